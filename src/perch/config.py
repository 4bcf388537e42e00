"""Mux configuration.

MuxConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

import logging
from dataclasses import dataclass

from perch.errors import ConfigurationError
from perch.routing.kinds import Kind, is_known_tag, kind_of


@dataclass(frozen=True, slots=True)
class MuxConfig:
    """Mux configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = MuxConfig(port=3000, default_kind="generic")
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False

    # Routing
    default_kind: str = "string"  # Kind for untyped variables like {name}

    # Run dispatch (and sync handlers) in a worker thread under ASGI
    threaded_dispatch: bool = True

    # Logging
    log_level: str = "info"

    def __post_init__(self) -> None:
        if not 0 <= self.port <= 65535:
            msg = f"port must be between 0 and 65535, got {self.port}"
            raise ConfigurationError(msg)
        if not is_known_tag(self.default_kind):
            msg = f"Unknown default_kind {self.default_kind!r}"
            raise ConfigurationError(msg)
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            msg = f"Unknown log_level {self.log_level!r}"
            raise ConfigurationError(msg)

    @property
    def variable_kind(self) -> Kind:
        """``default_kind`` resolved to a Kind."""
        return kind_of(self.default_kind)
