"""Logger capability for the mux.

``Mux`` takes any object with the five standard logging methods. A
``logging.Logger`` or ``logging.LoggerAdapter`` fits as-is. Without one
the mux logs to ``perch.mux``, which stays silent until the application
configures logging (the ``perch`` logger carries a ``NullHandler``).
"""

import logging
from typing import Any, Protocol, runtime_checkable

logging.getLogger("perch").addHandler(logging.NullHandler())

_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


@runtime_checkable
class Logger(Protocol):
    """Structural type for an injected logger (printf-style arguments)."""

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def info(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def error(self, msg: str, *args: Any, **kwargs: Any) -> None: ...
    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None: ...


def get_logger(name: str = "mux") -> logging.Logger:
    """Return the ``perch.<name>`` logger."""
    return logging.getLogger(f"perch.{name}")


def configure_logging(level: str | int = "info") -> logging.Logger:
    """Attach a stream handler to the ``perch`` logger at *level*.

    Safe to call repeatedly; only one stream handler is ever installed.
    """
    root = logging.getLogger("perch")
    root.setLevel(level.upper() if isinstance(level, str) else level)
    if not any(
        isinstance(h, logging.StreamHandler) and not isinstance(h, logging.FileHandler)
        for h in root.handlers
    ):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)
    return root
