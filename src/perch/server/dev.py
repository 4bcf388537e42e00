"""Serve a mux with pounce.

Perch owns no socket code: the accept loop, connection handling, and
timeouts all belong to the ASGI server. pounce is an optional extra
(``pip install perch[server]``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from perch.errors import ConfigurationError
from perch.log import configure_logging

if TYPE_CHECKING:
    from perch.mux import Mux


def run_server(mux: Mux, host: str, port: int, *, app_path: str | None = None) -> None:
    """Start a single-worker pounce server with the live mux object.

    Args:
        mux: The ASGI callable to serve.
        host: Bind host address.
        port: Bind port number.
        app_path: Optional ``"module:attribute"`` import string, forwarded
            so pounce can re-import the app when reload is enabled.
    """
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError as exc:
        msg = "Serving requires pounce. Install it with: pip install perch[server]"
        raise ConfigurationError(msg) from exc

    configure_logging(mux.config.log_level)

    config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        reload=mux.config.debug,
    )
    server = Server(config, mux, app_path=app_path)
    server.run()
