"""ASGI type aliases and scope construction.

Users never see these; the adapter and the test client do.
"""

from collections.abc import Awaitable, Callable, Mapping, MutableMapping
from typing import Any, TypeAlias
from urllib.parse import quote

# Raw ASGI 3.0 types
Scope: TypeAlias = MutableMapping[str, Any]
Receive: TypeAlias = Callable[[], Awaitable[MutableMapping[str, Any]]]
Send: TypeAlias = Callable[[MutableMapping[str, Any]], Awaitable[None]]


def http_scope(
    method: str,
    target: str,
    *,
    headers: Mapping[str, str] | None = None,
    client: tuple[str, int] = ("127.0.0.1", 0),
    server: tuple[str, int] = ("testserver", 80),
) -> dict[str, Any]:
    """Build an HTTP scope for *target* (path with optional ``?query``)."""
    path, _, query_string = target.partition("?")
    raw_headers = [
        (name.lower().encode("latin-1"), value.encode("latin-1"))
        for name, value in (headers or {}).items()
    ]
    return {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": method.upper(),
        "path": path,
        "raw_path": quote(path).encode("ascii"),
        "query_string": quote(query_string, safe="=&+%/:;,@!$'()*?").encode("ascii"),
        "root_path": "",
        "headers": raw_headers,
        "server": server,
        "client": client,
    }
