"""Immutable HTTP request handed to handlers by the ASGI adapter.

The mux itself only reads ``path``; everything else is for handlers.
``segments`` shows the path the way the matcher sees it.
"""

from __future__ import annotations

import json as json_module
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import parse_qs

from perch._internal.asgi import Receive, Scope
from perch.http.headers import Headers
from perch.routing.compiler import split_path


@dataclass(frozen=True, slots=True)
class Request:
    """One inbound HTTP request.

    ``path`` is the percent-decoded ASGI path, without the query string.
    The body is read lazily, at most once, through ``body()``.
    """

    method: str
    path: str
    headers: Headers
    query_string: bytes = b""
    client: tuple[str, int] | None = None

    _receive: Receive | None = field(default=None, repr=False, compare=False)
    _body: list[bytes] = field(default_factory=list, repr=False, compare=False)

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Build a Request from an ASGI ``http`` scope."""
        client = scope.get("client")
        return cls(
            method=scope["method"],
            path=scope["path"],
            headers=Headers(tuple(scope.get("headers", ()))),
            query_string=scope.get("query_string", b""),
            client=tuple(client) if client else None,
            _receive=receive,
        )

    @property
    def segments(self) -> list[str]:
        """Path components as the matcher compares them: ``/a//b/`` -> ``["a", "b"]``."""
        return split_path(self.path)

    @property
    def query(self) -> dict[str, list[str]]:
        return parse_qs(self.query_string.decode("latin-1"), keep_blank_values=True)

    @property
    def target(self) -> str:
        """Path plus ``?query`` when there is one."""
        if not self.query_string:
            return self.path
        return f"{self.path}?{self.query_string.decode('latin-1')}"

    async def body(self) -> bytes:
        """The full request body. Drains ``receive`` on the first call only."""
        if self._body:
            return self._body[0]
        chunks: list[bytes] = []
        more = self._receive is not None
        while more:
            message = await self._receive()  # type: ignore[misc]
            chunks.append(message.get("body", b""))
            more = message.get("more_body", False)
        self._body.append(b"".join(chunks))
        return self._body[0]

    async def text(self) -> str:
        return (await self.body()).decode("utf-8")

    async def json(self) -> Any:
        return json_module.loads(await self.body())
