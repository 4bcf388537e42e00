"""ASGI handler — translates ASGI scope/messages to perch types.

The only component that touches raw ASGI directly. Converts the scope
to a typed Request, dispatches it through the mux, maps failures onto
fallback handlers, and sends the Response back through ASGI send().
"""

from __future__ import annotations

import inspect
import logging
from contextvars import Token
from typing import TYPE_CHECKING, Any

from perch._internal.asgi import Receive, Scope, Send
from perch._internal.invoke import settle
from perch.context import request_var
from perch.errors import HTTPError
from perch.http.request import Request
from perch.http.response import Response
from perch.server.defaults import status_text
from perch.server.negotiation import negotiate

if TYPE_CHECKING:
    from perch.mux import Mux

logger = logging.getLogger("perch.server")


def _dispatch(mux: Mux, request: Request) -> tuple[bool, Any]:
    route, handler = mux.resolve(request.path)
    return route is not None, handler(request)


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    mux: Mux,
    threaded: bool = True,
    debug: bool = False,
) -> None:
    """Process a single HTTP request: route, invoke, negotiate, send."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    token: Token[Request] = request_var.set(request)

    try:
        try:
            matched, result = await settle(_dispatch, mux, request, threaded=threaded)
            if inspect.isawaitable(result):
                result = await result
            response = negotiate(result)
            if not matched and response.status == 200:
                response = response.with_status(404)
        except HTTPError as exc:
            response = await _fallback_response(mux, exc.status, request, threaded, debug)
            logger.debug("%d %s %s: %s", exc.status, request.method, request.path, exc.detail)
        except Exception:
            logger.exception("500 %s %s", request.method, request.path)
            response = await _fallback_response(mux, 500, request, threaded, debug)
    finally:
        request_var.reset(token)

    await send_response(response, send)


async def _fallback_response(
    mux: Mux,
    status: int,
    request: Request,
    threaded: bool,
    debug: bool,
) -> Response:
    """Run the fallback for *status*, keeping *status* unless it picks its own."""
    try:
        result = await settle(mux.dispatch_fallback, status, request, threaded=threaded)
        response = negotiate(result)
    except Exception:
        # The fallback itself failed; answer with a bare 500
        logger.exception("Fallback for %d failed on %s %s", status, request.method, request.path)
        detail = status_text(500)
        if debug:
            detail = f"{detail}: fallback for {status} raised"
        return Response(body=detail, status=500)

    if response.status == 200:
        response = response.with_status(status)
    return response


def _body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


async def send_response(response: Response, send: Send) -> None:
    """Translate a perch Response into ASGI send() calls."""
    body = response.body_bytes if _body_allowed(response.status) else b""
    raw_headers = [
        (b"content-type", response.content_type.encode("latin-1")),
        *((name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in response.headers),
        (b"content-length", str(len(body)).encode("latin-1")),
    ]
    await send({"type": "http.response.start", "status": response.status, "headers": raw_headers})
    await send({"type": "http.response.body", "body": body})
