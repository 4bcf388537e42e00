"""Default fallback handlers — plain-text status messages.

Fallback handlers receive whatever context the caller dispatched with
(a Request under ASGI, anything at all when ``dispatch`` is called
directly), so the defaults accept and ignore any arguments.
"""

from functools import cache
from http import HTTPStatus
from typing import Any

from perch._internal.types import Handler
from perch.http.response import TEXT_PLAIN, Response


def status_text(status: int) -> str:
    """The reason phrase for *status*: ``404`` -> ``"Not Found"``."""
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return f"Error {status}"


def not_found(*_context: Any) -> Response:
    """Default 404 fallback."""
    return Response(body=status_text(404), status=404, content_type=TEXT_PLAIN)


def internal_server_error(*_context: Any) -> Response:
    """Default 500 fallback."""
    return Response(body=status_text(500), status=500, content_type=TEXT_PLAIN)


@cache
def default_fallback(status: int) -> Handler:
    """Plain-text fallback for any status without a registered handler."""
    if status == 404:
        return not_found
    if status == 500:
        return internal_server_error

    def fallback(*_context: Any) -> Response:
        return Response(
            body=status_text(status),
            status=status,
            content_type=TEXT_PLAIN,
        )

    fallback.__name__ = f"default_{status}"
    return fallback
