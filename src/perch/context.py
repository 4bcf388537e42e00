"""Request-scoped context via ContextVar.

``request_var`` holds the current ``Request`` while the ASGI adapter
dispatches it, so code without a request argument (a fallback handler
written for ``dispatch_fallback``, a helper deep in a handler) can still
ask the mux about the current path::

    from perch.context import get_request

    item_id = mux.variable_by_name("id", get_request())

Thread safety:
    ``ContextVar`` is task-local under asyncio. The adapter's worker
    thread runs in a copy of the request task's context, so the
    variable is visible to sync handlers too.
"""

from contextvars import ContextVar

from perch.http.request import Request

request_var: ContextVar[Request] = ContextVar("perch_request")
"""The current request. Set by the ASGI adapter before dispatch."""


def get_request() -> Request:
    """Return the current request.

    Raises ``LookupError`` if called outside a request context.
    """
    return request_var.get()
