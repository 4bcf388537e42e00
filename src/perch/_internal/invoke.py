"""Invoke helpers — run a dispatch and settle its result.

Perch handlers can be ``def`` or ``async def``. ``Mux.dispatch`` is
synchronous: it calls the handler and hands back whatever it returned,
which for an async handler is a coroutine. The ASGI adapter runs the
dispatch (optionally in a worker thread) and awaits that coroutine on
the event loop.

Usage::

    from perch._internal.invoke import settle

    result = await settle(mux.dispatch, request.path, request, threaded=True)
"""

import functools
import inspect
from collections.abc import Callable
from typing import Any

import anyio.to_thread


async def settle(func: Callable[..., Any], *args: Any, threaded: bool = False) -> Any:
    """Call *func*, off the event loop when *threaded*, and await the result.

    Works with both sync and async handlers behind *func*::

        # sync: runs in the worker thread, value comes straight back
        def show(request):
            return "hello"

        # async: the thread returns a coroutine, awaited here
        async def show(request):
            return await load(request)
    """
    if threaded:
        result = await anyio.to_thread.run_sync(functools.partial(func, *args))
    else:
        result = func(*args)
    if inspect.isawaitable(result):
        result = await result
    return result
