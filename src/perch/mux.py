"""The perch multiplexer.

Holds the route table, dispatches request paths to handlers, answers
variable queries for a request, and doubles as an ASGI 3.0 application.

Basic usage::

    from perch import Mux

    mux = Mux()

    @mux.route("/item/{id:int}")
    def show_item(request):
        (item_id,) = mux.variables_for(request)
        return f"item {item_id}"

    mux.dispatch("/item/42", request)
"""

from collections.abc import Callable
from typing import Any

from perch._internal.asgi import Receive, Scope, Send
from perch._internal.types import Handler
from perch.config import MuxConfig
from perch.errors import CompileError, NoVariablesMatched, VariableNotFound
from perch.log import Logger, get_logger
from perch.routing.kinds import cast
from perch.routing.route import Binding, Route
from perch.routing.table import RouteTable
from perch.server.defaults import default_fallback, not_found


def _path_of(request: object) -> str:
    """Accept either a bare path or a request-like object with ``.path``."""
    if isinstance(request, str):
        return request
    path = getattr(request, "path", None)
    if not isinstance(path, str):
        msg = f"Expected a path string or an object with a .path, got {type(request).__name__}"
        raise TypeError(msg)
    return path


class Mux:
    """Routes request paths to handlers in registration order.

    Thread safety:
        Registration and dispatch may overlap. The route table guards
        itself with a reader/writer lock, so concurrent dispatches never
        block each other, and no lock is held while a handler runs.
    """

    __slots__ = ("_log", "_table", "config")

    def __init__(self, config: MuxConfig | None = None, *, logger: Logger | None = None) -> None:
        self.config: MuxConfig = config or MuxConfig()
        self._log: Logger = logger if logger is not None else get_logger("mux")
        self._table = RouteTable(not_found, default_kind=self.config.variable_kind)

    # -- Registration --

    def register_route(self, template: str, handler: Handler) -> Route:
        """Register *handler* for *template*, overwriting any same-template route.

        An overwritten route keeps its place in the match order.

        Raises:
            CompileError: The template is malformed. The table is unchanged.
        """
        try:
            route, overwritten = self._table.register(template, handler)
        except CompileError as exc:
            self._log.warning("Rejected route %r: %s", template, exc.detail)
            raise

        verb = "Overwrote" if overwritten else "Registered"
        self._log.info("%s route %r (%d variables)", verb, template, len(route.variables))
        return route

    def route(self, template: str) -> Callable[[Handler], Handler]:
        """Register a route handler via decorator."""

        def decorator(func: Handler) -> Handler:
            self.register_route(template, func)
            return func

        return decorator

    def register_fallback(self, status: int, handler: Handler) -> bool:
        """Set the fallback handler for *status*; True if one was replaced."""
        overwritten = self._table.register_fallback(status, handler)
        verb = "Overwrote" if overwritten else "Registered"
        self._log.info("%s fallback for status %d", verb, status)
        return overwritten

    def fallback(self, status: int) -> Callable[[Handler], Handler]:
        """Register a fallback handler via decorator."""

        def decorator(func: Handler) -> Handler:
            self.register_fallback(status, func)
            return func

        return decorator

    # -- Dispatch --

    def resolve(self, path: str) -> tuple[Route | None, Handler]:
        """The route and handler *path* would dispatch to.

        Returns ``(None, not_found_handler)`` when nothing matches.
        """
        found = self._table.find(path)
        if found is None:
            self._log.debug("No route matched %r", path)
            return None, self.fallback_handler(404)
        route, handler, _ = found
        self._log.debug("Matched %r to route %r", path, route.template)
        return route, handler

    def dispatch(self, path: str, *context: Any) -> Any:
        """Invoke the first matching handler for *path* with *context*.

        Falls back to the 404 handler when no route matches; never raises
        for a missing route. Returns whatever the handler returns.
        """
        _, handler = self.resolve(path)
        return handler(*context)

    def fallback_handler(self, status: int) -> Handler:
        """The registered fallback for *status*, or the plain-text default."""
        handler = self._table.fallback(status)
        if handler is None:
            return default_fallback(status)
        return handler

    def dispatch_fallback(self, status: int, *context: Any) -> Any:
        """Invoke the fallback for *status* explicitly (e.g. 500 from a handler)."""
        return self.fallback_handler(status)(*context)

    # -- Variable queries --

    def bindings_for(self, request: object) -> list[Binding]:
        """Raw bindings from every route matching the request path."""
        return self._table.bindings_for(_path_of(request))

    def variables_for(self, request: object) -> list[Any]:
        """Typed values of every variable bound by routes matching the request.

        Values are in registration order, then left-to-right. A segment
        that fails its cast appears as ``UNCASTABLE``.

        Raises:
            NoVariablesMatched: no matching route declares a variable.
        """
        path = _path_of(request)
        bindings = self._table.bindings_for(path)
        if not bindings:
            raise NoVariablesMatched(path, "No variables matched for the route and request")
        return [cast(b.spec.kind, b.raw)[0] for b in bindings]

    def variable_by_name(self, name: str, request: object) -> Any:
        """Typed value of the variable *name* bound for the request.

        When several matching routes bind *name*, the last one wins.

        Raises:
            NoVariablesMatched: no matching route declares a variable.
            VariableNotFound: variables matched, but none called *name*.
        """
        path = _path_of(request)
        bindings = self._table.bindings_for(path)
        if not bindings:
            raise NoVariablesMatched(path, f"No variables found for url {path!r}")

        found: Binding | None = None
        for binding in bindings:
            if binding.name == name:
                found = binding
        if found is None:
            raise VariableNotFound(path, name)
        return cast(found.spec.kind, found.raw)[0]

    # -- Introspection --

    @property
    def routes(self) -> tuple[Route, ...]:
        """Registered routes in match order."""
        return self._table.routes

    @property
    def fallbacks(self) -> dict[int, Handler]:
        return self._table.fallbacks

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, template: object) -> bool:
        return template in self._table

    # -- Server --

    def run(
        self,
        host: str | None = None,
        port: int | None = None,
        *,
        app_path: str | None = None,
    ) -> None:
        """Serve this mux with pounce (``pip install perch[server]``)."""
        from perch.server.dev import run_server

        run_server(
            self,
            self.config.host if host is None else host,
            self.config.port if port is None else port,
            app_path=app_path,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        from perch.server.handler import handle_request

        await handle_request(
            scope,
            receive,
            send,
            mux=self,
            threaded=self.config.threaded_dispatch,
            debug=self.config.debug,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Acknowledge the ASGI lifespan protocol. The mux holds no resources."""
        while True:
            message = await receive()
            if message["type"] == "lifespan.startup":
                self._log.info("Serving %d routes", len(self._table))
                await send({"type": "lifespan.startup.complete"})
            elif message["type"] == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return
