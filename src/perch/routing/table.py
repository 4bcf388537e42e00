"""Ordered route table with status-code fallbacks.

Insertion order is match priority: the first registered route that
matches a path wins. Re-registering a template keeps its position.
"""

from collections.abc import Iterator

from perch._internal.rwlock import RWLock
from perch._internal.types import Handler
from perch.routing.compiler import compile_template
from perch.routing.kinds import Kind
from perch.routing.matcher import match_route
from perch.routing.route import Binding, Route


class RouteTable:
    """Routes in registration order plus a status-code -> handler map.

    Usage::

        table = RouteTable(not_found=handle_404)
        table.register("/item/{id:int}", show_item)
        found = table.find("/item/42")

    Reads (``find``, ``bindings_for``, ``fallback``) share a read lock;
    ``register`` and ``register_fallback`` take the write lock. The lock
    is never held while a handler runs: callers get the handler back and
    invoke it themselves.
    """

    __slots__ = ("_by_template", "_default_kind", "_fallbacks", "_lock", "_routes")

    def __init__(self, not_found: Handler, *, default_kind: Kind = Kind.STRING) -> None:
        self._routes: list[Route] = []
        self._by_template: dict[str, Route] = {}
        self._fallbacks: dict[int, Handler] = {404: not_found}
        self._default_kind = default_kind
        self._lock = RWLock()

    # -- Registration --

    def register(self, template: str, handler: Handler) -> tuple[Route, bool]:
        """Insert or overwrite the route for *template*.

        Returns ``(route, overwritten)``. Compilation happens before the
        lock is taken, so a ``CompileError`` leaves the table unchanged.
        """
        segments, _ = compile_template(template, default_kind=self._default_kind)
        with self._lock.write():
            existing = self._by_template.get(template)
            if existing is not None:
                existing._rebind(segments, handler)
                return existing, True
            route = Route(template=template, segments=segments, handler=handler)
            self._routes.append(route)
            self._by_template[template] = route
            return route, False

    def register_fallback(self, status: int, handler: Handler) -> bool:
        """Insert or replace the fallback for *status*; True if one existed."""
        with self._lock.write():
            overwritten = status in self._fallbacks
            self._fallbacks[status] = handler
            return overwritten

    # -- Lookup --

    def find(self, path: str) -> tuple[Route, Handler, tuple[Binding, ...]] | None:
        """First route matching *path*, with its handler and bindings.

        The handler is read under the lock alongside the match, so a
        concurrent re-registration is seen entirely or not at all.
        """
        with self._lock.read():
            for route in self._routes:
                matched, bindings = match_route(route, path)
                if matched:
                    return route, route.handler, bindings
        return None

    def bindings_for(self, path: str) -> list[Binding]:
        """Bindings from every route matching *path*, in registration order."""
        bindings: list[Binding] = []
        with self._lock.read():
            for route in self._routes:
                matched, found = match_route(route, path)
                if matched:
                    bindings.extend(found)
        return bindings

    def fallback(self, status: int) -> Handler | None:
        with self._lock.read():
            return self._fallbacks.get(status)

    @property
    def fallbacks(self) -> dict[int, Handler]:
        """Snapshot of the registered fallbacks."""
        with self._lock.read():
            return dict(self._fallbacks)

    @property
    def routes(self) -> tuple[Route, ...]:
        """Snapshot of the routes in match order."""
        with self._lock.read():
            return tuple(self._routes)

    def get(self, template: str) -> Route | None:
        with self._lock.read():
            return self._by_template.get(template)

    def __contains__(self, template: object) -> bool:
        with self._lock.read():
            return template in self._by_template

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._routes)

    def __iter__(self) -> Iterator[Route]:
        return iter(self.routes)
