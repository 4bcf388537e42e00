"""Positional matching of a request path against one compiled route."""

from perch.routing.compiler import split_path
from perch.routing.route import Binding, Literal, Route

NO_MATCH: tuple[bool, tuple[Binding, ...]] = (False, ())


def match_route(route: Route, path: str) -> tuple[bool, tuple[Binding, ...]]:
    """Decide whether *path* matches *route*, capturing variable segments.

    One variable always consumes exactly one path segment, so a match
    requires equal segment counts and is decided in a single
    left-to-right pass that stops at the first differing literal.

    Returns ``(True, bindings)`` on a match, ``(False, ())`` otherwise.
    """
    parts = split_path(path)
    segments = route.segments

    if len(parts) != len(segments):
        return NO_MATCH

    if not route.has_variables:
        for seg, part in zip(segments, parts, strict=True):
            if seg.text != part:  # type: ignore[union-attr]
                return NO_MATCH
        return True, ()

    bindings: list[Binding] = []
    for seg, part in zip(segments, parts, strict=True):
        if isinstance(seg, Literal):
            if seg.text != part:
                return NO_MATCH
        else:
            bindings.append(Binding(seg.spec, part))
    return True, tuple(bindings)
