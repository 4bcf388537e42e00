"""Route template compilation.

Turns ``"/profile/{name:string}/view"`` into an ordered tuple of
``Literal`` and ``Variable`` segments. Registration calls this before
touching the route table, so every error here leaves the table as it was.
"""

from perch.errors import (
    EmptyVariableBody,
    MalformedVariable,
    MissingVariableName,
    UnbalancedBraces,
)
from perch.routing.kinds import Kind, kind_of
from perch.routing.route import Literal, Segment, Variable, VariableSpec


def split_path(path: str) -> list[str]:
    """Split a template or request path on ``/``, dropping empty parts.

    ``"/a/b"``, ``"a/b/"`` and ``"//a//b"`` all give ``["a", "b"]``.
    """
    return [part for part in path.split("/") if part]


def parse_variable(
    template: str,
    body: str,
    *,
    default_kind: Kind = Kind.STRING,
) -> VariableSpec:
    """Parse the text between ``{`` and ``}`` into a VariableSpec.

    Examples::

        "id"          -> VariableSpec("id", Kind.STRING)
        "id:int"      -> VariableSpec("id", Kind.INT)
        " age : INT " -> VariableSpec("age", Kind.INT)
        "x:whatever"  -> VariableSpec("x", Kind.GENERIC)
    """
    if not body.strip():
        raise EmptyVariableBody(template)

    name, sep, tag = body.partition(":")
    name = name.strip()
    if not name:
        raise MissingVariableName(template)

    kind = kind_of(tag) if sep else default_kind
    return VariableSpec(name=name, kind=kind)


def compile_template(
    template: str,
    *,
    default_kind: Kind = Kind.STRING,
) -> tuple[tuple[Segment, ...], tuple[VariableSpec, ...]]:
    """Compile a route template into segments and its ordered variables.

    Examples::

        "/users"              -> (Literal("users"),), ()
        "/item/{id:int}"      -> (Literal("item"), Variable(id:int)), (id:int,)
        "/a/{x}/{y}"          -> (Literal("a"), Variable(x), Variable(y)), (x, y)

    Raises:
        UnbalancedBraces: ``{`` and ``}`` counts differ.
        MalformedVariable: a brace sits anywhere but around a whole segment.
        EmptyVariableBody: ``{}``.
        MissingVariableName: ``{:int}``.
    """
    opening = template.count("{")
    closing = template.count("}")
    if opening > closing:
        raise UnbalancedBraces(template)
    if closing > opening:
        raise UnbalancedBraces(template, "Missing '{' in route variable declaration")

    segments: list[Segment] = []
    for part in split_path(template):
        if "{" not in part and "}" not in part:
            segments.append(Literal(part))
            continue

        stripped = part.strip()
        body = stripped[1:-1]
        if (
            not stripped.startswith("{")
            or not stripped.endswith("}")
            or "{" in body
            or "}" in body
        ):
            raise MalformedVariable(
                template,
                f"Route variables must span a whole path segment, got {part!r}",
            )
        segments.append(Variable(parse_variable(template, body, default_kind=default_kind)))

    compiled = tuple(segments)
    variables = tuple(seg.spec for seg in compiled if isinstance(seg, Variable))
    return compiled, variables
