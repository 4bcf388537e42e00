"""Segment, VariableSpec, Binding, and Route types."""

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from perch.routing.kinds import Kind


@dataclass(frozen=True, slots=True)
class VariableSpec:
    """A named, typed path variable: ``{id:int}`` -> ``VariableSpec("id", Kind.INT)``."""

    name: str
    kind: Kind = Kind.STRING


@dataclass(frozen=True, slots=True)
class Literal:
    """A segment that must match the request segment exactly."""

    text: str


@dataclass(frozen=True, slots=True)
class Variable:
    """A segment that captures any single request segment."""

    spec: VariableSpec


Segment = Literal | Variable


@dataclass(frozen=True, slots=True)
class Binding:
    """A variable paired with the raw request segment it captured."""

    spec: VariableSpec
    raw: str

    @property
    def name(self) -> str:
        return self.spec.name


@dataclass(slots=True, eq=False)
class Route:
    """A registered route, keyed by its template string.

    Re-registering the same template updates this object in place, so
    callers holding a Route always see the current handler. Mutation
    only happens under the owning table's write lock.
    """

    template: str
    segments: tuple[Segment, ...]
    handler: Callable[..., Any]
    variables: tuple[VariableSpec, ...] = field(init=False)

    def __post_init__(self) -> None:
        self.variables = _variables_of(self.segments)

    @property
    def has_variables(self) -> bool:
        return bool(self.variables)

    def _rebind(self, segments: tuple[Segment, ...], handler: Callable[..., Any]) -> None:
        self.segments = segments
        self.variables = _variables_of(segments)
        self.handler = handler

    def __repr__(self) -> str:
        name = getattr(self.handler, "__name__", repr(self.handler))
        return f"Route({self.template!r}, handler={name})"


def _variables_of(segments: tuple[Segment, ...]) -> tuple[VariableSpec, ...]:
    return tuple(seg.spec for seg in segments if isinstance(seg, Variable))
