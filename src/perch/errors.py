"""Perch exception hierarchy.

Shared across the compiler, route table, Mux, and ASGI adapter so every
module raises and catches the same types.
"""

from dataclasses import dataclass
from http import HTTPStatus


class PerchError(Exception):
    """Base for all perch-specific errors."""


class ConfigurationError(PerchError):
    """Raised when mux configuration is invalid."""


# -- Registration-time errors --


class CompileError(PerchError, ValueError):
    """A route template could not be compiled.

    Raised by ``register_route`` before the route table is touched, so a
    failed registration never leaves a partial route behind.
    """

    default_detail = "Invalid route template"

    def __init__(self, template: str, detail: str = "") -> None:
        self.template = template
        self.detail = detail or self.default_detail
        super().__init__(self.detail)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.template!r}, {self.detail!r})"


class UnbalancedBraces(CompileError):
    """The template has a different number of ``{`` and ``}``."""

    default_detail = "Missing '}' in route variable declaration"


class MissingVariableName(CompileError):
    """A variable declaration has a type tag but no name: ``{:int}``."""

    default_detail = "Missing the variable name in variable declaration"


class EmptyVariableBody(CompileError):
    """A variable declaration is empty: ``{}``."""

    default_detail = "Missing variable information in variable declaration"


class MalformedVariable(CompileError):
    """Braces appear somewhere other than around a whole segment."""

    default_detail = "Route variables must span a whole path segment"


# -- Query-time errors --


class QueryError(PerchError, LookupError):
    """A variable query against a request path found nothing."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(detail)


class NoVariablesMatched(QueryError):
    """No route matching the request path declares any variables."""


class VariableNotFound(QueryError):
    """Variables matched, but none with the requested name."""

    def __init__(self, path: str, name: str) -> None:
        self.name = name
        super().__init__(path, f"No variable was found that matched for {name!r}")


# -- Status-code errors --


@dataclass(frozen=True, slots=True)
class HTTPError(PerchError):
    """An error that maps directly to an HTTP status code.

    Raised by handlers to hand the request over to the fallback handler
    registered for ``status``.
    """

    status: int
    detail: str = ""

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 — no route matched the request path."""

    def __init__(self, detail: str = HTTPStatus.NOT_FOUND.phrase) -> None:
        super().__init__(status=404, detail=detail)


class InternalServerError(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """500 — the handler failed."""

    def __init__(self, detail: str = HTTPStatus.INTERNAL_SERVER_ERROR.phrase) -> None:
        super().__init__(status=500, detail=detail)
