"""Perch — a small request router with typed path variables.

Registered templates are matched in registration order; the first match
wins. Variables declare their type inline and come back already cast.

Basic usage::

    from perch import Mux

    mux = Mux()

    @mux.route("/profile/{name:string}/view")
    def profile(request):
        return f"hello {mux.variable_by_name('name', request)}"

    @mux.fallback(404)
    def missing(request):
        return "nothing here"

Serving (``pip install perch[server]``)::

    mux.run()
"""

__version__ = "0.1.0"
__all__ = [
    "UNCASTABLE",
    "CompileError",
    "ConfigurationError",
    "EmptyVariableBody",
    "HTTPError",
    "InternalServerError",
    "Kind",
    "MalformedVariable",
    "MissingVariableName",
    "Mux",
    "MuxConfig",
    "NoVariablesMatched",
    "NotFound",
    "PerchError",
    "QueryError",
    "Request",
    "Response",
    "Route",
    "UnbalancedBraces",
    "VariableNotFound",
    "VariableSpec",
    "get_request",
]

_ERRORS = (
    "CompileError",
    "ConfigurationError",
    "EmptyVariableBody",
    "HTTPError",
    "InternalServerError",
    "MalformedVariable",
    "MissingVariableName",
    "NoVariablesMatched",
    "NotFound",
    "PerchError",
    "QueryError",
    "UnbalancedBraces",
    "VariableNotFound",
)


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import perch`` fast while providing a clean top-level API.
    """
    if name == "Mux":
        from perch.mux import Mux

        return Mux

    if name == "MuxConfig":
        from perch.config import MuxConfig

        return MuxConfig

    if name in ("Kind", "UNCASTABLE"):
        from perch.routing import kinds as _kinds

        return getattr(_kinds, name)

    if name in ("Route", "VariableSpec"):
        from perch.routing import route as _route

        return getattr(_route, name)

    if name == "Request":
        from perch.http.request import Request

        return Request

    if name == "Response":
        from perch.http.response import Response

        return Response

    if name == "get_request":
        from perch.context import get_request

        return get_request

    if name in _ERRORS:
        from perch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
