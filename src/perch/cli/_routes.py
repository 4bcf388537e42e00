"""``perch routes`` — list registered routes.

Resolves an import string to a Mux and prints its routes in match
order, followed by the registered fallbacks.
"""

import argparse

from perch.cli._resolve import load_mux
from perch.routing.route import Route


def _handler_name(handler: object) -> str:
    return getattr(handler, "__qualname__", None) or getattr(handler, "__name__", repr(handler))


def _variables(route: Route) -> str:
    return ", ".join(f"{spec.name}:{spec.kind}" for spec in route.variables) or "-"


def run_routes(args: argparse.Namespace) -> None:
    """Print a table of INDEX, TEMPLATE, VARIABLES, and HANDLER."""
    mux = load_mux(args.app)

    routes = mux.routes
    if not routes:
        print("No routes registered.")
    else:
        rows = [
            (str(i), route.template, _variables(route), _handler_name(route.handler))
            for i, route in enumerate(routes)
        ]
        headers = ("#", "TEMPLATE", "VARIABLES", "HANDLER")
        widths = [max(len(h), *(len(r[col]) for r in rows)) for col, h in enumerate(headers[:3])]

        fmt = f"{{:>{widths[0]}}}  {{:<{widths[1]}}}  {{:<{widths[2]}}}  {{}}"
        print(fmt.format(*headers))
        print("-" * min(sum(widths) + 6 + max(len(r[3]) for r in rows), 80))
        for row in rows:
            print(fmt.format(*row))

    print()
    print("FALLBACKS")
    for status, handler in sorted(mux.fallbacks.items()):
        print(f"  {status}  {_handler_name(handler)}")
