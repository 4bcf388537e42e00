"""``perch match`` — show where a request path would be dispatched.

Prints the winning route and the typed variables a handler would see.
Exits 1 when the path falls through to the 404 fallback.
"""

import argparse

from perch.cli._resolve import load_mux
from perch.routing.kinds import cast


def run_match(args: argparse.Namespace) -> None:
    """Resolve ``args.path`` against the mux and describe the outcome."""
    mux = load_mux(args.app)

    route, _ = mux.resolve(args.path)
    if route is None:
        print(f"{args.path} -> 404 fallback")
        raise SystemExit(1)

    print(f"{args.path} -> {route.template}")
    for binding in mux.bindings_for(args.path):
        value, ok = cast(binding.spec.kind, binding.raw)
        note = "" if ok else "  (uncastable)"
        print(f"  {binding.name}:{binding.spec.kind} = {value!r}{note}")
