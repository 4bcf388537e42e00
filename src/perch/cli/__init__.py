"""Perch CLI — inspect and serve a mux.

Entry point registered as ``perch`` in ``pyproject.toml``::

    [project.scripts]
    perch = "perch.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``perch`` command."""
    parser = argparse.ArgumentParser(
        prog="perch",
        description="Perch — a small request router with typed path variables.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- perch routes -----------------------------------------------------
    routes_parser = subparsers.add_parser("routes", help="List routes in match order")
    routes_parser.add_argument("app", help="Import string (e.g. myapp:mux)")

    # -- perch match ------------------------------------------------------
    match_parser = subparsers.add_parser("match", help="Show which route a path dispatches to")
    match_parser.add_argument("app", help="Import string (e.g. myapp:mux)")
    match_parser.add_argument("path", help="Request path (e.g. /item/42)")

    # -- perch run --------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Serve the mux with pounce")
    run_parser.add_argument("app", help="Import string (e.g. myapp:mux)")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "routes":
        from perch.cli._routes import run_routes

        run_routes(args)
    elif args.command == "match":
        from perch.cli._match import run_match

        run_match(args)
    elif args.command == "run":
        from perch.cli._run import run_server

        run_server(args)
