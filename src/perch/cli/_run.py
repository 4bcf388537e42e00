"""``perch run`` — serve a mux with pounce."""

import argparse

from perch.cli._resolve import load_mux


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it; CLI flags override the mux config."""
    mux = load_mux(args.app)
    mux.run(args.host, args.port, app_path=args.app)
