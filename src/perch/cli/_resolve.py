"""Mux import resolution — resolves ``"module:attribute"`` strings to Mux instances.

Shared by every ``perch`` subcommand to locate a Mux from a
user-supplied import string.
"""

import importlib
import sys

from perch.mux import Mux


def resolve_mux(import_string: str) -> Mux:
    """Resolve an import string to a perch Mux instance.

    Accepts ``"module:attribute"`` format.  When the attribute portion
    is omitted, defaults to ``"mux"`` (e.g. ``"myapp"`` resolves to
    ``myapp.mux``).

    Supports factory functions: if the resolved object is callable and
    not a Mux instance, it will be called.

    Raises:
        ModuleNotFoundError: If the module cannot be imported.
        AttributeError: If the attribute does not exist on the module.
        TypeError: If the resolved object is not a Mux or a factory for one.
    """
    module_path, _, attr_name = import_string.partition(":")
    if not attr_name:
        attr_name = "mux"

    module = importlib.import_module(module_path)
    obj = getattr(module, attr_name)

    if callable(obj) and not isinstance(obj, Mux):
        try:
            obj = obj()
        except Exception as exc:
            msg = f"Factory function {import_string!r} raised an error: {exc}"
            raise TypeError(msg) from exc

    if not isinstance(obj, Mux):
        msg = f"{import_string!r} resolved to {type(obj).__name__}, not a perch.Mux instance"
        raise TypeError(msg)

    return obj


def load_mux(import_string: str) -> Mux:
    """``resolve_mux`` for CLI use: report failures on stderr and exit 1."""
    try:
        return resolve_mux(import_string)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
