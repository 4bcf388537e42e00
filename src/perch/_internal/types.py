"""Shared type aliases used across perch modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Route or fallback handler; receives the dispatch context unexamined
Handler: TypeAlias = Callable[..., Any]
