"""Path variable kinds and type conversion.

Built-in kinds for route variables like ``{id:int}`` or ``{port:uint16}``.
Integer kinds enforce their declared bit width: ``"300"`` is not an
``int8``, it is a cast failure.
"""

import re
from enum import StrEnum
from typing import Any, Final


class Kind(StrEnum):
    """The resolved type of a path variable."""

    STRING = "string"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    INT = "int"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"
    UINT = "uint"
    GENERIC = "generic"

    @property
    def is_integer(self) -> bool:
        return self in _BOUNDS

    @property
    def is_unsigned(self) -> bool:
        return self in _BOUNDS and _BOUNDS[self][0] == 0

    @property
    def bounds(self) -> tuple[int, int] | None:
        """Inclusive ``(min, max)`` for integer kinds, ``None`` otherwise."""
        return _BOUNDS.get(self)


def _signed(bits: int) -> tuple[int, int]:
    return -(1 << (bits - 1)), (1 << (bits - 1)) - 1


def _unsigned(bits: int) -> tuple[int, int]:
    return 0, (1 << bits) - 1


# Platform-sized int/uint are treated as 64-bit
_BOUNDS: Final[dict[Kind, tuple[int, int]]] = {
    Kind.INT8: _signed(8),
    Kind.INT16: _signed(16),
    Kind.INT32: _signed(32),
    Kind.INT64: _signed(64),
    Kind.INT: _signed(64),
    Kind.UINT8: _unsigned(8),
    Kind.UINT16: _unsigned(16),
    Kind.UINT32: _unsigned(32),
    Kind.UINT64: _unsigned(64),
    Kind.UINT: _unsigned(64),
}

# Tag spellings accepted in templates, lowercased
TAGS: Final[dict[str, Kind]] = {
    **{kind.value: kind for kind in Kind},
    "str": Kind.STRING,
    "any": Kind.GENERIC,
}

_SIGNED_DIGITS = re.compile(r"[+-]?[0-9]+", re.ASCII)
_UNSIGNED_DIGITS = re.compile(r"[0-9]+", re.ASCII)


class _Uncastable:
    """Marker for a variable that matched but could not be converted."""

    __slots__ = ()
    _instance: "_Uncastable | None" = None

    def __new__(cls) -> "_Uncastable":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNCASTABLE"

    def __reduce__(self) -> str:
        return "UNCASTABLE"


UNCASTABLE: Final = _Uncastable()
"""Returned in place of a value when a captured segment fails its cast."""


def kind_of(tag: str) -> Kind:
    """Resolve a type tag to a Kind. Unknown tags resolve to ``GENERIC``."""
    return TAGS.get(tag.strip().lower(), Kind.GENERIC)


def is_known_tag(tag: str) -> bool:
    return tag.strip().lower() in TAGS


def cast(kind: Kind, raw: str) -> tuple[Any, bool]:
    """Convert a captured path segment to the value for *kind*.

    Returns ``(value, True)`` on success and ``(UNCASTABLE, False)`` when
    *raw* is not a base-10 integer within the kind's range. String and
    generic kinds always succeed and return *raw* unchanged.
    """
    bounds = _BOUNDS.get(kind)
    if bounds is None:
        return raw, True

    pattern = _UNSIGNED_DIGITS if bounds[0] == 0 else _SIGNED_DIGITS
    if pattern.fullmatch(raw) is None:
        return UNCASTABLE, False

    value = int(raw)
    low, high = bounds
    if not low <= value <= high:
        return UNCASTABLE, False
    return value, True
