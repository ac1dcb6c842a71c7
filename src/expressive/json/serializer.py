"""
=============================================================================
JSON SERIALIZER
=============================================================================

Turns in-memory Python values into JSON text.

=============================================================================
CLASSIFICATION ORDER
=============================================================================

Values are classified by shape, first match wins:

    ┌─────────────────────────────────────────────────────────────────────┐
    │  1. str / bytes      → never treated as sequences (see 5)           │
    │  2. Sequence         → array    list, tuple, ...                    │
    │  3. Mapping          → object   dict, OrderedDict, ...              │
    │  4. JSONRecord       → object   fields from json_fields()           │
    │     dataclass        → object   fields in declaration order         │
    │  5. scalar           → inline   None, bool, int, float, str         │
    │  6. other Iterable   → array    generators, sets, ranges            │
    │  7. anything else    → UnsupportedValueError                        │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
OUTPUT FORMAT
=============================================================================

The separators are fixed: one space after every ":" and every ",".

    serialize({"foo": 4, "bar": None})   →  {"foo": 4, "bar": null}
    serialize([1, 2.5, "x", True])       →  [1, 2.5, "x", true]

Strings are written between quotes WITHOUT escaping, mirroring the
parser, which does not unescape. A string containing `"` therefore
produces text that cannot be parsed back.

=============================================================================
STRUCTURED RECORDS
=============================================================================

A record type opts in by implementing `json_fields()`, returning its
fields as ordered (name, value) pairs:

    class Point:
        def __init__(self, x, y):
            self.x, self.y = x, y

        def json_fields(self):
            return [("x", self.x), ("y", self.y)]

    serialize(Point(1, 2))   →  {"x": 1, "y": 2}

Dataclasses need nothing extra: their declared fields are used, in
declaration order.

=============================================================================
"""

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Iterable as IterableT, Protocol, Tuple, runtime_checkable
import dataclasses
import math

from .errors import UnsupportedValueError


@runtime_checkable
class JSONRecord(Protocol):
    """A value that lists its own fields for serialization."""

    def json_fields(self) -> IterableT[Tuple[str, Any]]:
        ...


def serialize(value: Any) -> str:
    """
    Serialize a value to JSON text.

    Args:
        value: A sequence, mapping, record or scalar, nested freely.

    Returns:
        JSON text using ", " and ": " as separators.

    Raises:
        UnsupportedValueError: If some value in the tree cannot be
            classified, or is a non-finite float.
    """
    if isinstance(value, (str, bytes, bytearray)):
        return _render_scalar(value)

    if isinstance(value, Sequence):
        return _render_array(value)

    if isinstance(value, Mapping):
        return _render_object(value.items())

    if isinstance(value, JSONRecord):
        return _render_object(value.json_fields())

    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return _render_object(
            (f.name, getattr(value, f.name)) for f in dataclasses.fields(value)
        )

    if value is None or isinstance(value, (bool, int, float)):
        return _render_scalar(value)

    if isinstance(value, Iterable):
        return _render_array(value)

    raise UnsupportedValueError(value)


def _render_array(items: IterableT[Any]) -> str:
    return "[" + ", ".join(serialize(item) for item in items) + "]"


def _render_object(entries: IterableT[Tuple[Any, Any]]) -> str:
    return "{" + ", ".join(
        f'"{key}": {serialize(item)}' for key, item in entries
    ) + "}"


def _render_scalar(value: Any) -> str:
    if value is None:
        return "null"
    # bool before int: True is an int in Python
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise UnsupportedValueError(value)
        return repr(value)
    if isinstance(value, str):
        return f'"{value}"'
    # bytes have no JSON form
    raise UnsupportedValueError(value)
