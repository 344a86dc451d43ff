"""
Lightweight typing aliases for encoder inputs.

Values are plain Python objects aligned by position with a Schema; these
aliases only document intent in annotations. This module contains no runtime
logic and is zero-IO.

Examples:
    >>> from recjson.core.typing import Record
    >>> row: Record = (1, "foo", None)
    >>> len(row)
    3
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Protocol

__all__ = [
    "Value",
    "Record",
    "RecordSequence",
    "StringMap",
    "TextSink",
]

# Any scalar, record, sequence, or map value; None is null for every kind.
Value = Any

# Positional record: one entry per field of the matching Schema.
Record = Sequence[Any]

# Homogeneous records sharing one element schema.
RecordSequence = Iterable[Record]

# Untyped map; values are rendered via their display form only.
StringMap = Mapping[str, Any]


class TextSink(Protocol):
    """Anything with a text ``write`` method (io.StringIO, open text files)."""

    def write(self, s: str, /) -> Any: ...
