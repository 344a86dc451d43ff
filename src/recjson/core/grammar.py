"""
Canonical field kinds and naming helpers.

Defines the closed FieldKind enumeration used by schemas and the encoder, the
host alias table accepted in schema declarations, and zero-IO normalization
helpers used across the stack.

Design principles
-----------------
1) One naming standard:
   - Enum classes: PascalCase
   - Enum member names: UPPER_SNAKE (Python constants)
   - Enum serialized values (declarations, config, logs): lower_snake

2) Closed dispatch:
   - FieldKind is closed. The encoder handles every member explicitly and
     raises for a member it does not know, so adding a kind forces every
     writer to be updated.

3) Aliases are input-only:
   - Declarations may use host spellings (``int``, ``chararray``, ``bag``, ...).
     Canonical output (``Schema.declaration()``) always uses ``.value``.

Kind table
----------

| FieldKind         | JSON rendering                                  | Host aliases
|-------------------|-------------------------------------------------|---------------------------------
| boolean           | true / false                                    | bool
| int32             | integer number                                  | int, integer, int8, int16
| int64             | integer number                                  | long, bigint
| float32           | shortest single-precision round-trip number     | float, real
| float64           | shortest double-precision round-trip number     | double
| datetime          | string (display form)                           | date, time, timestamp
| opaque            | string (display form)                           | bytearray, bytes, binary
| text              | string (verbatim)                               | chararray, string, str
| string_map        | object of string / null values                  | map
| record            | object, one member per nested field             | tuple, struct
| record_sequence   | array of objects sharing the element schema     | bag, list

Examples
--------
>>> from recjson.core.grammar import FieldKind, field_kind_from_value, is_nested_kind
>>> field_kind_from_value("chararray") is FieldKind.TEXT
True
>>> field_kind_from_value("RECORD_SEQUENCE") is FieldKind.RECORD_SEQUENCE
True
>>> is_nested_kind(FieldKind.RECORD)
True

Tags
----
grammar, enums, normalization, lower_snake, helpers
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from enum import Enum
from typing import Final

from .errors import GrammarError

__all__ = [
    "FieldKind",
    "KIND_ALIASES",
    "SCALAR_KINDS",
    "NUMERIC_KINDS",
    "NESTED_KINDS",
    "is_lower_snake",
    "is_identifier",
    "field_kind_from_value",
    "is_scalar_kind",
    "is_nested_kind",
    "ensure_all_kind_values_lower_snake",
]


class FieldKind(Enum):
    """
    Closed set of field kinds a schema can declare.

    Serialized values appear in:
      - schema declarations (``B:record_sequence{item:record(v:int32)}``)
      - error messages and adapter logs
    """

    BOOLEAN = "boolean"
    INT32 = "int32"
    INT64 = "int64"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    DATETIME = "datetime"
    OPAQUE = "opaque"
    TEXT = "text"
    STRING_MAP = "string_map"
    RECORD = "record"
    RECORD_SEQUENCE = "record_sequence"


# Host spellings accepted by field_kind_from_value in addition to FieldKind values.
KIND_ALIASES: Final[dict[str, FieldKind]] = {
    "bool": FieldKind.BOOLEAN,
    "int": FieldKind.INT32,
    "integer": FieldKind.INT32,
    "int8": FieldKind.INT32,
    "int16": FieldKind.INT32,
    "long": FieldKind.INT64,
    "bigint": FieldKind.INT64,
    "float": FieldKind.FLOAT32,
    "real": FieldKind.FLOAT32,
    "double": FieldKind.FLOAT64,
    "date": FieldKind.DATETIME,
    "time": FieldKind.DATETIME,
    "timestamp": FieldKind.DATETIME,
    "bytearray": FieldKind.OPAQUE,
    "bytes": FieldKind.OPAQUE,
    "binary": FieldKind.OPAQUE,
    "chararray": FieldKind.TEXT,
    "string": FieldKind.TEXT,
    "str": FieldKind.TEXT,
    "map": FieldKind.STRING_MAP,
    "tuple": FieldKind.RECORD,
    "struct": FieldKind.RECORD,
    "bag": FieldKind.RECORD_SEQUENCE,
    "list": FieldKind.RECORD_SEQUENCE,
}

NUMERIC_KINDS: Final[frozenset[FieldKind]] = frozenset(
    {FieldKind.INT32, FieldKind.INT64, FieldKind.FLOAT32, FieldKind.FLOAT64}
)
SCALAR_KINDS: Final[frozenset[FieldKind]] = NUMERIC_KINDS | {
    FieldKind.BOOLEAN,
    FieldKind.DATETIME,
    FieldKind.OPAQUE,
    FieldKind.TEXT,
}
NESTED_KINDS: Final[frozenset[FieldKind]] = frozenset(
    {FieldKind.RECORD, FieldKind.RECORD_SEQUENCE}
)

_LOWER_SNAKE_RE = re.compile(r"^[a-z][a-z0-9]*(?:_[a-z0-9]+)*$")
_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def is_lower_snake(value: str) -> bool:
    """
    Check whether a string is lower_snake.

    Examples:
        >>> is_lower_snake("record_sequence")
        True
        >>> is_lower_snake("RecordSequence")
        False
    """
    return bool(_LOWER_SNAKE_RE.match(value))


def is_identifier(value: str) -> bool:
    """Check whether a field name can be written unquoted in a declaration."""
    return bool(_IDENTIFIER_RE.match(value))


def field_kind_from_value(s: str | FieldKind) -> FieldKind:
    """
    Resolve a kind name (canonical value or host alias, any case) to a FieldKind.

    Args:
        s (str | FieldKind): Kind name or an existing FieldKind.

    Returns:
        FieldKind: Matching enum member.

    Raises:
        GrammarError: If the name is neither a FieldKind value nor a known alias.
    """
    if isinstance(s, FieldKind):
        return s
    if not isinstance(s, str):
        raise GrammarError(f"field kind must be a string, got {type(s).__name__}")
    key = s.strip().lower()
    try:
        return FieldKind(key)
    except ValueError:
        pass
    try:
        return KIND_ALIASES[key]
    except KeyError:
        raise GrammarError(f"unknown field kind {s!r}") from None


def is_scalar_kind(kind: FieldKind) -> bool:
    """True for kinds written as a single JSON primitive."""
    return kind in SCALAR_KINDS


def is_nested_kind(kind: FieldKind) -> bool:
    """True for kinds that require a nested schema (record, record_sequence)."""
    return kind in NESTED_KINDS


def ensure_all_kind_values_lower_snake(enums: Iterable[type[Enum]] = (FieldKind,)) -> None:
    """
    Assert every enum value is lower_snake.

    Raises:
        GrammarError: On the first offending member.
    """
    for enum_cls in enums:
        for member in enum_cls:
            if not isinstance(member.value, str) or not is_lower_snake(member.value):
                raise GrammarError(
                    f"{enum_cls.__name__}.{member.name} value {member.value!r} is not lower_snake"
                )
