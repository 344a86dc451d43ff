"""
Core package aggregator for recjson contracts (kinds, schemas, declarations, encoder).

## Contracts (single source of truth)
- Grammar — closed FieldKind enum, host aliases, normalization helpers.
- Schemas — frozen pydantic models (FieldSchema, Schema) and structural checks.
- Declarations — textual schema parser (`parse_schema`).
- Encoder — schema-driven recursive record → JSON text (`encode`).
- Serde/Writer — scalar text policy and the incremental JsonWriter.

## Notes
- Zero-IO policy: stdlib + pydantic only; no file/network IO, no polars/pyarrow.
- Values align with schemas by position; None is null for every kind.
- Wire policy: compact separators, ensure_ascii=False, schema key order.

## Downstream usage
- recjson.io — maps polars/pyarrow schemas to `Schema`, aligns host rows to
  positional records, and calls `encode` once per row.
- recjson.cli — parses declarations and drives recjson.io.

## Examples
```python
from recjson.core import encode, parse_schema

schema = parse_schema("B:bag{T:tuple(v:int)}")
encode(schema, [[(1,), (2,)]])  # '{"B":[{"v":1},{"v":2}]}'
encode(schema, [])              # None (absent record)
```
"""

from __future__ import annotations

from .declaration import parse_field, parse_schema
from .encoder import encode, write_field, write_record
from .errors import (
    EncodeError,
    GrammarError,
    MalformedSequenceSchema,
    MalformedValue,
    MissingNestedSchema,
    MissingSchema,
    SchemaCycle,
    SchemaError,
)
from .grammar import FieldKind, field_kind_from_value
from .padding import pad_zero
from .schema import FieldSchema, Schema, record_field, schema_of, sequence_field, validate_schema
from .writer import JsonWriter

__all__ = [
    "FieldKind",
    "field_kind_from_value",
    "FieldSchema",
    "Schema",
    "schema_of",
    "record_field",
    "sequence_field",
    "validate_schema",
    "parse_schema",
    "parse_field",
    "encode",
    "write_record",
    "write_field",
    "JsonWriter",
    "pad_zero",
    "EncodeError",
    "MissingSchema",
    "MissingNestedSchema",
    "MalformedSequenceSchema",
    "MalformedValue",
    "SchemaCycle",
    "SchemaError",
    "GrammarError",
]
