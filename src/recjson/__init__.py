"""
recjson — schema-driven encoding of nested records into JSON text.

Layers
- recjson.core: kinds, schemas, declarations, and the recursive encoder (zero-IO).
- recjson.io: polars/pyarrow adapters, configuration, NDJSON output.
- recjson.cli: ``recjson`` console entry point.
"""

from __future__ import annotations

from recjson.core import (
    EncodeError,
    FieldKind,
    FieldSchema,
    Schema,
    encode,
    parse_schema,
)

__all__ = [
    "EncodeError",
    "FieldKind",
    "FieldSchema",
    "Schema",
    "encode",
    "parse_schema",
]

__version__ = "0.1.0"
