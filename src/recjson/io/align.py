"""
Host value alignment.

Polars and pyarrow hand rows back as Python objects whose nested structs are
dicts keyed by field name and whose maps are lists of key/value pairs. The
encoder only understands positional records, so these helpers walk a host value
alongside its Schema and rebuild it positionally.

Rules
- Record given as a Mapping: positions are looked up by field name (a missing
  name is null). Given as a sequence: kept positional, one entry per field.
- record_sequence: each element aligned against the element schema; a broken
  sequence schema leaves the value untouched so the encoder reports it.
- string_map: Mappings are copied; lists of ``(key, value)`` pairs or of
  ``{"key": ..., "value": ...}`` dicts become dicts.
- Everything else passes through unchanged.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from recjson.core.errors import EncodeError
from recjson.core.grammar import FieldKind
from recjson.core.schema import FieldSchema, Schema, sequence_element

__all__ = ["align_record", "align_value"]


def align_record(schema: Schema, value: Any) -> Any:
    """
    Rebuild a host record as a positional tuple ordered like ``schema``.

    Returns None for None; values that are neither mappings nor sequences are
    returned unchanged for the encoder to reject.
    """
    if value is None:
        return None
    if isinstance(value, Mapping):
        return tuple(align_value(f, value.get(f.name)) for f in schema)
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        # zip stops at the shorter side; a short record stays short and the
        # encoder raises MalformedValue for it.
        return tuple(align_value(f, v) for f, v in zip(schema, value))
    return value


def align_value(field: FieldSchema, value: Any) -> Any:
    """Align one field value according to its kind."""
    if value is None:
        return None
    kind = field.kind
    if kind is FieldKind.RECORD:
        if field.nested is None:
            return value
        return align_record(field.nested, value)
    if kind is FieldKind.RECORD_SEQUENCE:
        try:
            element = sequence_element(field)
        except EncodeError:
            return value
        if isinstance(value, (str, bytes, Mapping)):
            return value
        return [align_record(element, row) for row in value]
    if kind is FieldKind.STRING_MAP:
        return _as_mapping(value)
    return value


def _as_mapping(value: Any) -> Any:
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
        return value
    out: dict[Any, Any] = {}
    for entry in value:
        if isinstance(entry, Mapping) and "key" in entry:
            out[entry["key"]] = entry.get("value")
        elif isinstance(entry, Sequence) and not isinstance(entry, (str, bytes)) and len(entry) == 2:
            out[entry[0]] = entry[1]
        else:
            # Not a key/value list; leave it for the encoder to reject.
            return value
    return out
