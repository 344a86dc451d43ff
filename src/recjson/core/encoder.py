"""
Schema-driven recursive JSON encoder.

Walks a Schema and a positional record value in lock-step and streams a JSON
object into a JsonWriter: one member per schema field, depth-first,
left-to-right, keys in schema order.

Dispatch per field (first match wins):
    1. value is None            -> ``"name":null`` for every kind
    2. boolean / numeric kinds  -> native JSON boolean / number (non-finite
                                   floats as the strings "NaN", "Infinity",
                                   "-Infinity")
    3. datetime / opaque        -> JSON string of the display form
    4. text                     -> JSON string, verbatim
    5. string_map               -> object of display-form strings or null
    6. record                   -> object over the nested schema
    7. record_sequence          -> array of element objects ([] when empty)

Errors (recjson.core.errors) propagate immediately out of every recursion
level. ``encode`` owns its buffer, so a failed call never returns partial
text; callers streaming into their own sink with ``write_record`` must discard
what was written themselves.

Examples:
    >>> from recjson.core.encoder import encode
    >>> from recjson.core.schema import schema_of, record_field, FieldSchema
    >>> schema = schema_of(record_field("T",
    ...     FieldSchema(name="dt", kind="datetime"),
    ...     FieldSchema(name="number", kind="float")))
    >>> encode(schema, [("2005-01-01T00:00:00.000Z", 12.0)])
    '{"T":{"dt":"2005-01-01T00:00:00.000Z","number":12.0}}'
"""

from __future__ import annotations

import io
from collections.abc import Iterable, Mapping, Sequence
from typing import Any, assert_never

from .constants import MAX_NESTING_DEPTH
from .errors import MalformedValue, MissingNestedSchema, MissingSchema, SchemaCycle
from .grammar import FieldKind
from .schema import FieldSchema, Schema, sequence_element
from .serde import NON_FINITE_TOKENS, display_form, float32_text, float64_text, integer_text
from .typing import Record, Value
from .writer import JsonWriter

__all__ = [
    "encode",
    "write_record",
    "write_field",
]


def encode(
    schema: Schema | None,
    value: Record | None,
    *,
    max_depth: int = MAX_NESTING_DEPTH,
) -> str | None:
    """
    Encode one record as a JSON object string.

    Args:
        schema (Schema | None): Schema of the record; fields align by position.
        value (Record | None): Positional record value.
        max_depth (int): Nesting depth at which SchemaCycle is raised.

    Returns:
        str | None: JSON text, or None when the record is absent (None or zero
        positions); there is nothing to emit for such a row.

    Raises:
        MissingSchema: If ``schema`` is None for a present record.
        MalformedValue: If the record has fewer positions than the schema has
            fields, or a value cannot be rendered as its declared kind.
        MissingNestedSchema / MalformedSequenceSchema: On broken nested schemas.
        SchemaCycle: If nesting exceeds ``max_depth``.
    """
    if value is None or len(value) == 0:
        return None
    if schema is None:
        raise MissingSchema("a non-null schema is required to encode a record")
    if len(value) < len(schema):
        raise MalformedValue(
            f"record has {len(value)} positions but schema declares {len(schema)} fields"
        )

    buf = io.StringIO()
    write_record(JsonWriter(buf), schema, value, max_depth=max_depth)
    return buf.getvalue()


def write_record(
    writer: JsonWriter,
    schema: Schema,
    value: Record,
    *,
    max_depth: int = MAX_NESTING_DEPTH,
    _depth: int = 0,
) -> None:
    """
    Write ``value`` as a JSON object with one member per field of ``schema``.

    Raises:
        MalformedValue: If ``value`` is not a positional sequence or is shorter
            than the schema.
    """
    if _depth > max_depth:
        raise SchemaCycle(f"schema nesting exceeds maximum depth {max_depth}")
    if not _is_positional(value):
        raise MalformedValue(
            f"record value must be a positional sequence, got {type(value).__name__}"
        )
    writer.start_object()
    for i, field in enumerate(schema):
        try:
            item = value[i]
        except IndexError:
            raise MalformedValue(
                f"record has no position {i} for field {field.name!r}", field=field.name
            ) from None
        write_field(writer, field, item, max_depth=max_depth, _depth=_depth)
    writer.end_object()


def write_field(
    writer: JsonWriter,
    field: FieldSchema,
    value: Value,
    *,
    max_depth: int = MAX_NESTING_DEPTH,
    _depth: int = 0,
) -> None:
    """
    Write exactly one ``"name":<json>`` member into the open object.

    Args:
        writer (JsonWriter): Writer positioned inside an open object.
        field (FieldSchema): Descriptor for this member.
        value (Value): Value at the matching position; None is always null.
        max_depth (int): Nesting depth at which SchemaCycle is raised.
    """
    name = field.name
    if value is None:
        writer.write_null_field(name)
        return

    kind = field.kind
    if kind is FieldKind.BOOLEAN:
        if not isinstance(value, bool):
            raise _type_mismatch(field, value)
        writer.write_boolean_field(name, value)
    elif kind is FieldKind.INT32 or kind is FieldKind.INT64:
        writer.write_number_field(name, _render(integer_text, field, value))
    elif kind is FieldKind.FLOAT32:
        _write_float(writer, name, _render(float32_text, field, value))
    elif kind is FieldKind.FLOAT64:
        _write_float(writer, name, _render(float64_text, field, value))
    elif kind is FieldKind.DATETIME or kind is FieldKind.OPAQUE:
        writer.write_string_field(name, display_form(value))
    elif kind is FieldKind.TEXT:
        if not isinstance(value, str):
            raise _type_mismatch(field, value)
        writer.write_string_field(name, value)
    elif kind is FieldKind.STRING_MAP:
        _write_string_map(writer, field, value)
    elif kind is FieldKind.RECORD:
        if field.nested is None:
            raise MissingNestedSchema(f"no nested schema found for field {name!r}", field=name)
        if not _is_positional(value):
            raise _type_mismatch(field, value)
        writer.write_field_name(name)
        write_record(writer, field.nested, value, max_depth=max_depth, _depth=_depth + 1)
    elif kind is FieldKind.RECORD_SEQUENCE:
        element = sequence_element(field)
        _write_sequence(writer, field, element, value, max_depth=max_depth, _depth=_depth + 1)
    else:
        assert_never(kind)


def _write_float(writer: JsonWriter, name: str, text: str) -> None:
    # NaN and the infinities have no JSON number form.
    if text in NON_FINITE_TOKENS:
        writer.write_string_field(name, text)
    else:
        writer.write_number_field(name, text)


def _write_string_map(writer: JsonWriter, field: FieldSchema, value: Any) -> None:
    if not isinstance(value, Mapping):
        raise _type_mismatch(field, value)
    writer.write_field_name(field.name)
    writer.start_object()
    for key, item in value.items():
        writer.write_string_field(str(key), display_form(item))
    writer.end_object()


def _write_sequence(
    writer: JsonWriter,
    field: FieldSchema,
    element: Schema,
    value: Any,
    *,
    max_depth: int,
    _depth: int,
) -> None:
    if isinstance(value, (str, bytes, Mapping)) or not isinstance(value, Iterable):
        raise _type_mismatch(field, value)
    writer.write_field_name(field.name)
    writer.start_array()
    for row in value:
        if row is None:
            writer.write_null()
        else:
            write_record(writer, element, row, max_depth=max_depth, _depth=_depth)
    writer.end_array()


def _is_positional(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def _render(render: Any, field: FieldSchema, value: Any) -> str:
    try:
        return render(value)
    except (TypeError, ValueError, OverflowError) as exc:
        raise MalformedValue(
            f"field {field.name!r} of kind {field.kind.value!r} cannot render {value!r}: {exc}",
            field=field.name,
        ) from exc


def _type_mismatch(field: FieldSchema, value: Any) -> MalformedValue:
    return MalformedValue(
        f"field {field.name!r} of kind {field.kind.value!r} got {type(value).__name__}",
        field=field.name,
    )
