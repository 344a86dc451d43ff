"""
pyarrow adapter: Arrow schemas and tables → recjson encoder inputs.

Arrow carries a native map type, so string_map fields need no hints here:
``map<k, v>`` columns encode as string_map directly. Struct and list<struct>
types map onto record and record_sequence the same way as the polars adapter.

Type mapping
- bool → boolean
- int8/16/32, uint8/16 → int32; int64, uint32/64 → int64
- float16/float32 → float32; float64 → float64
- timestamp/date/time/duration → datetime
- string/large_string → text; dictionary → mapping of its value type
- binary/large_binary/fixed_size_binary/decimal/null → opaque
- map → string_map; struct → record; list/large_list/fixed_size_list of struct → record_sequence
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from typing import Any

import pyarrow as pa

from recjson.core.grammar import FieldKind
from recjson.core.schema import FieldSchema, Schema

from .align import align_record
from .batch import encode_records
from .config import EncodeSettings
from .errors import IoSchemaError

__all__ = [
    "schema_from_arrow",
    "records_from_table",
    "encode_table",
]

_T = pa.types


def _scalar_kind(t: pa.DataType) -> FieldKind | None:
    if _T.is_boolean(t):
        return FieldKind.BOOLEAN
    if _T.is_int8(t) or _T.is_int16(t) or _T.is_int32(t) or _T.is_uint8(t) or _T.is_uint16(t):
        return FieldKind.INT32
    if _T.is_int64(t) or _T.is_uint32(t) or _T.is_uint64(t):
        return FieldKind.INT64
    if _T.is_float16(t) or _T.is_float32(t):
        return FieldKind.FLOAT32
    if _T.is_float64(t):
        return FieldKind.FLOAT64
    if _T.is_timestamp(t) or _T.is_date(t) or _T.is_time(t) or _T.is_duration(t):
        return FieldKind.DATETIME
    if _T.is_string(t) or _T.is_large_string(t):
        return FieldKind.TEXT
    if (
        _T.is_binary(t)
        or _T.is_large_binary(t)
        or _T.is_fixed_size_binary(t)
        or _T.is_decimal(t)
        or _T.is_null(t)
    ):
        return FieldKind.OPAQUE
    return None


def _field_from_type(name: str, t: pa.DataType, element_name: str) -> FieldSchema:
    if _T.is_dictionary(t):
        return _field_from_type(name, t.value_type, element_name)

    kind = _scalar_kind(t)
    if kind is not None:
        return FieldSchema(name=name, kind=kind)

    if _T.is_map(t):
        return FieldSchema(name=name, kind=FieldKind.STRING_MAP)

    if _T.is_struct(t):
        nested = _schema_from_fields((t.field(i) for i in range(t.num_fields)), element_name)
        return FieldSchema(name=name, kind=FieldKind.RECORD, nested=nested)

    if _T.is_list(t) or _T.is_large_list(t) or _T.is_fixed_size_list(t):
        inner = t.value_type
        if not _T.is_struct(inner):
            raise IoSchemaError(
                f"field {name!r}: lists of {inner} are not supported; only lists of structs"
            )
        element = _schema_from_fields(
            (inner.field(i) for i in range(inner.num_fields)), element_name
        )
        element_field = FieldSchema(name=element_name, kind=FieldKind.RECORD, nested=element)
        return FieldSchema(
            name=name, kind=FieldKind.RECORD_SEQUENCE, nested=Schema((element_field,))
        )

    raise IoSchemaError(f"field {name!r}: unsupported arrow type {t}")


def _schema_from_fields(fields: Iterable[pa.Field], element_name: str) -> Schema:
    return Schema(tuple(_field_from_type(f.name, f.type, element_name) for f in fields))


def schema_from_arrow(schema: pa.Schema, *, element_name: str | None = None) -> Schema:
    """
    Map an Arrow schema to a recjson Schema.

    Raises:
        IoSchemaError: If a type has no FieldKind counterpart.

    Examples:
        >>> import pyarrow as pa
        >>> schema_from_arrow(pa.schema([("m", pa.map_(pa.string(), pa.int64()))])).declaration()
        'm:string_map'
    """
    element_name = element_name or EncodeSettings().element_name
    return _schema_from_fields(schema, element_name)


def records_from_table(table: pa.Table, schema: Schema) -> Iterator[Any]:
    """Yield one positional record per table row, aligned to ``schema`` by column name."""
    for row in table.to_pylist():
        yield align_record(schema, row)


def encode_table(
    table: pa.Table,
    *,
    schema: Schema | None = None,
    settings: EncodeSettings | None = None,
) -> pa.Array:
    """
    Encode every row of an Arrow table as a JSON object string.

    Returns:
        pa.Array: ``string`` array, null for absent or skipped rows.

    Raises:
        IoSchemaError: If the table's types cannot be mapped (derived schema only).
        recjson.core.errors.EncodeError: On the first failing row when
            ``settings.on_error == "raise"``.
    """
    settings = settings or EncodeSettings()
    if schema is None:
        schema = schema_from_arrow(table.schema, element_name=settings.element_name)
    values = encode_records(schema, records_from_table(table, schema), settings)
    return pa.array(values, type=pa.string())
