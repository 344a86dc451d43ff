"""
Polars adapter: DataFrame schemas and rows → recjson encoder inputs.

Purpose
- Map a polars schema onto a recjson Schema (dtype → FieldKind).
- Align DataFrame rows into positional records and encode one JSON object per row.

Dtype mapping
- Boolean → boolean
- Int8/Int16/Int32, UInt8/UInt16 → int32; Int64, UInt32/UInt64 → int64
- Float32 → float32; Float64 → float64
- Date/Datetime/Time/Duration → datetime
- String/Categorical/Enum → text
- Binary/Object/Null/Decimal → opaque
- Struct → record (string_map when the field is named in ``string_maps``)
- List/Array of Struct → record_sequence (string_map when named and key/value shaped)

Notes
- Lists of non-struct values have no FieldKind counterpart and raise IoSchemaError.
- Float32 values come back from polars widened to Python floats; the encoder
  renders them at single precision, so no widening noise reaches the output.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any

import polars as pl

from recjson.core.grammar import FieldKind
from recjson.core.schema import FieldSchema, Schema

from .align import align_record
from .batch import encode_records
from .config import EncodeSettings
from .errors import IoSchemaError

__all__ = [
    "schema_from_polars",
    "records_from_frame",
    "encode_frame",
    "with_json_column",
]

# Note: polars exposes dtype classes (e.g., pl.Int64); base_type() maps parametrized
# instances (Datetime("us"), List(...)) back onto these classes.
_SCALAR_KINDS: dict[object, FieldKind] = {
    pl.Boolean: FieldKind.BOOLEAN,
    pl.Int8: FieldKind.INT32,
    pl.Int16: FieldKind.INT32,
    pl.Int32: FieldKind.INT32,
    pl.UInt8: FieldKind.INT32,
    pl.UInt16: FieldKind.INT32,
    pl.Int64: FieldKind.INT64,
    pl.UInt32: FieldKind.INT64,
    pl.UInt64: FieldKind.INT64,
    pl.Float32: FieldKind.FLOAT32,
    pl.Float64: FieldKind.FLOAT64,
    pl.Date: FieldKind.DATETIME,
    pl.Datetime: FieldKind.DATETIME,
    pl.Time: FieldKind.DATETIME,
    pl.Duration: FieldKind.DATETIME,
    pl.String: FieldKind.TEXT,
    pl.Categorical: FieldKind.TEXT,
    pl.Enum: FieldKind.TEXT,
    pl.Binary: FieldKind.OPAQUE,
    pl.Object: FieldKind.OPAQUE,
    pl.Null: FieldKind.OPAQUE,
    pl.Decimal: FieldKind.OPAQUE,
}


def _is_key_value_struct(dtype: Any) -> bool:
    return isinstance(dtype, pl.Struct) and {f.name for f in dtype.fields} == {"key", "value"}


def _field_from_dtype(
    name: str,
    dtype: Any,
    string_maps: frozenset[str],
    element_name: str,
) -> FieldSchema:
    base = dtype.base_type()
    if base is pl.Object and name in string_maps:
        return FieldSchema(name=name, kind=FieldKind.STRING_MAP)
    if base in _SCALAR_KINDS:
        return FieldSchema(name=name, kind=_SCALAR_KINDS[base])

    if base is pl.Struct:
        if name in string_maps:
            return FieldSchema(name=name, kind=FieldKind.STRING_MAP)
        nested = _schema_from_items(
            ((f.name, f.dtype) for f in dtype.fields), string_maps, element_name
        )
        return FieldSchema(name=name, kind=FieldKind.RECORD, nested=nested)

    if base is pl.List or base is pl.Array:
        inner = dtype.inner
        if name in string_maps and _is_key_value_struct(inner):
            return FieldSchema(name=name, kind=FieldKind.STRING_MAP)
        if not isinstance(inner, pl.Struct):
            raise IoSchemaError(
                f"column {name!r}: lists of {inner} are not supported; only lists of structs"
            )
        element = _schema_from_items(
            ((f.name, f.dtype) for f in inner.fields), string_maps, element_name
        )
        element_field = FieldSchema(name=element_name, kind=FieldKind.RECORD, nested=element)
        return FieldSchema(
            name=name, kind=FieldKind.RECORD_SEQUENCE, nested=Schema((element_field,))
        )

    raise IoSchemaError(f"column {name!r}: unsupported polars dtype {dtype}")


def _schema_from_items(
    items: Iterable[tuple[str, Any]],
    string_maps: frozenset[str],
    element_name: str,
) -> Schema:
    return Schema(
        tuple(_field_from_dtype(n, dt, string_maps, element_name) for n, dt in items)
    )


def schema_from_polars(
    schema: Mapping[str, Any],
    *,
    string_maps: Iterable[str] = (),
    element_name: str | None = None,
) -> Schema:
    """
    Map a polars schema (``df.schema`` or a name → dtype mapping) to a recjson Schema.

    Args:
        schema (Mapping[str, pl.DataType]): Ordered column name → dtype mapping.
        string_maps (Iterable[str]): Field names (at any depth) to encode as string_map.
        element_name (str | None): Element record name for record_sequence
            fields; defaults to EncodeSettings().element_name.

    Returns:
        Schema: Field order follows the mapping's order.

    Raises:
        IoSchemaError: If a dtype has no FieldKind counterpart.

    Examples:
        >>> import polars as pl
        >>> schema_from_polars({"B": pl.List(pl.Struct({"v": pl.Int32}))}).declaration()
        'B:record_sequence{item:record(v:int32)}'
    """
    element_name = element_name or EncodeSettings().element_name
    return _schema_from_items(schema.items(), frozenset(string_maps), element_name)


def records_from_frame(df: pl.DataFrame, schema: Schema) -> Iterator[Any]:
    """
    Yield one positional record per DataFrame row, aligned to ``schema`` by column name.

    Notes:
        Columns absent from the frame align as null; extra columns are ignored.
    """
    for row in df.iter_rows(named=True):
        yield align_record(schema, row)


def encode_frame(
    df: pl.DataFrame,
    *,
    schema: Schema | None = None,
    settings: EncodeSettings | None = None,
) -> pl.Series:
    """
    Encode every row of a DataFrame as a JSON object string.

    Args:
        df (pl.DataFrame): Input frame.
        schema (Schema | None): Explicit schema; derived from ``df.schema`` when None.
        settings (EncodeSettings | None): Adapter settings (defaults when None).

    Returns:
        pl.Series: String series named ``settings.output_column``; null for
        absent or skipped rows.

    Raises:
        IoSchemaError: If the frame's dtypes cannot be mapped (derived schema only).
        recjson.core.errors.EncodeError: On the first failing row when
            ``settings.on_error == "raise"``.
    """
    settings = settings or EncodeSettings()
    if schema is None:
        schema = schema_from_polars(
            df.schema, string_maps=settings.string_maps, element_name=settings.element_name
        )
    values = encode_records(schema, records_from_frame(df, schema), settings)
    return pl.Series(settings.output_column, values, dtype=pl.String)


def with_json_column(
    df: pl.DataFrame,
    *,
    schema: Schema | None = None,
    settings: EncodeSettings | None = None,
) -> pl.DataFrame:
    """Return ``df`` with the encoded JSON series appended (see encode_frame)."""
    return df.with_columns(encode_frame(df, schema=schema, settings=settings))
