from __future__ import annotations

import json
import math
from datetime import datetime, timezone
from decimal import Decimal
from fractions import Fraction

import pytest

from recjson.core.declaration import parse_schema
from recjson.core.encoder import encode
from recjson.core.errors import MalformedValue
from recjson.core.grammar import FieldKind
from recjson.core.schema import FieldSchema, record_field, schema_of, sequence_field
from recjson.core.serde import json_loads


def _one(decl: str, value) -> str:
    out = encode(parse_schema(decl), (value,))
    assert out is not None
    return out


def test_booleans_are_native_tokens() -> None:
    assert _one("x:boolean", True) == '{"x":true}'
    assert _one("x:boolean", False) == '{"x":false}'


def test_int64_is_not_narrowed() -> None:
    big = 2**63 - 1
    assert _one("x:long", big) == '{"x":9223372036854775807}'
    assert json_loads(_one("x:long", -big))["x"] == -big


def test_int32_keeps_sign() -> None:
    assert _one("x:int", -2147483648) == '{"x":-2147483648}'


def test_float32_drops_double_precision_noise() -> None:
    # 0.1 widened from single precision is 0.10000000149011612.
    assert _one("x:float", 0.10000000149011612) == '{"x":0.1}'
    assert _one("x:float", 0.1) == '{"x":0.1}'
    assert _one("x:float", 1.5) == '{"x":1.5}'


def test_float64_round_trips_exactly() -> None:
    for v in (0.1, 1e-300, 123456789.123456789, -2.5):
        assert json_loads(_one("x:double", v))["x"] == v


def test_integral_floats_keep_decimal_point() -> None:
    assert _one("x:double", 12) == '{"x":12.0}'
    assert _one("x:float", 12) == '{"x":12.0}'


def _strict_loads(text: str):
    def reject(token: str):
        raise ValueError(f"non-standard JSON constant {token}")

    return json.loads(text, parse_constant=reject)


def test_non_finite_floats_are_quoted_strings() -> None:
    assert _one("x:double", float("nan")) == '{"x":"NaN"}'
    assert _one("x:double", float("inf")) == '{"x":"Infinity"}'
    assert _one("x:float", float("-inf")) == '{"x":"-Infinity"}'

    out = encode(parse_schema("x:double, y:float"), (math.nan, math.inf))
    assert _strict_loads(out) == {"x": "NaN", "y": "Infinity"}


@pytest.mark.parametrize(
    "value",
    [Decimal("1.5"), Decimal("2"), Fraction(7, 2), True, "12", 3.0],
)
def test_integer_kinds_reject_non_integral_values(value) -> None:
    for decl in ("x:int", "x:long"):
        with pytest.raises(MalformedValue) as info:
            _one(decl, value)
        assert info.value.field == "x"


def test_integer_kinds_accept_index_types() -> None:
    class Index:
        def __index__(self) -> int:
            return -7

    assert _one("x:long", Index()) == '{"x":-7}'


def test_every_kind_has_a_writer() -> None:
    samples = {
        FieldKind.BOOLEAN: True,
        FieldKind.INT32: 1,
        FieldKind.INT64: 2,
        FieldKind.FLOAT32: 0.5,
        FieldKind.FLOAT64: 0.25,
        FieldKind.DATETIME: "2005-01-01",
        FieldKind.OPAQUE: b"x",
        FieldKind.TEXT: "t",
        FieldKind.STRING_MAP: {"k": 1},
        FieldKind.RECORD: (1,),
        FieldKind.RECORD_SEQUENCE: [(1,)],
    }
    assert set(samples) == set(FieldKind)
    leaf = FieldSchema(name="v", kind="int")
    for kind, value in samples.items():
        if kind is FieldKind.RECORD:
            field = record_field("x", leaf)
        elif kind is FieldKind.RECORD_SEQUENCE:
            field = sequence_field("x", leaf)
        else:
            field = FieldSchema(name="x", kind=kind)
        out = encode(schema_of(field), (value,))
        assert _strict_loads(out).keys() == {"x"}


def test_float32_out_of_range_is_malformed() -> None:
    with pytest.raises(MalformedValue):
        _one("x:float", 3.5e38)


def test_text_is_verbatim_and_escaped() -> None:
    s = 'quote " backslash \\ newline \n unicode 🙂'
    out = _one("x:chararray", s)
    assert "🙂" in out  # ensure_ascii=False
    assert json_loads(out)["x"] == s


def test_datetime_and_opaque_use_display_form() -> None:
    dt = datetime(2005, 1, 1, tzinfo=timezone.utc)
    assert _one("x:datetime", dt) == '{"x":"2005-01-01T00:00:00+00:00"}'
    assert _one("x:datetime", "not re-validated") == '{"x":"not re-validated"}'
    assert _one("x:bytearray", b"raw bytes") == '{"x":"raw bytes"}'
    assert _one("x:opaque", 42) == '{"x":"42"}'


@pytest.mark.parametrize(
    "decl, value",
    [
        ("x:chararray", 5),
        ("x:boolean", 1),
        ("x:int", "abc"),
        ("x:int", 1.5),
        ("x:map", ["a", "b"]),
        ("x:tuple(a:int)", "ab"),
        ("x:tuple(a:int)", {"a": 1}),
        ("x:bag{(a:int)}", "ab"),
    ],
)
def test_values_that_do_not_fit_their_kind(decl: str, value) -> None:
    with pytest.raises(MalformedValue) as info:
        _one(decl, value)
    assert info.value.field == "x"
