from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from fractions import Fraction

import pytest

from recjson.core.padding import pad_zero
from recjson.core.serde import display_form, float32_text, float64_text, integer_text, json_string


@pytest.mark.parametrize(
    "value, expected",
    [(0, "00"), (1, "01"), (5, "05"), (9, "09"), (10, "10"), (19, "19"), (123, "123")],
)
def test_pad_zero(value: int, expected: str) -> None:
    assert pad_zero(value) == expected


def test_pad_zero_negative_gets_one_leading_zero() -> None:
    assert pad_zero(-5) == "0-5"


def test_iso_date_by_concatenation() -> None:
    assert f"2005-{pad_zero(1)}-{pad_zero(7)}T{pad_zero(0)}:00:00.000Z" == "2005-01-07T00:00:00.000Z"


def test_display_form_rules() -> None:
    assert display_form(None) is None
    assert display_form("as is") == "as is"
    assert display_form(False) == "false"
    assert display_form(7) == "7"
    assert display_form(1.0) == "1.0"
    assert display_form(float("nan")) == "NaN"
    assert display_form(bytearray(b"\xffok")) == "\ufffdok"
    assert display_form(date(2005, 1, 1)) == "2005-01-01"
    assert display_form(time(12, 30)) == "12:30:00"
    assert display_form(datetime(2005, 1, 1, 8)) == "2005-01-01T08:00:00"


def test_integer_text_is_exact() -> None:
    assert integer_text(10**30) == str(10**30)
    for bad in (True, 2.0, Decimal("1.5"), Fraction(7, 2), "3"):
        with pytest.raises(TypeError):
            integer_text(bad)


def test_float_texts() -> None:
    assert float64_text(1e16) == "1e+16"
    assert float64_text(float("-inf")) == "-Infinity"
    assert float32_text(3.4028234663852886e38) == "3.4028235e+38"
    assert float32_text(-0.0) == "-0.0"
    with pytest.raises(OverflowError):
        float32_text(1e39)


def test_json_string_keeps_unicode() -> None:
    assert json_string("héllo") == '"héllo"'
    assert json_string('a"b') == '"a\\"b"'
