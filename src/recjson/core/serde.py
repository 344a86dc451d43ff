"""
Scalar text rendering and thin JSON helpers.

Centralizes how individual values become JSON tokens so the writer and the
encoder share one policy:

- strings are JSON-quoted with ``ensure_ascii=False`` (unicode kept as-is);
- integers are written exactly, with no narrowing;
- float32 values are written as the shortest decimal that round-trips through
  IEEE single precision, so widened values do not leak double-precision noise;
- float64 values use ``repr`` (shortest round-trip double text);
- non-finite floats render as the text ``NaN``, ``Infinity``, ``-Infinity``;
  the encoder writes that text as a JSON string (see NON_FINITE_TOKENS);
- the display form of an arbitrary value is its human text (used for
  datetime/opaque kinds and for every string_map value).

This module is zero-IO and uses only the Python standard library.
"""

from __future__ import annotations

import json
import math
import operator
import struct
from datetime import date, datetime, time
from typing import Any

__all__ = [
    "json_loads",
    "json_string",
    "NON_FINITE_TOKENS",
    "integer_text",
    "float32_text",
    "float64_text",
    "display_form",
]

_F32 = struct.Struct("<f")

# Text of non-finite floats; never valid as a bare JSON number.
NON_FINITE_TOKENS: frozenset[str] = frozenset({"NaN", "Infinity", "-Infinity"})


def json_loads(s: str) -> Any:
    """
    Deserialize a JSON string to Python objects using the stdlib json module.

    Notes:
        Provided for round-trip checks in tests and tooling; recjson does not
        parse JSON anywhere on the encode path.
    """
    return json.loads(s)


def json_string(s: str) -> str:
    """
    Quote a string as a JSON string token.

    Examples:
        >>> json_string("héllo")
        '"héllo"'
    """
    return json.dumps(s, ensure_ascii=False)


def integer_text(value: Any) -> str:
    """
    Render an integral value exactly.

    Accepts anything with ``__index__`` (int, numpy integer scalars) except
    bool. Non-integral numbers (float, Decimal, Fraction) and numeric strings
    are rejected rather than truncated or parsed.

    Raises:
        TypeError: If the value is a bool or not integral.

    Examples:
        >>> integer_text(-(2**63))
        '-9223372036854775808'
    """
    if isinstance(value, bool):
        raise TypeError("expected an integer, got bool")
    try:
        return str(operator.index(value))
    except TypeError:
        raise TypeError(
            f"expected an integer, got {type(value).__name__} {value!r}"
        ) from None


def _non_finite_text(x: float) -> str:
    if math.isnan(x):
        return "NaN"
    return "Infinity" if x > 0 else "-Infinity"


def float64_text(value: Any) -> str:
    """
    Render a double-precision number as its shortest round-trip text.

    Examples:
        >>> float64_text(12)
        '12.0'
        >>> float64_text(0.1)
        '0.1'
    """
    x = float(value)
    if not math.isfinite(x):
        return _non_finite_text(x)
    return repr(x)


def float32_text(value: Any) -> str:
    """
    Render a single-precision number as the shortest text that round-trips as float32.

    Args:
        value (Any): A number; Python floats are rounded to single precision first.

    Returns:
        str: Decimal text with at most 9 significant digits.

    Raises:
        OverflowError: If the value is finite but out of single-precision range.

    Examples:
        >>> float32_text(0.10000000149011612)
        '0.1'
        >>> float32_text(12.0)
        '12.0'
    """
    x = float(value)
    if not math.isfinite(x):
        return _non_finite_text(x)
    packed = _F32.pack(x)
    x32 = _F32.unpack(packed)[0]
    # float32 needs at most 9 significant digits to round-trip.
    for digits in range(1, 10):
        candidate = float(f"{x32:.{digits}g}")
        if _F32.pack(candidate) == packed:
            return repr(candidate)
    return repr(x32)  # pragma: no cover - 9 digits always suffice


def display_form(value: Any) -> str | None:
    """
    Human text of a value, or None for null.

    Rules:
        - str: unchanged
        - bool: ``"true"`` / ``"false"``
        - bytes-like: decoded as UTF-8 (invalid sequences replaced)
        - datetime / date / time: ISO-8601 via ``isoformat()``
        - float: shortest round-trip text (non-finite as NaN / Infinity / -Infinity)
        - anything else: ``str(value)``; containers therefore render as
          Python text (``{"y": 1}`` becomes ``"{'y': 1}"``), a host-specific
          form. Values are never re-encoded as nested JSON.

    Examples:
        >>> display_form(True), display_form(1), display_form(b"raw")
        ('true', '1', 'raw')
        >>> display_form(None) is None
        True
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if isinstance(value, float):
        return float64_text(value)
    return str(value)
