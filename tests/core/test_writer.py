from __future__ import annotations

import io

import pytest

from recjson.core.writer import JsonWriter


def _writer() -> tuple[JsonWriter, io.StringIO]:
    buf = io.StringIO()
    return JsonWriter(buf), buf


def test_nested_containers_are_compact() -> None:
    w, buf = _writer()
    w.start_object()
    w.write_field_name("a")
    w.start_array()
    w.write_number("1")
    w.start_object()
    w.write_string_field("k", "v")
    w.end_object()
    w.write_null()
    w.end_array()
    w.write_boolean_field("b", False)
    w.end_object()

    assert buf.getvalue() == '{"a":[1,{"k":"v"},null],"b":false}'
    assert w.depth == 0


def test_string_field_none_is_null() -> None:
    w, buf = _writer()
    w.start_object()
    w.write_string_field("s", None)
    w.end_object()
    assert buf.getvalue() == '{"s":null}'


def test_names_and_strings_are_escaped() -> None:
    w, buf = _writer()
    w.start_object()
    w.write_string_field('we"ird\n', "tab\there")
    w.end_object()
    assert buf.getvalue() == '{"we\\"ird\\n":"tab\\there"}'


def test_depth_tracks_open_containers() -> None:
    w, _ = _writer()
    w.start_object()
    w.write_field_name("xs")
    w.start_array()
    assert w.depth == 2
    w.end_array()
    w.end_object()
    assert w.depth == 0


def test_value_without_name_inside_object() -> None:
    w, _ = _writer()
    w.start_object()
    with pytest.raises(RuntimeError):
        w.write_null()


def test_name_outside_object() -> None:
    w, _ = _writer()
    w.start_array()
    with pytest.raises(RuntimeError):
        w.write_field_name("a")


def test_unbalanced_close() -> None:
    w, _ = _writer()
    w.start_object()
    with pytest.raises(RuntimeError):
        w.end_array()


def test_dangling_name_cannot_close() -> None:
    w, _ = _writer()
    w.start_object()
    w.write_field_name("a")
    with pytest.raises(RuntimeError):
        w.end_object()


def test_single_root_value() -> None:
    w, _ = _writer()
    w.start_object()
    w.end_object()
    with pytest.raises(RuntimeError):
        w.start_object()
