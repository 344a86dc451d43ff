from __future__ import annotations

import pytest

from recjson.core.declaration import parse_field, parse_schema
from recjson.core.errors import GrammarError
from recjson.core.grammar import FieldKind
from recjson.core.schema import FieldSchema, record_field, schema_of, sequence_field


def test_host_aliases_parse_to_canonical_kinds() -> None:
    schema = parse_schema("B:bag{T:tuple(text:chararray, number:int)}")
    assert schema == schema_of(
        sequence_field(
            "B",
            FieldSchema(name="text", kind=FieldKind.TEXT),
            FieldSchema(name="number", kind=FieldKind.INT32),
            element_name="T",
        )
    )


def test_anonymous_element_uses_element_name() -> None:
    field = parse_field("B:bag{(v:int)}")
    assert field.nested is not None
    assert field.nested.names() == ["item"]

    custom = parse_field("B:bag{(v:int)}", element_name="row")
    assert custom.nested is not None
    assert custom.nested.names() == ["row"]


def test_canonical_declaration_round_trips() -> None:
    schema = parse_schema(
        'id:long, "odd name":chararray, m:map[int], '
        "t:tuple(dt:datetime, f:float), b:bag{(x:double, raw:bytearray)}"
    )
    text = schema.declaration()
    assert text == (
        'id:int64,"odd name":text,m:string_map,'
        "t:record(dt:datetime,f:float32),"
        "b:record_sequence{item:record(x:float64,raw:opaque)}"
    )
    assert parse_schema(text) == schema


def test_untyped_field_is_opaque() -> None:
    assert parse_field("payload") == FieldSchema(name="payload", kind=FieldKind.OPAQUE)


def test_nested_kind_without_body_has_no_nested_schema() -> None:
    assert parse_field("T:tuple").nested is None
    assert parse_field("B:bag").nested is None


def test_blank_text_is_empty_schema() -> None:
    assert len(parse_schema("")) == 0
    assert len(parse_schema("   ")) == 0


def test_empty_record_body() -> None:
    field = parse_field("T:tuple()")
    assert field.nested is not None
    assert len(field.nested) == 0


def test_kind_names_are_case_insensitive() -> None:
    assert parse_field("a:CHARARRAY").kind is FieldKind.TEXT


@pytest.mark.parametrize(
    "text",
    [
        "a:widget",
        "a:int(b:int)",
        "T:tuple(a:int",
        "a:int b:int",
        "a:int[]",
        "a:",
        ":int",
        "a:int,",
        "a;int",
    ],
)
def test_malformed_declarations(text: str) -> None:
    with pytest.raises(GrammarError):
        parse_schema(text)


def test_parse_field_requires_one_field() -> None:
    with pytest.raises(GrammarError):
        parse_field("a:int, b:int")


def test_record_field_helper_matches_parser() -> None:
    assert parse_field("T:tuple(a:int)") == record_field("T", FieldSchema(name="a", kind="int"))
