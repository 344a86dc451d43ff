from __future__ import annotations

import pytest

from recjson.core.declaration import parse_schema
from recjson.core.encoder import encode, write_record
from recjson.core.errors import (
    EncodeError,
    MalformedSequenceSchema,
    MalformedValue,
    MissingNestedSchema,
    MissingSchema,
    SchemaCycle,
)
from recjson.core.schema import FieldSchema, record_field, schema_of
from recjson.core.writer import JsonWriter


def test_missing_schema() -> None:
    with pytest.raises(MissingSchema):
        encode(None, (1,))


def test_record_without_nested_schema() -> None:
    schema = parse_schema("T:tuple")
    with pytest.raises(MissingNestedSchema) as info:
        encode(schema, [(1,)])
    assert info.value.field == "T"


def test_sequence_without_nested_schema() -> None:
    with pytest.raises(MissingNestedSchema):
        encode(parse_schema("B:bag"), ([],))


def test_sequence_element_without_nested_schema() -> None:
    with pytest.raises(MissingNestedSchema):
        encode(parse_schema("B:bag{T:tuple}"), ([(1,)],))


def test_sequence_of_scalar_field_is_malformed() -> None:
    # The single nested field must itself be a record.
    with pytest.raises(MalformedSequenceSchema):
        encode(parse_schema("B:bag{v:int}"), ([(1,)],))


def test_malformed_sequence_schema_fails_even_when_empty() -> None:
    with pytest.raises(MalformedSequenceSchema):
        encode(parse_schema("B:bag{a:tuple(v:int), b:tuple(v:int)}"), ([],))


def test_top_level_arity_mismatch() -> None:
    with pytest.raises(MalformedValue):
        encode(parse_schema("a:int, b:int"), (1,))


def test_nested_arity_mismatch() -> None:
    schema = parse_schema("T:tuple(a:int, b:int)")
    with pytest.raises(MalformedValue) as info:
        encode(schema, [(1,)])
    assert info.value.field == "b"


def test_sequence_element_arity_mismatch() -> None:
    schema = parse_schema("B:bag{(a:int, b:int)}")
    with pytest.raises(MalformedValue):
        encode(schema, ([(1, 2), (3,)],))


def test_nesting_deeper_than_max_depth_is_a_cycle() -> None:
    field = FieldSchema(name="leaf", kind="int")
    value: object = (1,)
    for i in range(5):
        field = record_field(f"r{i}", field)
        value = (value,)
    schema = schema_of(field)

    with pytest.raises(SchemaCycle):
        encode(schema, value, max_depth=3)
    # The same schema encodes under the default depth.
    assert encode(schema, value) == '{"r4":{"r3":{"r2":{"r1":{"r0":{"leaf":1}}}}}}'


def test_encode_errors_are_value_errors() -> None:
    for exc_type in (
        MissingSchema,
        MissingNestedSchema,
        MalformedSequenceSchema,
        MalformedValue,
        SchemaCycle,
    ):
        assert issubclass(exc_type, EncodeError)
        assert issubclass(exc_type, ValueError)


def test_failed_encode_returns_no_partial_text() -> None:
    schema = parse_schema("a:int, T:tuple")
    with pytest.raises(MissingNestedSchema):
        encode(schema, (1, (2,)))


def test_write_record_streams_into_caller_sink() -> None:
    chunks: list[str] = []

    class Sink:
        def write(self, s: str) -> None:
            chunks.append(s)

    schema = parse_schema("a:int, b:tuple(c:chararray)")
    write_record(JsonWriter(Sink()), schema, (1, ("x",)))
    assert len(chunks) > 1  # written incrementally, not as one buffer
    assert "".join(chunks) == '{"a":1,"b":{"c":"x"}}'
