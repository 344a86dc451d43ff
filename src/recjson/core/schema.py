"""
Pydantic v2 models for encoder schemas.

A Schema is an ordered tuple of FieldSchema descriptors; record and
record_sequence fields own their nested Schema outright, so every schema is a
finite tree. Validators normalize kind names through grammar helpers and reject
nested schemas on kinds that never carry one.

Responsibilities
- Define FieldSchema and Schema (frozen, hashable, comparable by value).
- Render the canonical declaration text (see recjson.core.declaration for the parser).
- Provide an eager structural check (validate_schema) that mirrors what the
  encoder enforces lazily.

Style
- Zero-IO (stdlib + pydantic only).
- Order is significant and duplicate names are legal: each position is
  independent and aligns with the same position of a record value.

References
- grammar: src/recjson/core/grammar.py (FieldKind, aliases)
- errors: src/recjson/core/errors.py
- tests: tests/core/test_schema_models.py
"""

from __future__ import annotations

import json
from collections.abc import Iterator

from pydantic import BaseModel, ConfigDict, RootModel, field_validator, model_validator

from .constants import MAX_NESTING_DEPTH, SEQUENCE_ELEMENT_NAME
from .errors import (
    MalformedSequenceSchema,
    MissingNestedSchema,
    SchemaCycle,
    SchemaError,
)
from .grammar import FieldKind, field_kind_from_value, is_identifier, is_nested_kind

__all__ = [
    "FieldSchema",
    "Schema",
    "schema_of",
    "record_field",
    "sequence_field",
    "sequence_element",
    "validate_schema",
]


class FieldSchema(BaseModel):
    """
    Named, kinded field descriptor.

    Attributes:
        name (str): Output key; written verbatim (no normalization).
        kind (FieldKind): Declared kind. Strings are accepted and resolved via
            grammar.field_kind_from_value (canonical values or host aliases).
        nested (Schema | None): Nested schema for record (its fields) and
            record_sequence (exactly one record field describing the element).

    Raises:
        pydantic.ValidationError: If the kind name is unknown or a scalar /
            string_map kind carries a nested schema.

    Notes:
        A record or record_sequence field may omit ``nested``; the encoder then
        fails with MissingNestedSchema only when a non-null value reaches it.

    Examples:
        >>> from recjson.core.schema import FieldSchema
        >>> FieldSchema(name="number", kind="float").kind.value
        'float32'
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str
    kind: FieldKind
    nested: Schema | None = None

    @field_validator("kind", mode="before")
    @classmethod
    def _normalize_kind(cls, v: object) -> FieldKind:
        return field_kind_from_value(v)  # type: ignore[arg-type]

    @model_validator(mode="after")
    def _check_nested(self) -> FieldSchema:
        if self.nested is not None and not is_nested_kind(self.kind):
            raise SchemaError(
                f"field {self.name!r} of kind {self.kind.value!r} cannot carry a nested schema"
            )
        return self

    def declaration(self) -> str:
        """
        Render this field as canonical declaration text.

        Examples:
            >>> from recjson.core.schema import record_field, FieldSchema
            >>> record_field("T", FieldSchema(name="dt", kind="datetime")).declaration()
            'T:record(dt:datetime)'
        """
        name = self.name if is_identifier(self.name) else json.dumps(self.name, ensure_ascii=False)
        out = f"{name}:{self.kind.value}"
        if self.nested is None:
            return out
        if self.kind is FieldKind.RECORD_SEQUENCE:
            return out + "{" + self.nested.declaration() + "}"
        return out + "(" + self.nested.declaration() + ")"


class Schema(RootModel[tuple[FieldSchema, ...]]):
    """
    Ordered sequence of FieldSchema.

    Supports ``len``, iteration, and indexing over its fields.

    Examples:
        >>> from recjson.core.schema import Schema, FieldSchema
        >>> s = Schema((FieldSchema(name="a", kind="int"), FieldSchema(name="a", kind="text")))
        >>> [f.kind.value for f in s]
        ['int32', 'text']
    """

    model_config = ConfigDict(frozen=True)

    root: tuple[FieldSchema, ...] = ()

    def __iter__(self) -> Iterator[FieldSchema]:  # type: ignore[override]
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> FieldSchema:
        return self.root[index]

    def names(self) -> list[str]:
        """Field names in schema order (duplicates kept)."""
        return [f.name for f in self.root]

    def declaration(self) -> str:
        """
        Render the schema as canonical declaration text.

        Examples:
            >>> from recjson.core.schema import schema_of, sequence_field, FieldSchema
            >>> schema_of(sequence_field("B", FieldSchema(name="v", kind="int"))).declaration()
            'B:record_sequence{item:record(v:int32)}'
        """
        return ",".join(f.declaration() for f in self.root)


FieldSchema.model_rebuild()
Schema.model_rebuild()


def schema_of(*fields: FieldSchema) -> Schema:
    """Build a Schema from positional FieldSchema arguments."""
    return Schema(tuple(fields))


def record_field(name: str, *fields: FieldSchema) -> FieldSchema:
    """Build a record field whose nested schema holds ``fields``."""
    return FieldSchema(name=name, kind=FieldKind.RECORD, nested=Schema(tuple(fields)))


def sequence_field(
    name: str,
    *fields: FieldSchema,
    element_name: str = SEQUENCE_ELEMENT_NAME,
) -> FieldSchema:
    """
    Build a record_sequence field whose elements are records of ``fields``.

    The nested schema holds exactly one record field named ``element_name``.
    """
    element = record_field(element_name, *fields)
    return FieldSchema(name=name, kind=FieldKind.RECORD_SEQUENCE, nested=Schema((element,)))


def sequence_element(field: FieldSchema) -> Schema:
    """
    Resolve the per-element schema of a record_sequence field.

    Args:
        field (FieldSchema): A field of kind record_sequence.

    Returns:
        Schema: The element record's nested schema.

    Raises:
        MissingNestedSchema: If the field or its element record has no nested schema.
        MalformedSequenceSchema: If the nested schema does not hold exactly one
            field of kind record.
    """
    if field.nested is None:
        raise MissingNestedSchema(
            f"no nested schema found for field {field.name!r}", field=field.name
        )
    if len(field.nested) != 1 or field.nested[0].kind is not FieldKind.RECORD:
        kinds = [f.kind.value for f in field.nested]
        raise MalformedSequenceSchema(
            f"record_sequence field {field.name!r} must hold exactly one record field, got {kinds}",
            field=field.name,
        )
    element = field.nested[0]
    if element.nested is None:
        raise MissingNestedSchema(
            f"no nested schema found for element {element.name!r} of field {field.name!r}",
            field=field.name,
        )
    return element.nested


def validate_schema(schema: Schema, *, max_depth: int = MAX_NESTING_DEPTH) -> None:
    """
    Eagerly check the structure the encoder requires for non-null values.

    Args:
        schema (Schema): Schema to check.
        max_depth (int): Maximum nesting depth before SchemaCycle is raised.

    Raises:
        MissingNestedSchema: A record / record_sequence lacks its nested schema.
        MalformedSequenceSchema: A record_sequence has the wrong nested shape.
        SchemaCycle: Nesting is deeper than ``max_depth``.

    Notes:
        The encoder itself never calls this: a null value under a broken nested
        schema still encodes as ``null``. Use it to reject schemas up front.
    """
    _validate_fields(schema, 0, max_depth)


def _validate_fields(schema: Schema, depth: int, max_depth: int) -> None:
    if depth > max_depth:
        raise SchemaCycle(f"schema nesting exceeds maximum depth {max_depth}")
    for f in schema:
        if f.kind is FieldKind.RECORD:
            if f.nested is None:
                raise MissingNestedSchema(
                    f"no nested schema found for field {f.name!r}", field=f.name
                )
            _validate_fields(f.nested, depth + 1, max_depth)
        elif f.kind is FieldKind.RECORD_SEQUENCE:
            _validate_fields(sequence_element(f), depth + 1, max_depth)
