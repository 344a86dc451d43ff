"""
Core exception types raised by schema declarations, schema models, and the encoder.

Provides typed exceptions for core-domain failures:
- GrammarError for unknown kind names and malformed schema declarations.
- SchemaError for schema model constraints (e.g. a nested schema on a scalar kind).
- EncodeError and its subclasses for failures while walking a (schema, value) pair.

Notes:
    - This module uses only the Python standard library and has no side effects.
    - Every EncodeError aborts the whole encode call; callers never receive
      partial output.
    - Encoding is deterministic, so none of these errors is worth retrying
      without changing the input.

Examples:
    Catch a structural failure raised during encoding.

    >>> from recjson.core.errors import EncodeError, MissingNestedSchema
    >>> try:
    ...     raise MissingNestedSchema("no nested schema found for field 'T'", field="T")
    ... except EncodeError as e:
    ...     name = e.field
    >>> name
    'T'
"""

from __future__ import annotations

__all__ = [
    "GrammarError",
    "SchemaError",
    "EncodeError",
    "MissingSchema",
    "MissingNestedSchema",
    "MalformedSequenceSchema",
    "MalformedValue",
    "SchemaCycle",
]


class GrammarError(ValueError):
    """Unknown kind name or malformed schema declaration text."""


class SchemaError(ValueError):
    """Schema model constraint violated (shape of a FieldSchema or Schema)."""


class EncodeError(ValueError):
    """
    Base class for failures raised while encoding a record.

    Attributes:
        field (str | None): Name of the field being written when the failure
            occurred, when known.
    """

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class MissingSchema(EncodeError):
    """No schema was supplied for a record to be encoded."""


class MissingNestedSchema(EncodeError):
    """A record or record_sequence field lacks its required nested schema."""


class MalformedSequenceSchema(EncodeError):
    """A record_sequence schema does not hold exactly one field of kind record."""


class MalformedValue(EncodeError):
    """
    Value does not fit its schema position.

    Raised for value/schema arity mismatches (fewer positions than fields) and
    for values whose Python type cannot be rendered as the declared kind.
    """


class SchemaCycle(EncodeError):
    """Schema nesting exceeded the maximum depth (self-referential or runaway schema)."""
