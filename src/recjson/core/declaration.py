"""
Textual schema declarations.

Parses compact declarations such as ``B:bag{T:tuple(text:chararray, number:int)}``
into a Schema. Canonical kind names and host aliases are both accepted (see
recjson.core.grammar.KIND_ALIASES); ``Schema.declaration()`` renders the
canonical form, which parses back to an equal Schema.

EBNF
----
```
schema   = [ field { "," field } ] ;
field    = name [ ":" type ] ;                       (* untyped -> opaque *)
name     = identifier | json_string ;
type     = kind [ "(" schema ")"                     (* record body *)
                | "{" body "}"                       (* sequence body *)
                | "[" [ kind ] "]" ] ;               (* map value hint, ignored *)
body     = "(" schema ")" | schema ;                 (* anonymous element record *)
```

Notes
- A record/record_sequence kind with no body yields ``nested=None``; the
  encoder reports MissingNestedSchema only if a non-null value reaches it.
- Bodies are attached as written: ``tuple{...}`` or a two-field ``bag{...}``
  parse fine and fail later, at encode or validate_schema time.
- Errors carry the character offset of the offending token.

Examples
--------
>>> from recjson.core.declaration import parse_schema
>>> parse_schema("B:bag{(v:int)}").declaration()
'B:record_sequence{item:record(v:int32)}'
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass

from .constants import SEQUENCE_ELEMENT_NAME
from .errors import GrammarError
from .grammar import FieldKind, field_kind_from_value, is_nested_kind
from .schema import FieldSchema, Schema

__all__ = ["parse_schema", "parse_field"]

_TOKEN_RE = re.compile(
    r"""
    (?P<ws>\s+)
  | (?P<ident>[A-Za-z_][A-Za-z0-9_]*)
  | (?P<string>"(?:[^"\\]|\\.)*")
  | (?P<punct>[:,(){}\[\]])
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class _Token:
    kind: str  # "ident" | "string" | "punct" | "end"
    text: str
    pos: int


def _tokenize(text: str) -> list[_Token]:
    tokens: list[_Token] = []
    pos = 0
    while pos < len(text):
        m = _TOKEN_RE.match(text, pos)
        if m is None:
            raise GrammarError(f"unexpected character {text[pos]!r} at offset {pos}")
        kind = m.lastgroup or "ws"
        if kind != "ws":
            tokens.append(_Token(kind, m.group(), pos))
        pos = m.end()
    tokens.append(_Token("end", "", len(text)))
    return tokens


class _Parser:
    def __init__(self, text: str, element_name: str) -> None:
        self._tokens = _tokenize(text)
        self._i = 0
        self._element_name = element_name

    # -- token helpers ----------------------------------------------------

    @property
    def _peek(self) -> _Token:
        return self._tokens[self._i]

    def _next(self) -> _Token:
        tok = self._tokens[self._i]
        self._i += 1
        return tok

    def _at(self, punct: str) -> bool:
        tok = self._peek
        return tok.kind == "punct" and tok.text == punct

    def _expect(self, punct: str) -> None:
        tok = self._next()
        if tok.kind != "punct" or tok.text != punct:
            shown = tok.text or "end of input"
            raise GrammarError(f"expected {punct!r} at offset {tok.pos}, got {shown!r}")

    # -- productions ------------------------------------------------------

    def parse(self) -> Schema:
        schema = self._schema(closers=())
        tok = self._peek
        if tok.kind != "end":
            raise GrammarError(f"unexpected {tok.text!r} at offset {tok.pos}")
        return schema

    def _schema(self, closers: tuple[str, ...]) -> Schema:
        fields: list[FieldSchema] = []
        if self._peek.kind == "end" or any(self._at(c) for c in closers):
            return Schema(())
        fields.append(self._field())
        while self._at(","):
            self._next()
            fields.append(self._field())
        return Schema(tuple(fields))

    def _name(self) -> str:
        tok = self._next()
        if tok.kind == "ident":
            return tok.text
        if tok.kind == "string":
            return json.loads(tok.text)
        shown = tok.text or "end of input"
        raise GrammarError(f"expected a field name at offset {tok.pos}, got {shown!r}")

    def _field(self) -> FieldSchema:
        name = self._name()
        if not self._at(":"):
            return FieldSchema(name=name, kind=FieldKind.OPAQUE)
        self._next()
        kind_tok = self._next()
        if kind_tok.kind != "ident":
            shown = kind_tok.text or "end of input"
            raise GrammarError(f"expected a kind at offset {kind_tok.pos}, got {shown!r}")
        kind = field_kind_from_value(kind_tok.text)

        nested: Schema | None = None
        if self._at("(") or self._at("{"):
            if not is_nested_kind(kind):
                tok = self._peek
                raise GrammarError(
                    f"kind {kind.value!r} of field {name!r} cannot have a body (offset {tok.pos})"
                )
            if self._at("("):
                self._next()
                nested = self._schema(closers=(")",))
                self._expect(")")
            else:
                self._next()
                nested = self._sequence_body()
                self._expect("}")
        elif self._at("["):
            if kind is not FieldKind.STRING_MAP:
                raise GrammarError(
                    f"only map kinds take a value hint (field {name!r}, offset {self._peek.pos})"
                )
            self._next()
            if self._peek.kind == "ident":
                field_kind_from_value(self._next().text)
            self._expect("]")
        return FieldSchema(name=name, kind=kind, nested=nested)

    def _sequence_body(self) -> Schema:
        if not self._at("("):
            return self._schema(closers=("}",))
        self._next()
        element = self._schema(closers=(")",))
        self._expect(")")
        return Schema((FieldSchema(name=self._element_name, kind=FieldKind.RECORD, nested=element),))


def parse_schema(text: str, *, element_name: str = SEQUENCE_ELEMENT_NAME) -> Schema:
    """
    Parse declaration text into a Schema.

    Args:
        text (str): Declaration, e.g. ``"T:tuple(dt:datetime, number:float)"``.
        element_name (str): Name given to anonymous sequence elements
            (``bag{(v:int)}``).

    Returns:
        Schema: Parsed schema (empty for blank text).

    Raises:
        GrammarError: On unknown kinds, unexpected tokens, or bodies on scalar kinds.
    """
    return _Parser(text, element_name).parse()


def parse_field(text: str, *, element_name: str = SEQUENCE_ELEMENT_NAME) -> FieldSchema:
    """
    Parse a single field declaration.

    Raises:
        GrammarError: If the text does not hold exactly one field.
    """
    schema = parse_schema(text, element_name=element_name)
    if len(schema) != 1:
        raise GrammarError(f"expected exactly one field, got {len(schema)}")
    return schema[0]
