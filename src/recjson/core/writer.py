"""
Incremental JSON writer.

JsonWriter appends JSON tokens to a text sink as they are produced: no
document tree is built and nothing already written is revisited. The encoder
drives it depth-first; any object with a ``write(str)`` method is a valid sink.

Notes:
    - Output is compact (``","`` and ``":"`` separators, no whitespace).
    - Keys are written in call order; duplicates are not collapsed.
    - Misuse (a member name outside an object, unbalanced ends) raises
      RuntimeError: those are programming errors, not data errors.
"""

from __future__ import annotations

from .constants import ITEM_SEPARATOR, KEY_SEPARATOR
from .serde import json_string
from .typing import TextSink

__all__ = ["JsonWriter"]

_OBJECT = "object"
_ARRAY = "array"


class _Frame:
    __slots__ = ("kind", "count", "pending_name")

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self.count = 0
        self.pending_name = False


class JsonWriter:
    """
    Streaming JSON token writer over a text sink.

    Args:
        sink (TextSink): Destination; receives many small ``write`` calls.

    Examples:
        >>> import io
        >>> buf = io.StringIO()
        >>> w = JsonWriter(buf)
        >>> w.start_object(); w.write_number_field("a", "1"); w.write_null_field("b"); w.end_object()
        >>> buf.getvalue()
        '{"a":1,"b":null}'
    """

    def __init__(self, sink: TextSink) -> None:
        self._write = sink.write
        self._stack: list[_Frame] = []
        self._root_written = False

    @property
    def depth(self) -> int:
        """Number of currently open objects/arrays."""
        return len(self._stack)

    def _before_value(self) -> None:
        if not self._stack:
            if self._root_written:
                raise RuntimeError("a JSON document holds exactly one root value")
            self._root_written = True
            return
        frame = self._stack[-1]
        if frame.kind == _OBJECT:
            if not frame.pending_name:
                raise RuntimeError("object members need a name before their value")
            frame.pending_name = False
        elif frame.count:
            self._write(ITEM_SEPARATOR)
        frame.count += 1

    # -- containers -------------------------------------------------------

    def start_object(self) -> None:
        self._before_value()
        self._write("{")
        self._stack.append(_Frame(_OBJECT))

    def end_object(self) -> None:
        self._end(_OBJECT, "}")

    def start_array(self) -> None:
        self._before_value()
        self._write("[")
        self._stack.append(_Frame(_ARRAY))

    def end_array(self) -> None:
        self._end(_ARRAY, "]")

    def _end(self, kind: str, token: str) -> None:
        if not self._stack or self._stack[-1].kind != kind:
            raise RuntimeError(f"no open {kind} to close")
        if self._stack[-1].pending_name:
            raise RuntimeError("member name written without a value")
        self._stack.pop()
        self._write(token)

    # -- members and values -----------------------------------------------

    def write_field_name(self, name: str) -> None:
        if not self._stack or self._stack[-1].kind != _OBJECT:
            raise RuntimeError(f"field name {name!r} written outside an object")
        frame = self._stack[-1]
        if frame.pending_name:
            raise RuntimeError(f"field name {name!r} follows another name without a value")
        if frame.count:
            self._write(ITEM_SEPARATOR)
        self._write(json_string(name))
        self._write(KEY_SEPARATOR)
        frame.pending_name = True

    def write_null(self) -> None:
        self._before_value()
        self._write("null")

    def write_boolean(self, value: bool) -> None:
        self._before_value()
        self._write("true" if value else "false")

    def write_number(self, text: str) -> None:
        """Write pre-rendered number text (see recjson.core.serde)."""
        self._before_value()
        self._write(text)

    def write_string(self, value: str) -> None:
        self._before_value()
        self._write(json_string(value))

    # -- convenience pairs ------------------------------------------------

    def write_null_field(self, name: str) -> None:
        self.write_field_name(name)
        self.write_null()

    def write_boolean_field(self, name: str, value: bool) -> None:
        self.write_field_name(name)
        self.write_boolean(value)

    def write_number_field(self, name: str, text: str) -> None:
        self.write_field_name(name)
        self.write_number(text)

    def write_string_field(self, name: str, value: str | None) -> None:
        """Write a string member, or a null member when ``value`` is None."""
        self.write_field_name(name)
        if value is None:
            self.write_null()
        else:
            self.write_string(value)
