"""
recjson core encoding defaults.

Defines nesting limits, adapter naming defaults, and the JSON separator policy
consumed by the encoder and downstream IO layers. This module is zero-IO and
uses only the Python standard library.

Notes:
    - The encoder raises SchemaCycle once recursion exceeds MAX_NESTING_DEPTH.
    - Adapters name the single element field of a record_sequence schema
      SEQUENCE_ELEMENT_NAME when the host type carries no name for it.
    - Changes to these constants change wire output or error behavior; update
      tests under tests/core alongside them.
"""

from __future__ import annotations

__all__ = [
    "MAX_NESTING_DEPTH",
    "SEQUENCE_ELEMENT_NAME",
    "ITEM_SEPARATOR",
    "KEY_SEPARATOR",
    "PAD_WIDTH",
]

# Maximum schema nesting depth walked by the encoder before failing with SchemaCycle.
MAX_NESTING_DEPTH: int = 128

# Name given to the element record of a sequence when the host schema has none
# (arrow/polars list element naming).
SEQUENCE_ELEMENT_NAME: str = "item"

# Compact separators, matching the canonical JSON policy.
ITEM_SEPARATOR: str = ","
KEY_SEPARATOR: str = ":"

# Minimum decimal width produced by pad_zero.
PAD_WIDTH: int = 2
