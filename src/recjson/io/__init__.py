"""
recjson.io — host adapters and output for the recjson encoder.

## Responsibilities
- Map polars and pyarrow schemas onto `recjson.core.schema.Schema`.
- Align host rows (dict structs, key/value map lists) into positional records.
- Apply the per-record failure policy (`EncodeSettings.on_error`) around `recjson.core.encode`.
- Write encoded records as NDJSON with atomic tmp → ready renames.

## Public API
- EncodeSettings — adapter configuration (env > TOML > defaults).
- schema_from_polars, encode_frame, with_json_column — polars DataFrames.
- schema_from_arrow, encode_table — pyarrow Tables.
- write_ndjson — atomic NDJSON output.

## Import DAG discipline
- Depends only on stdlib, polars/pyarrow, and recjson.core.*.
- recjson.core MUST NOT import recjson.io.

## Examples
```python
import polars as pl
from recjson.io import encode_frame

df = pl.DataFrame({"B": [[{"v": 1}, {"v": 2}], []]})
encode_frame(df).to_list()  # ['{"B":[{"v":1},{"v":2}]}', '{"B":[]}']
```
"""

from __future__ import annotations

from .arrow import encode_table, schema_from_arrow
from .config import EncodeSettings
from .frames import encode_frame, schema_from_polars, with_json_column
from .write import write_ndjson

__all__ = [
    "EncodeSettings",
    "schema_from_polars",
    "encode_frame",
    "with_json_column",
    "schema_from_arrow",
    "encode_table",
    "write_ndjson",
]
