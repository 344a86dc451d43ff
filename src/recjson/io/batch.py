"""
Per-record batch encoding with the adapter's failure policy.

The core encoder makes no policy decision about failures; this is where a
batch decides. With ``on_error="raise"`` the first EncodeError aborts the
batch; with ``"skip"`` the row is logged at WARNING and yields None.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from recjson.core.encoder import encode
from recjson.core.errors import EncodeError
from recjson.core.schema import Schema
from recjson.core.typing import Record

from .config import EncodeSettings

__all__ = ["encode_records"]

logger = logging.getLogger(__name__)


def encode_records(
    schema: Schema,
    records: Iterable[Record | None],
    settings: EncodeSettings,
) -> list[str | None]:
    """
    Encode each record independently.

    Args:
        schema (Schema): Schema shared by every record.
        records (Iterable[Record | None]): Positional records (see recjson.io.align).
        settings (EncodeSettings): Supplies on_error and max_depth.

    Returns:
        list[str | None]: One entry per record; None for absent or skipped rows.

    Raises:
        EncodeError: First failure when settings.on_error == "raise".
    """
    out: list[str | None] = []
    skipped = 0
    for idx, record in enumerate(records):
        try:
            out.append(encode(schema, record, max_depth=settings.max_depth))
        except EncodeError as exc:
            if settings.on_error != "skip":
                raise
            skipped += 1
            logger.warning("skipping row %d: %s: %s", idx, type(exc).__name__, exc)
            out.append(None)
    if skipped:
        logger.info("encoded %d rows, skipped %d", len(out) - skipped, skipped)
    return out
