"""
Atomic NDJSON writer for encoded records.

Overview
- Writes one JSON text per line, UTF-8 encoded.
- Absent results (None) have nothing to emit and are skipped, not written as ``null``.
- Write path: ``<path>.<uid>.tmp`` → fsync → os.replace(tmp, final), so
  readers never observe a half-written file.

Notes
- Single-writer semantics (no inter-process locking).
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Iterable
from typing import Any

from .errors import IoWriteError
from .fs import fsync_file, makedirs, open_write, remove_quietly, rename_atomic

__all__ = ["write_ndjson"]


def write_ndjson(lines: Iterable[str | None], path: str | os.PathLike[str]) -> dict[str, Any]:
    """
    Write encoded records to ``path`` as newline-delimited JSON.

    Args:
        lines (Iterable[str | None]): Encoded JSON texts; None entries are skipped.
        path (str | PathLike): Final destination; parent directories are created.

    Returns:
        dict[str, Any]: Summary with keys:
            - path (str): Final path written
            - rows (int): Lines written
            - skipped (int): None entries skipped
            - bytes (int): Size of the final file

    Raises:
        IoWriteError: If writing, fsync, or the atomic rename fails.
    """
    final_path = os.fspath(path)
    makedirs(os.path.dirname(final_path))
    tmp_path = f"{final_path}.{uuid.uuid4().hex}.tmp"

    rows = 0
    skipped = 0
    try:
        with open_write(tmp_path) as fh:
            for line in lines:
                if line is None:
                    skipped += 1
                    continue
                fh.write(line.encode("utf-8"))
                fh.write(b"\n")
                rows += 1
            fsync_file(fh)
        rename_atomic(tmp_path, final_path)
    except OSError as exc:
        remove_quietly(tmp_path)
        raise IoWriteError(f"failed to write ndjson to {final_path!r}: {exc}") from exc
    except Exception:
        # Encoder errors raised while consuming ``lines`` propagate unchanged.
        remove_quietly(tmp_path)
        raise

    return {
        "path": final_path,
        "rows": rows,
        "skipped": skipped,
        "bytes": os.path.getsize(final_path),
    }
