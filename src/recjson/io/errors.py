"""
Custom exceptions for the recjson.io module.

Purpose
- Provide IO-layer specific error types that map cleanly to responsibilities in recjson.io.
- Keep recjson.core as the source of truth for schema/encoder errors (see recjson.core.errors).

Source of truth and boundaries
- recjson.core.errors.EncodeError subclasses are raised by the encoder and
  propagate through adapters unchanged (unless settings ask to skip them).
- recjson.io raises Io* errors for host-schema, configuration, and file concerns:
  - IoConfigError: invalid or unsupported configuration.
  - IoSchemaError: a host dtype has no FieldKind mapping.
  - IoWriteError: atomic write path failed (tmp write/fsync/rename).

Notes
- These exceptions do not perform any IO and are stdlib-only.
"""

from __future__ import annotations


class IoError(Exception):
    """
    Base class for IO-related errors in recjson.io.

    Notes:
        Use this as a catch-all for IO-layer failures, distinct from recjson.core errors.
    """


class IoConfigError(IoError):
    """
    Raised when IO configuration is invalid or unsupported.

    Examples:
        - Unknown on_error policy
        - Unsupported input file extension in the CLI
    """


class IoSchemaError(IoError):
    """
    Raised when a polars/pyarrow schema cannot be mapped to a recjson Schema.

    Notes:
        Lists of non-struct values and other dtypes without a FieldKind
        counterpart end up here.
    """


class IoWriteError(IoError):
    """
    Raised when an NDJSON write fails to complete atomically.

    Notes:
        The write path is tmp file → fsync → os.replace(tmp, final). Failures at any step
        surface as IoWriteError (with best-effort cleanup of tmp files).
    """
