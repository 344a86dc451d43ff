from __future__ import annotations

import argparse
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path

import polars as pl

from recjson.core.declaration import parse_schema
from recjson.core.errors import EncodeError, GrammarError
from recjson.core.padding import pad_zero
from recjson.core.schema import validate_schema
from recjson.io.config import EncodeSettings
from recjson.io.errors import IoConfigError, IoError
from recjson.io.frames import encode_frame
from recjson.io.write import write_ndjson

_LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_READERS = {
    ".parquet": pl.read_parquet,
    ".ipc": pl.read_ipc,
    ".arrow": pl.read_ipc,
    ".feather": pl.read_ipc,
    ".ndjson": pl.read_ndjson,
    ".jsonl": pl.read_ndjson,
    ".csv": pl.read_csv,
}


def _configure_logging(level: str | None = None) -> None:
    """Configure stdlib logging once; RECJSON_LOG_LEVEL applies when ``level`` is None."""
    lvl = (level or os.environ.get("RECJSON_LOG_LEVEL") or "WARNING").upper()
    logging.basicConfig(level=getattr(logging, lvl, logging.WARNING), format=_LOG_FORMAT)


def _read_frame(path: Path) -> pl.DataFrame:
    """Read an input file with the polars reader matching its extension.

    Raises:
        IoConfigError: If the extension has no reader.
    """
    reader = _READERS.get(path.suffix.lower())
    if reader is None:
        known = ", ".join(sorted(_READERS))
        raise IoConfigError(f"unsupported input extension {path.suffix!r} (known: {known})")
    return reader(path)


def _cmd_encode(argv: list[str]) -> int:
    p = argparse.ArgumentParser(
        prog="encode",
        description="Encode each row of a table file as one JSON object (NDJSON output).",
    )
    p.add_argument("--input", type=str, required=True, help="Input file (parquet/ipc/ndjson/csv).")
    p.add_argument(
        "--schema",
        type=str,
        default="",
        help="Schema declaration, e.g. 'B:bag{T:tuple(v:int)}'. Derived from the file if omitted.",
    )
    p.add_argument(
        "--string-map",
        dest="string_maps",
        action="append",
        default=[],
        help="Column/field to encode as a string map (repeatable).",
    )
    p.add_argument("--out", type=str, default="", help="Output NDJSON path (stdout if omitted).")
    p.add_argument("--on-error", choices=["raise", "skip"], default=None, help="Per-row failure policy.")
    p.add_argument("--config", type=str, default=None, help="TOML config path (recjson.toml).")
    p.add_argument("--n", type=int, default=0, help="Rows to print when writing to stdout (0 = all).")
    p.add_argument("--log-level", type=str, default=None, help="Logging level (default WARNING).")
    args = p.parse_args(argv)

    _configure_logging(args.log_level)

    settings = EncodeSettings.load(args.config)
    if args.on_error:
        settings = replace(settings, on_error=args.on_error)
    if args.string_maps:
        settings = replace(settings, string_maps=settings.string_maps + tuple(args.string_maps))

    try:
        schema = None
        if args.schema:
            schema = parse_schema(args.schema, element_name=settings.element_name)
            validate_schema(schema, max_depth=settings.max_depth)
        df = _read_frame(Path(args.input))
        print(f"[INFO] Read {df.height} rows from {args.input}", file=sys.stderr)
        series = encode_frame(df, schema=schema, settings=settings)
    except (GrammarError, EncodeError, IoError) as exc:
        print(f"[ERROR] {type(exc).__name__}: {exc}", file=sys.stderr)
        return 1

    if args.out:
        try:
            summary = write_ndjson(series.to_list(), args.out)
        except IoError as exc:
            print(f"[ERROR] {type(exc).__name__}: {exc}", file=sys.stderr)
            return 1
        print(
            f"[INFO] Wrote {summary['rows']} rows to {summary['path']} "
            f"(skipped {summary['skipped']}, {summary['bytes']} bytes)",
            file=sys.stderr,
        )
        return 0

    shown = 0
    for line in series.to_list():
        if line is None:
            continue
        if args.n and shown >= args.n:
            break
        print(line)
        shown += 1
    return 0


def _cmd_check_schema(argv: list[str]) -> int:
    p = argparse.ArgumentParser(
        prog="check-schema",
        description="Parse and validate a schema declaration; print its canonical form.",
    )
    p.add_argument("declaration", type=str, help="Schema declaration text.")
    p.add_argument("--max-depth", type=int, default=None, help="Maximum nesting depth.")
    args = p.parse_args(argv)

    settings = EncodeSettings.load()
    max_depth = args.max_depth or settings.max_depth
    try:
        schema = parse_schema(args.declaration, element_name=settings.element_name)
        validate_schema(schema, max_depth=max_depth)
    except (GrammarError, EncodeError) as exc:
        print(f"[ERROR] {type(exc).__name__}: {exc}", file=sys.stderr)
        return 1
    print(schema.declaration())
    return 0


def _cmd_pad_zero(argv: list[str]) -> int:
    p = argparse.ArgumentParser(prog="pad-zero", description="Zero-pad integers below 10.")
    p.add_argument("values", type=int, nargs="+", help="Integers to pad.")
    args = p.parse_args(argv)

    for v in args.values:
        print(pad_zero(v))
    return 0


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="recjson", description="Schema-driven record to JSON CLI.")
    sub = p.add_subparsers(dest="cmd", required=True)

    sub.add_parser("encode")
    sub.add_parser("check-schema")
    sub.add_parser("pad-zero")
    return p


def main(argv: list[str] | None = None) -> None:
    argv = list(sys.argv[1:] if argv is None else argv)
    if not argv:
        build_argparser().print_help()
        return
    cmd, rest = argv[0], argv[1:]
    if cmd == "encode":
        code = _cmd_encode(rest)
    elif cmd == "check-schema":
        code = _cmd_check_schema(rest)
    elif cmd == "pad-zero":
        code = _cmd_pad_zero(rest)
    else:
        print(f"Unknown command: {cmd}", file=sys.stderr)
        code = 2
    raise SystemExit(code)


if __name__ == "__main__":
    main()
