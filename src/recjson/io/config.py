"""
Configuration for the recjson.io module.

Defines EncodeSettings, a frozen dataclass carrying runtime configuration for
host adapters (per-record error policy, output column naming, sequence element
naming, nesting limit, and string_map hints). Defaults are sourced from
recjson.core.constants (the single source of truth).

Source of truth
- recjson.core.constants.MAX_NESTING_DEPTH, SEQUENCE_ELEMENT_NAME

Import DAG discipline
- Depends only on stdlib and recjson.core.constants.

Notes
- Precedence when loading: env > TOML > defaults.
- Unparseable values are ignored and the previous layer's value is kept.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Literal

try:  # Python 3.11+ stdlib TOML parser
    import tomllib  # type: ignore
except Exception:  # pragma: no cover - environments without tomllib
    tomllib = None  # type: ignore[assignment]

from recjson.core.constants import MAX_NESTING_DEPTH as CORE_MAX_NESTING_DEPTH
from recjson.core.constants import SEQUENCE_ELEMENT_NAME as CORE_SEQUENCE_ELEMENT_NAME

OnError = Literal["raise", "skip"]

_ON_ERROR_CHOICES = ("raise", "skip")


@dataclass(frozen=True)
class EncodeSettings:
    """
    Runtime settings for recjson adapters.

    Attributes:
        on_error (Literal["raise","skip"]): Per-record failure policy. "raise"
            aborts the whole batch with the encoder's error; "skip" logs a
            warning and yields null for that row.
        output_column (str): Name of the JSON column appended by with_json_column.
        element_name (str): Name of the element record inside record_sequence
            schemas derived from host list types.
        max_depth (int): Nesting depth at which the encoder raises SchemaCycle.
        string_maps (tuple[str, ...]): Field names whose struct or key/value-list
            values are encoded as string_map instead of record/record_sequence.

    Examples:
        >>> from recjson.io import EncodeSettings
        >>> EncodeSettings(on_error="skip")  # doctest: +ELLIPSIS
        EncodeSettings(...)
    """

    on_error: OnError = "raise"
    output_column: str = "json"
    element_name: str = CORE_SEQUENCE_ELEMENT_NAME
    max_depth: int = CORE_MAX_NESTING_DEPTH
    string_maps: tuple[str, ...] = ()

    # Configuration loaders (env/TOML) with precedence: env > TOML > defaults.

    @classmethod
    def _apply_mapping(cls, base: EncodeSettings, cfg: dict[str, Any] | None) -> EncodeSettings:
        """Apply a loose config mapping onto EncodeSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        if "on_error" in cfg and isinstance(cfg["on_error"], str):
            policy = cfg["on_error"].strip().lower()
            if policy in _ON_ERROR_CHOICES:
                s = replace(s, on_error=policy)  # type: ignore[arg-type]

        if "output_column" in cfg and isinstance(cfg["output_column"], str):
            if cfg["output_column"].strip():
                s = replace(s, output_column=cfg["output_column"].strip())

        if "element_name" in cfg and isinstance(cfg["element_name"], str):
            if cfg["element_name"].strip():
                s = replace(s, element_name=cfg["element_name"].strip())

        if "max_depth" in cfg:
            try:
                depth = int(cfg["max_depth"])
            except (TypeError, ValueError):
                depth = s.max_depth
            if depth >= 1:
                s = replace(s, max_depth=depth)

        if "string_maps" in cfg:
            raw = cfg["string_maps"]
            if isinstance(raw, str):
                names = [n.strip() for n in raw.split(",")]
            elif isinstance(raw, (list, tuple)):
                names = [str(n).strip() for n in raw]
            else:
                names = None
            if names is not None:
                s = replace(s, string_maps=tuple(n for n in names if n))

        return s

    @classmethod
    def from_env(
        cls, base: EncodeSettings | None = None, prefix: str = "RECJSON_"
    ) -> EncodeSettings:
        """
        Build EncodeSettings from environment variables. Precedence is env > base (if provided) > defaults.

        Recognized variables:
            - RECJSON_ON_ERROR ("raise" | "skip")
            - RECJSON_OUTPUT_COLUMN
            - RECJSON_ELEMENT_NAME
            - RECJSON_MAX_DEPTH
            - RECJSON_STRING_MAPS (comma-separated field names)
        """
        s = base or cls()

        def get(name: str) -> str | None:
            return os.getenv(prefix + name)

        mapping: dict[str, Any] = {}
        for key in ("on_error", "output_column", "element_name", "max_depth", "string_maps"):
            v = get(key.upper())
            if v:
                mapping[key] = v
        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> EncodeSettings:
        """
        Build EncodeSettings from a TOML file.

        Search order when `path` is None:
            1) ./recjson.toml (with either top-level [encode] or direct keys)
            2) ./pyproject.toml under [tool.recjson.encode]

        Returns defaults if no file present or tomllib is unavailable.
        """
        s = cls()
        if tomllib is None:
            return s

        def _load_toml(p: Path) -> dict[str, Any] | None:
            try:
                with p.open("rb") as fh:
                    return tomllib.load(fh)  # type: ignore[arg-type]
            except (OSError, tomllib.TOMLDecodeError):
                return None

        cfg: dict[str, Any] | None = None

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "recjson.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        for p in cand:
            if not p.exists():
                continue
            data = _load_toml(p)
            if not isinstance(data, dict):
                continue
            if p.name == "pyproject.toml":
                # Expect [tool.recjson.encode]
                tool = data.get("tool", {})
                cfg = (
                    tool.get("recjson", {}).get("encode", {})  # type: ignore[assignment]
                    if isinstance(tool, dict)
                    else None
                )
            else:
                # recjson.toml - accept either [encode] table or top-level keys
                if "encode" in data and isinstance(data["encode"], dict):
                    cfg = data["encode"]
                else:
                    cfg = data
            if cfg:
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> EncodeSettings:
        """
        Load EncodeSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults (recjson.toml, pyproject.toml).

        Returns:
            EncodeSettings
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s
