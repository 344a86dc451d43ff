from __future__ import annotations

from pathlib import Path

from recjson.io.config import EncodeSettings

_ENV_KEYS = [
    "RECJSON_ON_ERROR",
    "RECJSON_OUTPUT_COLUMN",
    "RECJSON_ELEMENT_NAME",
    "RECJSON_MAX_DEPTH",
    "RECJSON_STRING_MAPS",
]


def _clear_env(monkeypatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def _write_recjson_toml(tmp: Path, content: str) -> Path:
    p = tmp / "recjson.toml"
    p.write_text(content)
    return p


def test_defaults_without_env_or_toml(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    s = EncodeSettings.load()

    assert s == EncodeSettings()
    assert s.on_error == "raise"
    assert s.output_column == "json"
    assert s.element_name == "item"
    assert s.max_depth == 128
    assert s.string_maps == ()


def test_encode_settings_precedence_env_over_toml(tmp_path: Path, monkeypatch) -> None:
    # Arrange TOML
    _write_recjson_toml(
        tmp_path,
        """
        [encode]
        on_error = "skip"
        output_column = "payload"
        max_depth = 16
        string_maps = ["attrs", "tags"]
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)
    # Arrange ENV that should override TOML
    monkeypatch.setenv("RECJSON_ON_ERROR", "raise")
    monkeypatch.setenv("RECJSON_MAX_DEPTH", "32")
    monkeypatch.setenv("RECJSON_STRING_MAPS", "props, ")

    # Act
    s = EncodeSettings.load()

    # Assert precedence: env > TOML > defaults
    assert s.on_error == "raise"  # env override
    assert s.max_depth == 32  # env override
    assert s.string_maps == ("props",)  # env override, blanks dropped
    assert s.output_column == "payload"  # from TOML
    assert s.element_name == "item"  # default


def test_top_level_keys_in_recjson_toml(tmp_path: Path, monkeypatch) -> None:
    _write_recjson_toml(tmp_path, 'element_name = "row"\non_error = "SKIP"\n')
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    s = EncodeSettings.load()

    assert s.element_name == "row"
    assert s.on_error == "skip"


def test_pyproject_tool_table(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / "pyproject.toml").write_text(
        '[tool.recjson.encode]\noutput_column = "as_json"\nstring_maps = "a,b"\n'
    )
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    s = EncodeSettings.load()

    assert s.output_column == "as_json"
    assert s.string_maps == ("a", "b")


def test_explicit_path(tmp_path: Path, monkeypatch) -> None:
    cfg = tmp_path / "custom.toml"
    cfg.write_text("[encode]\nmax_depth = 4\n")
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    assert EncodeSettings.load(cfg).max_depth == 4


def test_invalid_values_keep_previous_layer(tmp_path: Path, monkeypatch) -> None:
    _write_recjson_toml(tmp_path, '[encode]\non_error = "explode"\nmax_depth = 0\n')
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)
    monkeypatch.setenv("RECJSON_MAX_DEPTH", "deep")

    s = EncodeSettings.load()

    assert s.on_error == "raise"
    assert s.max_depth == 128


def test_malformed_toml_falls_back_to_defaults(tmp_path: Path, monkeypatch) -> None:
    _write_recjson_toml(tmp_path, "[encode\nnot toml")
    monkeypatch.chdir(tmp_path)
    _clear_env(monkeypatch)

    assert EncodeSettings.load() == EncodeSettings()
