from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

import pytest

from runform.core.config import (
    DEFAULT_CONFIG,
    ConfigError,
    _deep_merge,
    config_language,
    config_limits,
    default_config_path,
    expand_path,
    load_config,
    save_config,
)


def test_deep_merge_nested_dicts() -> None:
    base = {"a": {"b": 1, "c": 2}, "x": 3}
    override = {"a": {"b": 9}, "y": 4}
    merged = _deep_merge(base, override)
    assert merged == {"a": {"b": 9, "c": 2}, "x": 3, "y": 4}
    assert base["a"]["b"] == 1


def test_expand_path_expands_home_and_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("RUNFORM_TMP_PATH", str(tmp_path))
    expanded = expand_path("$RUNFORM_TMP_PATH/config.toml")
    assert expanded == (tmp_path / "config.toml").resolve()


def test_default_config_path_uses_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    path = tmp_path / "custom.toml"
    monkeypatch.setenv("RUNFORM_CONFIG_FILE", str(path))
    assert default_config_path() == path.resolve()


def test_load_config_missing_file_returns_defaults(tmp_path: Path) -> None:
    cfg = load_config(tmp_path / "missing.toml")
    assert cfg == DEFAULT_CONFIG
    assert config_language(cfg) == "en"
    assert config_limits(cfg) == {"max_recommendations": 5, "max_exercises": 5, "max_priorities": 5}


def test_load_config_from_json(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"recommendations": {"max_exercises": 3}}))
    cfg = load_config(path)
    assert cfg["recommendations"]["max_exercises"] == 3
    assert cfg["recommendations"]["max_recommendations"] == 5


def test_load_config_from_toml(write_temp_toml) -> None:
    path = write_temp_toml(
        "config.toml",
        """
[display]
language = "ru"
output_format = "json"

[focus]
max_priorities = 2
""",
    )
    cfg = load_config(path)
    assert config_language(cfg) == "ru"
    assert cfg["display"]["output_format"] == "json"
    assert config_limits(cfg)["max_priorities"] == 2


def test_load_config_invalid_json_raises(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{broken")
    with pytest.raises(ConfigError):
        load_config(path)


def test_load_config_invalid_toml_raises(tmp_path: Path) -> None:
    path = tmp_path / "broken.toml"
    path.write_text("[display\nlanguage = 'en'")
    with pytest.raises(ConfigError):
        load_config(path)


@pytest.mark.parametrize(
    "override",
    [
        {"display": {"language": "de"}},
        {"display": {"output_format": "xml"}},
        {"recommendations": {"max_exercises": 0}},
        {"recommendations": {"max_recommendations": True}},
        {"focus": {"max_priorities": "3"}},
        {"focus": 5},
    ],
)
def test_load_config_rejects_bad_values(tmp_path: Path, override: Dict[str, Any]) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps(override))
    with pytest.raises(ConfigError):
        load_config(path)


def test_load_config_root_must_be_object(tmp_path: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text("[1, 2]")
    with pytest.raises(ConfigError):
        load_config(path)


def test_save_config_json(tmp_path: Path) -> None:
    path = save_config(DEFAULT_CONFIG, tmp_path / "config.json")
    assert json.loads(path.read_text())["focus"]["max_priorities"] == 5


def test_save_config_toml_and_reload(tmp_path: Path) -> None:
    payload: Dict[str, Any] = _deep_merge(DEFAULT_CONFIG, {"display": {"language": "ru"}})
    path = save_config(payload, tmp_path / "nested" / "config.toml")
    assert path.exists()
    assert '[display]\nlanguage = "ru"' in path.read_text()
    assert load_config(path) == payload
