"""Configuration loading and persistence."""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # Python 3.9-3.10
    import tomli as tomllib  # type: ignore[no-redef]

from runform.core.constants import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES


class ConfigError(RuntimeError):
    """Raised when config file parsing fails."""


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def expand_path(path_str: str) -> Path:
    """Expand user/env vars and return absolute path."""
    return Path(os.path.expandvars(path_str)).expanduser().resolve()


def default_config_path() -> Path:
    """Get default config file path."""
    raw = os.getenv("RUNFORM_CONFIG_FILE", "~/.config/runform/config.toml")
    return expand_path(raw)


def _default_config() -> Dict[str, Any]:
    return {
        "display": {
            "language": DEFAULT_LANGUAGE,
            "output_format": "pretty",
        },
        "recommendations": {
            "max_recommendations": 5,
            "max_exercises": 5,
        },
        "focus": {
            "max_priorities": 5,
        },
    }


DEFAULT_CONFIG: Dict[str, Any] = _default_config()


def _read_config(path: Path) -> Dict[str, Any]:
    suffix = path.suffix.lower()
    text = path.read_text()
    try:
        if suffix in {".toml", ""}:
            loaded = tomllib.loads(text)
        else:
            loaded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {path} must contain an object/table at the root")
    return loaded


def _validate(config: Dict[str, Any]) -> Dict[str, Any]:
    for section in ("display", "recommendations", "focus"):
        if not isinstance(config.get(section), dict):
            raise ConfigError(f"Config section [{section}] must be a table")

    language = config["display"].get("language")
    if language not in SUPPORTED_LANGUAGES:
        raise ConfigError(
            f"display.language must be one of {', '.join(SUPPORTED_LANGUAGES)}, got {language!r}"
        )
    if config["display"].get("output_format") not in {"pretty", "json"}:
        raise ConfigError("display.output_format must be pretty or json")

    for section, key in (
        ("recommendations", "max_recommendations"),
        ("recommendations", "max_exercises"),
        ("focus", "max_priorities"),
    ):
        value = config[section].get(key)
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            raise ConfigError(f"{section}.{key} must be a positive integer, got {value!r}")
    return config


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from disk, merged with defaults."""
    cfg_path = path or default_config_path()
    cfg = _default_config()

    if cfg_path.exists():
        loaded = _read_config(cfg_path)
        cfg = _deep_merge(cfg, loaded)

    return _validate(cfg)


def _toml_literal(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    if isinstance(value, list):
        items = ", ".join(_toml_literal(item) for item in value if item is not None)
        return f"[{items}]"
    raise TypeError(f"Unsupported TOML value type: {type(value)!r}")


def dict_to_toml(data: Dict[str, Any], prefix: Optional[str] = None) -> str:
    lines = []
    plain_keys = []
    nested_keys = []

    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, dict):
            nested_keys.append((key, value))
        else:
            plain_keys.append((key, value))

    if prefix is not None:
        lines.append(f"[{prefix}]")

    for key, value in plain_keys:
        lines.append(f"{key} = {_toml_literal(value)}")

    if plain_keys and nested_keys:
        lines.append("")

    for index, (key, value) in enumerate(nested_keys):
        table_name = key if prefix is None else f"{prefix}.{key}"
        lines.append(dict_to_toml(value, prefix=table_name))
        if index != len(nested_keys) - 1:
            lines.append("")

    return "\n".join(lines)


def save_config(config: Dict[str, Any], path: Optional[Path] = None) -> Path:
    """Save configuration to disk as TOML (default) or JSON."""
    cfg_path = path or default_config_path()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)

    if cfg_path.suffix.lower() == ".json":
        cfg_path.write_text(json.dumps(config, indent=2) + "\n")
        return cfg_path

    cfg_path.write_text(dict_to_toml(config).strip() + "\n")
    return cfg_path


def config_language(config: Dict[str, Any]) -> str:
    return str(config.get("display", {}).get("language", DEFAULT_LANGUAGE))


def config_limits(config: Dict[str, Any]) -> Dict[str, int]:
    """Engine limits from config, keyed by run_full_analysis argument names."""
    recommendations = config.get("recommendations", {})
    focus = config.get("focus", {})
    return {
        "max_recommendations": int(recommendations.get("max_recommendations", 5)),
        "max_exercises": int(recommendations.get("max_exercises", 5)),
        "max_priorities": int(focus.get("max_priorities", 5)),
    }
