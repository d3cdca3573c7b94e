"""Loading biomechanics payloads from JSON or YAML."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


class InputFileError(ValueError):
    """Raised when an input file cannot be read or is not an object."""


def parse_payload_text(text: str, suffix: str = "") -> Any:
    """Parse JSON or YAML text; unknown suffixes try JSON first."""
    if suffix in {".yaml", ".yml"}:
        return yaml.safe_load(text)
    if suffix == ".json":
        return json.loads(text)
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return yaml.safe_load(text)


def load_input_payload(
    file_path: Optional[Path],
    read_stdin: bool = False,
    stdin_text: str = "",
) -> Dict[str, Any]:
    """Load one input object from a file or stdin text."""
    if file_path is not None and str(file_path) != "-":
        source = str(file_path)
        try:
            text = file_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise InputFileError(f"Cannot read input file {file_path}: {exc}") from exc
        suffix = file_path.suffix.lower()
    elif read_stdin or (file_path is not None and str(file_path) == "-"):
        source = "stdin"
        text = stdin_text
        suffix = ""
    else:
        raise InputFileError("No input given: pass a file path or --stdin")

    if not text.strip():
        raise InputFileError(f"Input from {source} is empty")

    try:
        raw_data = parse_payload_text(text, suffix)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise InputFileError(f"Cannot parse input from {source}: {exc}") from exc

    if not isinstance(raw_data, dict):
        raise InputFileError(f"Input from {source} must be an object, got {type(raw_data).__name__}")
    return raw_data
