"""JSON export helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from runform.core.models import to_payload


def write_json(path: Path, payload: Any) -> Path:
    """Write a result record or plain payload as pretty JSON and return path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(to_payload(payload), indent=2, ensure_ascii=False) + "\n")
    return path
