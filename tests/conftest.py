from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any, Dict, Tuple

import pytest
import yaml
from typer.testing import CliRunner


def metric(mean: float, std: float, spread: float = 15.0, count: int = 80) -> Dict[str, Any]:
    return {"min": mean - spread, "max": mean + spread, "mean": mean, "std": std, "count": count}


def _stats(values: Tuple[float, float, float, float, int]) -> Dict[str, Any]:
    low, high, mean, std, count = values
    return {"min": low, "max": high, "mean": mean, "std": std, "count": count}


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture()
def nominal_input() -> Dict[str, Any]:
    """Both sides at the reference angles with moderate variability."""
    arm = {"arm_swing": metric(150.0, 10.0), "elbow_angle": metric(110.0, 8.0)}
    leg = {
        "knee_angle": metric(115.0, 10.0, spread=40.0),
        "ankle_angle": metric(100.0, 5.0),
        "hip_angle": metric(28.0, 2.0, spread=8.0),
        "shank_angle": metric(55.0, 5.0),
    }
    return {
        "left_arm": copy.deepcopy(arm),
        "right_arm": copy.deepcopy(arm),
        "left_leg": copy.deepcopy(leg),
        "right_leg": copy.deepcopy(leg),
        "trunk": {"trunk_angle": metric(175.0, 1.0, spread=3.0)},
        "head": {"head_angle": metric(137.0, 2.0, spread=5.0)},
    }


@pytest.fixture()
def real_user_input() -> Dict[str, Any]:
    """Statistics from a recorded treadmill session."""
    return {
        "left_arm": {
            "arm_swing": _stats((142.5, 160.6, 151.6, 5.2, 78)),
            "elbow_angle": _stats((91.3, 139.3, 115.3, 10.8, 82)),
        },
        "right_arm": {
            "arm_swing": _stats((126.1, 162.4, 144.2, 8.1, 75)),
            "elbow_angle": _stats((91.8, 128.1, 109.9, 9.5, 80)),
        },
        "left_leg": {
            "knee_angle": _stats((62.9, 168.0, 115.4, 22.3, 85)),
            "ankle_angle": _stats((81.8, 119.4, 100.6, 8.5, 88)),
            "hip_angle": _stats((11.0, 39.8, 25.4, 6.2, 80)),
            "shank_angle": _stats((3.6, 108.3, 55.9, 18.4, 83)),
        },
        "right_leg": {
            "knee_angle": _stats((63.3, 158.6, 111.0, 20.1, 84)),
            "ankle_angle": _stats((85.0, 123.1, 104.1, 9.2, 87)),
            "hip_angle": _stats((9.1, 49.0, 29.1, 8.5, 79)),
            "shank_angle": _stats((3.4, 104.2, 53.8, 17.2, 81)),
        },
        "trunk": {"trunk_angle": _stats((172.1, 176.9, 174.5, 1.2, 86))},
        "head": {"head_angle": _stats((131.3, 141.9, 136.6, 2.8, 84))},
    }


@pytest.fixture()
def write_temp_json(tmp_path: Path):
    def _write(name: str, payload: Any) -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(payload, indent=2) + "\n")
        return path

    return _write


@pytest.fixture()
def write_temp_yaml(tmp_path: Path):
    def _write(name: str, payload: Any) -> Path:
        path = tmp_path / name
        path.write_text(yaml.safe_dump(payload, sort_keys=False))
        return path

    return _write


@pytest.fixture()
def write_temp_toml(tmp_path: Path):
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content.strip() + "\n")
        return path

    return _write
