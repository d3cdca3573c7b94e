"""Analysis from per-joint means only.

Full metrics are synthesized from each mean with a fixed relative spread, so
the regular scorers can run unchanged.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

from runform.core.analysis import analyze_run
from runform.core.models import RunAnalysisResult
from runform.core.schemas import (
    RunBiomechanicsInput,
    SimpleBiomechanicsInput,
    validate_run_input,
    validate_simple_input,
)

SYNTHETIC_COUNT = 80
DEFAULT_SPREAD = 0.05
DEFAULT_KNEE_SPREAD = 0.1
DEFAULT_TRUNK_SPREAD = 0.01
HEAD_SPREAD = 0.02

DEFAULT_MEANS = {
    "left_arm_swing": 150.0,
    "right_arm_swing": 145.0,
    "left_elbow_angle": 110.0,
    "right_elbow_angle": 110.0,
    "left_knee_angle": 115.0,
    "right_knee_angle": 111.0,
    "left_ankle_angle": 100.0,
    "right_ankle_angle": 104.0,
    "trunk_angle": 174.0,
    "head_angle": 136.0,
}

# Hip and shank are not captured by the simple input.
FIXED_MEANS = {
    "left_hip_angle": 25.0,
    "right_hip_angle": 28.0,
    "left_shank_angle": 55.0,
    "right_shank_angle": 54.0,
}


def synthesize_metric(mean: float, spread: float = DEFAULT_SPREAD) -> Dict[str, Any]:
    low, high = mean * (1 - spread), mean * (1 + spread)
    return {
        "min": min(low, high),
        "max": max(low, high),
        "mean": mean,
        "std": abs(mean) * spread / 2,
        "count": SYNTHETIC_COUNT,
    }


def _mean(simple: SimpleBiomechanicsInput, name: str) -> float:
    value: Optional[float] = getattr(simple, f"{name}_mean")
    return DEFAULT_MEANS[name] if value is None else value


def expand_simple_input(
    payload: Union[SimpleBiomechanicsInput, Mapping[str, Any]],
) -> RunBiomechanicsInput:
    """Build a full biomechanics input from means."""
    simple = validate_simple_input(payload)
    knee_spread = simple.knee_variability or DEFAULT_KNEE_SPREAD
    trunk_spread = simple.trunk_stability or DEFAULT_TRUNK_SPREAD

    def _metric(name: str, spread: float = DEFAULT_SPREAD) -> Dict[str, Any]:
        return synthesize_metric(_mean(simple, name), spread)

    full = {
        "left_arm": {
            "arm_swing": _metric("left_arm_swing"),
            "elbow_angle": _metric("left_elbow_angle"),
        },
        "right_arm": {
            "arm_swing": _metric("right_arm_swing"),
            "elbow_angle": _metric("right_elbow_angle"),
        },
        "left_leg": {
            "knee_angle": _metric("left_knee_angle", knee_spread),
            "ankle_angle": _metric("left_ankle_angle"),
            "hip_angle": synthesize_metric(FIXED_MEANS["left_hip_angle"]),
            "shank_angle": synthesize_metric(FIXED_MEANS["left_shank_angle"]),
        },
        "right_leg": {
            "knee_angle": _metric("right_knee_angle", knee_spread),
            "ankle_angle": _metric("right_ankle_angle"),
            "hip_angle": synthesize_metric(FIXED_MEANS["right_hip_angle"]),
            "shank_angle": synthesize_metric(FIXED_MEANS["right_shank_angle"]),
        },
        "trunk": {"trunk_angle": _metric("trunk_angle", trunk_spread)},
        "head": {"head_angle": _metric("head_angle", HEAD_SPREAD)},
        "weight_kg": simple.weight_kg,
        "height_cm": simple.height_cm,
    }
    return validate_run_input(full)


def analyze_simple(payload: Union[SimpleBiomechanicsInput, Mapping[str, Any]]) -> RunAnalysisResult:
    return analyze_run(expand_simple_input(payload))
