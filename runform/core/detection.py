"""Rule-based detection of running technique errors.

Each rule inspects the validated input on its own and returns at most one
finding. Rules run in a fixed order so the output is deterministic.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Mapping, Optional, Sequence, Union

from runform.core import norms
from runform.core.models import ErrorDetectionResult, ErrorType, RunningError, Severity
from runform.core.schemas import RunBiomechanicsInput, validate_run_input
from runform.utils.numeric import clamp, coefficient_of_variation, severity_bucket

logger = logging.getLogger(__name__)

Rule = Callable[[RunBiomechanicsInput], Optional[RunningError]]


def _confidence(value: float, cap: float) -> float:
    return clamp(min(cap, value), 0.0, 100.0)


def detect_arm_asymmetry(data: RunBiomechanicsInput) -> Optional[RunningError]:
    left = data.left_arm.arm_swing.mean
    right = data.right_arm.arm_swing.mean
    diff = abs(left - right)
    if diff <= norms.ARM_ASYMMETRY.low:
        return None
    return RunningError(
        error_type=ErrorType.ARM_ASYMMETRY,
        error_name="Arm swing asymmetry",
        severity=severity_bucket(diff, norms.ARM_ASYMMETRY.buckets),
        confidence=_confidence(50 + diff * 2, 95),
        affected_metrics=("left_arm.arm_swing", "right_arm.arm_swing"),
        values={"left_arm_swing": left, "right_arm_swing": right, "difference": diff},
        description=(
            f"One arm swings harder than the other (difference {diff:.1f}°). "
            "The imbalance costs extra energy and brings fatigue sooner."
        ),
    )


def detect_leg_asymmetry(data: RunBiomechanicsInput) -> Optional[RunningError]:
    left = data.left_leg.knee_angle.mean
    right = data.right_leg.knee_angle.mean
    diff = abs(left - right)
    if diff <= norms.LEG_ASYMMETRY.low:
        return None
    return RunningError(
        error_type=ErrorType.LEG_ASYMMETRY,
        error_name="Leg asymmetry",
        severity=severity_bucket(diff, norms.LEG_ASYMMETRY.buckets),
        confidence=_confidence(45 + diff * 2.5, 90),
        affected_metrics=("left_leg.knee_angle", "right_leg.knee_angle"),
        values={"left_knee_angle": left, "right_knee_angle": right, "difference": diff},
        description=(
            f"One knee bends more than the other (difference {diff:.1f}°). "
            "This overloads one leg and raises injury risk."
        ),
    )


def detect_knee_instability(data: RunBiomechanicsInput) -> Optional[RunningError]:
    left = data.left_leg.knee_angle
    right = data.right_leg.knee_angle
    left_cv = coefficient_of_variation(left.std, left.mean)
    right_cv = coefficient_of_variation(right.std, right.mean)
    max_cv = max(left_cv, right_cv)
    if max_cv <= norms.KNEE_INSTABILITY.low:
        return None

    side, metric = ("left_leg", left) if left_cv > right_cv else ("right_leg", right)
    return RunningError(
        error_type=ErrorType.KNEE_INSTABILITY,
        error_name="Knee instability",
        severity=severity_bucket(max_cv, norms.KNEE_INSTABILITY.buckets),
        confidence=_confidence(40 + max_cv * 1.5, 88),
        affected_metrics=(f"{side}.knee_angle",),
        values={"cv": max_cv, "std": metric.std, "mean": metric.mean},
        description=(
            f"Knee angle varies from stride to stride (CV {max_cv:.1f}%). "
            "This reduces control and raises injury risk."
        ),
    )


def detect_vertical_oscillation(data: RunBiomechanicsInput) -> Optional[RunningError]:
    left = data.left_leg.hip_angle
    right = data.right_leg.hip_angle
    left_cv = coefficient_of_variation(left.std, left.mean)
    right_cv = coefficient_of_variation(right.std, right.mean)
    avg_cv = (left_cv + right_cv) / 2.0
    if avg_cv <= norms.VERTICAL_OSCILLATION.low:
        return None
    return RunningError(
        error_type=ErrorType.EXCESSIVE_VERTICAL_OSCILLATION,
        error_name="Excessive vertical oscillation",
        severity=severity_bucket(avg_cv, norms.VERTICAL_OSCILLATION.buckets),
        confidence=_confidence(35 + avg_cv * 2, 85),
        affected_metrics=("left_leg.hip_angle", "right_leg.hip_angle"),
        values={"avg_hip_cv": avg_cv, "left_hip_cv": left_cv, "right_hip_cv": right_cv},
        description=(
            f"Hip motion varies by {avg_cv:.1f}% on average: the stride bounces upward "
            "instead of driving forward, which wastes energy."
        ),
    )


def _deviation_severity(deviation: float, high: float, medium: float) -> Severity:
    if deviation > high:
        return Severity.HIGH
    if deviation > medium:
        return Severity.MEDIUM
    return Severity.LOW


def detect_trunk_lean(data: RunBiomechanicsInput) -> Optional[RunningError]:
    cfg = norms.POSTURE
    angle = data.trunk.trunk_angle.mean
    if angle < cfg.forward_lean_limit:
        direction, deviation = "forward", cfg.forward_lean_limit - angle
    elif angle > cfg.backward_lean_limit:
        direction, deviation = "backward", angle - cfg.backward_lean_limit
    else:
        return None
    return RunningError(
        error_type=ErrorType.POOR_TRUNK_POSTURE,
        error_name="Poor trunk posture",
        severity=_deviation_severity(deviation, cfg.high_deviation, cfg.medium_deviation),
        confidence=_confidence(60 + deviation * 5, 92),
        affected_metrics=("trunk.trunk_angle",),
        values={"trunk_angle": angle, "deviation": deviation},
        description=(
            f"Trunk leans {direction} ({angle:.1f}°, {deviation:.1f}° outside the neutral band). "
            "A tall, neutral torso makes running easier and unloads the lower back."
        ),
    )


def detect_insufficient_arm_drive(data: RunBiomechanicsInput) -> Optional[RunningError]:
    cfg = norms.ARM_DRIVE
    average = (data.left_arm.arm_swing.mean + data.right_arm.arm_swing.mean) / 2.0
    if average >= cfg.min_average_swing:
        return None
    deficit = cfg.min_average_swing - average
    return RunningError(
        error_type=ErrorType.INSUFFICIENT_ARM_DRIVE,
        error_name="Insufficient arm drive",
        severity=_deviation_severity(deficit, cfg.high_deficit, cfg.medium_deficit),
        confidence=_confidence(50 + deficit * 2, 88),
        affected_metrics=("left_arm.arm_swing", "right_arm.arm_swing"),
        values={"avg_arm_swing": average, "optimal": cfg.reference_swing, "deficit": deficit},
        description=(
            f"Arm swing averages {average:.1f}°, too passive. "
            "An active arm drive helps speed and balance."
        ),
    )


def detect_trunk_instability(data: RunBiomechanicsInput) -> Optional[RunningError]:
    metric = data.trunk.trunk_angle
    if metric.std <= norms.TRUNK_INSTABILITY.low:
        return None
    return RunningError(
        error_type=ErrorType.POOR_TRUNK_POSTURE,
        error_name="Trunk instability",
        severity=severity_bucket(metric.std, norms.TRUNK_INSTABILITY.buckets),
        confidence=_confidence(55 + metric.std * 8, 90),
        affected_metrics=("trunk.trunk_angle",),
        values={
            "trunk_std": metric.std,
            "trunk_cv": coefficient_of_variation(metric.std, metric.mean),
        },
        description=(
            f"Torso sways from side to side (std {metric.std:.1f}°). "
            "This wastes effort and costs speed."
        ),
    )


RULES: Sequence[Rule] = (
    detect_arm_asymmetry,
    detect_leg_asymmetry,
    detect_knee_instability,
    detect_vertical_oscillation,
    detect_trunk_lean,
    detect_insufficient_arm_drive,
    detect_trunk_instability,
)


def detect_running_errors(data: Union[RunBiomechanicsInput, Mapping[str, Any]]) -> List[RunningError]:
    """Apply every rule in order and collect the findings."""
    validated = validate_run_input(data)
    errors: List[RunningError] = []
    for rule in RULES:
        finding = rule(validated)
        if finding is not None:
            logger.debug("%s: %s (%s)", rule.__name__, finding.error_type.value, finding.severity.value)
            errors.append(finding)
    return errors


def highest_severity(errors: Iterable[RunningError]) -> Severity:
    highest = Severity.LOW
    for error in errors:
        if error.severity.rank > highest.rank:
            highest = error.severity
    return highest


def build_error_summary(errors: Sequence[RunningError]) -> str:
    if not errors:
        return "No technique errors detected. Great work!"

    noun = "error" if len(errors) == 1 else "errors"
    lines = [f"Detected {len(errors)} {noun}:"]
    for severity in (Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM, Severity.LOW):
        count = sum(1 for error in errors if error.severity is severity)
        if count:
            lines.append(f"- {count} {severity.value.lower()}")

    lines.append("")
    lines.append("Main issues:")
    ranked = sorted(errors, key=lambda error: error.severity.rank, reverse=True)
    for index, error in enumerate(ranked[:3], 1):
        lines.append(f"{index}. {error.error_name} ({error.severity.value})")
    return "\n".join(lines)


def detect_errors(data: Union[RunBiomechanicsInput, Mapping[str, Any]]) -> ErrorDetectionResult:
    errors = detect_running_errors(data)
    return ErrorDetectionResult(
        errors=tuple(errors),
        error_count=len(errors),
        highest_severity=highest_severity(errors),
        summary=build_error_summary(errors),
    )
