"""Category scorers: pure functions of the input and the norm tables."""

from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from runform.core import norms
from runform.core.bmi import adjust_efficiency_for_bmi, adjust_vertical_for_height, calculate_bmi
from runform.core.models import (
    ArmQualityResult,
    CategoryBreakdown,
    CategoryScores,
    ConsistencyResult,
    EfficiencyResult,
    LegQualityResult,
    SymmetryResult,
    TrunkStabilityResult,
)
from runform.core.schemas import (
    ArmData,
    BiomechanicsMetric,
    HeadData,
    LegData,
    RunBiomechanicsInput,
    TrunkData,
)
from runform.utils.numeric import (
    asymmetry_index,
    asymmetry_penalty,
    clamp,
    coefficient_of_variation,
    consistency_proximity,
    gaussian_proximity,
    rate_band,
    round_to,
)

logger = logging.getLogger(__name__)


def _joint_score(metric: BiomechanicsMetric, norm: norms.JointNorm) -> float:
    return gaussian_proximity(metric.mean, norm.optimal, norm.sigma)


def _cv(metric: BiomechanicsMetric) -> float:
    return coefficient_of_variation(metric.std, metric.mean)


def _side_penalty(left_score: float, right_score: float, max_penalty: float) -> Tuple[float, float]:
    """Return (symmetry, penalty) for two side scores."""
    index = asymmetry_index(left_score, right_score)
    return 100.0 - index, asymmetry_penalty(index, max_penalty)


def score_arm_quality(left: ArmData, right: ArmData) -> ArmQualityResult:
    swing_norm = norms.ARM_NORMS["arm_swing"]
    elbow_norm = norms.ARM_NORMS["elbow_angle"]

    left_swing = _joint_score(left.arm_swing, swing_norm)
    left_elbow = _joint_score(left.elbow_angle, elbow_norm)
    right_swing = _joint_score(right.arm_swing, swing_norm)
    right_elbow = _joint_score(right.elbow_angle, elbow_norm)

    left_score = (left_swing + left_elbow) / 2.0
    right_score = (right_swing + right_elbow) / 2.0
    symmetry, penalty = _side_penalty(left_score, right_score, norms.ARM_ASYMMETRY_MAX_PENALTY)

    return ArmQualityResult(
        arm_quality_index=max(0.0, (left_score + right_score) / 2.0 - penalty),
        arm_symmetry=symmetry,
        left_arm_score=left_score,
        right_arm_score=right_score,
        asymmetry_penalty=penalty,
        left_swing_score=left_swing,
        left_elbow_score=left_elbow,
        right_swing_score=right_swing,
        right_elbow_score=right_elbow,
    )


def _leg_side(leg: LegData, side: str, joint_scores: Dict[str, float]) -> float:
    total = 0.0
    for joint, weight in norms.LEG_JOINT_WEIGHTS.items():
        score = _joint_score(getattr(leg, joint), norms.LEG_NORMS[joint])
        joint_scores[f"{side}_{joint.replace('_angle', '')}_score"] = score
        total += score * weight
    return total


def score_leg_quality(left: LegData, right: LegData) -> LegQualityResult:
    joint_scores: Dict[str, float] = {}
    left_score = _leg_side(left, "left", joint_scores)
    right_score = _leg_side(right, "right", joint_scores)
    symmetry, penalty = _side_penalty(left_score, right_score, norms.LEG_ASYMMETRY_MAX_PENALTY)

    return LegQualityResult(
        leg_quality_index=max(0.0, (left_score + right_score) / 2.0 - penalty),
        leg_symmetry=symmetry,
        left_leg_score=left_score,
        right_leg_score=right_score,
        asymmetry_penalty=penalty,
        joint_scores=joint_scores,
    )


def score_trunk_stability(trunk: TrunkData, head: HeadData) -> TrunkStabilityResult:
    weights = norms.TRUNK_STABILITY
    angle_score = _joint_score(trunk.trunk_angle, norms.TRUNK_NORM)
    consistency_score = consistency_proximity(
        _cv(trunk.trunk_angle),
        optimal_cv=weights.target_cv,
        sigma=weights.cv_sigma,
    )
    head_score = _joint_score(head.head_angle, norms.HEAD_NORM)

    return TrunkStabilityResult(
        trunk_stability_score=(
            angle_score * weights.angle_weight
            + consistency_score * weights.consistency_weight
            + head_score * weights.head_weight
        ),
        trunk_angle_score=angle_score,
        trunk_consistency_score=consistency_score,
        head_angle_score=head_score,
    )


def score_symmetry(data: RunBiomechanicsInput) -> SymmetryResult:
    swing_asym = asymmetry_index(data.left_arm.arm_swing.mean, data.right_arm.arm_swing.mean)
    elbow_asym = asymmetry_index(data.left_arm.elbow_angle.mean, data.right_arm.elbow_angle.mean)
    arm_asym = (swing_asym + elbow_asym) / 2.0

    leg_asym = 0.0
    for joint, weight in norms.LEG_JOINT_WEIGHTS.items():
        left = getattr(data.left_leg, joint).mean
        right = getattr(data.right_leg, joint).mean
        leg_asym += asymmetry_index(left, right) * weight

    arm_symmetry = 100.0 - arm_asym
    leg_symmetry = 100.0 - leg_asym
    overall = arm_symmetry * norms.SYMMETRY_ARM_WEIGHT + leg_symmetry * norms.SYMMETRY_LEG_WEIGHT

    return SymmetryResult(
        symmetry_score=overall,
        arm_symmetry=arm_symmetry,
        leg_symmetry=leg_symmetry,
        rating=rate_band(100.0 - overall, norms.ASYMMETRY_BANDS),
    )


def score_efficiency(data: RunBiomechanicsInput) -> EfficiencyResult:
    cfg = norms.EFFICIENCY
    hip_cv = (_cv(data.left_leg.hip_angle) + _cv(data.right_leg.hip_angle)) / 2.0
    arm_cv = (_cv(data.left_arm.arm_swing) + _cv(data.right_arm.arm_swing)) / 2.0
    knee_cv = (_cv(data.left_leg.knee_angle) + _cv(data.right_leg.knee_angle)) / 2.0

    vertical = 100.0 - abs(hip_cv - cfg.hip_cv_optimal) * cfg.hip_cv_slope
    arm = 100.0 - max(0.0, arm_cv - cfg.arm_swing_cv_limit) * cfg.arm_swing_cv_slope
    knee = 100.0 - abs(knee_cv - cfg.knee_cv_optimal) * cfg.knee_cv_slope
    economy = vertical * cfg.vertical_weight + arm * cfg.arm_weight + knee * cfg.knee_weight

    excess = (
        max(0.0, hip_cv - cfg.hip_cv_upper)
        + max(0.0, arm_cv - cfg.arm_swing_cv_upper)
        + max(0.0, knee_cv - cfg.knee_cv_upper)
    )
    waste = min(cfg.waste_cap, excess * cfg.waste_multiplier)

    if data.weight_kg is not None and data.height_cm is not None:
        economy = adjust_efficiency_for_bmi(economy, calculate_bmi(data.weight_kg, data.height_cm))
    if data.height_cm is not None:
        adjusted_vertical = adjust_vertical_for_height(vertical, data.height_cm)
        economy += (adjusted_vertical - vertical) * norms.VERTICAL_HEIGHT_SHARE

    return EfficiencyResult(
        efficiency_score=clamp(economy - waste, 0.0, 100.0),
        movement_economy=economy,
        energy_waste_penalty=waste,
        vertical_efficiency=vertical,
        arm_efficiency=arm,
        knee_efficiency=knee,
    )


def _all_metrics(data: RunBiomechanicsInput) -> List[BiomechanicsMetric]:
    return [
        data.left_arm.arm_swing,
        data.left_arm.elbow_angle,
        data.right_arm.arm_swing,
        data.right_arm.elbow_angle,
        data.left_leg.knee_angle,
        data.left_leg.ankle_angle,
        data.left_leg.hip_angle,
        data.left_leg.shank_angle,
        data.right_leg.knee_angle,
        data.right_leg.ankle_angle,
        data.right_leg.hip_angle,
        data.right_leg.shank_angle,
        data.trunk.trunk_angle,
        data.head.head_angle,
    ]


def score_consistency(data: RunBiomechanicsInput) -> ConsistencyResult:
    cfg = norms.CONSISTENCY
    values = [_cv(metric) for metric in _all_metrics(data)]
    overall = sum(values) / len(values)

    if overall < cfg.rigid_below:
        score = cfg.rigid_base + overall * cfg.rigid_slope
    elif overall <= cfg.optimal_upper:
        score = 100.0 - (overall - cfg.rigid_below) * cfg.optimal_slope
    else:
        score = max(0.0, cfg.unstable_base - (overall - cfg.optimal_upper) * cfg.unstable_slope)

    return ConsistencyResult(
        consistency_score=score,
        overall_cv=overall,
        variability_penalty=max(0.0, (overall - cfg.optimal_upper) * cfg.penalty_slope),
        cv_rating=rate_band(overall, norms.CV_BANDS),
    )


def compute_category_scores(data: RunBiomechanicsInput) -> Tuple[CategoryScores, CategoryBreakdown]:
    """Run all six scorers and round each headline score to one decimal."""
    breakdown = CategoryBreakdown(
        arm_quality=score_arm_quality(data.left_arm, data.right_arm),
        leg_quality=score_leg_quality(data.left_leg, data.right_leg),
        trunk_stability=score_trunk_stability(data.trunk, data.head),
        symmetry=score_symmetry(data),
        efficiency=score_efficiency(data),
        consistency=score_consistency(data),
    )
    scores = CategoryScores(
        arm_quality=round_to(breakdown.arm_quality.arm_quality_index, 1),
        leg_quality=round_to(breakdown.leg_quality.leg_quality_index, 1),
        trunk_stability=round_to(breakdown.trunk_stability.trunk_stability_score, 1),
        symmetry=round_to(breakdown.symmetry.symmetry_score, 1),
        efficiency=round_to(breakdown.efficiency.efficiency_score, 1),
        consistency=round_to(breakdown.consistency.consistency_score, 1),
    )
    logger.debug("Category scores: %s", scores.as_dict())
    return scores, breakdown
