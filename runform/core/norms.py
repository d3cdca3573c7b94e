"""Reference norms for running biomechanics.

Optimal joint angles, tolerance widths, category weights and detection
thresholds. Values follow published elite-runner biomechanics and are shared,
read-only, by every scorer and by the error detector.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Tuple

from runform.core.models import RunnerLevel


@dataclass(frozen=True)
class JointNorm:
    """Optimal angle (degrees) and Gaussian width for one joint."""

    optimal: float
    sigma: float
    range_min: float
    range_max: float


@dataclass(frozen=True)
class SeverityTiers:
    """Four named tiers for one detection rule.

    ``low`` is the trigger: a rule only fires above it. The remaining three
    tiers are the cutoffs handed to ``severity_bucket``.
    """

    low: float
    medium: float
    high: float
    critical: float

    @property
    def buckets(self) -> Tuple[float, float, float]:
        return (self.medium, self.high, self.critical)


@dataclass(frozen=True)
class EfficiencyNorms:
    hip_cv_optimal: float = 22.0
    hip_cv_slope: float = 2.0
    arm_swing_cv_limit: float = 8.0
    arm_swing_cv_slope: float = 5.0
    knee_cv_optimal: float = 16.0
    knee_cv_slope: float = 3.0
    vertical_weight: float = 0.4
    arm_weight: float = 0.3
    knee_weight: float = 0.3
    hip_cv_upper: float = 25.0
    arm_swing_cv_upper: float = 10.0
    knee_cv_upper: float = 20.0
    waste_multiplier: float = 1.5
    waste_cap: float = 30.0


@dataclass(frozen=True)
class ConsistencyNorms:
    rigid_below: float = 5.0
    rigid_base: float = 70.0
    rigid_slope: float = 4.0
    optimal_upper: float = 12.0
    optimal_slope: float = 2.0
    unstable_base: float = 86.0
    unstable_slope: float = 4.0
    penalty_slope: float = 2.0


@dataclass(frozen=True)
class TrunkStabilityNorms:
    angle_weight: float = 0.4
    consistency_weight: float = 0.4
    head_weight: float = 0.2
    target_cv: float = 1.0
    cv_sigma: float = 5.0


@dataclass(frozen=True)
class PostureNorms:
    forward_lean_limit: float = 170.0
    backward_lean_limit: float = 178.0
    high_deviation: float = 5.0
    medium_deviation: float = 3.0


@dataclass(frozen=True)
class ArmDriveNorms:
    min_average_swing: float = 135.0
    reference_swing: float = 150.0
    high_deficit: float = 15.0
    medium_deficit: float = 10.0


ARM_NORMS: Mapping[str, JointNorm] = MappingProxyType(
    {
        "arm_swing": JointNorm(optimal=150.0, sigma=10.0, range_min=130.0, range_max=170.0),
        "elbow_angle": JointNorm(optimal=110.0, sigma=15.0, range_min=90.0, range_max=130.0),
    }
)

LEG_NORMS: Mapping[str, JointNorm] = MappingProxyType(
    {
        "knee_angle": JointNorm(optimal=115.0, sigma=20.0, range_min=60.0, range_max=170.0),
        "ankle_angle": JointNorm(optimal=100.0, sigma=10.0, range_min=80.0, range_max=120.0),
        "hip_angle": JointNorm(optimal=28.0, sigma=8.0, range_min=10.0, range_max=50.0),
        "shank_angle": JointNorm(optimal=55.0, sigma=18.0, range_min=0.0, range_max=110.0),
    }
)

TRUNK_NORM = JointNorm(optimal=175.0, sigma=3.0, range_min=165.0, range_max=180.0)
HEAD_NORM = JointNorm(optimal=137.0, sigma=5.0, range_min=125.0, range_max=145.0)

# Shared by leg quality (joint scores) and symmetry (joint asymmetries).
LEG_JOINT_WEIGHTS: Mapping[str, float] = MappingProxyType(
    {
        "knee_angle": 0.3,
        "ankle_angle": 0.25,
        "hip_angle": 0.25,
        "shank_angle": 0.2,
    }
)

ARM_ASYMMETRY_MAX_PENALTY = 15.0
LEG_ASYMMETRY_MAX_PENALTY = 20.0

SYMMETRY_ARM_WEIGHT = 0.4
SYMMETRY_LEG_WEIGHT = 0.6

TRUNK_STABILITY = TrunkStabilityNorms()
EFFICIENCY = EfficiencyNorms()
CONSISTENCY = ConsistencyNorms()

# Upper bounds of the excellent/good/acceptable/poor bands, in percent.
CV_BANDS: Tuple[float, float, float, float] = (5.0, 10.0, 15.0, 20.0)
ASYMMETRY_BANDS: Tuple[float, float, float, float] = (5.0, 10.0, 15.0, 20.0)

CATEGORY_WEIGHTS: Mapping[str, float] = MappingProxyType(
    {
        "arm_quality": 0.15,
        "leg_quality": 0.25,
        "trunk_stability": 0.15,
        "symmetry": 0.20,
        "efficiency": 0.15,
        "consistency": 0.10,
    }
)

# Evaluated top-down, first match wins; below the last entry is NEEDS_HELP.
CLASSIFICATION_THRESHOLDS: Tuple[Tuple[float, RunnerLevel], ...] = (
    (85.0, RunnerLevel.ELITE),
    (70.0, RunnerLevel.ADVANCED),
    (55.0, RunnerLevel.INTERMEDIATE),
    (40.0, RunnerLevel.BEGINNER),
)

ARM_ASYMMETRY = SeverityTiers(low=10.0, medium=15.0, high=20.0, critical=30.0)
LEG_ASYMMETRY = SeverityTiers(low=8.0, medium=12.0, high=18.0, critical=25.0)
KNEE_INSTABILITY = SeverityTiers(low=15.0, medium=20.0, high=25.0, critical=30.0)
TRUNK_INSTABILITY = SeverityTiers(low=2.0, medium=3.0, high=4.0, critical=5.0)
VERTICAL_OSCILLATION = SeverityTiers(low=10.0, medium=15.0, high=20.0, critical=25.0)
POSTURE = PostureNorms()
ARM_DRIVE = ArmDriveNorms()

BMI_OPTIMAL_RANGE = (19.0, 24.0)
BMI_OPTIMAL_BONUS = 5.0
# (inclusive upper BMI, adjustment) for the bands above the optimal range.
BMI_HEAVY_PENALTIES: Tuple[Tuple[float, float], ...] = (
    (27.0, -3.0),
    (30.0, -8.0),
)
BMI_OBESE_PENALTY = -15.0
BMI_LIGHT_LIMIT = 17.0
BMI_LIGHT_PENALTY = -2.0
BMI_UNDERWEIGHT_PENALTY = -5.0

WEIGHT_CATEGORY_LIMITS: Tuple[Tuple[float, str], ...] = (
    (18.5, "underweight"),
    (25.0, "normal"),
    (30.0, "overweight"),
)
WEIGHT_CATEGORY_MAX = "obese"

TALL_RUNNER_CM = 185.0
MEDIUM_TALL_RUNNER_CM = 175.0
SHORT_RUNNER_CM = 160.0
TALL_RUNNER_CREDIT = 3.0
MEDIUM_TALL_RUNNER_CREDIT = 1.0
SHORT_RUNNER_DEBIT = -2.0
VERTICAL_HEIGHT_SHARE = 0.4

BASE_CADENCE = 180
CADENCE_SHORT_REFERENCE_CM = 170.0
CADENCE_TALL_REFERENCE_CM = 180.0

FOCUS_SCORE_THRESHOLD = 85.0
