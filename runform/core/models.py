"""Result records and enums shared across the engine."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class Severity(str, Enum):
    """Severity of a detected technique error."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        return _SEVERITY_ORDER.index(self)


_SEVERITY_ORDER = (Severity.LOW, Severity.MEDIUM, Severity.HIGH, Severity.CRITICAL)


class RunnerLevel(str, Enum):
    """Five-tier skill bucket derived from the composite score."""

    ELITE = "ELITE"
    ADVANCED = "ADVANCED"
    INTERMEDIATE = "INTERMEDIATE"
    BEGINNER = "BEGINNER"
    NEEDS_HELP = "NEEDS_HELP"


class ErrorType(str, Enum):
    ARM_ASYMMETRY = "ARM_ASYMMETRY"
    LEG_ASYMMETRY = "LEG_ASYMMETRY"
    KNEE_INSTABILITY = "KNEE_INSTABILITY"
    EXCESSIVE_VERTICAL_OSCILLATION = "EXCESSIVE_VERTICAL_OSCILLATION"
    POOR_TRUNK_POSTURE = "POOR_TRUNK_POSTURE"
    OVERSTRIDING = "OVERSTRIDING"
    EXCESSIVE_PRONATION = "EXCESSIVE_PRONATION"
    INSUFFICIENT_ARM_DRIVE = "INSUFFICIENT_ARM_DRIVE"


class Difficulty(str, Enum):
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


@dataclass(frozen=True)
class ArmQualityResult:
    """Arm quality index with per-side and per-joint sub-scores."""

    arm_quality_index: float
    arm_symmetry: float
    left_arm_score: float
    right_arm_score: float
    asymmetry_penalty: float
    left_swing_score: float
    left_elbow_score: float
    right_swing_score: float
    right_elbow_score: float


@dataclass(frozen=True)
class LegQualityResult:
    """Leg quality index with per-side and per-joint sub-scores."""

    leg_quality_index: float
    leg_symmetry: float
    left_leg_score: float
    right_leg_score: float
    asymmetry_penalty: float
    joint_scores: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class TrunkStabilityResult:
    trunk_stability_score: float
    trunk_angle_score: float
    trunk_consistency_score: float
    head_angle_score: float


@dataclass(frozen=True)
class SymmetryResult:
    symmetry_score: float
    arm_symmetry: float
    leg_symmetry: float
    rating: str


@dataclass(frozen=True)
class EfficiencyResult:
    efficiency_score: float
    movement_economy: float
    energy_waste_penalty: float
    vertical_efficiency: float
    arm_efficiency: float
    knee_efficiency: float


@dataclass(frozen=True)
class ConsistencyResult:
    consistency_score: float
    overall_cv: float
    variability_penalty: float
    cv_rating: str


@dataclass(frozen=True)
class CategoryBreakdown:
    """Full scorer outputs behind the six category scores."""

    arm_quality: ArmQualityResult
    leg_quality: LegQualityResult
    trunk_stability: TrunkStabilityResult
    symmetry: SymmetryResult
    efficiency: EfficiencyResult
    consistency: ConsistencyResult


@dataclass(frozen=True)
class CategoryScores:
    """Six 0-100 category scores composing the overall technique score."""

    arm_quality: float
    leg_quality: float
    trunk_stability: float
    symmetry: float
    efficiency: float
    consistency: float

    def as_dict(self) -> Dict[str, float]:
        return {item.name: getattr(self, item.name) for item in fields(self)}


@dataclass(frozen=True)
class RunAnalysisResult:
    composite_score: float
    category_scores: CategoryScores
    classification: RunnerLevel
    summary: str
    timestamp: str
    bmi: Optional[float] = None
    weight_category: Optional[str] = None
    recommended_cadence: Optional[int] = None
    breakdown: Optional[CategoryBreakdown] = None


@dataclass(frozen=True)
class RunningError:
    """One discrete, severity-tagged technique defect."""

    error_type: ErrorType
    error_name: str
    severity: Severity
    confidence: float
    affected_metrics: Tuple[str, ...]
    values: Dict[str, float]
    description: str


@dataclass(frozen=True)
class ErrorDetectionResult:
    errors: Tuple[RunningError, ...]
    error_count: int
    highest_severity: Severity
    summary: str


@dataclass(frozen=True)
class Exercise:
    """Static catalog entry for a corrective exercise."""

    id: str
    name: str
    category: str
    description: str
    sets: int
    reps: str
    frequency: str
    difficulty: Difficulty
    target_errors: Tuple[ErrorType, ...]


@dataclass(frozen=True)
class Recommendation:
    priority: int
    focus_area: str
    recommendation: str
    reason: str
    expected_improvement: str


@dataclass(frozen=True)
class RecommendationResult:
    recommendations: Tuple[Recommendation, ...]
    exercises: Tuple[Exercise, ...]
    focus_areas: Tuple[str, ...]
    estimated_improvement_time: str
    summary: str


@dataclass(frozen=True)
class FocusPriority:
    area: str
    priority: int
    reason: str
    action: str
    source: str
    score: Optional[float] = None


@dataclass(frozen=True)
class FocusAreasResult:
    priorities: Tuple[FocusPriority, ...]
    tips: Tuple[str, ...]
    estimated_improvement: str


@dataclass(frozen=True)
class ClassificationChange:
    from_level: RunnerLevel
    to_level: RunnerLevel
    improved: bool


@dataclass(frozen=True)
class ComparisonResult:
    improvement_percentage: float
    category_changes: Dict[str, float]
    classification_change: ClassificationChange
    key_improvements: Tuple[str, ...]
    areas_to_focus: Tuple[str, ...]
    summary: str


def to_payload(value: Any) -> Any:
    """Convert result records into JSON-ready builtins."""
    if isinstance(value, Enum):
        return value.value
    if is_dataclass(value) and not isinstance(value, type):
        return {item.name: to_payload(getattr(value, item.name)) for item in fields(value)}
    if isinstance(value, dict):
        return {str(key): to_payload(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_payload(item) for item in value]
    return value
