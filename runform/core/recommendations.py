"""Ranked recommendations and improvement-time estimates."""

from __future__ import annotations

import logging
import math
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from runform.core.exercises import exercises_for_errors
from runform.core.models import (
    ErrorType,
    Exercise,
    Recommendation,
    RecommendationResult,
    RunnerLevel,
    RunningError,
    Severity,
)

logger = logging.getLogger(__name__)

# error type -> (recommendation, expected improvement)
RECOMMENDATION_TEXT: Dict[ErrorType, Tuple[str, str]] = {
    ErrorType.ARM_ASYMMETRY: (
        "Work on symmetrical arm action. Use single-arm exercises and put extra attention on the weaker side.",
        "5-10% better symmetry in 2-3 weeks",
    ),
    ErrorType.LEG_ASYMMETRY: (
        "Strengthen the weaker leg with single-leg exercises. Pay attention to balance and stability.",
        "5-8% better symmetry in 3-4 weeks",
    ),
    ErrorType.KNEE_INSTABILITY: (
        "Work on knee stability with balance drills and strength work for the muscles around the knee.",
        "20-30% less variability in 4-6 weeks",
    ),
    ErrorType.EXCESSIVE_VERTICAL_OSCILLATION: (
        "Focus on moving forward rather than bouncing up. Take short, quick steps.",
        "15-25% less vertical oscillation in 2-4 weeks",
    ),
    ErrorType.POOR_TRUNK_POSTURE: (
        "Work on posture and core stability. Strengthen the core and watch the trunk angle.",
        "10-15% better posture in 3-5 weeks",
    ),
    ErrorType.OVERSTRIDING: (
        "Raise your cadence and shorten your stride. Land under your centre of mass.",
        "15-20% better technique in 3-4 weeks",
    ),
    ErrorType.EXCESSIVE_PRONATION: (
        "Strengthen the feet and ankles. Consider supportive footwear.",
        "10-15% improvement in 4-6 weeks",
    ),
    ErrorType.INSUFFICIENT_ARM_DRIVE: (
        "Increase arm swing range. Keep elbows near 90° and move the hands from hip to chest height.",
        "15-20% better arm action in 2-3 weeks",
    ),
}
DEFAULT_RECOMMENDATION = (
    "Work on overall running technique with a coach.",
    "Gradual improvement over 4-8 weeks",
)

FOCUS_AREA_ARMS = "Arm action"
FOCUS_AREA_LEGS = "Leg action"
FOCUS_AREA_CORE = "Core stability"
FOCUS_AREA_HORIZONTAL = "Horizontal drive"

MAINTENANCE_FOCUS_AREA = "Technique maintenance"
NO_IMPROVEMENT_NEEDED = "not required"

FAST_ADAPTERS = (RunnerLevel.ELITE, RunnerLevel.ADVANCED)
SLOW_ADAPTERS = (RunnerLevel.BEGINNER, RunnerLevel.NEEDS_HELP)

# (max weeks, label); anything longer falls into the last bucket.
IMPROVEMENT_BUCKETS: Tuple[Tuple[int, str], ...] = (
    (4, "2-4 weeks"),
    (8, "1-2 months"),
    (12, "2-3 months"),
)
LONGEST_IMPROVEMENT = "3-6 months"


def sort_errors(errors: Iterable[RunningError]) -> List[RunningError]:
    """Severity descending, then confidence descending; ties keep input order."""
    return sorted(errors, key=lambda error: (-error.severity.rank, -error.confidence))


def focus_areas_for_errors(errors: Iterable[RunningError]) -> List[str]:
    areas: List[str] = []

    def _add(area: str) -> None:
        if area not in areas:
            areas.append(area)

    for error in errors:
        name = error.error_type.value
        if "ARM" in name:
            _add(FOCUS_AREA_ARMS)
        if "LEG" in name or "KNEE" in name:
            _add(FOCUS_AREA_LEGS)
        if "TRUNK" in name:
            _add(FOCUS_AREA_CORE)
        if error.error_type is ErrorType.EXCESSIVE_VERTICAL_OSCILLATION:
            _add(FOCUS_AREA_HORIZONTAL)
    return areas


def estimate_improvement_time(
    errors: Sequence[RunningError],
    runner_level: Optional[RunnerLevel] = None,
) -> str:
    if not errors:
        return NO_IMPROVEMENT_NEEDED

    critical = sum(1 for error in errors if error.severity is Severity.CRITICAL)
    high = sum(1 for error in errors if error.severity is Severity.HIGH)
    base_weeks = critical * 6 + high * 4 + len(errors) * 2

    factor = 1.0
    if runner_level in FAST_ADAPTERS:
        factor = 0.7
    elif runner_level in SLOW_ADAPTERS:
        factor = 1.3

    weeks = math.ceil(base_weeks * factor)
    for max_weeks, label in IMPROVEMENT_BUCKETS:
        if weeks <= max_weeks:
            return label
    return LONGEST_IMPROVEMENT


def _maintenance_result() -> RecommendationResult:
    return RecommendationResult(
        recommendations=(
            Recommendation(
                priority=1,
                focus_area="Maintain current form",
                recommendation="Keep your current training routine.",
                reason="Your running technique is at an excellent level.",
                expected_improvement="Maintain the current level",
            ),
        ),
        exercises=(),
        focus_areas=(MAINTENANCE_FOCUS_AREA,),
        estimated_improvement_time=NO_IMPROVEMENT_NEEDED,
        summary="Excellent running technique! Keep it up.",
    )


def build_recommendation_summary(
    recommendations: Sequence[Recommendation],
    exercises: Sequence[Exercise],
) -> str:
    lines = ["Personal plan for improving running technique:", "", "Priority areas:"]
    for item in recommendations[:3]:
        lines.append(f"{item.priority}. {item.focus_area}")
    lines.append("")
    lines.append(f"Recommended exercises: {len(exercises)}")
    for exercise in exercises[:3]:
        lines.append(f"- {exercise.name} ({exercise.frequency})")
    lines.append("")
    lines.append("With regular training the first results show in 2-3 weeks.")
    return "\n".join(lines)


def get_recommendations(
    errors: Iterable[RunningError],
    runner_level: Optional[RunnerLevel] = None,
    limit: int = 5,
    exercise_limit: int = 5,
) -> RecommendationResult:
    """Turn detected errors into a ranked improvement plan."""
    ranked = sort_errors(errors)
    if not ranked:
        return _maintenance_result()

    recommendations: List[Recommendation] = []
    for index, error in enumerate(ranked[:limit], 1):
        text, improvement = RECOMMENDATION_TEXT.get(error.error_type, DEFAULT_RECOMMENDATION)
        recommendations.append(
            Recommendation(
                priority=index,
                focus_area=error.error_name,
                recommendation=text,
                reason=error.description,
                expected_improvement=improvement,
            )
        )

    if len(ranked) > limit:
        recommendations.append(
            Recommendation(
                priority=limit + 1,
                focus_area="Overall technique",
                recommendation="Work with a qualified running coach for a complete technique overhaul.",
                reason=f"{len(ranked)} technique errors detected",
                expected_improvement="Significant improvement in 2-3 months",
            )
        )

    exercises = exercises_for_errors([error.error_type for error in ranked], limit=exercise_limit)
    logger.debug("Built %d recommendations and %d exercises", len(recommendations), len(exercises))
    return RecommendationResult(
        recommendations=tuple(recommendations),
        exercises=tuple(exercises),
        focus_areas=tuple(focus_areas_for_errors(ranked)),
        estimated_improvement_time=estimate_improvement_time(ranked, runner_level),
        summary=build_recommendation_summary(recommendations, exercises),
    )
