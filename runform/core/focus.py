"""Training focus: weakest categories first, then serious errors."""

from __future__ import annotations

from typing import Iterable, List, Tuple

from runform.core.models import FocusAreasResult, FocusPriority, RunAnalysisResult, RunningError, Severity
from runform.core.norms import FOCUS_SCORE_THRESHOLD
from runform.core.recommendations import NO_IMPROVEMENT_NEEDED

CATEGORY_FOCUS = {
    "arm_quality": ("Arm action", "arm action"),
    "leg_quality": ("Leg technique", "leg technique"),
    "trunk_stability": ("Upright posture", "an upright, stable back"),
    "symmetry": ("Left/right balance", "balance between left and right"),
    "efficiency": ("Running economy", "running economy"),
    "consistency": ("Movement consistency", "stride-to-stride consistency"),
}

WEAKEST_CATEGORY_TIPS = {
    "consistency": "Make every stride the same: repeatable movement is the key to speed.",
    "efficiency": "Learn to run lighter: less effort for the same speed.",
    "symmetry": "Even out the work of the left and right leg; running gets easier.",
    "trunk_stability": "Strengthen abs and back: they are the base of good technique.",
}
EXERCISE_TIP = "Do the corrective exercises 3-4 times a week; expect visible results within a month."
EXCELLENT_TIP = "Your technique is at an excellent level. Keep it up!"
MINDFUL_TIP = "Think about technique in every session, not only about speed."

SERIOUS_SEVERITIES = (Severity.CRITICAL, Severity.HIGH)


def weak_categories(analysis: RunAnalysisResult) -> List[Tuple[str, float]]:
    """Categories below the focus threshold, weakest first."""
    scores = analysis.category_scores.as_dict()
    weak = [(name, score) for name, score in scores.items() if score < FOCUS_SCORE_THRESHOLD]
    return sorted(weak, key=lambda item: item[1])


def improvement_estimate(score: float) -> str:
    if score >= 90:
        return "1-2 months"
    if score >= 75:
        return "2-3 months"
    return "3-6 months"


def _maintain_priority(reason: str) -> FocusPriority:
    return FocusPriority(
        area="Maintain current form",
        priority=1,
        reason=reason,
        action="Keep your current training routine",
        source="maintenance",
    )


def _maintenance_focus() -> FocusAreasResult:
    return FocusAreasResult(
        priorities=(_maintain_priority("No technique errors were detected"),),
        tips=(EXCELLENT_TIP,),
        estimated_improvement=NO_IMPROVEMENT_NEEDED,
    )


def get_focus_areas(
    errors: Iterable[RunningError],
    analysis: RunAnalysisResult,
    limit: int = 5,
) -> FocusAreasResult:
    """Rank what to work on next from category scores and serious errors."""
    errors = list(errors)
    if not errors:
        return _maintenance_focus()

    weak = weak_categories(analysis)
    priorities: List[FocusPriority] = []

    for name, score in weak:
        area, action = CATEGORY_FOCUS.get(name, (name, name))
        priorities.append(
            FocusPriority(
                area=area,
                priority=len(priorities) + 1,
                reason=f"Score {score:.1f}/100 needs improvement",
                action=f"Work on improving {action}",
                source="category",
                score=score,
            )
        )

    for error in errors:
        if error.severity not in SERIOUS_SEVERITIES:
            continue
        priorities.append(
            FocusPriority(
                area=error.error_name,
                priority=len(priorities) + 1,
                reason=f"{error.severity.value.title()} severity error: {error.description}",
                action="Needs immediate correction",
                source="error",
            )
        )

    if not priorities:
        priorities.append(_maintain_priority("No category is below target and no serious errors were found"))

    tips: List[str] = [EXERCISE_TIP]
    if weak:
        tip = WEAKEST_CATEGORY_TIPS.get(weak[0][0])
        if tip:
            tips.append(tip)
    tips.append(EXCELLENT_TIP if analysis.composite_score >= 90 else MINDFUL_TIP)

    return FocusAreasResult(
        priorities=tuple(priorities[:limit]),
        tips=tuple(tips),
        estimated_improvement=improvement_estimate(analysis.composite_score),
    )
