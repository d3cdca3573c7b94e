"""Before/after comparison of two analysed runs."""

from __future__ import annotations

from typing import Dict, List

from runform.core.constants import CATEGORY_LABELS, CATEGORY_ORDER
from runform.core.models import ClassificationChange, ComparisonResult, RunAnalysisResult, RunnerLevel
from runform.core.norms import CLASSIFICATION_THRESHOLDS, FOCUS_SCORE_THRESHOLD
from runform.utils.numeric import round_to

KEY_IMPROVEMENT_POINTS = 2.0

_LEVEL_RANK = {level: rank for rank, (_, level) in enumerate(reversed(CLASSIFICATION_THRESHOLDS), 1)}
_LEVEL_RANK[RunnerLevel.NEEDS_HELP] = 0


def compare_runs(before: RunAnalysisResult, after: RunAnalysisResult) -> ComparisonResult:
    """Compare two analyses of the same runner, earlier one first."""
    labels = CATEGORY_LABELS["en"]
    before_scores = before.category_scores.as_dict()
    after_scores = after.category_scores.as_dict()

    changes: Dict[str, float] = {
        name: round_to(after_scores[name] - before_scores[name], 1) for name in CATEGORY_ORDER
    }

    if before.composite_score > 0:
        improvement = (after.composite_score - before.composite_score) / before.composite_score * 100.0
    else:
        improvement = 0.0 if after.composite_score == 0 else 100.0
    improvement = round_to(improvement, 1)

    key_improvements: List[str] = [
        f"{labels[name]}: +{delta:.1f}"
        for name, delta in sorted(changes.items(), key=lambda item: item[1], reverse=True)
        if delta >= KEY_IMPROVEMENT_POINTS
    ]
    areas_to_focus: List[str] = [
        labels[name]
        for name in CATEGORY_ORDER
        if changes[name] < 0 or after_scores[name] < FOCUS_SCORE_THRESHOLD
    ]

    improved = _LEVEL_RANK[after.classification] > _LEVEL_RANK[before.classification]
    change = ClassificationChange(
        from_level=before.classification,
        to_level=after.classification,
        improved=improved,
    )

    direction = "improved" if improvement > 0 else "declined" if improvement < 0 else "unchanged"
    summary = (
        f"Overall score {direction}: {before.composite_score} -> {after.composite_score} "
        f"({improvement:+.1f}%)."
    )
    if before.classification is not after.classification:
        summary += f" Level changed from {before.classification.value} to {after.classification.value}."

    return ComparisonResult(
        improvement_percentage=improvement,
        category_changes=changes,
        classification_change=change,
        key_improvements=tuple(key_improvements),
        areas_to_focus=tuple(areas_to_focus),
        summary=summary,
    )
