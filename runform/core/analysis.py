"""Composite analysis: category scores, overall score and runner level."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional, Union

from runform.core.bmi import calculate_bmi, recommended_cadence, weight_category
from runform.core.constants import CATEGORY_LABELS, CATEGORY_ORDER
from runform.core.models import CategoryScores, RunAnalysisResult, RunnerLevel
from runform.core.norms import CATEGORY_WEIGHTS, CLASSIFICATION_THRESHOLDS
from runform.core.schemas import RunBiomechanicsInput, validate_run_input
from runform.core.scoring import compute_category_scores
from runform.utils.numeric import round_to, weighted_sum

logger = logging.getLogger(__name__)

LEVEL_VERDICTS = {
    RunnerLevel.ELITE: "Excellent running technique. Keep maintaining this level.",
    RunnerLevel.ADVANCED: "Good running technique with some room for improvement.",
    RunnerLevel.INTERMEDIATE: "Moderate running technique. Work on the identified weaknesses.",
    RunnerLevel.BEGINNER: "Basic running technique with significant potential for improvement.",
    RunnerLevel.NEEDS_HELP: "Running technique needs substantial correction. Working with a coach is recommended.",
}


def composite_score(scores: CategoryScores) -> float:
    """Weighted sum of the six category scores, rounded to one decimal."""
    values = scores.as_dict()
    return round_to(
        weighted_sum(
            [values[name] for name in CATEGORY_ORDER],
            [CATEGORY_WEIGHTS[name] for name in CATEGORY_ORDER],
        ),
        1,
    )


def classify_runner_level(score: float) -> RunnerLevel:
    for threshold, level in CLASSIFICATION_THRESHOLDS:
        if score >= threshold:
            return level
    return RunnerLevel.NEEDS_HELP


def build_summary(
    level: RunnerLevel,
    score: float,
    scores: CategoryScores,
    bmi: Optional[float] = None,
    weight_label: Optional[str] = None,
) -> str:
    labels = CATEGORY_LABELS["en"]
    ranked = sorted(scores.as_dict().items(), key=lambda item: item[1], reverse=True)
    strongest, weakest = ranked[0], ranked[-1]

    lines: List[str] = [f"{level.value.replace('_', ' ').title()} level. Overall score: {score}/100.", ""]
    if bmi is not None and weight_label:
        lines.extend(["Physical profile:", f"- BMI: {bmi} ({weight_label})", ""])
    lines.append("Strengths:")
    lines.append(f"- {labels[strongest[0]]}: {strongest[1]:.1f}/100")
    lines.append("")
    lines.append("Areas for improvement:")
    lines.append(f"- {labels[weakest[0]]}: {weakest[1]:.1f}/100")
    lines.append("")
    lines.append(LEVEL_VERDICTS[level])
    return "\n".join(lines)


def analyze_run(
    data: Union[RunBiomechanicsInput, Mapping[str, Any]],
    now: Optional[datetime] = None,
) -> RunAnalysisResult:
    """Validate the input, score it and classify the runner."""
    validated = validate_run_input(data)
    scores, breakdown = compute_category_scores(validated)
    score = composite_score(scores)
    level = classify_runner_level(score)

    bmi: Optional[float] = None
    weight_label: Optional[str] = None
    if validated.weight_kg is not None and validated.height_cm is not None:
        bmi = round_to(calculate_bmi(validated.weight_kg, validated.height_cm), 1)
        weight_label = weight_category(bmi)

    cadence = recommended_cadence(validated.height_cm) if validated.height_cm is not None else None
    timestamp = (now or datetime.now(timezone.utc)).isoformat()

    logger.debug("Composite score %.1f classified as %s", score, level.value)
    return RunAnalysisResult(
        composite_score=score,
        category_scores=scores,
        classification=level,
        summary=build_summary(level, score, scores, bmi, weight_label),
        timestamp=timestamp,
        bmi=bmi,
        weight_category=weight_label,
        recommended_cadence=cadence,
        breakdown=breakdown,
    )
