"""Full analysis pipeline and the block-structured report built from it."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Union

from runform.core.analysis import analyze_run
from runform.core.constants import REPORT_PRIORITY_BY_SEVERITY, TECHNIQUE_METRIC_LABELS
from runform.core.detection import detect_errors
from runform.core.focus import get_focus_areas
from runform.core.models import (
    ErrorDetectionResult,
    FocusAreasResult,
    RecommendationResult,
    RunAnalysisResult,
    RunnerLevel,
    Severity,
)
from runform.core.recommendations import get_recommendations
from runform.core.schemas import RunBiomechanicsInput, validate_run_input
from runform.utils.numeric import round_to

logger = logging.getLogger(__name__)

REPORT_LEVELS = {
    RunnerLevel.ELITE: "Professional",
    RunnerLevel.ADVANCED: "Advanced",
    RunnerLevel.INTERMEDIATE: "Amateur",
    RunnerLevel.BEGINNER: "Beginner",
    RunnerLevel.NEEDS_HELP: "Novice",
}

STRONG_METRIC = 85


@dataclass(frozen=True)
class FullAnalysis:
    """Outputs of every engine for one input."""

    analysis: RunAnalysisResult
    detection: ErrorDetectionResult
    recommendations: RecommendationResult
    focus: FocusAreasResult


def run_full_analysis(
    data: Union[RunBiomechanicsInput, Mapping[str, Any]],
    max_recommendations: int = 5,
    max_exercises: int = 5,
    max_priorities: int = 5,
) -> FullAnalysis:
    validated = validate_run_input(data)
    analysis = analyze_run(validated)
    detection = detect_errors(validated)
    recommendations = get_recommendations(
        detection.errors,
        runner_level=analysis.classification,
        limit=max_recommendations,
        exercise_limit=max_exercises,
    )
    focus = get_focus_areas(detection.errors, analysis, limit=max_priorities)
    logger.debug(
        "Full analysis: score=%.1f errors=%d exercises=%d",
        analysis.composite_score,
        detection.error_count,
        len(recommendations.exercises),
    )
    return FullAnalysis(
        analysis=analysis,
        detection=detection,
        recommendations=recommendations,
        focus=focus,
    )


def _join(names: List[str]) -> str:
    return " and ".join(names)


def _messages(full: FullAnalysis, metrics: List[Dict[str, Any]], level: str) -> Dict[str, str]:
    score = full.analysis.composite_score
    errors = full.detection.errors
    strong = [item["name"].lower() for item in metrics if item["value"] >= STRONG_METRIC]
    weak_items = sorted((item for item in metrics if item["value"] < STRONG_METRIC), key=lambda item: item["value"])
    weak = [item["name"].lower() for item in weak_items]

    focus_area = full.focus.priorities[0].area if full.focus.priorities else "overall technique"
    main_error = next(
        (error for error in errors if error.severity in (Severity.CRITICAL, Severity.HIGH)),
        errors[0] if errors else None,
    )

    if strong:
        target = f"{_join(weak)} better" if weak else "your technique even steadier"
        first = (
            f"Your technique is already strong, especially {_join(strong)}. "
            f"The most important thing now is to make {target}. "
            "The exercises below were picked to get you there faster."
        )
    else:
        first = (
            f"Your overall technique score is {score}/100, level: {level}. "
            "There are a few areas worth working on, and the exercises below will help you progress."
        )

    quality = "very strong" if score >= 85 else "good" if score >= 70 else "in need of attention"
    technique = f"Overall your technique is {quality}."
    if strong:
        technique += f" {_join(strong).capitalize()} work especially well and give you a solid base."
    if weak_items:
        technique += f" {weak_items[0]['name']} lags behind the other metrics and costs energy on every stride."
    else:
        technique += " All metrics are at a high level."

    if main_error is not None:
        focus_message = f"Focus on {focus_area.lower()}. {main_error.description}"
    else:
        focus_message = f"The main focus now is {focus_area.lower()}. Improving it pays off directly in speed and ease."

    if errors:
        tone = "this is very fixable with the right exercises" if len(errors) <= 2 else "regular training will correct them"
        errors_message = f"{len(errors)} technique {'error was' if len(errors) == 1 else 'errors were'} found; {tone}."
    else:
        errors_message = "No serious technique errors were found. Keep watching movement quality in every session."

    if full.recommendations.exercises:
        exercises_message = (
            "These exercises target your specific errors and weak spots. "
            "Do them regularly to lock in the right movement patterns."
        )
    else:
        exercises_message = "No corrective exercises are needed right now. Focus on maintaining form and building load gradually."

    return {
        "first": first,
        "technique": technique,
        "focus": focus_message,
        "focus_recommendation": (
            "Aim to make every stride the same length and height. "
            "Do the recommended exercises 3-4 times a week and you will feel the difference within a few weeks."
        ),
        "errors": errors_message,
        "exercises": exercises_message,
    }


def build_report_blocks(full: FullAnalysis, language: str = "en") -> Dict[str, Any]:
    """Assemble the `first-message` plus technique/focus/errors/exercises blocks."""
    labels = TECHNIQUE_METRIC_LABELS.get(language, TECHNIQUE_METRIC_LABELS["en"])
    scores = full.analysis.category_scores.as_dict()
    metrics = [{"name": label, "value": int(round_to(scores[key], 0))} for key, label in labels.items()]
    level = REPORT_LEVELS[full.analysis.classification]
    messages = _messages(full, metrics, level)

    return {
        "first-message": messages["first"],
        "blocks": [
            {
                "id": "technique",
                "message": messages["technique"],
                "data": {
                    "score": round_to(full.analysis.composite_score, 1),
                    "level": level,
                    "metrics": metrics,
                },
            },
            {
                "id": "focus",
                "message": messages["focus"],
                "recommendation": messages["focus_recommendation"],
                "estimated_improvement": full.focus.estimated_improvement,
            },
            {
                "id": "errors",
                "message": messages["errors"],
                "data": [
                    {
                        "priority": REPORT_PRIORITY_BY_SEVERITY[error.severity.value],
                        "description": error.description,
                    }
                    for error in full.detection.errors
                ],
            },
            {
                "id": "exercises",
                "message": messages["exercises"],
                "data": [
                    {"id": exercise.id, "name": exercise.name, "description": exercise.description}
                    for exercise in full.recommendations.exercises
                ],
            },
        ],
    }


def build_report(data: Union[RunBiomechanicsInput, Mapping[str, Any]], **limits: int) -> Dict[str, Any]:
    return build_report_blocks(run_full_analysis(data, **limits))
