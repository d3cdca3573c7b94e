"""Markdown rendering of a full technique report."""

from __future__ import annotations

from pathlib import Path
from typing import List

from runform.core.constants import CATEGORY_ORDER
from runform.core.report import FullAnalysis
from runform.utils.formatting import (
    category_label,
    difficulty_label,
    format_score,
    level_label,
    severity_label,
)


def report_to_markdown(full: FullAnalysis, language: str = "en") -> str:
    """Render analysis, errors, recommendations and focus as one document."""
    analysis = full.analysis
    scores = analysis.category_scores.as_dict()

    lines: List[str] = [
        "# Running Technique Report",
        "",
        f"- **Score:** {format_score(analysis.composite_score)}",
        f"- **Level:** {level_label(analysis.classification.value, language)}",
        f"- **Analysed:** {analysis.timestamp}",
    ]
    if analysis.bmi is not None:
        lines.append(f"- **BMI:** {analysis.bmi} ({analysis.weight_category})")
    if analysis.recommended_cadence is not None:
        lines.append(f"- **Recommended cadence:** {analysis.recommended_cadence} spm")

    lines.extend(["", "## Category Scores", "", "| Category | Score |", "|----------|-------|"])
    for name in CATEGORY_ORDER:
        lines.append(f"| {category_label(name, language)} | {scores[name]:.1f} |")

    lines.extend(["", "## Summary", "", analysis.summary, "", "## Detected Errors", ""])
    if full.detection.errors:
        lines.extend(["| Error | Severity | Confidence |", "|-------|----------|------------|"])
        for error in full.detection.errors:
            lines.append(
                f"| {error.error_name} | {severity_label(error.severity.value, language)} "
                f"| {error.confidence:.0f}% |"
            )
        lines.append("")
        for error in full.detection.errors:
            lines.append(f"- **{error.error_name}:** {error.description}")
    else:
        lines.append("No technique errors detected.")

    lines.extend(["", "## Recommendations", ""])
    for item in full.recommendations.recommendations:
        lines.append(f"{item.priority}. **{item.focus_area}**: {item.recommendation}")
        lines.append(f"   - Expected: {item.expected_improvement}")
    lines.append("")
    lines.append(f"Estimated improvement time: {full.recommendations.estimated_improvement_time}")

    lines.extend(["", "## Exercises", ""])
    if full.recommendations.exercises:
        for exercise in full.recommendations.exercises:
            lines.append(
                f"- **{exercise.name}** ({difficulty_label(exercise.difficulty.value, language)}): "
                f"{exercise.sets} x {exercise.reps}, {exercise.frequency}. {exercise.description}"
            )
    else:
        lines.append("No corrective exercises needed.")

    lines.extend(["", "## Focus", ""])
    for priority in full.focus.priorities:
        lines.append(f"{priority.priority}. **{priority.area}**: {priority.action} ({priority.reason})")
    lines.append("")
    for tip in full.focus.tips:
        lines.append(f"- {tip}")
    lines.append("")
    return "\n".join(lines)


def write_report_markdown(path: Path, full: FullAnalysis, language: str = "en") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(report_to_markdown(full, language))
    return path
