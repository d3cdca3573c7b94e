from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict

from runform.core.report import run_full_analysis
from runform.exporters.json_export import write_json
from runform.exporters.markdown import report_to_markdown, write_report_markdown


def test_report_to_markdown_sections(real_user_input: Dict[str, Any]) -> None:
    markdown = report_to_markdown(run_full_analysis(dict(real_user_input, weight_kg=68, height_cm=178)))
    assert markdown.startswith("# Running Technique Report")
    for heading in ("## Category Scores", "## Summary", "## Detected Errors", "## Recommendations", "## Exercises", "## Focus"):
        assert heading in markdown
    assert "| Consistency |" in markdown
    assert "| Excessive vertical oscillation | Critical |" in markdown
    assert "- **Recommended cadence:** 180 spm" in markdown
    assert "- **BMI:** 21.5 (normal)" in markdown
    assert "**Cadence drill with metronome** (Medium)" in markdown


def test_report_to_markdown_clean_run(nominal_input: Dict[str, Any]) -> None:
    markdown = report_to_markdown(run_full_analysis(nominal_input))
    assert "No technique errors detected." in markdown
    assert "No corrective exercises needed." in markdown
    assert "1. **Maintain current form**" in markdown


def test_report_to_markdown_russian_labels(real_user_input: Dict[str, Any]) -> None:
    markdown = report_to_markdown(run_full_analysis(real_user_input), language="ru")
    assert "| Консистентность |" in markdown
    assert "Критическая" in markdown


def test_write_report_markdown(tmp_path: Path, nominal_input: Dict[str, Any]) -> None:
    path = write_report_markdown(tmp_path / "out" / "report.md", run_full_analysis(nominal_input))
    assert path.exists()
    assert path.read_text().startswith("# Running Technique Report")


def test_write_json_serializes_records(tmp_path: Path, nominal_input: Dict[str, Any]) -> None:
    full = run_full_analysis(nominal_input)
    path = write_json(tmp_path / "analysis.json", full.analysis)
    payload = json.loads(path.read_text())
    assert payload["classification"] == "ELITE"
    assert set(payload["category_scores"]) == {
        "arm_quality",
        "leg_quality",
        "trunk_stability",
        "symmetry",
        "efficiency",
        "consistency",
    }
