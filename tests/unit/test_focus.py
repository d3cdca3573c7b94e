from __future__ import annotations

import copy
from typing import Any, Dict

import pytest

from runform.core.analysis import analyze_run
from runform.core.detection import detect_running_errors
from runform.core.focus import (
    EXCELLENT_TIP,
    EXERCISE_TIP,
    MINDFUL_TIP,
    get_focus_areas,
    improvement_estimate,
    weak_categories,
)


def test_weak_categories_sorted_ascending(real_user_input: Dict[str, Any]) -> None:
    analysis = analyze_run(real_user_input)
    weak = weak_categories(analysis)
    assert [name for name, _ in weak] == ["consistency"]


@pytest.mark.parametrize(("score", "expected"), [(95, "1-2 months"), (90, "1-2 months"), (80, "2-3 months"), (50, "3-6 months")])
def test_improvement_estimate(score: float, expected: str) -> None:
    assert improvement_estimate(score) == expected


def test_focus_for_recorded_session(real_user_input: Dict[str, Any]) -> None:
    analysis = analyze_run(real_user_input)
    errors = detect_running_errors(real_user_input)
    result = get_focus_areas(errors, analysis)

    first, second = result.priorities
    assert (first.area, first.source, first.priority) == ("Movement consistency", "category", 1)
    assert first.score == analysis.category_scores.consistency
    assert (second.area, second.source, second.priority) == ("Excessive vertical oscillation", "error", 2)
    assert second.reason.startswith("Critical severity error:")
    assert result.tips[0] == EXERCISE_TIP
    assert result.tips[-1] == EXCELLENT_TIP
    assert result.estimated_improvement == "1-2 months"


def test_focus_for_clean_run_without_weak_categories(nominal_input: Dict[str, Any]) -> None:
    analysis = analyze_run(dict(nominal_input, weight_kg=70, height_cm=175))
    result = get_focus_areas([], analysis)
    assert len(result.priorities) == 1
    assert result.priorities[0].area == "Maintain current form"
    assert result.priorities[0].source == "maintenance"
    assert EXERCISE_TIP not in result.tips


def test_focus_limit_truncates(real_user_input: Dict[str, Any]) -> None:
    analysis = analyze_run(real_user_input)
    errors = detect_running_errors(real_user_input)
    result = get_focus_areas(errors, analysis, limit=1)
    assert [priority.area for priority in result.priorities] == ["Movement consistency"]


def test_mindful_tip_below_ninety(nominal_input: Dict[str, Any]) -> None:
    payload = copy.deepcopy(nominal_input)
    payload["trunk"]["trunk_angle"].update(mean=160.0, std=6.0)
    payload["right_arm"]["arm_swing"]["mean"] = 120.0
    analysis = analyze_run(payload)
    assert analysis.composite_score < 90
    result = get_focus_areas(detect_running_errors(payload), analysis)
    assert result.tips[-1] == MINDFUL_TIP
    assert any(priority.source == "error" for priority in result.priorities)


def test_focus_without_errors_ignores_weak_categories(nominal_input: Dict[str, Any]) -> None:
    payload = copy.deepcopy(nominal_input)
    for section in ("left_arm", "right_arm", "left_leg", "right_leg", "trunk", "head"):
        for stats in payload[section].values():
            stats["std"] = 0.5
    analysis = analyze_run(payload)
    errors = detect_running_errors(payload)
    assert errors == []
    assert weak_categories(analysis)

    result = get_focus_areas(errors, analysis)
    assert [priority.area for priority in result.priorities] == ["Maintain current form"]
    assert result.priorities[0].source == "maintenance"
    assert result.tips == (EXCELLENT_TIP,)
    assert result.estimated_improvement == "not required"
