from __future__ import annotations

import copy
import math
from typing import Any, Dict

import pytest

from runform.core.schemas import (
    InputValidationError,
    RunBiomechanicsInput,
    validate_run_input,
    validate_simple_input,
)


def test_validate_run_input_accepts_nominal(nominal_input: Dict[str, Any]) -> None:
    data = validate_run_input(nominal_input)
    assert isinstance(data, RunBiomechanicsInput)
    assert data.left_arm.arm_swing.mean == 150.0
    assert data.weight_kg is None
    assert validate_run_input(data) is data


def test_validate_run_input_ignores_unknown_keys(nominal_input: Dict[str, Any]) -> None:
    payload = copy.deepcopy(nominal_input)
    payload["session"] = "morning"
    payload["left_arm"]["arm_swing"]["unit"] = "deg"
    assert validate_run_input(payload).left_arm.arm_swing.count == 80


def test_missing_section_names_field(nominal_input: Dict[str, Any]) -> None:
    payload = copy.deepcopy(nominal_input)
    del payload["trunk"]
    with pytest.raises(InputValidationError) as exc_info:
        validate_run_input(payload)
    assert exc_info.value.field == "trunk"
    assert "trunk" in str(exc_info.value)


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("std", -1.0),
        ("count", 0),
        ("count", 12.5),
        ("count", "80"),
        ("mean", "fast"),
        ("mean", math.nan),
        ("mean", math.inf),
    ],
)
def test_bad_metric_values_are_rejected(nominal_input: Dict[str, Any], key: str, value: Any) -> None:
    payload = copy.deepcopy(nominal_input)
    payload["left_leg"]["knee_angle"][key] = value
    with pytest.raises(InputValidationError) as exc_info:
        validate_run_input(payload)
    assert exc_info.value.field == f"left_leg.knee_angle.{key}"
    assert exc_info.value.errors


@pytest.mark.parametrize("field", ["weight_kg", "height_cm"])
def test_anthropometrics_must_be_positive(nominal_input: Dict[str, Any], field: str) -> None:
    payload = dict(nominal_input, **{field: 0})
    with pytest.raises(InputValidationError) as exc_info:
        validate_run_input(payload)
    assert exc_info.value.field == field


def test_non_mapping_input_is_rejected() -> None:
    with pytest.raises(InputValidationError, match="must be an object"):
        validate_run_input(["not", "a", "mapping"])  # type: ignore[arg-type]


def test_validation_error_is_value_error(nominal_input: Dict[str, Any]) -> None:
    payload = copy.deepcopy(nominal_input)
    payload["head"] = {}
    with pytest.raises(ValueError):
        validate_run_input(payload)


def test_simple_input_all_optional() -> None:
    data = validate_simple_input({})
    assert data.left_arm_swing_mean is None
    assert data.knee_variability is None


def test_simple_input_bounds() -> None:
    with pytest.raises(InputValidationError) as exc_info:
        validate_simple_input({"knee_variability": 1.5})
    assert exc_info.value.field == "knee_variability"
    with pytest.raises(InputValidationError):
        validate_simple_input({"trunk_stability": -0.1})


@pytest.mark.parametrize(("key", "value"), [("mean", "150"), ("mean", True), ("std", "2.5"), ("min", False)])
def test_metric_numbers_are_not_coerced(nominal_input: Dict[str, Any], key: str, value: Any) -> None:
    payload = copy.deepcopy(nominal_input)
    payload["right_arm"]["elbow_angle"][key] = value
    with pytest.raises(InputValidationError) as exc_info:
        validate_run_input(payload)
    assert exc_info.value.field == f"right_arm.elbow_angle.{key}"


def test_integer_angles_are_accepted(nominal_input: Dict[str, Any]) -> None:
    payload = copy.deepcopy(nominal_input)
    payload["right_arm"]["elbow_angle"].update(min=95, max=125, mean=110, std=8)
    assert validate_run_input(payload).right_arm.elbow_angle.mean == 110.0


@pytest.mark.parametrize(("field", "value"), [("height_cm", "180"), ("knee_variability", True), ("head_angle_mean", "137")])
def test_simple_input_numbers_are_not_coerced(field: str, value: Any) -> None:
    with pytest.raises(InputValidationError) as exc_info:
        validate_simple_input({field: value})
    assert exc_info.value.field == field
