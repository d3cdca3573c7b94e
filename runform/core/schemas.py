"""Validated input records for the analysis engine."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


class InputValidationError(ValueError):
    """Raised when a biomechanics payload fails validation.

    ``field`` is the dotted path of the first offending field and ``errors``
    holds every problem pydantic reported.
    """

    def __init__(self, message: str, field: str = "", errors: Optional[List[Dict[str, Any]]] = None) -> None:
        super().__init__(message)
        self.field = field
        self.errors = errors or []


class _FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False, extra="ignore")


class BiomechanicsMetric(_FrozenModel):
    """Aggregated statistics for one joint angle over a recording."""

    min: float = Field(strict=True)
    max: float = Field(strict=True)
    mean: float = Field(strict=True)
    std: float = Field(ge=0, strict=True)
    count: int = Field(gt=0, strict=True)


class ArmData(_FrozenModel):
    arm_swing: BiomechanicsMetric
    elbow_angle: BiomechanicsMetric


class LegData(_FrozenModel):
    knee_angle: BiomechanicsMetric
    ankle_angle: BiomechanicsMetric
    hip_angle: BiomechanicsMetric
    shank_angle: BiomechanicsMetric


class TrunkData(_FrozenModel):
    trunk_angle: BiomechanicsMetric


class HeadData(_FrozenModel):
    head_angle: BiomechanicsMetric


class RunBiomechanicsInput(_FrozenModel):
    """One recording's worth of joint statistics plus optional anthropometrics."""

    left_arm: ArmData
    right_arm: ArmData
    left_leg: LegData
    right_leg: LegData
    trunk: TrunkData
    head: HeadData
    weight_kg: Optional[float] = Field(default=None, gt=0, strict=True)
    height_cm: Optional[float] = Field(default=None, gt=0, strict=True)


class SimpleBiomechanicsInput(_FrozenModel):
    """Per-joint means only; missing means fall back to reference defaults."""

    left_arm_swing_mean: Optional[float] = Field(default=None, strict=True)
    right_arm_swing_mean: Optional[float] = Field(default=None, strict=True)
    left_elbow_angle_mean: Optional[float] = Field(default=None, strict=True)
    right_elbow_angle_mean: Optional[float] = Field(default=None, strict=True)
    left_knee_angle_mean: Optional[float] = Field(default=None, strict=True)
    right_knee_angle_mean: Optional[float] = Field(default=None, strict=True)
    left_ankle_angle_mean: Optional[float] = Field(default=None, strict=True)
    right_ankle_angle_mean: Optional[float] = Field(default=None, strict=True)
    trunk_angle_mean: Optional[float] = Field(default=None, strict=True)
    head_angle_mean: Optional[float] = Field(default=None, strict=True)
    knee_variability: Optional[float] = Field(default=None, ge=0, le=1, strict=True)
    trunk_stability: Optional[float] = Field(default=None, ge=0, le=1, strict=True)
    weight_kg: Optional[float] = Field(default=None, gt=0, strict=True)
    height_cm: Optional[float] = Field(default=None, gt=0, strict=True)


def _error_field(error: Mapping[str, Any]) -> str:
    return ".".join(str(part) for part in error.get("loc", ()))


def _validate(model: Type[ModelT], payload: Union[ModelT, Mapping[str, Any]], label: str) -> ModelT:
    if isinstance(payload, model):
        return payload
    if not isinstance(payload, Mapping):
        raise InputValidationError(f"{label} must be an object, got {type(payload).__name__}")
    try:
        return model.model_validate(dict(payload))
    except ValidationError as exc:
        errors = exc.errors(include_url=False)
        first = errors[0] if errors else {}
        field = _error_field(first)
        detail = first.get("msg", "invalid value")
        raise InputValidationError(
            f"Invalid {label}: {field or '<root>'}: {detail}",
            field=field,
            errors=[dict(item) for item in errors],
        ) from exc


def validate_run_input(payload: Union[RunBiomechanicsInput, Mapping[str, Any]]) -> RunBiomechanicsInput:
    """Validate a full biomechanics payload, failing on the first bad field."""
    return _validate(RunBiomechanicsInput, payload, "biomechanics input")


def validate_simple_input(payload: Union[SimpleBiomechanicsInput, Mapping[str, Any]]) -> SimpleBiomechanicsInput:
    """Validate a simplified (means-only) payload."""
    return _validate(SimpleBiomechanicsInput, payload, "simple input")
