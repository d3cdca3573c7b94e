"""Body-mass and stature helpers."""

from __future__ import annotations

import math

from runform.core.norms import (
    BASE_CADENCE,
    BMI_HEAVY_PENALTIES,
    BMI_LIGHT_LIMIT,
    BMI_LIGHT_PENALTY,
    BMI_OBESE_PENALTY,
    BMI_OPTIMAL_BONUS,
    BMI_OPTIMAL_RANGE,
    BMI_UNDERWEIGHT_PENALTY,
    CADENCE_SHORT_REFERENCE_CM,
    CADENCE_TALL_REFERENCE_CM,
    MEDIUM_TALL_RUNNER_CM,
    MEDIUM_TALL_RUNNER_CREDIT,
    SHORT_RUNNER_CM,
    SHORT_RUNNER_DEBIT,
    TALL_RUNNER_CM,
    TALL_RUNNER_CREDIT,
    WEIGHT_CATEGORY_LIMITS,
    WEIGHT_CATEGORY_MAX,
)
from runform.utils.numeric import clamp


def calculate_bmi(weight_kg: float, height_cm: float) -> float:
    """Body-mass index (kg/m^2), unrounded."""
    if weight_kg <= 0 or height_cm <= 0:
        raise ValueError("weight_kg and height_cm must be positive")
    height_m = height_cm / 100.0
    return weight_kg / (height_m * height_m)


def weight_category(bmi: float) -> str:
    for upper, label in WEIGHT_CATEGORY_LIMITS:
        if bmi < upper:
            return label
    return WEIGHT_CATEGORY_MAX


def bmi_adjustment(bmi: float) -> float:
    """Points added to movement economy for a given BMI."""
    lower, upper = BMI_OPTIMAL_RANGE
    if lower <= bmi <= upper:
        return BMI_OPTIMAL_BONUS
    if BMI_LIGHT_LIMIT <= bmi < lower:
        return BMI_LIGHT_PENALTY
    if bmi < BMI_LIGHT_LIMIT:
        return BMI_UNDERWEIGHT_PENALTY
    for heavy_upper, adjustment in BMI_HEAVY_PENALTIES:
        if bmi <= heavy_upper:
            return adjustment
    return BMI_OBESE_PENALTY


def adjust_efficiency_for_bmi(score: float, bmi: float) -> float:
    return clamp(score + bmi_adjustment(bmi), 0.0, 100.0)


def height_adjustment(height_cm: float) -> float:
    """Tall runners are allowed more vertical motion, short ones less."""
    if height_cm >= TALL_RUNNER_CM:
        return TALL_RUNNER_CREDIT
    if height_cm >= MEDIUM_TALL_RUNNER_CM:
        return MEDIUM_TALL_RUNNER_CREDIT
    if height_cm < SHORT_RUNNER_CM:
        return SHORT_RUNNER_DEBIT
    return 0.0


def adjust_vertical_for_height(score: float, height_cm: float) -> float:
    return clamp(score + height_adjustment(height_cm), 0.0, 100.0)


def recommended_cadence(height_cm: float) -> int:
    """Target cadence in steps/min: 180, +/-2 per full 5 cm outside 170-180 cm."""
    if height_cm < CADENCE_SHORT_REFERENCE_CM:
        steps = math.floor((CADENCE_SHORT_REFERENCE_CM - height_cm) / 5)
        return BASE_CADENCE + steps * 2
    if height_cm > CADENCE_TALL_REFERENCE_CM:
        steps = math.floor((height_cm - CADENCE_TALL_REFERENCE_CM) / 5)
        return BASE_CADENCE - steps * 2
    return BASE_CADENCE
