"""Numeric primitives used by the scorers and the error detector."""

from __future__ import annotations

import math
from typing import Sequence, Tuple

from runform.core.models import Severity

BAND_LABELS = ("excellent", "good", "acceptable", "poor", "very_poor")


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value into [lower, upper]."""
    return max(lower, min(upper, value))


def round_to(value: float, decimals: int = 2) -> float:
    """Round half-up to the given number of decimals."""
    multiplier = 10**decimals
    return math.floor(value * multiplier + 0.5) / multiplier


def gaussian_proximity(value: float, optimal: float, sigma: float) -> float:
    """Score 0-100 for how close value is to optimal on a bell curve of width sigma."""
    if sigma <= 0:
        raise ValueError(f"sigma must be positive, got {sigma}")
    z = (value - optimal) / sigma
    return clamp(100.0 * math.exp(-0.5 * z * z), 0.0, 100.0)


def coefficient_of_variation(std: float, mean: float) -> float:
    """Coefficient of variation in percent; zero-mean metrics report 0."""
    if mean == 0:
        return 0.0
    return std / abs(mean) * 100.0


def asymmetry_index(left: float, right: float) -> float:
    """Relative left/right difference in percent of their average, capped at 100."""
    average = abs(left + right) / 2.0
    if average == 0:
        return 0.0
    return min(100.0, abs(left - right) / average * 100.0)


def asymmetry_penalty(index: float, max_penalty: float = 20.0) -> float:
    """Convex penalty: max_penalty * (index / 100) ** 1.5."""
    normalized = max(0.0, index) / 100.0
    return max_penalty * normalized**1.5


def consistency_proximity(cv: float, optimal_cv: float = 8.0, sigma: float = 5.0) -> float:
    """Gaussian proximity of a CV to a target CV."""
    return gaussian_proximity(cv, optimal_cv, sigma)


def severity_bucket(value: float, thresholds: Tuple[float, float, float]) -> Severity:
    """Map value onto LOW/MEDIUM/HIGH/CRITICAL using three ascending cutoffs."""
    first, second, third = thresholds
    if value < first:
        return Severity.LOW
    if value < second:
        return Severity.MEDIUM
    if value < third:
        return Severity.HIGH
    return Severity.CRITICAL


def weighted_sum(scores: Sequence[float], weights: Sequence[float]) -> float:
    """Weighted sum of 0-100 scores, clamped to [0, 100]."""
    if len(scores) != len(weights):
        raise ValueError(
            f"scores and weights must have the same length ({len(scores)} != {len(weights)})"
        )
    total = sum(score * weight for score, weight in zip(scores, weights))
    return clamp(total, 0.0, 100.0)


def rate_band(value: float, bands: Tuple[float, float, float, float]) -> str:
    """Name the quality band a CV or asymmetry value falls into."""
    for label, upper in zip(BAND_LABELS, bands):
        if value < upper:
            return label
    return BAND_LABELS[-1]
