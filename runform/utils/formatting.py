"""Formatting helpers used by exports and console output."""

from __future__ import annotations

from typing import Dict, Optional

from runform.core.constants import (
    CATEGORY_LABELS,
    DEFAULT_LANGUAGE,
    DIFFICULTY_LABELS,
    LEVEL_LABELS,
    SEVERITY_LABELS,
)


def _lookup(table: Dict[str, Dict[str, str]], key: str, language: str) -> str:
    labels = table.get(language) or table[DEFAULT_LANGUAGE]
    return labels.get(key, key)


def category_label(name: str, language: str = DEFAULT_LANGUAGE) -> str:
    return _lookup(CATEGORY_LABELS, name, language)


def level_label(level: str, language: str = DEFAULT_LANGUAGE) -> str:
    return _lookup(LEVEL_LABELS, level, language)


def severity_label(severity: str, language: str = DEFAULT_LANGUAGE) -> str:
    return _lookup(SEVERITY_LABELS, severity, language)


def difficulty_label(difficulty: str, language: str = DEFAULT_LANGUAGE) -> str:
    return _lookup(DIFFICULTY_LABELS, difficulty, language)


def format_score(score: Optional[float]) -> str:
    """Format a 0-100 score as '87.5/100'."""
    if score is None:
        return "N/A"
    return f"{float(score):.1f}/100"


def score_style(score: float) -> str:
    """Rich style name for a score band."""
    if score >= 85:
        return "green"
    if score >= 70:
        return "cyan"
    if score >= 55:
        return "yellow"
    return "red"


def severity_style(severity: str) -> str:
    return {
        "CRITICAL": "bold red",
        "HIGH": "red",
        "MEDIUM": "yellow",
        "LOW": "cyan",
    }.get(severity, "")


def format_percent(value: float) -> str:
    return f"{value:+.1f}%"
