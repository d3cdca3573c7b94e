"""Static label tables for runform output."""

from __future__ import annotations

SUPPORTED_LANGUAGES = ("en", "ru")
DEFAULT_LANGUAGE = "en"

CATEGORY_ORDER = (
    "arm_quality",
    "leg_quality",
    "trunk_stability",
    "symmetry",
    "efficiency",
    "consistency",
)

CATEGORY_LABELS = {
    "en": {
        "arm_quality": "Arm quality",
        "leg_quality": "Leg quality",
        "trunk_stability": "Trunk stability",
        "symmetry": "Symmetry",
        "efficiency": "Efficiency",
        "consistency": "Consistency",
    },
    "ru": {
        "arm_quality": "Работа рук",
        "leg_quality": "Работа ног",
        "trunk_stability": "Стабильность туловища",
        "symmetry": "Симметрия",
        "efficiency": "Эффективность",
        "consistency": "Консистентность",
    },
}

LEVEL_LABELS = {
    "en": {
        "ELITE": "Elite",
        "ADVANCED": "Advanced",
        "INTERMEDIATE": "Intermediate",
        "BEGINNER": "Beginner",
        "NEEDS_HELP": "Needs help",
    },
    "ru": {
        "ELITE": "Элитный",
        "ADVANCED": "Продвинутый",
        "INTERMEDIATE": "Средний",
        "BEGINNER": "Начальный",
        "NEEDS_HELP": "Требуется помощь",
    },
}

SEVERITY_LABELS = {
    "en": {
        "LOW": "Low",
        "MEDIUM": "Medium",
        "HIGH": "High",
        "CRITICAL": "Critical",
    },
    "ru": {
        "LOW": "Низкая",
        "MEDIUM": "Средняя",
        "HIGH": "Высокая",
        "CRITICAL": "Критическая",
    },
}

DIFFICULTY_LABELS = {
    "en": {"EASY": "Easy", "MEDIUM": "Medium", "HARD": "Hard"},
    "ru": {"EASY": "Легко", "MEDIUM": "Средне", "HARD": "Сложно"},
}

# Headline metrics of the block report, keyed by category.
TECHNIQUE_METRIC_LABELS = {
    "en": {
        "arm_quality": "Arms",
        "leg_quality": "Legs",
        "trunk_stability": "Trunk",
        "consistency": "Stability",
    },
    "ru": {
        "arm_quality": "Руки",
        "leg_quality": "Ноги",
        "trunk_stability": "Корпус",
        "consistency": "Стабильность",
    },
}

REPORT_PRIORITY_BY_SEVERITY = {
    "CRITICAL": "high",
    "HIGH": "high",
    "MEDIUM": "medium",
    "LOW": "low",
}
