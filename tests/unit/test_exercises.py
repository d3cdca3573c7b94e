from runform.core.exercises import EXERCISES, EXERCISES_BY_ID, exercises_for_error, exercises_for_errors
from runform.core.models import ErrorType


def test_catalog_ids_are_unique() -> None:
    assert len(EXERCISES_BY_ID) == len(EXERCISES) == 14


def test_every_error_type_has_an_exercise() -> None:
    for error_type in ErrorType:
        assert exercises_for_error(error_type), error_type


def test_exercises_for_error_keeps_catalog_order() -> None:
    ids = [exercise.id for exercise in exercises_for_error(ErrorType.POOR_TRUNK_POSTURE)]
    assert ids == ["plank", "dead_bug", "wall_posture_drill"]


def test_exercises_for_errors_deduplicates_and_limits() -> None:
    selected = exercises_for_errors(
        [ErrorType.EXCESSIVE_VERTICAL_OSCILLATION, ErrorType.KNEE_INSTABILITY],
        limit=5,
    )
    assert [exercise.id for exercise in selected] == [
        "cadence_drill",
        "a_skip",
        "bulgarian_split_squat",
        "single_leg_deadlift",
        "single_leg_balance",
    ]

    shared = exercises_for_errors([ErrorType.ARM_ASYMMETRY, ErrorType.INSUFFICIENT_ARM_DRIVE], limit=10)
    assert [exercise.id for exercise in shared] == [
        "arm_swing_mirror",
        "single_arm_dumbbell_row",
        "seated_arm_drive",
    ]


def test_exercises_for_no_errors_is_empty() -> None:
    assert exercises_for_errors([]) == []
