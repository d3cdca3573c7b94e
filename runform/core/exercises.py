"""Static catalog of corrective exercises."""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from runform.core.models import Difficulty, ErrorType, Exercise

EXERCISES: Tuple[Exercise, ...] = (
    Exercise(
        id="arm_swing_mirror",
        name="Mirror arm swings",
        category="arms",
        description="Stand in front of a mirror and swing both arms from hip to chest height, matching range on each side.",
        sets=3,
        reps="30 seconds",
        frequency="4 times a week",
        difficulty=Difficulty.EASY,
        target_errors=(ErrorType.ARM_ASYMMETRY, ErrorType.INSUFFICIENT_ARM_DRIVE),
    ),
    Exercise(
        id="single_arm_dumbbell_row",
        name="Single-arm dumbbell row",
        category="arms",
        description="Row a light dumbbell one side at a time, starting and finishing with the weaker side.",
        sets=3,
        reps="10-12 per side",
        frequency="2-3 times a week",
        difficulty=Difficulty.MEDIUM,
        target_errors=(ErrorType.ARM_ASYMMETRY,),
    ),
    Exercise(
        id="seated_arm_drive",
        name="Seated arm drive",
        category="arms",
        description="Sit tall on the floor and drive the arms as in fast running, elbows bent near 90 degrees.",
        sets=3,
        reps="20 seconds",
        frequency="3 times a week",
        difficulty=Difficulty.EASY,
        target_errors=(ErrorType.INSUFFICIENT_ARM_DRIVE, ErrorType.ARM_ASYMMETRY),
    ),
    Exercise(
        id="bulgarian_split_squat",
        name="Bulgarian split squat",
        category="legs",
        description="Rear foot on a bench, lower the hips until the front thigh is parallel to the floor.",
        sets=3,
        reps="8-10 per leg",
        frequency="2 times a week",
        difficulty=Difficulty.MEDIUM,
        target_errors=(ErrorType.LEG_ASYMMETRY, ErrorType.KNEE_INSTABILITY),
    ),
    Exercise(
        id="single_leg_deadlift",
        name="Single-leg Romanian deadlift",
        category="legs",
        description="Hinge at the hip on one leg with a soft knee, keeping the pelvis level.",
        sets=3,
        reps="10 per leg",
        frequency="2-3 times a week",
        difficulty=Difficulty.MEDIUM,
        target_errors=(ErrorType.LEG_ASYMMETRY, ErrorType.KNEE_INSTABILITY),
    ),
    Exercise(
        id="single_leg_balance",
        name="Single-leg balance",
        category="legs",
        description="Balance on one foot with a slightly bent knee; progress by closing the eyes.",
        sets=3,
        reps="30-45 seconds per leg",
        frequency="daily",
        difficulty=Difficulty.EASY,
        target_errors=(ErrorType.KNEE_INSTABILITY, ErrorType.EXCESSIVE_PRONATION),
    ),
    Exercise(
        id="step_down",
        name="Controlled step-down",
        category="legs",
        description="Step down slowly from a low box, keeping the knee over the second toe.",
        sets=3,
        reps="12 per leg",
        frequency="3 times a week",
        difficulty=Difficulty.MEDIUM,
        target_errors=(ErrorType.KNEE_INSTABILITY,),
    ),
    Exercise(
        id="plank",
        name="Plank",
        category="core",
        description="Hold a straight line from head to heels on the forearms, without sagging hips.",
        sets=3,
        reps="45-60 seconds",
        frequency="4 times a week",
        difficulty=Difficulty.EASY,
        target_errors=(ErrorType.POOR_TRUNK_POSTURE,),
    ),
    Exercise(
        id="dead_bug",
        name="Dead bug",
        category="core",
        description="On the back, extend the opposite arm and leg while pressing the lower back into the floor.",
        sets=3,
        reps="10 per side",
        frequency="3-4 times a week",
        difficulty=Difficulty.EASY,
        target_errors=(ErrorType.POOR_TRUNK_POSTURE,),
    ),
    Exercise(
        id="wall_posture_drill",
        name="Wall posture drill",
        category="core",
        description="Stand with heels, hips and shoulders against a wall, then lean forward from the ankles as one unit.",
        sets=2,
        reps="10",
        frequency="before every run",
        difficulty=Difficulty.EASY,
        target_errors=(ErrorType.POOR_TRUNK_POSTURE,),
    ),
    Exercise(
        id="cadence_drill",
        name="Cadence drill with metronome",
        category="drills",
        description="Run easy with a metronome 5% above the current cadence, keeping steps short and quick.",
        sets=4,
        reps="2 minutes",
        frequency="2 times a week",
        difficulty=Difficulty.MEDIUM,
        target_errors=(ErrorType.EXCESSIVE_VERTICAL_OSCILLATION, ErrorType.OVERSTRIDING),
    ),
    Exercise(
        id="a_skip",
        name="A-skip",
        category="drills",
        description="Skip forward driving the knee up and pawing the foot down under the hips.",
        sets=3,
        reps="20 meters",
        frequency="2-3 times a week",
        difficulty=Difficulty.MEDIUM,
        target_errors=(ErrorType.EXCESSIVE_VERTICAL_OSCILLATION, ErrorType.OVERSTRIDING),
    ),
    Exercise(
        id="short_foot",
        name="Short-foot exercise",
        category="feet",
        description="Shorten the foot by lifting the arch without curling the toes.",
        sets=3,
        reps="10 holds of 5 seconds",
        frequency="daily",
        difficulty=Difficulty.EASY,
        target_errors=(ErrorType.EXCESSIVE_PRONATION,),
    ),
    Exercise(
        id="box_jump",
        name="Box jump with soft landing",
        category="plyometrics",
        description="Jump onto a box and land quietly with knees tracking over the toes.",
        sets=3,
        reps="6-8",
        frequency="1-2 times a week",
        difficulty=Difficulty.HARD,
        target_errors=(ErrorType.KNEE_INSTABILITY, ErrorType.LEG_ASYMMETRY),
    ),
)

EXERCISES_BY_ID: Dict[str, Exercise] = {exercise.id: exercise for exercise in EXERCISES}


def exercises_for_error(error_type: ErrorType) -> List[Exercise]:
    return [exercise for exercise in EXERCISES if error_type in exercise.target_errors]


def exercises_for_errors(error_types: Iterable[ErrorType], limit: int = 5) -> List[Exercise]:
    """Collect exercises for the given error types in order, without duplicates."""
    selected: List[Exercise] = []
    seen = set()
    for error_type in error_types:
        for exercise in exercises_for_error(error_type):
            if exercise.id in seen:
                continue
            seen.add(exercise.id)
            selected.append(exercise)
            if len(selected) >= limit:
                return selected
    return selected
