import math
from typing import Iterable, List, Mapping, Tuple

from models import CUSTOM, Exercise, Workout, WorkoutSet


class MathTools:
    """Provides essential mathematical utilities for workout calculations."""

    BRZYCKI_NUMERATOR: float = 36.0
    BRZYCKI_DENOMINATOR: float = 37.0

    @classmethod
    def brzycki_1rm(cls, weight: float, reps: int) -> float:
        """Return the estimated one-rep max using the Brzycki formula.

        A single rep is its own maximum. ``reps == 37`` divides by zero and
        the resulting ``ZeroDivisionError`` is left to the caller.
        """
        if reps == 1:
            return weight
        return weight * (cls.BRZYCKI_NUMERATOR / (cls.BRZYCKI_DENOMINATOR - reps))

    @staticmethod
    def set_volume(weight: float, reps: int) -> float:
        return weight * reps

    @staticmethod
    def volume(sets: Iterable[Tuple[int, float]]) -> float:
        """Sum of reps times weight over ``(reps, weight)`` pairs."""
        return sum(MathTools.set_volume(weight, reps) for reps, weight in sets)


def _parse_reps(raw) -> int:
    if isinstance(raw, bool):
        raise ValueError("Invalid reps value")
    try:
        reps = int(str(raw).strip())
    except ValueError:
        raise ValueError("Invalid reps value")
    if reps <= 0:
        raise ValueError("Invalid reps value")
    return reps


def _parse_weight(raw) -> float:
    if isinstance(raw, bool):
        raise ValueError("Invalid weight value")
    try:
        weight = float(str(raw).strip())
    except ValueError:
        raise ValueError("Invalid weight value")
    if weight < 0 or not math.isfinite(weight):
        raise ValueError("Invalid weight value")
    return weight


def _parse_day(raw) -> int:
    if raw in (None, ""):
        return 0
    try:
        return int(str(raw).strip())
    except ValueError:
        raise ValueError("Invalid workout day")


def parse_workout_form(form: Mapping[str, str]) -> Workout:
    """Build a workout from flat form fields.

    Exercises are read as ``exercise_<i>`` for i = 0, 1, ... until one is
    missing; the sets of exercise i as ``reps_<i>_<j>`` / ``weight_<i>_<j>``
    until either value of a pair is missing.
    """
    date = (form.get("date") or "").strip()
    if not date:
        raise ValueError("date is required")
    exercises: List[Exercise] = []
    i = 0
    while form.get(f"exercise_{i}"):
        exercise = Exercise(form[f"exercise_{i}"])
        j = 0
        while True:
            reps = form.get(f"reps_{i}_{j}")
            weight = form.get(f"weight_{i}_{j}")
            if reps in (None, "") or weight in (None, ""):
                break
            exercise.sets.append(WorkoutSet(_parse_reps(reps), _parse_weight(weight)))
            j += 1
        exercises.append(exercise)
        i += 1
    return Workout(
        date=date,
        workout_type=form.get("workout_type") or CUSTOM,
        workout_day=_parse_day(form.get("workout_day")),
        exercises=exercises,
    )


def parse_workout_payload(payload: Mapping) -> Workout:
    """Build a workout from a nested JSON document."""
    if any(key.startswith("exercise_") for key in payload):
        return parse_workout_form({k: "" if v is None else str(v) for k, v in payload.items()})
    date = str(payload.get("date") or "").strip()
    if not date:
        raise ValueError("date is required")
    raw_exercises = payload.get("exercises") or []
    if not isinstance(raw_exercises, list):
        raise ValueError("exercises must be a list")
    exercises: List[Exercise] = []
    for item in raw_exercises:
        if not isinstance(item, Mapping) or not item.get("name"):
            raise ValueError("every exercise needs a name")
        raw_sets = item.get("sets") or []
        if not isinstance(raw_sets, list):
            raise ValueError("sets must be a list")
        sets = []
        for raw in raw_sets:
            if not isinstance(raw, Mapping):
                raise ValueError("every set needs reps and weight")
            sets.append(WorkoutSet(_parse_reps(raw.get("reps")), _parse_weight(raw.get("weight"))))
        exercises.append(Exercise(str(item["name"]), sets))
    return Workout(
        date=date,
        workout_type=str(payload.get("workout_type") or CUSTOM),
        workout_day=_parse_day(payload.get("workout_day")),
        exercises=exercises,
    )


def parse_workout_id(raw) -> int:
    if raw in (None, ""):
        raise ValueError("Workout ID required")
    try:
        return int(str(raw).strip())
    except ValueError:
        raise ValueError("Invalid workout ID")
