from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from db import WorkoutRepository, SetRepository
from models import CUSTOM, Exercise, Workout, WorkoutSet

logger = logging.getLogger(__name__)

Row = Tuple[int, str, str, int, Optional[int], Optional[str], Optional[int], Optional[float]]


def build_workout_hierarchy(rows: Iterable[Row]) -> List[Workout]:
    """Nest flat ``(workout, exercise, set)`` rows into workouts.

    Workouts keep the order in which their id first appears in ``rows``.
    Exercises are matched by name inside a workout, so two exercise rows
    sharing a name in one workout end up as a single exercise. Rows with a
    NULL exercise or set only contribute their workout.
    """
    workouts: Dict[int, Workout] = {}
    exercises: Dict[int, Dict[str, Exercise]] = {}
    for workout_id, date, w_type, w_day, _ex_id, ex_name, reps, weight in rows:
        workout = workouts.get(workout_id)
        if workout is None:
            workout = Workout(
                id=workout_id,
                date=date,
                workout_type=w_type or CUSTOM,
                workout_day=int(w_day or 0),
            )
            workouts[workout_id] = workout
            exercises[workout_id] = {}
        if ex_name is None:
            continue
        by_name = exercises[workout_id]
        exercise = by_name.get(ex_name)
        if exercise is None:
            exercise = Exercise(ex_name)
            by_name[ex_name] = exercise
            workout.exercises.append(exercise)
        if reps is None or weight is None:
            continue
        exercise.sets.append(WorkoutSet(int(reps), float(weight)))
    return list(workouts.values())


class WorkoutService:
    """Write and read paths for logged workouts."""

    def __init__(self, workout_repo: WorkoutRepository, set_repo: SetRepository) -> None:
        self.workouts = workout_repo
        self.sets = set_repo

    def log_workout(
        self,
        date: str,
        workout_type: str | None = None,
        workout_day: int = 0,
        exercises: Iterable[Exercise] = (),
    ) -> int:
        if not date:
            raise ValueError("date is required")
        kept = [ex for ex in exercises if ex.sets]
        workout = Workout(
            date=date,
            workout_type=workout_type or CUSTOM,
            workout_day=workout_day or 0,
            exercises=kept,
        )
        workout_id = self.workouts.create(workout)
        logger.info(
            "Saved workout %d (%s, day %d) with %d exercises",
            workout_id,
            workout.workout_type,
            workout.workout_day,
            len(kept),
        )
        return workout_id

    def save(self, workout: Workout) -> int:
        return self.log_workout(
            workout.date, workout.workout_type, workout.workout_day, workout.exercises
        )

    def list_workouts(self, include_empty: bool = False) -> List[Workout]:
        workouts = build_workout_hierarchy(self.workouts.fetch_rows())
        if include_empty:
            empty = [
                Workout(id=wid, date=date, workout_type=w_type or CUSTOM, workout_day=int(w_day or 0))
                for wid, date, w_type, w_day in self.workouts.fetch_empty()
            ]
            workouts = sorted(workouts + empty, key=lambda w: w.date, reverse=True)
        logger.info("Number of workouts: %d", len(workouts))
        return workouts

    def delete_workout(self, workout_id: int) -> bool:
        removed = self.workouts.delete(workout_id)
        if removed:
            logger.info("Deleted workout %d", workout_id)
        else:
            logger.info("Workout %d not found", workout_id)
        return bool(removed)

    def latest_sets(self, name: str) -> List[WorkoutSet]:
        return self.sets.fetch_latest_for_exercise(name)
