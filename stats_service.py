from __future__ import annotations
from typing import Dict, List, Optional, Tuple

from db import SetRepository
from models import DateSeriesResult, ExerciseListResult, StatisticsPoint
from tools import MathTools


class StatisticsService:
    """Compute per-date trend statistics from logged sets."""

    def __init__(self, set_repo: SetRepository) -> None:
        self.sets = set_repo

    def exercise_names(self) -> List[str]:
        """Return every exercise name that appears in a logged workout."""
        return self.sets.fetch_exercise_names()

    def exercise_trend(self, exercise: str) -> List[StatisticsPoint]:
        """Best estimated 1RM and total volume per workout date, oldest first."""
        by_date: Dict[str, List[Tuple[int, float]]] = {}
        for date, reps, weight in self.sets.fetch_history(exercise):
            by_date.setdefault(date, []).append((int(reps), float(weight)))
        points = [
            StatisticsPoint(
                date,
                max(MathTools.brzycki_1rm(weight, reps) for reps, weight in sets),
                MathTools.volume(sets),
            )
            for date, sets in by_date.items()
        ]
        return sorted(points, key=lambda p: p.date)

    def statistics(
        self, exercise: Optional[str] = None
    ) -> ExerciseListResult | DateSeriesResult:
        if not exercise:
            return ExerciseListResult(self.exercise_names())
        return DateSeriesResult(exercise, self.exercise_trend(exercise))
