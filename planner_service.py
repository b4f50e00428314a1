from __future__ import annotations

import datetime
import logging

from db import WorkoutRepository, ExerciseLibraryRepository
from models import GZCLPDay, GZCLPPlan

logger = logging.getLogger(__name__)

CYCLE_LENGTH = 4

# Days 1 and 3 share the A triad, days 2 and 4 the B triad.
_TRIAD_A = ("Squat", "Overhead Press", "Lat Pulldown")
_TRIAD_B = ("Bench Press", "Deadlift", "Dumbbell Row")
_TRIADS = {1: _TRIAD_A, 2: _TRIAD_B, 3: _TRIAD_A, 4: _TRIAD_B}


class PlannerService:
    """Chooses the next day of the GZCLP rotation.

    The state is the ``workout_day`` of the most recently recorded
    ``gzclp`` workout. Nothing here writes to the store.
    """

    def __init__(
        self,
        workout_repo: WorkoutRepository,
        library_repo: ExerciseLibraryRepository,
    ) -> None:
        self.workouts = workout_repo
        self.library = library_repo

    def next_day(self) -> int:
        last_day = self.workouts.last_gzclp_day()
        return (last_day % CYCLE_LENGTH) + 1

    @staticmethod
    def triad_for_day(day: int) -> GZCLPDay:
        t1, t2, t3 = _TRIADS.get(day, _TRIAD_A)
        return GZCLPDay(day, t1, t2, t3)

    def prefill(self, today: datetime.date | None = None) -> GZCLPPlan:
        """Return the next GZCLP day with its triad and the catalog per tier."""
        day = self.next_day()
        logger.info("Next GZCLP day is %d", day)
        today = today or datetime.date.today()
        return GZCLPPlan(
            date=today.isoformat(),
            triad=self.triad_for_day(day),
            t1_options=self.library.fetch_by_category("T1"),
            t2_options=self.library.fetch_by_category("T2"),
            t3_options=self.library.fetch_by_category("T3"),
        )
