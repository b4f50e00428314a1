from __future__ import annotations

from dataclasses import dataclass, field, asdict
from typing import List, Optional

GZCLP = "gzclp"
CUSTOM = "custom"
CATEGORIES = ("T1", "T2", "T3")


@dataclass
class WorkoutSet:
    reps: int
    weight: float

    def to_dict(self) -> dict:
        return {"reps": self.reps, "weight": self.weight}


@dataclass
class Exercise:
    name: str
    sets: List[WorkoutSet] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {"name": self.name, "sets": [s.to_dict() for s in self.sets]}


@dataclass
class Workout:
    """A logged training session with its exercises in first-seen order."""

    date: str
    workout_type: str = CUSTOM
    workout_day: int = 0
    exercises: List[Exercise] = field(default_factory=list)
    id: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date,
            "workout_type": self.workout_type,
            "workout_day": self.workout_day,
            "exercises": [e.to_dict() for e in self.exercises],
        }


@dataclass
class CatalogEntry:
    id: int
    name: str
    category: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class GZCLPDay:
    day: int
    t1: str
    t2: str
    t3: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class GZCLPPlan:
    date: str
    triad: GZCLPDay
    t1_options: List[CatalogEntry] = field(default_factory=list)
    t2_options: List[CatalogEntry] = field(default_factory=list)
    t3_options: List[CatalogEntry] = field(default_factory=list)

    @property
    def day(self) -> int:
        return self.triad.day

    def to_dict(self) -> dict:
        return {
            "date": self.date,
            "workout_day": self.triad.day,
            "t1_exercise": self.triad.t1,
            "t2_exercise": self.triad.t2,
            "t3_exercise": self.triad.t3,
            "t1_exercises": [e.to_dict() for e in self.t1_options],
            "t2_exercises": [e.to_dict() for e in self.t2_options],
            "t3_exercises": [e.to_dict() for e in self.t3_options],
        }


@dataclass
class StatisticsPoint:
    date: str
    estimated_1rm: float
    total_volume: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ExerciseListResult:
    """Statistics answer when no exercise was requested."""

    exercises: List[str] = field(default_factory=list)
    kind: str = "exercise_list"

    def to_dict(self) -> dict:
        return {"exercises": list(self.exercises), "data": []}


@dataclass
class DateSeriesResult:
    """Per-date trend points for a single exercise."""

    exercise: str
    data: List[StatisticsPoint] = field(default_factory=list)
    kind: str = "date_series"

    def to_dict(self) -> dict:
        return {"exercises": [], "data": [p.to_dict() for p in self.data]}
