import os
import sys

import pytest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from db import Database, WorkoutRepository, SetRepository
from models import DateSeriesResult, Exercise, ExerciseListResult, WorkoutSet
from stats_service import StatisticsService
from workout_service import WorkoutService


@pytest.fixture
def repos(tmp_path):
    database = Database(str(tmp_path / "stats.db"))
    sets = SetRepository(database)
    service = WorkoutService(WorkoutRepository(database), sets)
    yield service, StatisticsService(sets)
    database.close()


def test_trend_groups_by_date(repos):
    service, stats = repos
    service.log_workout("2024-01-08", exercises=[Exercise("Squat", [WorkoutSet(2, 120.0)])])
    service.log_workout(
        "2024-01-01",
        exercises=[
            Exercise("Squat", [WorkoutSet(5, 100.0), WorkoutSet(3, 110.0)]),
            Exercise("Bench Press", [WorkoutSet(5, 80.0)]),
        ],
    )
    points = stats.exercise_trend("Squat")
    assert [p.date for p in points] == ["2024-01-01", "2024-01-08"]
    assert points[0].estimated_1rm == pytest.approx(110 * 36 / 34)
    assert points[0].total_volume == pytest.approx(830.0)
    assert points[1].estimated_1rm == pytest.approx(120 * 36 / 35)
    assert points[1].total_volume == pytest.approx(240.0)


def test_two_workouts_same_date_merge(repos):
    service, stats = repos
    service.log_workout("2024-01-01", exercises=[Exercise("Squat", [WorkoutSet(1, 140.0)])])
    service.log_workout("2024-01-01", exercises=[Exercise("Squat", [WorkoutSet(5, 100.0)])])
    (point,) = stats.exercise_trend("Squat")
    assert point.estimated_1rm == pytest.approx(140.0)
    assert point.total_volume == pytest.approx(640.0)


def test_statistics_without_name_lists_exercises(repos):
    service, stats = repos
    service.log_workout(
        "2024-01-01",
        exercises=[
            Exercise("Squat", [WorkoutSet(5, 100.0)]),
            Exercise("Bench Press", [WorkoutSet(5, 80.0)]),
        ],
    )
    service.log_workout("2024-01-02", exercises=[Exercise("Squat", [WorkoutSet(5, 100.0)])])
    for name in (None, ""):
        result = stats.statistics(name)
        assert isinstance(result, ExerciseListResult)
        assert result.exercises == ["Bench Press", "Squat"]
        assert result.to_dict() == {"exercises": ["Bench Press", "Squat"], "data": []}


def test_statistics_with_name_returns_series(repos):
    service, stats = repos
    service.log_workout("2024-01-01", exercises=[Exercise("Squat", [WorkoutSet(5, 100.0)])])
    result = stats.statistics("Squat")
    assert isinstance(result, DateSeriesResult)
    assert result.kind == "date_series"
    assert result.to_dict() == {
        "exercises": [],
        "data": [{"date": "2024-01-01", "estimated_1rm": 112.5, "total_volume": 500.0}],
    }


def test_unknown_exercise_has_no_points(repos):
    _service, stats = repos
    assert stats.exercise_trend("Squat") == []


def test_degenerate_reps_propagate(repos):
    service, stats = repos
    service.log_workout("2024-01-01", exercises=[Exercise("Squat", [WorkoutSet(37, 20.0)])])
    with pytest.raises(ZeroDivisionError):
        stats.exercise_trend("Squat")
