import os
import sys

import pytest

sys.path.append(os.path.dirname(os.path.dirname(__file__)))
from db import Database, WorkoutRepository, SetRepository
from models import Exercise, WorkoutSet
from workout_service import WorkoutService, build_workout_hierarchy


@pytest.fixture
def service(tmp_path):
    database = Database(str(tmp_path / "workouts.db"))
    yield WorkoutService(WorkoutRepository(database), SetRepository(database))
    database.close()


def test_build_hierarchy_keeps_first_seen_order():
    rows = [
        (2, "2024-02-01", "gzclp", 1, 3, "Squat", 5, 100.0),
        (2, "2024-02-01", "gzclp", 1, 4, "Overhead Press", 10, 40.0),
        (2, "2024-02-01", "gzclp", 1, 3, "Squat", 5, 105.0),
        (1, "2024-01-01", "custom", 0, 1, "Bench Press", 8, 60.0),
    ]
    workouts = build_workout_hierarchy(rows)
    assert [w.id for w in workouts] == [2, 1]
    assert [e.name for e in workouts[0].exercises] == ["Squat", "Overhead Press"]
    assert workouts[0].exercises[0].sets == [WorkoutSet(5, 100.0), WorkoutSet(5, 105.0)]
    assert workouts[0].workout_type == "gzclp"
    assert workouts[0].workout_day == 1
    assert workouts[1].exercises[0].sets == [WorkoutSet(8, 60.0)]


def test_build_hierarchy_merges_same_name_within_workout():
    rows = [
        (1, "2024-01-01", "custom", 0, 1, "Squat", 5, 100.0),
        (1, "2024-01-01", "custom", 0, 2, "Squat", 3, 120.0),
        (2, "2023-12-01", "custom", 0, 3, "Squat", 1, 130.0),
    ]
    workouts = build_workout_hierarchy(rows)
    assert len(workouts[0].exercises) == 1
    assert workouts[0].exercises[0].sets == [WorkoutSet(5, 100.0), WorkoutSet(3, 120.0)]
    assert workouts[1].exercises[0].sets == [WorkoutSet(1, 130.0)]


def test_build_hierarchy_tolerates_null_children():
    rows = [(7, "2024-01-01", None, None, None, None, None, None)]
    workouts = build_workout_hierarchy(rows)
    assert workouts[0].id == 7
    assert workouts[0].workout_type == "custom"
    assert workouts[0].exercises == []


def test_round_trip(service):
    exercises = [
        Exercise("Squat", [WorkoutSet(5, 100.0), WorkoutSet(5, 102.5)]),
        Exercise("Overhead Press", [WorkoutSet(10, 40.0)]),
        Exercise("Lat Pulldown", [WorkoutSet(15, 50.0), WorkoutSet(12, 55.0)]),
    ]
    wid = service.log_workout("2024-03-04", "gzclp", 3, exercises)
    (workout,) = service.list_workouts()
    assert workout.id == wid
    assert (workout.date, workout.workout_type, workout.workout_day) == ("2024-03-04", "gzclp", 3)
    assert [e.name for e in workout.exercises] == ["Squat", "Overhead Press", "Lat Pulldown"]
    assert [e.sets for e in workout.exercises] == [e.sets for e in exercises]


def test_exercises_without_sets_are_dropped(service):
    service.log_workout(
        "2024-01-01",
        exercises=[Exercise("Squat"), Exercise("Bench Press", [WorkoutSet(5, 60.0)])],
    )
    (workout,) = service.list_workouts()
    assert [e.name for e in workout.exercises] == ["Bench Press"]
    assert workout.workout_type == "custom"


def test_empty_workout_hidden_unless_requested(service):
    service.log_workout("2024-01-01", exercises=[Exercise("Squat", [WorkoutSet(5, 100.0)])])
    empty_id = service.log_workout("2024-02-01")
    assert [w.date for w in service.list_workouts()] == ["2024-01-01"]
    workouts = service.list_workouts(include_empty=True)
    assert [w.id for w in workouts] == [empty_id, 1]
    assert workouts[0].exercises == []


def test_list_orders_by_date_descending(service):
    for date in ["2024-01-02", "2024-01-03", "2024-01-01"]:
        service.log_workout(date, exercises=[Exercise("Squat", [WorkoutSet(5, 100.0)])])
    assert [w.date for w in service.list_workouts()] == ["2024-01-03", "2024-01-02", "2024-01-01"]


def test_log_workout_requires_date(service):
    with pytest.raises(ValueError):
        service.log_workout("")


def test_delete_reports_found(service):
    wid = service.log_workout("2024-01-01", exercises=[Exercise("Squat", [WorkoutSet(5, 100.0)])])
    assert service.delete_workout(wid) is True
    assert service.list_workouts(include_empty=True) == []
    assert service.delete_workout(wid) is False


def test_latest_sets(service):
    assert service.latest_sets("Squat") == []
    service.log_workout("2024-01-01", exercises=[Exercise("Squat", [WorkoutSet(5, 100.0)])])
    service.log_workout("2024-01-08", exercises=[Exercise("Squat", [WorkoutSet(3, 110.0), WorkoutSet(3, 112.5)])])
    assert service.latest_sets("Squat") == [WorkoutSet(3, 110.0), WorkoutSet(3, 112.5)]
