import datetime

from config import load_settings
from db import Database, WorkoutRepository, SetRepository
from models import GZCLP, Exercise, WorkoutSet
from workout_service import WorkoutService


def seed(db_path: str | None = None) -> int | None:
    database = Database(db_path or load_settings()["db_path"])
    workouts = WorkoutRepository(database)
    if workouts.count():
        print("Database already contains workouts")
        database.close()
        return None

    service = WorkoutService(workouts, SetRepository(database))
    wid = service.log_workout(
        datetime.date.today().isoformat(),
        GZCLP,
        1,
        [
            Exercise("Squat", [WorkoutSet(3, 100.0)] * 5),
            Exercise("Overhead Press", [WorkoutSet(10, 40.0)] * 3),
            Exercise("Lat Pulldown", [WorkoutSet(15, 50.0)] * 3),
        ],
    )
    print("Seed data inserted")
    database.close()
    return wid


if __name__ == "__main__":
    seed()
