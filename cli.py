import argparse
import json
import logging
import shutil

from config import load_settings
from db import Database, WorkoutRepository, SetRepository, ExerciseLibraryRepository
from planner_service import PlannerService
from stats_service import StatisticsService
from workout_service import WorkoutService

logger = logging.getLogger(__name__)


def init_db(db_path: str) -> None:
    database = Database(db_path)
    entries = ExerciseLibraryRepository(database).fetch_by_category()
    print(f"Exercise library contains {len(entries)} exercises")
    database.close()


def next_day(db_path: str) -> None:
    database = Database(db_path)
    planner = PlannerService(WorkoutRepository(database), ExerciseLibraryRepository(database))
    triad = planner.triad_for_day(planner.next_day())
    print(f"Day {triad.day}: T1 {triad.t1}, T2 {triad.t2}, T3 {triad.t3}")
    database.close()


def print_stats(db_path: str, exercise: str | None) -> None:
    database = Database(db_path)
    stats = StatisticsService(SetRepository(database))
    print(json.dumps(stats.statistics(exercise).to_dict(), indent=2))
    database.close()


def export_workouts(db_path: str, output_path: str) -> None:
    database = Database(db_path)
    service = WorkoutService(WorkoutRepository(database), SetRepository(database))
    workouts = service.list_workouts(include_empty=True)
    with open(output_path, "w", encoding="utf-8") as f:
        json.dump([w.to_dict() for w in workouts], f, indent=2)
    database.close()
    logger.info("Exported %d workouts to %s", len(workouts), output_path)


def backup_db(db_path: str, backup_path: str) -> None:
    shutil.copy(db_path, backup_path)


def serve(settings: dict) -> None:
    import uvicorn
    from rest_api import LogbookAPI

    api = LogbookAPI(settings["db_path"])
    uvicorn.run(api.app, host=settings["host"], port=settings["port"])


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="GZCLP logbook utilities")
    parser.add_argument("--settings", default="settings.yaml")
    parser.add_argument("--db", help="override the configured database path")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sub.add_parser("init")
    sub.add_parser("serve")
    sub.add_parser("next-day")

    stats = sub.add_parser("stats")
    stats.add_argument("exercise", nargs="?")

    exp = sub.add_parser("export")
    exp.add_argument("output")

    backup = sub.add_parser("backup")
    backup.add_argument("dest")

    args = parser.parse_args(argv)
    settings = load_settings(args.settings)
    if args.db:
        settings["db_path"] = args.db
    logging.basicConfig(
        level=settings["log_level"],
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.cmd == "init":
        init_db(settings["db_path"])
    elif args.cmd == "serve":
        serve(settings)
    elif args.cmd == "next-day":
        next_day(settings["db_path"])
    elif args.cmd == "stats":
        print_stats(settings["db_path"], args.exercise)
    elif args.cmd == "export":
        export_workouts(settings["db_path"], args.output)
    elif args.cmd == "backup":
        backup_db(settings["db_path"], args.dest)


if __name__ == "__main__":
    main()
