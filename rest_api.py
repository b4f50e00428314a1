import logging
import sqlite3
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Body

from config import APP_VERSION, load_settings
from db import (
    Database,
    WorkoutRepository,
    SetRepository,
    ExerciseLibraryRepository,
)
from models import CATEGORIES
from planner_service import PlannerService
from stats_service import StatisticsService
from tools import parse_workout_payload, parse_workout_id
from workout_service import WorkoutService

logger = logging.getLogger(__name__)


class LogbookAPI:
    """Provides REST endpoints for workout logging."""

    def __init__(self, db_path: str = "workouts.db") -> None:
        self.db_path = db_path
        self.database = Database(db_path)
        self.workouts = WorkoutRepository(self.database)
        self.sets = SetRepository(self.database)
        self.library = ExerciseLibraryRepository(self.database)
        self.workout_service = WorkoutService(self.workouts, self.sets)
        self.planner = PlannerService(self.workouts, self.library)
        self.statistics = StatisticsService(self.sets)

        @asynccontextmanager
        async def lifespan(_app: FastAPI):
            yield
            self.database.close()

        self.app = FastAPI(
            title="GZCLP Logbook API",
            description="REST API for workout logging and analytics",
            version=APP_VERSION,
            lifespan=lifespan,
        )
        self._setup_routes()

    def _setup_routes(self) -> None:
        @self.app.get(
            "/health",
            summary="Health check",
            description="Verify API and database connectivity.",
        )
        def health():
            """Return API and database connection status."""
            try:
                self.workouts.count()
                return {"status": "ok"}
            except sqlite3.Error as e:  # pragma: no cover - connectivity failure
                raise HTTPException(status_code=500, detail=str(e))

        @self.app.get("/exercises")
        def list_exercises(category: str = None):
            if category and category not in CATEGORIES:
                raise HTTPException(status_code=400, detail="unknown category")
            return [e.to_dict() for e in self.library.fetch_by_category(category)]

        @self.app.post("/workouts")
        def create_workout(payload: dict = Body(...)):
            try:
                workout = parse_workout_payload(payload)
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))
            try:
                workout_id = self.workout_service.save(workout)
            except sqlite3.Error:
                logger.exception("Error saving workout")
                raise HTTPException(status_code=500, detail="Failed to save workout")
            return {"id": workout_id}

        @self.app.get(
            "/workouts",
            summary="List workouts",
            description="Retrieve logged workouts with their exercises and sets.",
        )
        def list_workouts(include_empty: bool = False):
            try:
                workouts = self.workout_service.list_workouts(include_empty)
            except sqlite3.Error:
                logger.exception("Error loading workouts")
                raise HTTPException(status_code=500, detail="Failed to load workouts")
            return [w.to_dict() for w in workouts]

        def _delete(workout_id: int) -> dict:
            try:
                found = self.workout_service.delete_workout(workout_id)
            except sqlite3.Error:
                logger.exception("Error deleting workout %d", workout_id)
                raise HTTPException(status_code=500, detail="Database error")
            if not found:
                raise HTTPException(status_code=404, detail="Workout not found")
            return {"status": "deleted"}

        @self.app.delete("/workouts/{workout_id}")
        def delete_workout(workout_id: int):
            return _delete(workout_id)

        @self.app.post("/workout/delete")
        def delete_workout_form(payload: dict = Body(...)):
            try:
                workout_id = parse_workout_id(payload.get("id"))
            except ValueError as e:
                raise HTTPException(status_code=400, detail=str(e))
            return _delete(workout_id)

        @self.app.get("/gzclp")
        def gzclp_prefill():
            try:
                plan = self.planner.prefill()
            except sqlite3.Error:
                logger.exception("Error preparing GZCLP day")
                raise HTTPException(status_code=500, detail="Database error")
            return plan.to_dict()

        @self.app.get("/api/latest-exercise")
        def latest_exercise(name: str = None):
            if not name:
                raise HTTPException(status_code=400, detail="Exercise name required")
            try:
                sets = self.workout_service.latest_sets(name)
            except sqlite3.Error:
                logger.exception("Error loading latest sets for %s", name)
                raise HTTPException(status_code=500, detail="Database error")
            return {"sets": [s.to_dict() for s in sets]}

        @self.app.get("/api/statistics")
        def statistics(exercise: str = None):
            try:
                result = self.statistics.statistics(exercise)
            except (sqlite3.Error, ZeroDivisionError):
                logger.exception("Error computing statistics for %s", exercise)
                raise HTTPException(status_code=500, detail="Failed to compute statistics")
            return result.to_dict()


def create_app(settings_path: str = "settings.yaml") -> FastAPI:
    settings = load_settings(settings_path)
    return LogbookAPI(settings["db_path"]).app


if __name__ == "__main__":
    import uvicorn

    settings = load_settings()
    logging.basicConfig(level=settings["log_level"])
    uvicorn.run(LogbookAPI(settings["db_path"]).app, host=settings["host"], port=settings["port"])
