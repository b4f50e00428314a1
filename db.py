import logging
import sqlite3
from contextlib import contextmanager
from typing import List, Tuple, Optional

from models import (
    CUSTOM,
    GZCLP,
    CatalogEntry,
    Workout,
    WorkoutSet,
)

logger = logging.getLogger(__name__)


DEFAULT_EXERCISES: List[Tuple[str, str]] = [
    # T1 - main compounds
    ("Squat", "T1"),
    ("Bench Press", "T1"),
    ("Deadlift", "T1"),
    ("Overhead Press", "T1"),
    # T2 - secondary movements
    ("Front Squat", "T2"),
    ("Incline Bench Press", "T2"),
    ("Sumo Deadlift", "T2"),
    ("Close Grip Bench Press", "T2"),
    ("Romanian Deadlift", "T2"),
    ("Paused Bench Press", "T2"),
    # T3 - accessories
    ("Lat Pulldown", "T3"),
    ("Dumbbell Row", "T3"),
    ("Leg Curl", "T3"),
    ("Leg Extension", "T3"),
    ("Tricep Pushdown", "T3"),
    ("Bicep Curl", "T3"),
    ("Calf Raise", "T3"),
    ("Face Pull", "T3"),
    ("Lateral Raise", "T3"),
    ("Chest Fly", "T3"),
]


class Database:
    """Owns the SQLite store: schema creation, seeding and connections."""

    _TABLE_DEFINITIONS = {
        "workouts": (
            """CREATE TABLE IF NOT EXISTS workouts (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    date TEXT NOT NULL,
                    workout_type TEXT DEFAULT 'custom',
                    workout_day INTEGER DEFAULT 0
                );""",
            {
                "workout_type": "TEXT DEFAULT 'custom'",
                "workout_day": "INTEGER DEFAULT 0",
            },
        ),
        "exercise_library": (
            """CREATE TABLE IF NOT EXISTS exercise_library (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL UNIQUE,
                    category TEXT NOT NULL
                );""",
            {},
        ),
        "exercises": (
            """CREATE TABLE IF NOT EXISTS exercises (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    workout_id INTEGER NOT NULL,
                    name TEXT NOT NULL,
                    FOREIGN KEY(workout_id) REFERENCES workouts(id)
                );""",
            {},
        ),
        "sets": (
            """CREATE TABLE IF NOT EXISTS sets (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    exercise_id INTEGER NOT NULL,
                    reps INTEGER NOT NULL,
                    weight REAL NOT NULL,
                    FOREIGN KEY(exercise_id) REFERENCES exercises(id)
                );""",
            {},
        ),
    }

    def __init__(self, db_path: str = "workouts.db") -> None:
        self._db_path = db_path
        self._closed = False
        self._ensure_schema()
        self._import_exercise_library()
        logger.info("Opened workout store at %s", db_path)

    @property
    def db_path(self) -> str:
        return self._db_path

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        """Mark the store closed; later units of work raise ``RuntimeError``."""
        if not self._closed:
            self._closed = True
            logger.info("Closed workout store at %s", self._db_path)

    @contextmanager
    def connection(self):
        """Yield a connection whose work is committed as one transaction.

        Any exception rolls the transaction back and is re-raised.
        """
        if self._closed:
            raise RuntimeError("database is closed")
        conn = sqlite3.connect(self._db_path)
        conn.execute("PRAGMA foreign_keys = ON;")
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _ensure_schema(self) -> None:
        with self.connection() as conn:
            for table, (sql, added_columns) in self._TABLE_DEFINITIONS.items():
                self._ensure_table(conn, table, sql, added_columns)

    def _ensure_table(
        self, conn: sqlite3.Connection, table: str, sql: str, added_columns: dict
    ) -> None:
        conn.execute(sql)
        if not added_columns:
            return
        cur = conn.execute(f"PRAGMA table_info({table});")
        existing = {row[1] for row in cur.fetchall()}
        for column, decl in added_columns.items():
            if column not in existing:
                conn.execute(f"ALTER TABLE {table} ADD COLUMN {column} {decl};")
                logger.info("Added column %s.%s", table, column)

    def _import_exercise_library(self) -> None:
        with self.connection() as conn:
            conn.executemany(
                "INSERT OR IGNORE INTO exercise_library (name, category) VALUES (?, ?);",
                DEFAULT_EXERCISES,
            )


class BaseRepository:
    """Base repository providing helper methods."""

    def __init__(self, database: Database) -> None:
        self.db = database

    def execute(self, query: str, params: Tuple = ()) -> int:
        with self.db.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return cursor.lastrowid

    def fetch_all(self, query: str, params: Tuple = ()) -> List[Tuple]:
        with self.db.connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return cursor.fetchall()


class WorkoutRepository(BaseRepository):
    """Repository for the workout -> exercise -> set hierarchy."""

    def create(self, workout: Workout) -> int:
        """Insert ``workout`` with all exercises and sets in one transaction."""
        workout_type = workout.workout_type or CUSTOM
        workout_day = workout.workout_day or 0
        with self.db.connection() as conn:
            cur = conn.execute(
                "INSERT INTO workouts (date, workout_type, workout_day) VALUES (?, ?, ?);",
                (workout.date, workout_type, workout_day),
            )
            workout_id = cur.lastrowid
            for exercise in workout.exercises:
                cur = conn.execute(
                    "INSERT INTO exercises (workout_id, name) VALUES (?, ?);",
                    (workout_id, exercise.name),
                )
                exercise_id = cur.lastrowid
                conn.executemany(
                    "INSERT INTO sets (exercise_id, reps, weight) VALUES (?, ?, ?);",
                    [(exercise_id, s.reps, s.weight) for s in exercise.sets],
                )
        return workout_id

    def delete(self, workout_id: int) -> int:
        """Delete a workout and its descendants; return workout rows removed."""
        with self.db.connection() as conn:
            conn.execute(
                """DELETE FROM sets
                    WHERE exercise_id IN (
                        SELECT id FROM exercises WHERE workout_id = ?
                    );""",
                (workout_id,),
            )
            conn.execute("DELETE FROM exercises WHERE workout_id = ?;", (workout_id,))
            cur = conn.execute("DELETE FROM workouts WHERE id = ?;", (workout_id,))
            return cur.rowcount

    def fetch_rows(
        self,
    ) -> List[Tuple[int, str, str, int, int, str, int, float]]:
        """Return one row per stored set with its workout and exercise columns.

        Workouts without any set produce no rows.
        """
        return self.fetch_all(
            """SELECT w.id, w.date, w.workout_type, w.workout_day,
                      e.id, e.name, s.reps, s.weight
                 FROM workouts w
                 JOIN exercises e ON e.workout_id = w.id
                 JOIN sets s ON s.exercise_id = e.id
                ORDER BY w.date DESC, e.id, s.id;"""
        )

    def fetch_empty(self) -> List[Tuple[int, str, str, int]]:
        """Return workouts that have no set rows, newest date first."""
        return self.fetch_all(
            """SELECT w.id, w.date, w.workout_type, w.workout_day
                 FROM workouts w
                WHERE NOT EXISTS (
                    SELECT 1 FROM exercises e
                      JOIN sets s ON s.exercise_id = e.id
                     WHERE e.workout_id = w.id
                )
                ORDER BY w.date DESC, w.id;"""
        )

    def count(self) -> int:
        return self.fetch_all("SELECT COUNT(*) FROM workouts;")[0][0]

    def last_gzclp_day(self) -> int:
        """Return the day of the most recently recorded gzclp workout, or 0.

        The latest row by id is used rather than the largest day, so the
        rotation wraps from day 4 back to day 1.
        """
        rows = self.fetch_all(
            "SELECT workout_day FROM workouts WHERE workout_type = ? ORDER BY id DESC LIMIT 1;",
            (GZCLP,),
        )
        return int(rows[0][0] or 0) if rows else 0


class SetRepository(BaseRepository):
    """Read access to logged sets for lookups and statistics."""

    def fetch_latest_for_exercise(self, name: str) -> List[WorkoutSet]:
        rows = self.fetch_all(
            """SELECT s.reps, s.weight
                 FROM sets s
                 JOIN exercises e ON s.exercise_id = e.id
                 JOIN workouts w ON e.workout_id = w.id
                WHERE e.name = ? AND w.id = (
                    SELECT w2.id
                      FROM workouts w2
                      JOIN exercises e2 ON w2.id = e2.workout_id
                     WHERE e2.name = ?
                     ORDER BY w2.date DESC, w2.id DESC
                     LIMIT 1
                )
                ORDER BY s.id;""",
            (name, name),
        )
        return [WorkoutSet(int(reps), float(weight)) for reps, weight in rows]

    def fetch_history(self, name: str) -> List[Tuple[str, int, float]]:
        """Return ``(date, reps, weight)`` for every set of ``name``."""
        return self.fetch_all(
            """SELECT w.date, s.reps, s.weight
                 FROM sets s
                 JOIN exercises e ON s.exercise_id = e.id
                 JOIN workouts w ON e.workout_id = w.id
                WHERE e.name = ?
                ORDER BY w.date, s.id;""",
            (name,),
        )

    def fetch_exercise_names(self) -> List[str]:
        rows = self.fetch_all(
            """SELECT DISTINCT e.name
                 FROM exercises e
                 JOIN workouts w ON e.workout_id = w.id
                ORDER BY e.name;"""
        )
        return [name for (name,) in rows]


class ExerciseLibraryRepository(BaseRepository):
    """Repository for the seeded T1/T2/T3 exercise catalog."""

    def fetch_by_category(self, category: Optional[str] = None) -> List[CatalogEntry]:
        query = "SELECT id, name, category FROM exercise_library"
        params: tuple = ()
        if category:
            query += " WHERE category = ?"
            params = (category,)
        query += " ORDER BY name;"
        return [
            CatalogEntry(int(eid), name, cat)
            for eid, name, cat in self.fetch_all(query, params)
        ]
