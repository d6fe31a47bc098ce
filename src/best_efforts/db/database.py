"""SQLite store for workouts and lap splits."""

import logging
import sqlite3
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Union

from ..config import get_settings
from ..exceptions import DatabaseError
from ..models.efforts import Workout, WorkoutLap, WorkoutWithLaps
from .schema import SCHEMA

logger = logging.getLogger(__name__)


def get_default_db_path() -> Path:
    """Get the default database path from settings."""
    return Path(get_settings().db_path)


class BestEffortsDatabase:
    """SQLite database of workouts and their laps."""

    def __init__(self, db_path: Optional[Union[str, Path]] = None):
        """
        Initialize the workout store.

        Args:
            db_path: Path to SQLite database file. If not provided, uses
                     BEST_EFFORTS_DB_PATH or the default location.
        """
        self.db_path = Path(db_path) if db_path else get_default_db_path()
        self._init_db()

    def _init_db(self) -> None:
        """Initialize database schema."""
        with self._get_connection() as conn:
            conn.executescript(SCHEMA)

    @contextmanager
    def _get_connection(self):
        """Get database connection with context manager."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            logger.error(f"Database error on {self.db_path}: {e}")
            raise DatabaseError(str(e)) from e
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    # === Workout Methods ===

    def _upsert_workout(self, conn: sqlite3.Connection, workout: Workout, user_id: str) -> None:
        conn.execute(
            """
            INSERT INTO workouts (id, user_id, date, name, distance_meters)
            VALUES (?, ?, ?, ?, ?)
            ON CONFLICT(user_id, id) DO UPDATE SET
                date = excluded.date,
                name = excluded.name,
                distance_meters = excluded.distance_meters
            """,
            (
                str(workout.id),
                user_id,
                workout.date.isoformat(),
                workout.name,
                workout.distance_meters,
            ),
        )

    def _replace_laps(
        self,
        conn: sqlite3.Connection,
        workout_id: Union[int, str],
        laps: Iterable[WorkoutLap],
        user_id: str,
    ) -> int:
        rows = [
            (str(workout_id), user_id, lap.lap_index, lap.distance_meters, lap.elapsed_time_seconds)
            for lap in laps
        ]
        conn.execute(
            "DELETE FROM workout_laps WHERE workout_id = ? AND user_id = ?",
            (str(workout_id), user_id),
        )
        conn.executemany(
            """
            INSERT INTO workout_laps
            (workout_id, user_id, lap_index, distance_meters, elapsed_time_seconds)
            VALUES (?, ?, ?, ?, ?)
            """,
            rows,
        )
        return len(rows)

    def save_workout(self, workout: Workout, user_id: str = "default") -> None:
        """Save or update a workout."""
        with self._get_connection() as conn:
            self._upsert_workout(conn, workout, user_id)

    def save_laps(
        self,
        workout_id: Union[int, str],
        laps: Iterable[WorkoutLap],
        user_id: str = "default",
    ) -> int:
        """Replace all laps of a workout. Returns the number of laps written."""
        with self._get_connection() as conn:
            return self._replace_laps(conn, workout_id, laps, user_id)

    def save_workout_with_laps(self, entry: WorkoutWithLaps, user_id: str = "default") -> None:
        """Save a workout and replace its laps in one transaction."""
        with self._get_connection() as conn:
            self._upsert_workout(conn, entry.workout, user_id)
            self._replace_laps(conn, entry.workout.id, entry.laps, user_id)

    def get_workout(self, workout_id: Union[int, str], user_id: str = "default") -> Optional[Workout]:
        """Get a workout by ID."""
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM workouts WHERE id = ? AND user_id = ?",
                (str(workout_id), user_id),
            ).fetchone()

        return self._row_to_workout(row) if row else None

    def get_workouts_since(self, start_date: date, user_id: str = "default") -> List[Workout]:
        """Get workouts on or after a date, newest first."""
        with self._get_connection() as conn:
            rows = conn.execute(
                """
                SELECT * FROM workouts
                WHERE user_id = ? AND date >= ?
                ORDER BY date DESC, id
                """,
                (user_id, start_date.isoformat()),
            ).fetchall()

        return [self._row_to_workout(row) for row in rows]

    # === Lap Methods ===

    def get_laps(self, workout_id: Union[int, str], user_id: str = "default") -> List[WorkoutLap]:
        """Get a workout's laps ordered by lap index."""
        with self._get_connection() as conn:
            rows = conn.execute(
                """
                SELECT lap_index, distance_meters, elapsed_time_seconds
                FROM workout_laps
                WHERE workout_id = ? AND user_id = ?
                ORDER BY lap_index
                """,
                (str(workout_id), user_id),
            ).fetchall()

        return [self._row_to_lap(row) for row in rows]

    def get_laps_for_workouts(
        self,
        workout_ids: Sequence[Union[int, str]],
        user_id: str = "default",
    ) -> Dict[str, List[WorkoutLap]]:
        """Get laps for many workouts in one query, grouped by workout ID."""
        grouped: Dict[str, List[WorkoutLap]] = {str(wid): [] for wid in workout_ids}
        if not grouped:
            return grouped

        placeholders = ",".join("?" for _ in grouped)
        with self._get_connection() as conn:
            rows = conn.execute(
                f"""
                SELECT workout_id, lap_index, distance_meters, elapsed_time_seconds
                FROM workout_laps
                WHERE user_id = ? AND workout_id IN ({placeholders})
                ORDER BY workout_id, lap_index
                """,
                (user_id, *grouped.keys()),
            ).fetchall()

        for row in rows:
            grouped[row["workout_id"]].append(self._row_to_lap(row))
        return grouped

    def count_workouts(self, user_id: str = "default") -> int:
        """Count stored workouts for a user."""
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT COUNT(*) AS count FROM workouts WHERE user_id = ?",
                (user_id,),
            ).fetchone()
        return row["count"]

    def _row_to_workout(self, row: sqlite3.Row) -> Workout:
        """Convert a database row to a Workout."""
        return Workout(
            id=row["id"],
            date=date.fromisoformat(row["date"]),
            name=row["name"],
            distance_meters=row["distance_meters"],
        )

    def _row_to_lap(self, row: sqlite3.Row) -> WorkoutLap:
        """Convert a database row to a WorkoutLap."""
        return WorkoutLap(
            lap_index=row["lap_index"],
            distance_meters=row["distance_meters"],
            elapsed_time_seconds=row["elapsed_time_seconds"],
        )
