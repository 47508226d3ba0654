"""Read-only SQLite record store for logged fitness data."""
import json
import os
import sqlite3
from contextlib import contextmanager
from datetime import date
from typing import Generator, Optional
import logging

from fitness_metrics.models import (
    DietPlan,
    MealRecord,
    ProgressEntry,
    WaterIntakeEntry,
    WorkoutRecord,
)

from .config import get_settings

log = logging.getLogger(__name__)


class RecordStoreUnavailable(RuntimeError):
    """Raised when the record store database cannot be opened."""


def _row_to_workout(row) -> WorkoutRecord:
    """Convert SQLite row to WorkoutRecord model."""
    return WorkoutRecord(
        id=row["id"],
        user_id=row["user_id"],
        plan_id=row["plan_id"],
        name=row["name"],
        status=row["status"],
        scheduled_date=row["scheduled_date"],
        completed_date=row["completed_date"],
        duration=row["duration"],
    )


def _row_to_meal(row) -> MealRecord:
    """Convert SQLite row to MealRecord model."""
    return MealRecord(
        id=row["id"],
        user_id=row["user_id"],
        diet_plan_id=row["diet_plan_id"],
        name=row["name"],
        meal_type=row["meal_type"],
        date=row["date"],
        calories=float(row["calories"] or 0),
        protein=float(row["protein"] or 0),
        carbs=float(row["carbs"] or 0),
        fat=float(row["fat"] or 0),
        completed=bool(row["completed"]),
    )


def _row_to_progress(row) -> ProgressEntry:
    """Convert SQLite row to ProgressEntry model (measurements stored as JSON text)."""
    raw = row["measurements"]
    measurements = json.loads(raw) if raw else None
    return ProgressEntry(
        id=row["id"],
        user_id=row["user_id"],
        date=row["date"],
        weight=row["weight"],
        body_fat=row["body_fat"],
        measurements=measurements,
        notes=row["notes"],
    )


def _row_to_water(row) -> WaterIntakeEntry:
    """Convert SQLite row to WaterIntakeEntry model."""
    return WaterIntakeEntry(
        id=row["id"],
        user_id=row["user_id"],
        date=row["date"],
        amount=int(row["amount"] or 0),
    )


def _row_to_diet_plan(row) -> DietPlan:
    """Convert SQLite row to DietPlan model."""
    return DietPlan(
        id=row["id"],
        user_id=row["user_id"],
        name=row["name"],
        status=row["status"],
        daily_calories=int(row["daily_calories"]),
        protein_percentage=int(row["protein_percentage"]),
        carbs_percentage=int(row["carbs_percentage"]),
        fat_percentage=int(row["fat_percentage"]),
    )


class RecordStore:
    """
    Read-only access to one user's logged records.

    Opens a fresh read-only connection per call so the API never holds
    locks against the application that writes the records.
    """

    def __init__(self, settings=None):
        self.settings = settings or get_settings()

    @contextmanager
    def get_conn(self) -> Generator[sqlite3.Connection, None, None]:
        """Get read-only connection to the fitness database."""
        yield from self._connect(self.settings.fitness_db_path)

    def _connect(self, db_path: str) -> Generator[sqlite3.Connection, None, None]:
        """
        Create a read-only connection with proper isolation.
        Uses URI mode with mode=ro to ensure read-only access.
        """
        if not os.path.exists(db_path):
            log.error(f"[STORE] Record store not found at {db_path}")
            raise RecordStoreUnavailable(f"Record store not found: {db_path}")

        uri = f"file:{db_path}?mode=ro"
        conn = sqlite3.connect(uri, uri=True, check_same_thread=False)
        conn.row_factory = sqlite3.Row  # Enable dict-like row access
        try:
            yield conn
        finally:
            conn.close()

    def workouts(self, user_id: int) -> list[WorkoutRecord]:
        with self.get_conn() as conn:
            rows = conn.execute(
                "SELECT * FROM workouts WHERE user_id = ? ORDER BY scheduled_date",
                (user_id,),
            ).fetchall()
        return [_row_to_workout(row) for row in rows]

    def meals(
        self,
        user_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[MealRecord]:
        """Meals for a user, optionally limited to an inclusive date range."""
        # Stored dates may carry a time of day; compare on the calendar day.
        query = "SELECT * FROM meals WHERE user_id = ?"
        params: list = [user_id]
        if start is not None:
            query += " AND date(date) >= ?"
            params.append(start.isoformat())
        if end is not None:
            query += " AND date(date) <= ?"
            params.append(end.isoformat())
        query += " ORDER BY date"

        with self.get_conn() as conn:
            rows = conn.execute(query, params).fetchall()
        return [_row_to_meal(row) for row in rows]

    def progress_entries(self, user_id: int) -> list[ProgressEntry]:
        with self.get_conn() as conn:
            rows = conn.execute(
                "SELECT * FROM progress_entries WHERE user_id = ? ORDER BY date DESC, id DESC",
                (user_id,),
            ).fetchall()
        return [_row_to_progress(row) for row in rows]

    def water_intakes(self, user_id: int, day: Optional[date] = None) -> list[WaterIntakeEntry]:
        query = "SELECT * FROM water_intakes WHERE user_id = ?"
        params: list = [user_id]
        if day is not None:
            query += " AND date(date) = ?"
            params.append(day.isoformat())

        with self.get_conn() as conn:
            rows = conn.execute(query, params).fetchall()
        return [_row_to_water(row) for row in rows]

    def active_diet_plan(self, user_id: int) -> Optional[DietPlan]:
        with self.get_conn() as conn:
            row = conn.execute(
                """
                SELECT * FROM diet_plans
                WHERE user_id = ? AND status = 'active'
                ORDER BY id DESC
                LIMIT 1
                """,
                (user_id,),
            ).fetchone()
        return _row_to_diet_plan(row) if row else None


# Singleton instance
record_store = RecordStore()
