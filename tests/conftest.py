"""
Pytest fixtures for Fitness Metrics tests.
"""
import sys
import sqlite3
import pytest
from pathlib import Path
from datetime import date
from dotenv import load_dotenv

# Ensure src/ and the repo root are on sys.path so tests can import
# fitness_metrics and the dashboard server.
ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
for path in (SRC, ROOT):
    if str(path) not in sys.path:
        sys.path.insert(0, str(path))

# Load environment variables
load_dotenv()

from fitness_metrics.models import (  # noqa: E402
    DietPlan,
    MealRecord,
    ProgressEntry,
    WaterIntakeEntry,
    WorkoutRecord,
)

# Wednesday; the week containing it starts on Sunday 2025-03-09.
REFERENCE_DAY = date(2025, 3, 12)


# ============================================================================
# Record Factories
# ============================================================================

def make_workout(id, day=None, status="completed", duration=None, scheduled=None, user_id=1):
    """Workout completed on `day` (or scheduled on `scheduled` when not completed)."""
    completed = status == "completed"
    return WorkoutRecord(
        id=id,
        user_id=user_id,
        name=f"Workout {id}",
        status=status,
        scheduled_date=scheduled or day,
        completed_date=day if completed else None,
        duration=duration,
    )


def make_meal(id, day, calories, protein=0, carbs=0, fat=0, completed=True, meal_type="lunch"):
    return MealRecord(
        id=id,
        user_id=1,
        meal_type=meal_type,
        date=day,
        calories=calories,
        protein=protein,
        carbs=carbs,
        fat=fat,
        completed=completed,
    )


def make_entry(id, day, weight=None, body_fat=None, **measurements):
    return ProgressEntry(
        id=id,
        user_id=1,
        date=day,
        weight=weight,
        body_fat=body_fat,
        measurements=measurements or None,
    )


def make_water(id, day, amount):
    return WaterIntakeEntry(id=id, user_id=1, date=day, amount=amount)


def make_plan(daily_calories=2200, protein=33, carbs=40, fat=27):
    return DietPlan(
        id=1,
        user_id=1,
        name="Cut",
        daily_calories=daily_calories,
        protein_percentage=protein,
        carbs_percentage=carbs,
        fat_percentage=fat,
    )


@pytest.fixture
def reference_day():
    """Fixed 'today' used by date-relative tests."""
    return REFERENCE_DAY


# ============================================================================
# Record Store Fixtures
# ============================================================================

SCHEMA = """
CREATE TABLE workouts (
    id INTEGER PRIMARY KEY,
    user_id INTEGER NOT NULL,
    plan_id INTEGER,
    name TEXT,
    status TEXT NOT NULL,
    scheduled_date TEXT NOT NULL,
    completed_date TEXT,
    duration INTEGER
);
CREATE TABLE meals (
    id INTEGER PRIMARY KEY,
    user_id INTEGER NOT NULL,
    diet_plan_id INTEGER,
    name TEXT,
    meal_type TEXT NOT NULL,
    calories REAL,
    protein REAL,
    carbs REAL,
    fat REAL,
    date TEXT NOT NULL,
    completed INTEGER DEFAULT 0
);
CREATE TABLE progress_entries (
    id INTEGER PRIMARY KEY,
    user_id INTEGER NOT NULL,
    date TEXT NOT NULL,
    weight REAL,
    body_fat REAL,
    measurements TEXT,
    notes TEXT
);
CREATE TABLE water_intakes (
    id INTEGER PRIMARY KEY,
    user_id INTEGER NOT NULL,
    date TEXT NOT NULL,
    amount INTEGER NOT NULL
);
CREATE TABLE diet_plans (
    id INTEGER PRIMARY KEY,
    user_id INTEGER NOT NULL,
    name TEXT,
    status TEXT,
    daily_calories INTEGER,
    protein_percentage INTEGER,
    carbs_percentage INTEGER,
    fat_percentage INTEGER
);
"""

SEED_ROWS = {
    "workouts": [
        (1, 1, None, "Upper Body", "completed", "2025-03-10", "2025-03-10", 45),
        (2, 1, None, "Cardio", "completed", "2025-03-11", "2025-03-11T18:30:00", None),
        (3, 1, None, "Lower Body", "completed", "2025-03-12", "2025-03-12", 30),
        (4, 1, None, "Full Body", "scheduled", "2025-03-14", None, None),
        (5, 2, None, "Yoga", "completed", "2025-03-12", "2025-03-12", 60),
    ],
    "meals": [
        (1, 1, 1, "Oats", "breakfast", 380, 25, 40, 12, "2025-03-12", 1),
        (2, 1, 1, "Chicken bowl", "lunch", 520, 35, 60, 18, "2025-03-12", 0),
        (3, 1, 1, "Salmon", "dinner", 650, 45, 30, 35, "2025-03-11", 1),
        # Timestamped dates, as written by clients that log the time of day
        (4, 3, None, "Eggs", "breakfast", 380, 24, 2, 26, "2025-03-12T08:00:00", 1),
        (5, 3, None, "Toast", "breakfast", 200, 6, 30, 4, "2025-03-13T07:00:00", 1),
    ],
    "progress_entries": [
        (1, 1, "2025-03-01", 180, 22.0, '{"waist": 34}', None),
        (2, 1, "2025-03-08", 175, 21.5, '{"waist": 33.5, "sleepHours": 7.5, "sleepQuality": 80}', None),
        (3, 1, "2025-03-11", None, None, '{"steps": 10000}', None),
        (4, 1, "2025-03-12", None, None,
         '{"steps": 8000, "sleepHours": 6.5, "sleepQuality": 70, "waterIntake": 1.4}', None),
    ],
    "water_intakes": [
        (1, 1, "2025-03-12", 500),
        (2, 1, "2025-03-12", 750),
        (3, 3, "2025-03-12T09:00:00", 500),
    ],
    "diet_plans": [
        (1, 1, "Cut", "active", 2200, 33, 40, 27),
    ],
}


@pytest.fixture
def fitness_db(tmp_path):
    """Seeded fitness.db in a temporary data directory; returns the directory."""
    conn = sqlite3.connect(tmp_path / "fitness.db")
    conn.executescript(SCHEMA)
    for table, rows in SEED_ROWS.items():
        placeholders = ", ".join("?" * len(rows[0]))
        conn.executemany(f"INSERT INTO {table} VALUES ({placeholders})", rows)
    conn.commit()
    conn.close()
    return tmp_path


@pytest.fixture
def api_client(fitness_db, monkeypatch):
    """TestClient for the dashboard API reading from the seeded database."""
    from fastapi.testclient import TestClient
    from server.dashboard_api.config import Settings
    from server.dashboard_api.database import record_store
    from server.dashboard_api.main import app

    monkeypatch.setattr(record_store, "settings", Settings(data_path=str(fitness_db)))
    with TestClient(app) as client:
        yield client
