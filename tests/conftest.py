"""Shared fixtures for best-effort tests."""

import os
import tempfile
from datetime import date, timedelta

import pytest

from best_efforts.db.database import BestEffortsDatabase
from best_efforts.metrics.pace import format_pace, format_time
from best_efforts.models.efforts import BestEffort, Workout, WorkoutLap, WorkoutWithLaps


TODAY = date(2026, 10, 18)


@pytest.fixture
def today():
    """Fixed evaluation date."""
    return TODAY


@pytest.fixture
def make_laps():
    """Build laps from (distance_meters, elapsed_seconds) pairs."""
    def _make(splits, start_index=0, step=1):
        return [
            WorkoutLap(
                lap_index=start_index + i * step,
                distance_meters=distance,
                elapsed_time_seconds=seconds,
            )
            for i, (distance, seconds) in enumerate(splits)
        ]
    return _make


@pytest.fixture
def make_workout():
    """Build a workout dated `days_ago` days before the fixed date."""
    def _make(workout_id, days_ago=0, distance_meters=None):
        return Workout(
            id=workout_id,
            date=TODAY - timedelta(days=days_ago),
            distance_meters=distance_meters,
        )
    return _make


@pytest.fixture
def make_run(make_workout, make_laps):
    """Build a workout whose only lap is one 400m repeat in `seconds`."""
    def _make(workout_id, days_ago, seconds, distance=400.0):
        return WorkoutWithLaps(
            workout=make_workout(workout_id, days_ago),
            laps=make_laps([(distance, seconds)]),
        )
    return _make


@pytest.fixture
def make_best():
    """Build a historical best effort for a distance name."""
    def _make(distance, time_seconds, meters=400.0, workout_id=0, workout_date=TODAY):
        return BestEffort(
            workout_id=workout_id,
            workout_date=workout_date,
            distance=distance,
            distance_meters=meters,
            time_seconds=time_seconds,
            time_formatted=format_time(time_seconds),
            pace=format_pace(time_seconds / (meters / 1609.34)),
            start_lap_index=0,
            end_lap_index=0,
            is_pr=True,
        )
    return _make


@pytest.fixture
def temp_db():
    """Create a temporary workout database."""
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = f.name

    db = BestEffortsDatabase(db_path)
    yield db

    try:
        os.unlink(db_path)
    except OSError:
        pass
