"""Database schema for stored workouts and their laps."""

SCHEMA = """
-- Workouts (one row per run); ids are unique per user
CREATE TABLE IF NOT EXISTS workouts (
    id TEXT NOT NULL,
    user_id TEXT NOT NULL DEFAULT 'default',
    date TEXT NOT NULL,
    name TEXT,
    distance_meters REAL,
    created_at TEXT DEFAULT CURRENT_TIMESTAMP,
    PRIMARY KEY (user_id, id)
);

-- Lap splits, owned by a workout
CREATE TABLE IF NOT EXISTS workout_laps (
    workout_id TEXT NOT NULL,
    user_id TEXT NOT NULL DEFAULT 'default',
    lap_index INTEGER NOT NULL,
    distance_meters REAL,
    elapsed_time_seconds REAL,
    FOREIGN KEY (user_id, workout_id) REFERENCES workouts(user_id, id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_workouts_user_date ON workouts(user_id, date DESC);
CREATE INDEX IF NOT EXISTS idx_laps_workout ON workout_laps(user_id, workout_id, lap_index);
"""
