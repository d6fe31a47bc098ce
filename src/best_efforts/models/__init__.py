"""Data models for the Best Efforts engine."""

from .distances import (
    StandardDistance,
    METERS_PER_MILE,
    MIN_WORKOUT_FRACTION,
)
from .efforts import (
    to_camel,
    WorkoutId,
    WorkoutLap,
    Workout,
    WorkoutWithLaps,
    BestEffort,
    NearMiss,
    EffortAnalysis,
    WorkoutBestEfforts,
    BestEffortsResponse,
)

__all__ = [
    # Reference data
    "StandardDistance",
    "METERS_PER_MILE",
    "MIN_WORKOUT_FRACTION",
    # Models
    "to_camel",
    "WorkoutId",
    "WorkoutLap",
    "Workout",
    "WorkoutWithLaps",
    "BestEffort",
    "NearMiss",
    "EffortAnalysis",
    "WorkoutBestEfforts",
    "BestEffortsResponse",
]
