"""Personal-best detection from workout lap splits."""

__version__ = "0.1.0"

from .models import (
    StandardDistance,
    WorkoutLap,
    Workout,
    WorkoutWithLaps,
    BestEffort,
    NearMiss,
    EffortAnalysis,
    WorkoutBestEfforts,
)
from .engine import (
    WindowSelection,
    ChronologicalWorkouts,
    LeaderboardPolicy,
    detect_best_efforts_in_workout,
    analyze_workouts_for_best_efforts,
    find_near_misses,
    get_best_effort_insights,
    current_bests,
)

__all__ = [
    # Version
    "__version__",
    # Models
    "StandardDistance",
    "WorkoutLap",
    "Workout",
    "WorkoutWithLaps",
    "BestEffort",
    "NearMiss",
    "EffortAnalysis",
    "WorkoutBestEfforts",
    # Engine
    "WindowSelection",
    "ChronologicalWorkouts",
    "LeaderboardPolicy",
    "detect_best_efforts_in_workout",
    "analyze_workouts_for_best_efforts",
    "find_near_misses",
    "get_best_effort_insights",
    "current_bests",
]
