"""Personal-best detection engine: scan, resolve, rank, summarize."""

from .scanner import (
    WindowMatch,
    sort_laps,
    should_scan,
    scan_distance,
    scan_workout,
)
from .resolver import (
    HistoricalBests,
    WindowSelection,
    select_window,
    build_effort,
    resolve_efforts,
    detect_best_efforts_in_workout,
)
from .leaderboard import (
    ChronologicalWorkouts,
    LeaderboardPolicy,
    LeaderboardState,
    insert_ranked,
    format_pr_notification,
    fold_workout,
    build_analysis,
    analyze_workouts_for_best_efforts,
    current_bests,
)
from .near_miss import DEFAULT_NEAR_MISS_THRESHOLD, find_near_misses
from .insights import get_best_effort_insights

__all__ = [
    # Scanner
    "WindowMatch",
    "sort_laps",
    "should_scan",
    "scan_distance",
    "scan_workout",
    # Resolver
    "HistoricalBests",
    "WindowSelection",
    "select_window",
    "build_effort",
    "resolve_efforts",
    "detect_best_efforts_in_workout",
    # Leaderboard
    "ChronologicalWorkouts",
    "LeaderboardPolicy",
    "LeaderboardState",
    "insert_ranked",
    "format_pr_notification",
    "fold_workout",
    "build_analysis",
    "analyze_workouts_for_best_efforts",
    "current_bests",
    # Near misses and insights
    "DEFAULT_NEAR_MISS_THRESHOLD",
    "find_near_misses",
    "get_best_effort_insights",
]
