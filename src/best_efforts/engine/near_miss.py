"""Near-miss detection: fast efforts that just missed the record."""

from typing import List, Optional, Sequence

from ..models.efforts import NearMiss, Workout, WorkoutLap
from .resolver import HistoricalBests, WindowSelection, detect_best_efforts_in_workout


# Within 2% of the record
DEFAULT_NEAR_MISS_THRESHOLD = 1.02


def find_near_misses(
    workout: Workout,
    laps: Optional[Sequence[WorkoutLap]],
    historical_bests: HistoricalBests,
    threshold_percent: float = DEFAULT_NEAR_MISS_THRESHOLD,
    selection: WindowSelection = WindowSelection.FIRST,
) -> List[NearMiss]:
    """
    Find efforts that did not beat the record but came close.

    Only distances with a historical best are considered, and PRs are never
    near misses.

    Args:
        workout: Workout to inspect
        laps: Its laps
        historical_bests: Current record per distance name
        threshold_percent: Ratio of effort time to record time at or below
            which an effort counts (1.02 = within 2%)
        selection: Window tie-break policy

    Returns:
        One entry per qualifying distance, shortest distance first
    """
    efforts = detect_best_efforts_in_workout(workout, laps, historical_bests, selection)

    near_misses: List[NearMiss] = []
    for effort in efforts:
        if effort.is_pr:
            continue
        best = historical_bests.get(effort.distance)
        if best is None or best.time_seconds <= 0:
            continue

        ratio = effort.time_seconds / best.time_seconds
        if ratio <= threshold_percent:
            near_misses.append(
                NearMiss(
                    distance=effort.distance,
                    time_seconds=effort.time_seconds,
                    missed_by_seconds=effort.time_seconds - best.time_seconds,
                    missed_by_percent=(ratio - 1) * 100,
                )
            )

    return near_misses
