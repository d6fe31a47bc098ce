"""
Segment window scanner.

Finds contiguous runs of laps whose cumulative distance lands within a
standard distance's tolerance. For each start lap the window is grown one lap
at a time; the first in-tolerance window from that start is kept and the scan
moves on to the next start. A window that overshoots ``meters + tolerance``
before matching is abandoned. Worst case is O(n^2) per distance, which is fine
for workouts of a few hundred laps.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from ..models.distances import MIN_WORKOUT_FRACTION, StandardDistance
from ..models.efforts import WorkoutLap


@dataclass(frozen=True)
class WindowMatch:
    """A lap window that covers a standard distance."""
    distance: StandardDistance
    start_lap_index: int
    end_lap_index: int
    distance_meters: float
    time_seconds: float


def sort_laps(laps: Optional[Sequence[WorkoutLap]]) -> List[WorkoutLap]:
    """Order laps by lap_index. Duplicate indices keep their input order."""
    if not laps:
        return []
    return sorted(laps, key=lambda lap: lap.lap_index)


def should_scan(distance: StandardDistance, workout_distance_meters: Optional[float]) -> bool:
    """Skip distances the whole workout is clearly too short to contain.

    Workouts without a recorded total are always scanned.
    """
    if not workout_distance_meters:
        return True
    return workout_distance_meters >= distance.meters * MIN_WORKOUT_FRACTION


def scan_distance(
    sorted_laps: Sequence[WorkoutLap],
    distance: StandardDistance,
) -> List[WindowMatch]:
    """
    Find candidate windows for one standard distance.

    Args:
        sorted_laps: Laps already ordered by lap_index
        distance: Standard distance to look for

    Returns:
        At most one match per start lap, in ascending start order
    """
    matches: List[WindowMatch] = []
    lap_count = len(sorted_laps)

    for start in range(lap_count):
        cumulative_distance = 0.0
        cumulative_time = 0.0

        for end in range(start, lap_count):
            lap = sorted_laps[end]
            cumulative_distance += lap.distance_meters or 0.0
            cumulative_time += lap.elapsed_time_seconds or 0.0

            if distance.matches(cumulative_distance):
                matches.append(
                    WindowMatch(
                        distance=distance,
                        start_lap_index=sorted_laps[start].lap_index,
                        end_lap_index=lap.lap_index,
                        distance_meters=cumulative_distance,
                        time_seconds=cumulative_time,
                    )
                )
                break

            if cumulative_distance > distance.max_meters:
                break

    return matches


def scan_workout(
    laps: Optional[Sequence[WorkoutLap]],
    workout_distance_meters: Optional[float] = None,
) -> Dict[StandardDistance, List[WindowMatch]]:
    """
    Scan a workout's laps for every standard distance.

    Args:
        laps: Workout laps in any order (may be empty or None)
        workout_distance_meters: Recorded total distance, if known

    Returns:
        Mapping of distance to its candidate windows. Distances that were
        skipped or had no match are absent.
    """
    sorted_laps = sort_laps(laps)
    if not sorted_laps:
        return {}

    candidates: Dict[StandardDistance, List[WindowMatch]] = {}
    for distance in StandardDistance:
        if not should_scan(distance, workout_distance_meters):
            continue
        matches = scan_distance(sorted_laps, distance)
        if matches:
            candidates[distance] = matches
    return candidates
