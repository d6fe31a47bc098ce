"""
Per-workout effort resolver.

Reduces the scanner's candidate windows to one BestEffort per standard
distance, computes time/pace/VDOT, and flags PRs against a map of the best
efforts known so far.
"""

from enum import Enum
from typing import Dict, List, Mapping, Optional, Sequence

from ..metrics.pace import (
    calculate_equivalent_vdot,
    calculate_pace_seconds_per_mile,
    format_pace,
    format_time,
)
from ..models.distances import StandardDistance
from ..models.efforts import BestEffort, Workout, WorkoutLap
from .scanner import WindowMatch, scan_workout


HistoricalBests = Mapping[str, BestEffort]


class WindowSelection(str, Enum):
    """How to pick one window when several in a workout match a distance.

    FIRST keeps the earliest-starting window, even if a later one is faster.
    FASTEST keeps the quickest window (earliest on ties).
    """
    FIRST = "first"
    FASTEST = "fastest"


def select_window(
    matches: Sequence[WindowMatch],
    selection: WindowSelection = WindowSelection.FIRST,
) -> Optional[WindowMatch]:
    """Pick one window out of the candidates for a distance."""
    if not matches:
        return None
    if selection == WindowSelection.FASTEST:
        return min(matches, key=lambda m: m.time_seconds)
    return matches[0]


def build_effort(
    workout: Workout,
    match: WindowMatch,
    historical_bests: Optional[HistoricalBests] = None,
) -> Optional[BestEffort]:
    """
    Turn a matched window into a BestEffort.

    Returns None when the window has no meaningful pace (zero distance or
    zero time), so degenerate laps never reach ranking or formatting.
    """
    pace = calculate_pace_seconds_per_mile(match.distance_meters, match.time_seconds)
    if pace is None:
        return None

    name = match.distance.display_name
    previous = historical_bests.get(name) if historical_bests else None
    is_pr = previous is None or match.time_seconds < previous.time_seconds
    improvement = previous.time_seconds - match.time_seconds if previous else None

    return BestEffort(
        workout_id=workout.id,
        workout_date=workout.date,
        distance=name,
        distance_meters=match.distance_meters,
        time_seconds=match.time_seconds,
        time_formatted=format_time(match.time_seconds),
        pace=format_pace(pace),
        start_lap_index=match.start_lap_index,
        end_lap_index=match.end_lap_index,
        is_pr=is_pr,
        improvement_seconds=improvement,
        equivalent_vdot=calculate_equivalent_vdot(match.distance_meters, match.time_seconds),
    )


def resolve_efforts(
    workout: Workout,
    candidates: Mapping[StandardDistance, Sequence[WindowMatch]],
    historical_bests: Optional[HistoricalBests] = None,
    selection: WindowSelection = WindowSelection.FIRST,
) -> Dict[str, BestEffort]:
    """
    Reduce candidate windows to one effort per distance.

    Windows without a valid pace are discarded before selection.

    Returns:
        Mapping of distance name to effort, in standard-distance order
    """
    efforts: Dict[str, BestEffort] = {}
    for distance in StandardDistance:
        valid = [
            m for m in candidates.get(distance, ())
            if calculate_pace_seconds_per_mile(m.distance_meters, m.time_seconds) is not None
        ]
        match = select_window(valid, selection)
        if match is None:
            continue
        effort = build_effort(workout, match, historical_bests)
        if effort is not None:
            efforts[distance.display_name] = effort
    return efforts


def detect_best_efforts_in_workout(
    workout: Workout,
    laps: Optional[Sequence[WorkoutLap]],
    historical_bests: Optional[HistoricalBests] = None,
    selection: WindowSelection = WindowSelection.FIRST,
) -> List[BestEffort]:
    """
    Detect best efforts within a single workout using its laps.

    Args:
        workout: The workout the laps belong to
        laps: Lap splits in any order; empty or None yields no efforts
        historical_bests: Current best effort per distance name. A distance
            without an entry makes any effort at it a PR.
        selection: Window tie-break policy

    Returns:
        At most one effort per standard distance, shortest distance first
    """
    if not laps:
        return []

    candidates = scan_workout(laps, workout.distance_meters)
    return list(resolve_efforts(workout, candidates, historical_bests, selection).values())
