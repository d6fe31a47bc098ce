"""
Pace, time and VDOT helpers for lap-window efforts.

Paces are expressed per mile. The VDOT here is a deliberately rough linear
proxy (speed in mph times 4.35), not Daniels' full oxygen-cost formula; it is
only used to give each effort a comparable fitness number.
"""

import math
from typing import Optional

from ..models.distances import METERS_PER_MILE

# mph -> VDOT linear factor
VDOT_PER_MPH = 4.35


def round_half_up(value: float) -> int:
    """Round half up (2.5 -> 3), unlike the builtin round()."""
    return int(math.floor(value + 0.5))


def format_time(seconds: float) -> str:
    """Format seconds as H:MM:SS, or M:SS under an hour."""
    total = round_half_up(seconds)
    hours = total // 3600
    minutes = (total % 3600) // 60
    secs = total % 60

    if hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    return f"{minutes}:{secs:02d}"


def format_pace(seconds_per_mile: float) -> str:
    """Format a per-mile pace as M:SS."""
    total = round_half_up(seconds_per_mile)
    return f"{total // 60}:{total % 60:02d}"


def meters_to_miles(meters: float) -> float:
    """Convert meters to statute miles."""
    return meters / METERS_PER_MILE


def calculate_pace_seconds_per_mile(
    distance_meters: float,
    time_seconds: float,
) -> Optional[float]:
    """
    Calculate pace in seconds per mile.

    Returns None when the pace is undefined or meaningless: zero or negative
    distance, zero or negative time, or a non-finite result. Callers treat
    None as "no valid effort".

    Args:
        distance_meters: Distance covered
        time_seconds: Time taken

    Returns:
        Seconds per mile, or None
    """
    if distance_meters <= 0 or time_seconds <= 0:
        return None

    pace = time_seconds / meters_to_miles(distance_meters)
    if not math.isfinite(pace):
        return None
    return pace


def calculate_equivalent_vdot(distance_meters: float, time_seconds: float) -> Optional[int]:
    """Approximate VDOT from average speed (mph * 4.35, rounded)."""
    if distance_meters <= 0 or time_seconds <= 0:
        return None

    velocity_mph = meters_to_miles(distance_meters) / (time_seconds / 3600)
    return round_half_up(velocity_mph * VDOT_PER_MPH)
