"""Pace and fitness math for best efforts."""

from .pace import (
    VDOT_PER_MPH,
    round_half_up,
    format_time,
    format_pace,
    meters_to_miles,
    calculate_pace_seconds_per_mile,
    calculate_equivalent_vdot,
)

__all__ = [
    "VDOT_PER_MPH",
    "round_half_up",
    "format_time",
    "format_pace",
    "meters_to_miles",
    "calculate_pace_seconds_per_mile",
    "calculate_equivalent_vdot",
]
