"""Standard race distances searched for best efforts."""

from enum import Enum
from typing import Optional


class StandardDistance(Enum):
    """Standard race distances with their match tolerance.

    Each value is ``(display name, meters, tolerance meters)``. A lap window
    counts as the distance when its cumulative length is within the tolerance
    of ``meters``. Members are declared shortest first; that order is the
    display order everywhere else.
    """
    M400 = ("400m", 400.0, 10.0)
    M800 = ("800m", 800.0, 20.0)
    K1 = ("1K", 1000.0, 25.0)
    MILE = ("1mi", 1609.34, 40.0)
    K5 = ("5K", 5000.0, 100.0)
    K10 = ("10K", 10000.0, 200.0)
    MI10 = ("10mi", 16093.4, 400.0)
    HALF_MARATHON = ("Half Marathon", 21097.5, 500.0)
    MARATHON = ("Marathon", 42195.0, 1000.0)

    def __init__(self, display_name: str, meters: float, tolerance_meters: float):
        self.display_name = display_name
        self.meters = meters
        self.tolerance_meters = tolerance_meters

    @property
    def min_meters(self) -> float:
        """Shortest cumulative distance that still matches."""
        return self.meters - self.tolerance_meters

    @property
    def max_meters(self) -> float:
        """Longest cumulative distance that still matches."""
        return self.meters + self.tolerance_meters

    def matches(self, cumulative_meters: float) -> bool:
        """Check whether a cumulative distance counts as this distance."""
        return abs(cumulative_meters - self.meters) <= self.tolerance_meters

    @classmethod
    def from_name(cls, name: str) -> Optional["StandardDistance"]:
        """Look a distance up by its display name (e.g. "5K")."""
        for distance in cls:
            if distance.display_name == name:
                return distance
        return None


# Meters per statute mile, used for pace and VDOT math
METERS_PER_MILE = 1609.34

# A workout shorter than this fraction of a distance is not scanned for it
MIN_WORKOUT_FRACTION = 0.9
