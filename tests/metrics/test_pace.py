"""Tests for pace, time and VDOT helpers."""

import pytest

from best_efforts.metrics.pace import (
    calculate_equivalent_vdot,
    calculate_pace_seconds_per_mile,
    format_pace,
    format_time,
    round_half_up,
)


class TestFormatTime:
    """Tests for elapsed time formatting."""

    def test_under_an_hour(self):
        assert format_time(360) == "6:00"

    def test_pads_seconds(self):
        assert format_time(65) == "1:05"

    def test_over_an_hour(self):
        assert format_time(3661) == "1:01:01"

    def test_rounds_to_whole_seconds(self):
        """359.6s rounds up to a clean minute instead of showing 5:60."""
        assert format_time(359.6) == "6:00"

    def test_half_second_rounds_up(self):
        assert format_time(89.5) == "1:30"


class TestFormatPace:
    """Tests for per-mile pace formatting."""

    def test_six_minute_mile(self):
        assert format_pace(360) == "6:00"

    def test_rounds_seconds(self):
        assert format_pace(421.4) == "7:01"


class TestPaceCalculation:
    """Tests for pace computation."""

    def test_one_mile(self):
        """A mile in 360s is a 360 s/mi pace."""
        assert calculate_pace_seconds_per_mile(1609.34, 360) == pytest.approx(360)

    def test_zero_distance_is_undefined(self):
        """Zero distance has no pace rather than an infinite one."""
        assert calculate_pace_seconds_per_mile(0, 360) is None

    def test_zero_time_is_undefined(self):
        assert calculate_pace_seconds_per_mile(400, 0) is None

    def test_negative_values_are_undefined(self):
        assert calculate_pace_seconds_per_mile(-400, 90) is None
        assert calculate_pace_seconds_per_mile(400, -90) is None


class TestEquivalentVdot:
    """Tests for the linear VDOT proxy."""

    def test_fast_400(self):
        """400m in 90s is ~9.94 mph -> 43."""
        assert calculate_equivalent_vdot(400, 90) == 43

    def test_twenty_minute_5k(self):
        """5K in 20:00 is ~9.32 mph -> 41."""
        assert calculate_equivalent_vdot(5000, 1200) == 41

    def test_zero_time(self):
        assert calculate_equivalent_vdot(400, 0) is None


class TestRoundHalfUp:
    """Tests for half-up rounding."""

    def test_half_rounds_up(self):
        assert round_half_up(2.5) == 3

    def test_below_half_rounds_down(self):
        assert round_half_up(2.49) == 2
