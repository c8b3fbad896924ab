"""
Geodesy Tests
=============

Unit tests for distance, bearing and angle helpers.
"""

import os
import math
import pytest
import numpy as np

import sys
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))

from target_compass.nav.geodesy import (
    Coordinate,
    EARTH_RADIUS_M,
    angle_difference,
    bearing,
    distance,
    format_distance,
    format_distance_simple,
    normalize_angle,
    round_half_up,
    to_degrees,
    to_radians,
)


class TestNormalizeAngle:
    """Test normalize_angle()."""

    def test_known_values(self):
        """Test documented reductions."""
        assert normalize_angle(-10) == pytest.approx(350)
        assert normalize_angle(725) == pytest.approx(5)
        assert normalize_angle(0) == 0
        assert normalize_angle(360) == 0

    def test_range(self):
        """Test output always in [0, 360)."""
        for x in np.linspace(-1000.0, 1000.0, 401):
            result = normalize_angle(float(x))
            assert 0.0 <= result < 360.0

    def test_tiny_negative(self):
        """Test tiny negative input does not produce 360."""
        result = normalize_angle(-1e-20)
        assert 0.0 <= result < 360.0


class TestAngleDifference:
    """Test angle_difference()."""

    def test_across_north(self):
        """Test shortest signed rotation across 0/360."""
        assert angle_difference(350, 10) == pytest.approx(20)
        assert angle_difference(10, 350) == pytest.approx(-20)

    def test_half_turn_is_positive(self):
        """Test exactly opposite angles give +180, never -180."""
        assert angle_difference(0, 180) == pytest.approx(180)
        assert angle_difference(180, 0) == pytest.approx(180)

    def test_range(self):
        """Test output always in (-180, 180]."""
        for a in range(-360, 720, 37):
            for b in range(-360, 720, 41):
                d = angle_difference(a, b)
                assert -180.0 < d <= 180.0


class TestDistance:
    """Test haversine distance."""

    def test_same_point(self):
        """Test distance to self is zero."""
        a = Coordinate(13.0453132, 77.5733936)
        assert distance(a, a) == 0.0

    def test_symmetric(self):
        """Test distance(a, b) == distance(b, a)."""
        a = Coordinate(13.0453132, 77.5733936)
        b = Coordinate(12.9716, 77.5946)
        assert distance(a, b) == pytest.approx(distance(b, a), rel=1e-12)

    def test_one_degree_longitude_at_equator(self):
        """Test one degree of longitude on the equator is ~111,195 m."""
        d = distance(Coordinate(0, 0), Coordinate(0, 1))
        assert d == pytest.approx(111195, rel=0.01)
        assert d == pytest.approx(EARTH_RADIUS_M * math.pi / 180.0, rel=1e-9)

    def test_short_span(self):
        """Test 0.001 deg of latitude is ~111 m."""
        d = distance(Coordinate(13.0443132, 77.5733936), Coordinate(13.0453132, 77.5733936))
        assert d == pytest.approx(111.19, abs=0.5)


class TestBearing:
    """Test initial bearing."""

    def test_due_east(self):
        """Test bearing along the equator to the east."""
        assert bearing(Coordinate(0, 0), Coordinate(0, 1)) == pytest.approx(90, abs=0.01)

    def test_cardinal_directions(self):
        """Test north, south and west."""
        origin = Coordinate(10, 10)
        assert bearing(origin, Coordinate(11, 10)) == pytest.approx(0, abs=0.01)
        assert bearing(origin, Coordinate(9, 10)) == pytest.approx(180, abs=0.01)
        assert bearing(origin, Coordinate(10, 9)) == pytest.approx(270, abs=0.1)

    def test_range(self):
        """Test bearing is in [0, 360)."""
        origin = Coordinate(13.0, 77.0)
        for lat, lon in [(12.0, 76.0), (14.0, 76.0), (12.0, 78.0), (13.0, 76.5)]:
            b = bearing(origin, Coordinate(lat, lon))
            assert 0.0 <= b < 360.0


class TestConversions:
    """Test degree/radian helpers."""

    def test_round_trip(self):
        """Test to_degrees(to_radians(x)) == x."""
        assert to_degrees(to_radians(123.4)) == pytest.approx(123.4)
        assert to_radians(180) == pytest.approx(math.pi)


class TestFormatDistance:
    """Test distance formatting."""

    def test_meters(self):
        """Test sub-kilometer output."""
        assert format_distance(850.4) == "850m"
        assert format_distance(0) == "0m"

    def test_kilometers_and_meters(self):
        """Test km + remaining meters."""
        assert format_distance(1234.7) == "1km 235m"
        assert format_distance(2000) == "2km 0m"

    def test_simple(self):
        """Test coarse format."""
        assert format_distance_simple(850) == "850m"
        assert format_distance_simple(1500) == "1.5km"
        assert format_distance_simple(12000) == "12km"

    def test_rounds_before_splitting(self):
        """Test a value rounding up to the next kilometer carries over."""
        assert format_distance(999.7) == "1km 0m"
        assert format_distance(1999.7) == "2km 0m"
        assert format_distance(1999.4) == "1km 999m"
        assert format_distance_simple(999.7) == "1.0km"

    def test_halves_round_up(self):
        """Test .5 distances round away from the even neighbour."""
        assert format_distance(850.5) == "851m"
        assert format_distance(2.5) == "3m"
        assert format_distance(1000.5) == "1km 1m"
        assert format_distance_simple(12500) == "13km"


class TestRoundHalfUp:
    """Test half-up rounding."""

    def test_halves(self):
        """Test halves go toward positive infinity."""
        assert round_half_up(2.5) == 3
        assert round_half_up(0.5) == 1
        assert round_half_up(-2.5) == -2
        assert round_half_up(-0.5) == 0

    def test_non_halves(self):
        """Test ordinary values round to the nearest integer."""
        assert round_half_up(2.4) == 2
        assert round_half_up(-2.6) == -3
        assert isinstance(round_half_up(7.0), int)


class TestCoordinate:
    """Test Coordinate dataclass."""

    def test_immutable(self):
        """Test coordinates are frozen."""
        c = Coordinate(1.0, 2.0)
        with pytest.raises(Exception):
            c.latitude = 3.0

    def test_as_tuple(self):
        """Test tuple conversion."""
        assert Coordinate(1.0, 2.0).as_tuple() == (1.0, 2.0)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
