"""Tests for haversine distance helpers."""
import math

import pytest

from lombok_heritage.services.geo_math import (
    EARTH_RADIUS_KM, distance_km, distance_m, to_radians
)


class TestToRadians:

    def test_half_turn(self):
        assert to_radians(180) == pytest.approx(math.pi)

    def test_zero(self):
        assert to_radians(0) == 0


class TestDistanceKm:

    def test_same_point_is_zero(self):
        assert distance_km(-8.65, 116.32, -8.65, 116.32) == pytest.approx(0.0, abs=1e-9)

    def test_symmetric(self):
        a = (-8.5850, 116.1010)
        b = (-8.8390, 116.2920)
        assert distance_km(*a, *b) == pytest.approx(distance_km(*b, *a))

    def test_quarter_great_circle_on_equator(self):
        """(0,0) to (0,90) is a quarter of the circumference."""
        expected = 2 * math.pi * EARTH_RADIUS_KM / 4
        assert distance_km(0, 0, 0, 90) == pytest.approx(expected, rel=1e-9)
        assert distance_km(0, 0, 0, 90) == pytest.approx(10007.5, abs=0.1)

    def test_short_hop_in_mataram(self):
        """Pura Meru to Taman Mayura is a couple of hundred meters."""
        d = distance_km(-8.5850, 116.1010, -8.5846, 116.0993)
        assert 0.1 < d < 0.3

    def test_nan_propagates(self):
        assert math.isnan(distance_km(float('nan'), 0, 0, 0))


class TestDistanceM:

    def test_matches_km_times_thousand(self):
        a, b = (-8.58, 116.10), (-8.60, 116.20)
        assert distance_m(a, b) == pytest.approx(distance_km(*a, *b) * 1000)
