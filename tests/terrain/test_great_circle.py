"""Tests for great_circle_distance.

Cross-checked against pyproj's WGS84 geodesic; the spherical model is
expected to agree within half a percent at these scales.
"""

from __future__ import annotations

import random

import pytest
from pyproj import Geod

from domain.terrain.services import EARTH_RADIUS_KM, great_circle_distance

GEOD = Geod(ellps="WGS84")


def geodesic_km(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    _, _, dist_m = GEOD.inv(lon1, lat1, lon2, lat2)
    return dist_m / 1000.0


def test_one_degree_of_longitude_at_equator():
    assert great_circle_distance(0, 0, 0, 1) == pytest.approx(111.19, rel=0.01)


def test_one_degree_of_latitude():
    assert great_circle_distance(45, 7, 46, 7) == pytest.approx(111.19, rel=0.01)


@pytest.mark.parametrize(
    "lat, lon",
    [(0.0, 0.0), (46.0, 7.0), (-33.8688, 151.2093), (89.9, -179.9), (0.1, 0.1)],
)
def test_identical_points_are_zero(lat, lon):
    assert great_circle_distance(lat, lon, lat, lon) == 0.0


def test_identical_random_points_are_exactly_zero():
    # sin² + cos² can round to just below 1.0 for many latitudes
    rng = random.Random(0)
    nonzero = []
    for _ in range(2000):
        lat, lon = rng.uniform(-90, 90), rng.uniform(-180, 180)
        d = great_circle_distance(lat, lon, lat, lon)
        if d != 0.0:
            nonzero.append((lat, lon, d))
    assert nonzero == []


def test_near_coincident_points_do_not_raise():
    # Rounding can put the cosine marginally above 1.0
    d = great_circle_distance(12.3456789, 98.7654321, 12.3456789, 98.76543210000001)
    assert 0.0 <= d < 1e-3


def test_antipodal_points():
    assert great_circle_distance(0, 0, 0, 180) == pytest.approx(
        EARTH_RADIUS_KM * 3.141592653589793
    )


def test_symmetric():
    a = great_circle_distance(46.2, 7.3, -10.4, -5.6)
    b = great_circle_distance(-10.4, -5.6, 46.2, 7.3)
    assert a == pytest.approx(b)


@pytest.mark.parametrize(
    "lat1, lon1, lat2, lon2",
    [
        (46.0, 7.0, 46.5, 7.5),  # Alps
        (-23.5, -46.6, -22.9, -43.2),  # Sao Paulo - Rio
        (51.5, -0.1, 48.9, 2.3),  # London - Paris
        (0.0, 0.0, 1.0, 1.0),
    ],
)
def test_agrees_with_wgs84_geodesic(lat1, lon1, lat2, lon2):
    expected = geodesic_km(lat1, lon1, lat2, lon2)
    assert great_circle_distance(lat1, lon1, lat2, lon2) == pytest.approx(
        expected, rel=0.005
    )
