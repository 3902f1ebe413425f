"""Tests for route distance metrics."""

import pytest

from waypoint_tracker.domain.models import Coordinate
from waypoint_tracker.services import route_distance_km, segment_distances_km


def test_empty_and_single_point_routes_have_no_length():
    assert route_distance_km([]) == 0.0
    assert route_distance_km([Coordinate(10, 20)]) == 0.0


def test_one_degree_of_longitude_at_equator():
    legs = segment_distances_km([Coordinate(0, 0), Coordinate(0, 1), Coordinate(0, 2)])
    assert len(legs) == 2
    assert legs[0] == pytest.approx(111.32, rel=1e-3)
    assert route_distance_km([Coordinate(0, 0), Coordinate(0, 1), Coordinate(0, 2)]) == pytest.approx(
        sum(legs)
    )


def test_repeated_point_adds_nothing():
    p = Coordinate(45.0, 7.0)
    assert route_distance_km([p, p, p]) == 0.0
