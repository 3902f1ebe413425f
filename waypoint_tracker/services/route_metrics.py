"""Distance metrics over recorded routes."""

from __future__ import annotations

from typing import Sequence

from geopy.distance import geodesic

from ..domain.models import Coordinate


def segment_distances_km(coordinates: Sequence[Coordinate]) -> list[float]:
    """Geodesic length of each leg between consecutive waypoints."""
    return [
        geodesic(a.as_pair(), b.as_pair()).kilometers
        for a, b in zip(coordinates, coordinates[1:])
    ]


def route_distance_km(coordinates: Sequence[Coordinate]) -> float:
    """Total geodesic length of the polyline through ``coordinates``."""
    return sum(segment_distances_km(coordinates))
