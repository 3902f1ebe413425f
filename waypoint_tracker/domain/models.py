"""Immutable domain models for the waypoint tracker.

All models are frozen dataclasses with slots. They have no external
dependencies and represent the core concepts of route tracking:
coordinates, tracking states and the read-only snapshot handed to hosts.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional


class TrackingState(Enum):
    """Lifecycle state of a RouteTracker.

    A denied permission request leaves the tracker in AWAITING_PERMISSION
    with its ``permission_denied`` flag set.
    """

    IDLE = auto()
    AWAITING_PERMISSION = auto()
    SAMPLING = auto()
    COMPLETE = auto()


class PermissionStatus(Enum):
    """Location permission state as reported by the host platform."""

    GRANTED = "granted"
    DENIED = "denied"
    PROMPT = "prompt"


class ErrorKind(Enum):
    """Error categories reported to render sinks."""

    PERMISSION_DENIED = "permission_denied"
    SAMPLE_TIMED_OUT = "sample_timed_out"
    SAMPLE_UNAVAILABLE = "sample_unavailable"
    PERSISTENCE_WRITE = "persistence_write"
    MALFORMED_PERSISTED_DATA = "malformed_persisted_data"


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A WGS84 position in decimal degrees."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
            raise ValueError(
                f"Coordinates must be finite, got ({self.latitude}, {self.longitude})"
            )
        if not -90 <= self.latitude <= 90:
            raise ValueError(
                f"Latitude must be between -90 and 90, got {self.latitude}"
            )
        if not -180 <= self.longitude <= 180:
            raise ValueError(
                f"Longitude must be between -180 and 180, got {self.longitude}"
            )

    def as_pair(self) -> tuple[float, float]:
        """Return ``(latitude, longitude)``, the order map libraries expect."""
        return (self.latitude, self.longitude)


@dataclass(frozen=True, slots=True)
class RouteSnapshot:
    """Read-only view of a tracker's route at one point in time.

    Attributes:
        state: Tracker state when the snapshot was taken
        coordinates: Waypoints in arrival order
        max_points: Capacity of the route
        permission_denied: Whether the last authorization attempt failed
        total_distance_km: Geodesic length of the polyline
    """

    state: TrackingState
    coordinates: tuple[Coordinate, ...] = field(default_factory=tuple)
    max_points: int = 15
    permission_denied: bool = False
    total_distance_km: float = 0.0

    @property
    def num_points(self) -> int:
        """Return the number of recorded waypoints."""
        return len(self.coordinates)

    @property
    def is_complete(self) -> bool:
        """Check if the route has reached its capacity."""
        return len(self.coordinates) >= self.max_points

    @property
    def home(self) -> Optional[Coordinate]:
        """Return the first waypoint, if any."""
        return self.coordinates[0] if self.coordinates else None

    @property
    def destination(self) -> Optional[Coordinate]:
        """Return the last waypoint once the route is complete."""
        if self.is_complete and self.coordinates:
            return self.coordinates[-1]
        return None
