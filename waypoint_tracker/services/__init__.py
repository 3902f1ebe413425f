"""Services layer - Application orchestration.

This module contains the services that drive the adapters to fulfill
the tracking use cases.

Available services:
- RouteTracker: The tracking state machine
- ensure_authorized: Check-then-request location permission
- route_distance_km: Geodesic route length
"""

from .permissions import ensure_authorized
from .route_metrics import route_distance_km, segment_distances_km
from .route_tracker import RouteTracker

__all__ = ["RouteTracker", "ensure_authorized", "route_distance_km", "segment_distances_km"]
