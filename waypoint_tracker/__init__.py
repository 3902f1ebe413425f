"""Top-level package for the waypoint tracker.

Records a user's position at a fixed interval, keeps the resulting
route capped at a maximum number of waypoints, persists it across
restarts and streams tracking events to a map renderer.
"""

from .config import AppConfig, TrackerConfig, get_config, reset_config
from .container import Container, get_container, reset_container
from .domain import Coordinate, ErrorKind, PermissionStatus, RouteSnapshot, TrackingState
from .services import RouteTracker

__all__ = [
    "AppConfig",
    "Container",
    "Coordinate",
    "ErrorKind",
    "PermissionStatus",
    "RouteSnapshot",
    "RouteTracker",
    "TrackerConfig",
    "TrackingState",
    "get_config",
    "get_container",
    "reset_config",
    "reset_container",
]
