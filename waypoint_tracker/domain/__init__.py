"""Domain layer - Core tracking models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    ConfigurationError,
    MalformedPersistedDataError,
    PermissionDeniedError,
    PersistenceWriteError,
    RenderingError,
    SampleTimedOutError,
    SampleUnavailableError,
    WaypointTrackerError,
)
from .models import (
    Coordinate,
    ErrorKind,
    PermissionStatus,
    RouteSnapshot,
    TrackingState,
)

__all__ = [
    # Models
    "Coordinate",
    "ErrorKind",
    "PermissionStatus",
    "RouteSnapshot",
    "TrackingState",
    # Errors
    "WaypointTrackerError",
    "PermissionDeniedError",
    "SampleTimedOutError",
    "SampleUnavailableError",
    "PersistenceWriteError",
    "MalformedPersistedDataError",
    "ConfigurationError",
    "RenderingError",
]
