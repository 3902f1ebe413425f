"""Typed domain errors for the waypoint tracker.

All errors inherit from WaypointTrackerError and can optionally
wrap a root cause exception for debugging. Adapters translate
library exceptions (requests, OSError, pydantic) into these types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .models import ErrorKind


@dataclass
class WaypointTrackerError(Exception):
    """Base error for the waypoint tracker domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)

    @property
    def kind(self) -> Optional[ErrorKind]:
        """Category reported to render sinks, if this error is reportable."""
        return None


@dataclass
class PermissionDeniedError(WaypointTrackerError):
    """Location access was refused or could not be requested.

    Attributes:
        status: Last permission status observed, if any
    """

    status: Optional[str] = None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return ErrorKind.PERMISSION_DENIED


@dataclass
class SampleTimedOutError(WaypointTrackerError):
    """A location sample did not resolve within its timeout.

    Attributes:
        timeout_ms: The timeout that expired
    """

    timeout_ms: int = 0

    @property
    def kind(self) -> Optional[ErrorKind]:
        return ErrorKind.SAMPLE_TIMED_OUT


@dataclass
class SampleUnavailableError(WaypointTrackerError):
    """The location source could not produce a position.

    Attributes:
        provider: Name of the provider that failed
    """

    provider: str = ""

    @property
    def kind(self) -> Optional[ErrorKind]:
        return ErrorKind.SAMPLE_UNAVAILABLE


@dataclass
class PersistenceWriteError(WaypointTrackerError):
    """Saving or clearing the stored route failed.

    Attributes:
        location: Storage location (file path or key) involved
    """

    location: Optional[str] = None

    @property
    def kind(self) -> Optional[ErrorKind]:
        return ErrorKind.PERSISTENCE_WRITE


@dataclass
class MalformedPersistedDataError(WaypointTrackerError):
    """Stored route payload could not be decoded.

    Stores catch this and report the route as absent.
    """

    @property
    def kind(self) -> Optional[ErrorKind]:
        return ErrorKind.MALFORMED_PERSISTED_DATA


@dataclass
class ConfigurationError(WaypointTrackerError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
    """

    setting_name: str = ""


@dataclass
class RenderingError(WaypointTrackerError):
    """Map rendering failed.

    Attributes:
        output_path: Path where rendering was attempted
        renderer_type: Type of renderer that failed
    """

    output_path: Optional[str] = None
    renderer_type: str = ""
