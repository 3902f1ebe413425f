"""Location port - Single current-position samples.

Providers answer one request at a time and never retry; the retry
policy (the periodic schedule) belongs to RouteTracker.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import Coordinate


class LocationProviderPort(Protocol):
    """Port for location sampling.

    Implementations:
    - adapters/location/ip_geolocation.py (IpGeolocationProvider)
    - adapters/location/replay.py (ReplayLocationProvider)
    - adapters/location/timeout.py (TimeoutLocationProvider, wrapper)
    """

    def sample(self, timeout_ms: int) -> Coordinate:
        """Return the current position.

        Args:
            timeout_ms: Upper bound for the request in milliseconds.

        Returns:
            The sampled coordinate.

        Raises:
            SampleTimedOutError: If no position arrived within ``timeout_ms``.
            SampleUnavailableError: If the source cannot produce a position.
        """
        ...
