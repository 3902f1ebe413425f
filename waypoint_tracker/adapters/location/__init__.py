"""Location adapters - Implementations of LocationProviderPort.

Available implementations:
- IpGeolocationProvider: HTTP IP geolocation lookup
- ReplayLocationProvider: Recorded track playback
- TimeoutLocationProvider: Hard timeout around another provider
"""

from .ip_geolocation import IpGeolocationProvider
from .replay import ReplayLocationProvider
from .timeout import TimeoutLocationProvider

__all__ = ["IpGeolocationProvider", "ReplayLocationProvider", "TimeoutLocationProvider"]
