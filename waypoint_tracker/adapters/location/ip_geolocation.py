"""IP geolocation provider.

Approximates the current position from the public IP address through an
HTTP lookup service (ip-api.com by default). Coarse, but available on
any networked host without GPS hardware.

The request timeout is the sample timeout, so a slow service fails
with SampleTimedOutError instead of blocking the tracker.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import requests

from ...config import LocationConfig, get_config
from ...domain.errors import SampleTimedOutError, SampleUnavailableError
from ...domain.models import Coordinate

_LAT_KEYS = ("lat", "latitude")
_LON_KEYS = ("lon", "lng", "longitude")


def _first(payload: dict[str, Any], keys: tuple[str, ...]) -> Any:
    for key in keys:
        if payload.get(key) is not None:
            return payload[key]
    return None


@dataclass
class IpGeolocationProvider:
    """Location provider backed by an IP geolocation HTTP service.

    This adapter implements LocationProviderPort.

    Attributes:
        config: Location configuration (service URL, user agent)
        session: HTTP session, injectable for tests
    """

    config: LocationConfig = field(default_factory=lambda: get_config().location)
    session: Optional[requests.Session] = None

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        if self.session is None:
            self.session = requests.Session()
            self.session.headers["User-Agent"] = self.config.user_agent

    def sample(self, timeout_ms: int) -> Coordinate:
        """Look up the current position.

        Raises:
            SampleTimedOutError: If the service does not answer in time.
            SampleUnavailableError: On network errors, error statuses or
                payloads without a usable position.
        """
        assert self.session is not None
        url = self.config.ip_api_url

        try:
            response = self.session.get(url, timeout=timeout_ms / 1000)
            response.raise_for_status()
            payload = response.json()
        except requests.Timeout as e:
            raise SampleTimedOutError(
                f"Geolocation lookup exceeded {timeout_ms} ms",
                timeout_ms=timeout_ms,
                cause=e,
            )
        except (requests.RequestException, ValueError) as e:
            raise SampleUnavailableError(
                "Geolocation lookup failed",
                provider="ip",
                cause=e,
            )

        if not isinstance(payload, dict):
            raise SampleUnavailableError("Unexpected geolocation payload", provider="ip")

        if payload.get("status") == "fail":
            raise SampleUnavailableError(
                f"Geolocation service refused: {payload.get('message', 'unknown')}",
                provider="ip",
            )

        lat = _first(payload, _LAT_KEYS)
        lon = _first(payload, _LON_KEYS)
        if lat is None or lon is None:
            raise SampleUnavailableError("No position in geolocation payload", provider="ip")

        try:
            coordinate = Coordinate(latitude=float(lat), longitude=float(lon))
        except (TypeError, ValueError) as e:
            raise SampleUnavailableError(
                "Invalid position in geolocation payload", provider="ip", cause=e
            )

        self._logger.debug(
            "Geolocation sample",
            extra={"lat": coordinate.latitude, "lon": coordinate.longitude},
        )
        return coordinate
