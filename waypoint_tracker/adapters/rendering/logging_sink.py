"""Render sink that only logs tracking events."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from ...domain.models import Coordinate, ErrorKind


@dataclass
class LoggingRenderSink:
    """Writes every tracking event to the log.

    Handy as a headless sink and as a second sink next to a map renderer.
    """

    logger_name: str = __name__
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(self.logger_name)

    def on_route_loaded(self, coordinates: Sequence[Coordinate]) -> None:
        self._logger.info("Route loaded", extra={"points": len(coordinates)})

    def on_waypoint_added(self, coordinate: Coordinate, index: int) -> None:
        self._logger.info(
            "Point %d: %s, %s",
            index + 1,
            coordinate.latitude,
            coordinate.longitude,
            extra={"index": index},
        )

    def on_tracking_started(self) -> None:
        self._logger.info("Tracking started")

    def on_tracking_stopped(self) -> None:
        self._logger.info("Tracking stopped")

    def on_destination_reached(self, coordinate: Coordinate) -> None:
        self._logger.info(
            "Destination reached",
            extra={"lat": coordinate.latitude, "lon": coordinate.longitude},
        )

    def on_route_reset(self) -> None:
        self._logger.info("Route reset")

    def on_error(self, kind: ErrorKind, message: str) -> None:
        self._logger.error("Tracking error: %s", message, extra={"kind": kind.value})
