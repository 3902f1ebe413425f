"""Fan-out render sink.

Forwards every event to each wrapped sink in order. A sink that raises
is logged and skipped so the remaining sinks still receive the event.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Sequence

from ...domain.models import Coordinate, ErrorKind
from ...ports.rendering import RenderSinkPort


@dataclass
class CompositeRenderSink:
    """RenderSinkPort that dispatches to several sinks."""

    sinks: Sequence[RenderSinkPort] = field(default_factory=tuple)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.sinks = tuple(self.sinks)
        self._logger = logging.getLogger(__name__)

    def _dispatch(self, event: str, *args: Any) -> None:
        for sink in self.sinks:
            try:
                getattr(sink, event)(*args)
            except Exception as e:
                self._logger.error(
                    "Render sink failed",
                    extra={"event": event, "sink": type(sink).__name__, "error": str(e)},
                )

    def on_route_loaded(self, coordinates: Sequence[Coordinate]) -> None:
        self._dispatch("on_route_loaded", coordinates)

    def on_waypoint_added(self, coordinate: Coordinate, index: int) -> None:
        self._dispatch("on_waypoint_added", coordinate, index)

    def on_tracking_started(self) -> None:
        self._dispatch("on_tracking_started")

    def on_tracking_stopped(self) -> None:
        self._dispatch("on_tracking_stopped")

    def on_destination_reached(self, coordinate: Coordinate) -> None:
        self._dispatch("on_destination_reached", coordinate)

    def on_route_reset(self) -> None:
        self._dispatch("on_route_reset")

    def on_error(self, kind: ErrorKind, message: str) -> None:
        self._dispatch("on_error", kind, message)
