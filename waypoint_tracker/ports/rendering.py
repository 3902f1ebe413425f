"""Rendering port - Consumers of tracking events.

The map or UI layer implements this protocol. The tracker calls it
fire-and-forget: notifications are dispatched outside the tracker's
lock and a raising sink never affects the route.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import Coordinate, ErrorKind


class RenderSinkPort(Protocol):
    """Port for tracking event consumers.

    Implementations:
    - adapters/rendering/folium_adapter.py (FoliumRouteRenderer)
    - adapters/rendering/logging_sink.py (LoggingRenderSink)
    """

    def on_route_loaded(self, coordinates: Sequence[Coordinate]) -> None:
        """A persisted route was hydrated at initialization."""
        ...

    def on_waypoint_added(self, coordinate: Coordinate, index: int) -> None:
        """A sample was appended at position ``index`` (0-based)."""
        ...

    def on_tracking_started(self) -> None:
        """Periodic sampling started."""
        ...

    def on_tracking_stopped(self) -> None:
        """Periodic sampling stopped before completion."""
        ...

    def on_destination_reached(self, coordinate: Coordinate) -> None:
        """The route is full; ``coordinate`` is its last waypoint."""
        ...

    def on_route_reset(self) -> None:
        """The route was cleared."""
        ...

    def on_error(self, kind: ErrorKind, message: str) -> None:
        """A reportable failure occurred."""
        ...
