"""Folium route renderer adapter.

Implements RenderSinkPort by keeping its own copy of the waypoints and
re-rendering an interactive Leaflet map (via Folium) to an HTML file on
every route change:
- Polyline through all waypoints
- Marker per waypoint, "home" popup on the first one
- "destination" popup on the last one once the route is complete
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Sequence

from ...config import RenderingConfig, get_config
from ...domain.errors import RenderingError
from ...domain.models import Coordinate, ErrorKind
from ...services.route_metrics import route_distance_km


@dataclass
class FoliumRouteRenderer:
    """Folium-based interactive route map.

    Attributes:
        config: Rendering configuration (output path, tiles, labels)
        auto_save: Write the HTML file after every route change
    """

    config: RenderingConfig = field(default_factory=lambda: get_config().rendering)
    auto_save: bool = True

    tracking: bool = field(default=False, init=False)
    complete: bool = field(default=False, init=False)
    last_error: Optional[tuple[ErrorKind, str]] = field(default=None, init=False)

    _coordinates: List[Coordinate] = field(default_factory=list, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def coordinates(self) -> tuple[Coordinate, ...]:
        with self._lock:
            return tuple(self._coordinates)

    # RenderSinkPort

    def on_route_loaded(self, coordinates: Sequence[Coordinate]) -> None:
        with self._lock:
            self._coordinates = list(coordinates)
            self.complete = False
        self._changed()

    def on_waypoint_added(self, coordinate: Coordinate, index: int) -> None:
        with self._lock:
            if index < len(self._coordinates):
                self._logger.warning(
                    "Waypoint index already rendered, replacing tail",
                    extra={"index": index, "rendered": len(self._coordinates)},
                )
                del self._coordinates[index:]
            self._coordinates.append(coordinate)
        self._changed()

    def on_tracking_started(self) -> None:
        self.tracking = True

    def on_tracking_stopped(self) -> None:
        self.tracking = False

    def on_destination_reached(self, coordinate: Coordinate) -> None:
        with self._lock:
            self.complete = True
            self.tracking = False
        self._changed()

    def on_route_reset(self) -> None:
        with self._lock:
            self._coordinates.clear()
            self.complete = False
        self._changed()

    def on_error(self, kind: ErrorKind, message: str) -> None:
        self.last_error = (kind, message)
        self._logger.warning(
            "Tracking error reported", extra={"kind": kind.value, "detail": message}
        )

    # Rendering

    def build_map(self) -> Any:
        """Build the Folium map for the current route.

        Raises:
            RenderingError: If Folium is not installed.
        """
        try:
            import folium
        except ImportError as e:
            raise RenderingError(
                "Folium not installed",
                output_path=str(self.config.output_path),
                renderer_type="folium",
                cause=e,
            )

        with self._lock:
            coords = list(self._coordinates)
            complete = self.complete

        if not coords:
            return folium.Map(location=[0, 0], zoom_start=2, tiles=self.config.tiles)

        last = coords[-1]
        m = folium.Map(
            location=[last.latitude, last.longitude],
            zoom_start=self.config.zoom_start,
            tiles=self.config.tiles,
        )

        for i, point in enumerate(coords):
            is_home = i == 0
            is_destination = complete and i == len(coords) - 1
            if is_destination:
                popup: Optional[str] = self.config.destination_label
                icon_color = "red"
            elif is_home:
                popup = self.config.home_label
                icon_color = "green"
            else:
                popup = None
                icon_color = "blue"
            folium.Marker(
                location=[point.latitude, point.longitude],
                popup=popup,
                tooltip=f"#{i + 1}",
                icon=folium.Icon(color=icon_color),
            ).add_to(m)

        if len(coords) >= 2:
            folium.PolyLine(
                [[p.latitude, p.longitude] for p in coords],
                weight=self.config.line_weight,
                color=self.config.line_color,
                tooltip=f"{route_distance_km(coords):.2f} km",
            ).add_to(m)

        return m

    def render_html(self) -> str:
        """Return the map as a standalone HTML document."""
        return self.build_map().get_root().render()

    def save(self, output_path: Optional[Path] = None) -> Path:
        """Render the map and write it to ``output_path``.

        Raises:
            RenderingError: If rendering or writing fails.
        """
        output_path = output_path or self.config.output_path
        try:
            m = self.build_map()
            output_path.parent.mkdir(parents=True, exist_ok=True)
            m.save(str(output_path))
        except RenderingError:
            raise
        except Exception as e:
            self._logger.error(
                "Map rendering failed",
                extra={"error": str(e), "output_path": str(output_path)},
            )
            raise RenderingError(
                f"Map rendering failed: {e}",
                output_path=str(output_path),
                renderer_type="folium",
                cause=e,
            )

        self._logger.debug(
            "Map rendered",
            extra={"output_path": str(output_path), "points": len(self.coordinates)},
        )
        return output_path

    def _changed(self) -> None:
        if self.auto_save:
            self.save()
