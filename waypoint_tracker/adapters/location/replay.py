"""Replay location provider.

Plays back a recorded track one point per sample. Used for demos,
simulations and tests; a CSV track can be loaded with ``from_csv``.
"""

from __future__ import annotations

import csv
import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence, Union

from ...domain.errors import SampleUnavailableError
from ...domain.models import Coordinate


@dataclass
class ReplayLocationProvider:
    """Location provider returning a fixed sequence of positions.

    Attributes:
        points: Positions returned in order
        loop: Restart from the first point once exhausted
    """

    points: Sequence[Coordinate]
    loop: bool = False

    _cursor: int = field(default=0, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.points = tuple(self.points)
        self._logger = logging.getLogger(__name__)

    @classmethod
    def from_csv(cls, path: Union[str, Path], loop: bool = False) -> ReplayLocationProvider:
        """Load a track from a CSV file with ``lat`` and ``lng`` (or ``lon``) columns.

        Rows without a usable position are skipped.
        """
        track_path = Path(path)
        points: list[Coordinate] = []

        with track_path.open(newline="", encoding="utf-8") as f:
            reader = csv.DictReader(f)
            for row in reader:
                lat = (row.get("lat") or "").strip()
                lng = (row.get("lng") or row.get("lon") or "").strip()
                if not lat or not lng:
                    continue
                try:
                    points.append(Coordinate(latitude=float(lat), longitude=float(lng)))
                except ValueError:
                    continue

        logging.getLogger(__name__).info(
            "Replay track loaded",
            extra={"path": str(track_path), "points": len(points)},
        )
        return cls(points=points, loop=loop)

    @property
    def remaining(self) -> int:
        with self._lock:
            return max(len(self.points) - self._cursor, 0)

    def sample(self, timeout_ms: int) -> Coordinate:
        """Return the next recorded position.

        Raises:
            SampleUnavailableError: When the track is exhausted.
        """
        with self._lock:
            if self.loop and self.points and self._cursor >= len(self.points):
                self._cursor = 0
            if self._cursor >= len(self.points):
                raise SampleUnavailableError("Replay track exhausted", provider="replay")
            point = self.points[self._cursor]
            self._cursor += 1
            return point
