"""In-memory route store.

Keeps the route as serialized JSON text, exactly as the file store
would, so callers never share a live list with the store. Useful for
tests and for embedding the tracker where durability is not needed.

Example:
    store = InMemoryRouteStore()
    store.fail_next_saves = 1  # simulate a transient write failure
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Optional, Sequence

from ...domain.errors import MalformedPersistedDataError, PersistenceWriteError
from ...domain.models import Coordinate
from .codec import decode_route, encode_route


@dataclass
class InMemoryRouteStore:
    """Thread-safe route store holding a serialized copy in memory.

    Attributes:
        payload: Serialized route, or None when nothing is stored
        fail_next_saves: Number of upcoming ``save`` calls that fail
        name: Store name for logging
    """

    payload: Optional[str] = None
    fail_next_saves: int = 0
    name: str = "memory"

    save_count: int = field(default=0, init=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(f"{__name__}.{self.name}")

    def load(self) -> Optional[tuple[Coordinate, ...]]:
        with self._lock:
            if self.payload is None:
                return None
            try:
                return decode_route(self.payload)
            except MalformedPersistedDataError as e:
                self._logger.warning(
                    "Stored route is malformed, ignoring it", extra={"error": str(e)}
                )
                return None

    def save(self, coordinates: Sequence[Coordinate]) -> None:
        with self._lock:
            if self.fail_next_saves > 0:
                self.fail_next_saves -= 1
                raise PersistenceWriteError("Simulated write failure", location=self.name)
            self.payload = encode_route(coordinates)
            self.save_count += 1

    def clear(self) -> None:
        with self._lock:
            self.payload = None
