"""Persistence port - Durable storage of the current route.

This protocol replaces ambient key/value storage with an injected
abstraction. Stores hold a serialized copy of the route, never a live
reference to the tracker's list.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import Coordinate


class RouteStorePort(Protocol):
    """Port for route persistence.

    Implementations:
    - adapters/persistence/json_file_store.py (JsonFileRouteStore) - Production
    - adapters/persistence/memory_store.py (InMemoryRouteStore) - Testing
    """

    def load(self) -> Optional[tuple[Coordinate, ...]]:
        """Load the stored route.

        Returns:
            The stored coordinates in arrival order, or None when nothing
            is stored or the stored payload is malformed.
        """
        ...

    def save(self, coordinates: Sequence[Coordinate]) -> None:
        """Overwrite the stored route with ``coordinates``.

        A subsequent ``load`` observes either the previous route or the
        new one, never a partial write.

        Raises:
            PersistenceWriteError: If the route cannot be written.
        """
        ...

    def clear(self) -> None:
        """Remove the stored route.

        Raises:
            PersistenceWriteError: If the stored route cannot be removed.
        """
        ...
