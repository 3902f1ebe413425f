"""Persistence adapters - Implementations of RouteStorePort.

Available implementations:
- JsonFileRouteStore: Atomic JSON file storage
- InMemoryRouteStore: Serialized in-memory storage (testing, embedding)
"""

from .json_file_store import JsonFileRouteStore
from .memory_store import InMemoryRouteStore

__all__ = ["JsonFileRouteStore", "InMemoryRouteStore"]
