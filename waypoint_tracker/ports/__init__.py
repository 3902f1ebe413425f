"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the tracking core and external
adapters. They enable dependency injection and make the system testable.

This module follows the Hexagonal Architecture pattern:
- Input ports: How the application is driven (services)
- Output ports: How the application drives external systems (adapters)
"""

from .location import LocationProviderPort
from .permission import PermissionGatePort
from .persistence import RouteStorePort
from .rendering import RenderSinkPort
from .scheduling import ScheduledTaskPort, SchedulerPort

__all__ = [
    # Location
    "LocationProviderPort",
    # Permission
    "PermissionGatePort",
    # Persistence
    "RouteStorePort",
    # Rendering
    "RenderSinkPort",
    # Scheduling
    "SchedulerPort",
    "ScheduledTaskPort",
]
