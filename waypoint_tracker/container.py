"""Dependency injection container.

This module provides a simple DI container without external frameworks.
It allows registering and resolving the tracker's ports and services.

Design principles:
1. No magic - explicit registration and resolution
2. Testable - easy to swap implementations
3. Lazy loading - adapters instantiated on first use
4. Thread-safe - the scheduler calls back from worker threads
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, TypeVar

from .config import AppConfig, get_config

T = TypeVar("T")


@dataclass
class Container:
    """Dependency injection container.

    Usage:
        # Production
        container = Container.create_default(prompt=ask_user)
        tracker = container.resolve(RouteTracker)

        # Testing
        container = Container()
        container.register(LocationProviderPort, lambda: ReplayLocationProvider(points))
        provider = container.resolve(LocationProviderPort)

    Attributes:
        config: Application configuration
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _singletons: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _singleton_types: set[type[Any]] = field(default_factory=set, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(
        self,
        port_type: type[Any],
        factory: Callable[[], Any],
        singleton: bool = True,
    ) -> None:
        """Register a factory for a port type.

        Args:
            port_type: The type (usually a Protocol) to register.
            factory: A callable that creates instances of the type.
            singleton: If True, only one instance is created.
        """
        with self._lock:
            self._factories[port_type] = factory
            self._singletons.pop(port_type, None)
            if singleton:
                self._singleton_types.add(port_type)
            else:
                self._singleton_types.discard(port_type)

    def resolve(self, port_type: type[Any]) -> Any:
        """Resolve an instance of a port type.

        Raises:
            KeyError: If the type is not registered.
        """
        with self._lock:
            if port_type not in self._factories:
                raise KeyError(f"Type not registered: {port_type}")

            if port_type in self._singleton_types:
                if port_type not in self._singletons:
                    self._singletons[port_type] = self._factories[port_type]()
                return self._singletons[port_type]

            return self._factories[port_type]()

    def is_registered(self, port_type: type[Any]) -> bool:
        return port_type in self._factories

    def clear_singletons(self) -> None:
        """Clear all cached singletons.

        Call this in tests to ensure fresh instances.
        """
        with self._lock:
            self._singletons.clear()

    def clear_all(self) -> None:
        """Clear all registrations and singletons."""
        with self._lock:
            self._factories.clear()
            self._singletons.clear()
            self._singleton_types.clear()

    @classmethod
    def create_default(
        cls,
        config: Optional[AppConfig] = None,
        prompt: Optional[Callable[[], bool]] = None,
    ) -> Container:
        """Create a container with default production bindings.

        Args:
            config: Optional configuration override.
            prompt: Asks the user for location access; without it the
                consent-file gate can only honour a recorded answer.

        Returns:
            A configured Container instance.
        """
        from .adapters.location import (
            IpGeolocationProvider,
            ReplayLocationProvider,
            TimeoutLocationProvider,
        )
        from .adapters.permission import ConsentFilePermissionGate, StaticPermissionGate
        from .adapters.persistence import InMemoryRouteStore, JsonFileRouteStore
        from .adapters.rendering import (
            CompositeRenderSink,
            FoliumRouteRenderer,
            LoggingRenderSink,
        )
        from .adapters.scheduling import ThreadingScheduler
        from .domain.errors import ConfigurationError
        from .domain.models import PermissionStatus
        from .ports.location import LocationProviderPort
        from .ports.permission import PermissionGatePort
        from .ports.persistence import RouteStorePort
        from .ports.rendering import RenderSinkPort
        from .ports.scheduling import SchedulerPort
        from .services import RouteTracker

        config = config or get_config()
        container = cls(config=config)

        # Storage
        def create_store() -> RouteStorePort:
            if config.storage.backend == "memory":
                return InMemoryRouteStore()
            return JsonFileRouteStore(config.storage)

        container.register(RouteStorePort, create_store)

        # Permission
        def create_gate() -> PermissionGatePort:
            mode = config.permission.mode
            if mode == "always":
                return StaticPermissionGate.granted()
            if mode == "never":
                return StaticPermissionGate(PermissionStatus.DENIED, PermissionStatus.DENIED)
            return ConsentFilePermissionGate(config.storage, config.permission, prompt)

        container.register(PermissionGatePort, create_gate)

        # Location
        def create_provider() -> LocationProviderPort:
            source = config.location.source
            if source == "replay":
                if config.location.replay_file is None:
                    raise ConfigurationError(
                        "Replay source needs a track file",
                        setting_name="WPT_LOCATION_REPLAY_FILE",
                    )
                inner: LocationProviderPort = ReplayLocationProvider.from_csv(
                    config.location.replay_file, loop=config.location.replay_loop
                )
            else:
                inner = IpGeolocationProvider(config.location)
            return TimeoutLocationProvider(inner)

        container.register(LocationProviderPort, create_provider)

        # Rendering
        renderer = FoliumRouteRenderer(config.rendering)
        container.register(FoliumRouteRenderer, lambda: renderer)
        container.register(
            RenderSinkPort,
            lambda: CompositeRenderSink([LoggingRenderSink(), renderer]),
        )

        # Scheduling
        container.register(SchedulerPort, lambda: ThreadingScheduler())

        # Main service
        def create_tracker() -> RouteTracker:
            return RouteTracker(
                store=container.resolve(RouteStorePort),
                permission_gate=container.resolve(PermissionGatePort),
                location_provider=container.resolve(LocationProviderPort),
                render_sink=container.resolve(RenderSinkPort),
                scheduler=container.resolve(SchedulerPort),
                config=config.tracker,
            )

        container.register(RouteTracker, create_tracker)

        return container


# Global default container (lazy initialized)
_default_container: Optional[Container] = None
_container_lock = threading.Lock()


def get_container() -> Container:
    """Get the default application container.

    Returns:
        The default Container instance (creates one if needed).
    """
    global _default_container
    if _default_container is None:
        with _container_lock:
            if _default_container is None:
                _default_container = Container.create_default()
    return _default_container


def reset_container() -> None:
    """Reset the default container.

    Call this in tests to ensure a fresh container.
    """
    global _default_container
    with _container_lock:
        if _default_container is not None:
            _default_container.clear_all()
        _default_container = None
