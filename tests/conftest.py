"""Shared fixtures for the tracker test suite."""

from __future__ import annotations

from typing import Any, Callable, Optional

import pytest

from tests.fakes import RecordingRenderSink, track
from waypoint_tracker.adapters.location import ReplayLocationProvider
from waypoint_tracker.adapters.permission import StaticPermissionGate
from waypoint_tracker.adapters.persistence import InMemoryRouteStore
from waypoint_tracker.adapters.scheduling import ManualScheduler
from waypoint_tracker.config import TrackerConfig, reset_config
from waypoint_tracker.container import reset_container
from waypoint_tracker.services import RouteTracker


@pytest.fixture(autouse=True)
def _fresh_config(monkeypatch, tmp_path):
    """Isolate configuration and the global container per test."""
    monkeypatch.setenv("WPT_STORAGE_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("WPT_RENDER_OUTPUT_PATH", str(tmp_path / "map.html"))
    reset_config()
    reset_container()
    yield
    reset_config()
    reset_container()


@pytest.fixture
def sink() -> RecordingRenderSink:
    return RecordingRenderSink()


@pytest.fixture
def store() -> InMemoryRouteStore:
    return InMemoryRouteStore()


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def make_tracker(sink, store, scheduler) -> Callable[..., RouteTracker]:
    """Build a tracker wired to in-memory fakes.

    ``provider`` and ``gate`` override the default collaborators; any
    other keyword is a TrackerConfig field.
    """

    def _make(
        provider: Optional[Any] = None,
        gate: Optional[Any] = None,
        **config_kwargs: Any,
    ) -> RouteTracker:
        return RouteTracker(
            store=store,
            permission_gate=gate or StaticPermissionGate.granted(),
            location_provider=provider or ReplayLocationProvider(track(50)),
            render_sink=sink,
            scheduler=scheduler,
            config=TrackerConfig(**config_kwargs),
        )

    return _make
