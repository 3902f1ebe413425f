"""Route tracker service - The tracking state machine.

The tracker owns the waypoint list and drives every other component:

    initialize()  IDLE -> load stored route -> COMPLETE if already full
                  -> AWAITING_PERMISSION -> SAMPLING (one immediate sample,
                  then one sample per period) -> COMPLETE at max_points
    stop()        SAMPLING -> IDLE
    reset()       any state -> clear route and storage -> initialize()

Concurrency: public operations and sample results are serialized by an
RLock. Location requests and render notifications run outside the lock,
so ``stop`` never waits for a slow provider. Every stop/reset bumps a
generation counter; a sample started under an older generation is
discarded when it resolves. Only one location request is outstanding at a
time, across generations: a tick or restart that finds one running skips.
Saves run under the lock, so a late save can never resurrect a route that
``reset`` just cleared. Notifications are delivered one batch at a time;
what is left of a sample batch is dropped once its generation is stale.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from functools import partial
from typing import Callable, List, Optional

from ..config import TrackerConfig, get_config
from ..domain.errors import PersistenceWriteError, WaypointTrackerError
from ..domain.models import Coordinate, ErrorKind, RouteSnapshot, TrackingState
from ..ports.location import LocationProviderPort
from ..ports.permission import PermissionGatePort
from ..ports.persistence import RouteStorePort
from ..ports.rendering import RenderSinkPort
from ..ports.scheduling import ScheduledTaskPort, SchedulerPort
from .permissions import ensure_authorized
from .route_metrics import route_distance_km

Notification = Callable[[], None]


@dataclass
class RouteTracker:
    """Records a capped route of periodically sampled positions.

    Attributes:
        store: Persists the route after every change
        permission_gate: Authorizes location access
        location_provider: Produces position samples
        render_sink: Receives tracking events
        scheduler: Runs the periodic sampling task
        config: Limits and timings (max_points, periods, timeout)
    """

    store: RouteStorePort
    permission_gate: PermissionGatePort
    location_provider: LocationProviderPort
    render_sink: RenderSinkPort
    scheduler: SchedulerPort
    config: TrackerConfig = field(default_factory=lambda: get_config().tracker)

    _route: List[Coordinate] = field(default_factory=list, repr=False)
    _state: TrackingState = field(default=TrackingState.IDLE, repr=False)
    _permission_denied: bool = field(default=False, repr=False)
    _hydrated: bool = field(default=False, repr=False)
    _generation: int = field(default=0, repr=False)
    _sampling: bool = field(default=False, repr=False)
    _task: Optional[ScheduledTaskPort] = field(default=None, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _dispatch_lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def max_points(self) -> int:
        return self.config.max_points

    @property
    def state(self) -> TrackingState:
        with self._lock:
            return self._state

    @property
    def permission_denied(self) -> bool:
        """True while initialization is blocked by a denied permission."""
        with self._lock:
            return self._permission_denied

    @property
    def route(self) -> tuple[Coordinate, ...]:
        with self._lock:
            return tuple(self._route)

    @property
    def is_complete(self) -> bool:
        return self.state is TrackingState.COMPLETE

    def snapshot(self) -> RouteSnapshot:
        """Return an immutable view of the tracker."""
        with self._lock:
            state = self._state
            coordinates = tuple(self._route)
            denied = self._permission_denied
        return RouteSnapshot(
            state=state,
            coordinates=coordinates,
            max_points=self.max_points,
            permission_denied=denied,
            total_distance_km=route_distance_km(coordinates),
        )

    # Transitions

    def initialize(self) -> TrackingState:
        """Load the stored route, obtain permission and start sampling.

        Safe to call again after a permission denial or ``stop``; a
        no-op while sampling or once complete.

        Returns:
            The state after initialization.
        """
        pending: List[Notification] = []
        with self._lock:
            if self._state in (TrackingState.SAMPLING, TrackingState.COMPLETE):
                self._logger.debug(
                    "Initialize ignored", extra={"state": self._state.name}
                )
                return self._state

            self._generation += 1
            generation = self._generation

            if not self._hydrated:
                self._hydrate(pending)

            if len(self._route) >= self.max_points:
                self._complete(pending)
                state = self._state
            else:
                self._state = TrackingState.AWAITING_PERMISSION
                self._permission_denied = False
                state = self._state
        self._dispatch(pending)
        if state is TrackingState.COMPLETE:
            return state

        granted = ensure_authorized(self.permission_gate)

        with self._lock:
            if generation != self._generation or self._state is not TrackingState.AWAITING_PERMISSION:
                self._logger.info(
                    "Initialization superseded", extra={"generation": generation}
                )
                return self._state

            if not granted:
                self._permission_denied = True
                pending.append(
                    partial(
                        self.render_sink.on_error,
                        ErrorKind.PERMISSION_DENIED,
                        "Location permission not granted",
                    )
                )
            else:
                self._state = TrackingState.SAMPLING
                pending.append(self.render_sink.on_tracking_started)
                self._logger.info(
                    "Tracking started",
                    extra={"points": len(self._route), "max_points": self.max_points},
                )
        self._dispatch(pending)
        if not granted:
            return self.state

        # Center on the current location right away, then sample periodically.
        self._sample(generation)

        with self._lock:
            if (
                generation == self._generation
                and self._state is TrackingState.SAMPLING
                and self._task is None
            ):
                self._task = self.scheduler.schedule_periodic(
                    self.config.sampling_period_seconds,
                    partial(self._sample, generation),
                    name="route-sampling",
                )
            return self._state

    def stop(self) -> None:
        """Stop sampling. No-op when idle or complete."""
        pending: List[Notification] = []
        with self._lock:
            if self._state in (TrackingState.IDLE, TrackingState.COMPLETE):
                return
            was_sampling = self._state is TrackingState.SAMPLING
            self._generation += 1
            self._cancel_task()
            self._state = TrackingState.IDLE
            if was_sampling:
                pending.append(self.render_sink.on_tracking_stopped)
            self._logger.info("Tracking stopped", extra={"points": len(self._route)})
        self._dispatch(pending)

    def reset(self) -> TrackingState:
        """Discard the route and start a new one.

        The caller is responsible for confirming with the user first.

        Returns:
            The state after re-initialization.
        """
        pending: List[Notification] = []
        with self._lock:
            was_sampling = self._state is TrackingState.SAMPLING
            self._generation += 1
            self._cancel_task()
            self._route.clear()
            self._hydrated = True
            self._permission_denied = False
            self._state = TrackingState.IDLE

            try:
                self.store.clear()
            except PersistenceWriteError as e:
                self._logger.warning("Failed to clear stored route", extra={"error": str(e)})
                pending.append(
                    partial(self.render_sink.on_error, ErrorKind.PERSISTENCE_WRITE, str(e))
                )

            if was_sampling:
                pending.append(self.render_sink.on_tracking_stopped)
            pending.append(self.render_sink.on_route_reset)
            self._logger.info("Route reset")
        self._dispatch(pending)
        return self.initialize()

    def close(self) -> None:
        """Stop tracking and release the scheduler."""
        self.stop()
        self.scheduler.shutdown()

    # Internals (call with the lock held unless noted)

    def _hydrate(self, pending: List[Notification]) -> None:
        try:
            loaded = self.store.load() or ()
        except (WaypointTrackerError, OSError) as e:
            self._logger.warning("Stored route unavailable", extra={"error": str(e)})
            loaded = ()

        if len(loaded) > self.max_points:
            self._logger.warning(
                "Stored route longer than max_points, truncating",
                extra={"points": len(loaded), "max_points": self.max_points},
            )
            loaded = tuple(loaded[: self.max_points])

        self._route = list(loaded)
        self._hydrated = True
        if loaded:
            pending.append(partial(self.render_sink.on_route_loaded, tuple(loaded)))

    def _complete(self, pending: List[Notification]) -> None:
        self._cancel_task()
        self._state = TrackingState.COMPLETE
        if self._route:
            destination = self._route[-1]
            pending.append(partial(self.render_sink.on_destination_reached, destination))
            self._logger.info(
                "Destination reached",
                extra={
                    "points": len(self._route),
                    "lat": destination.latitude,
                    "lon": destination.longitude,
                },
            )

    def _cancel_task(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    def _persist(self, pending: List[Notification]) -> None:
        try:
            self.store.save(tuple(self._route))
        except PersistenceWriteError as e:
            # The in-memory route stays authoritative; the next save catches up.
            self._logger.warning(
                "Failed to persist route",
                extra={"points": len(self._route), "error": str(e)},
            )
            pending.append(
                partial(self.render_sink.on_error, ErrorKind.PERSISTENCE_WRITE, str(e))
            )

    def _append(self, coordinate: Coordinate, pending: List[Notification]) -> None:
        self._route.append(coordinate)
        index = len(self._route) - 1
        self._persist(pending)
        pending.append(partial(self.render_sink.on_waypoint_added, coordinate, index))
        self._logger.info(
            "Point %d: %s, %s",
            index + 1,
            coordinate.latitude,
            coordinate.longitude,
            extra={"index": index},
        )
        if len(self._route) >= self.max_points:
            self._complete(pending)

    def _sample(self, generation: int) -> None:
        """Take one sample for ``generation``. Called without the lock."""
        pending: List[Notification] = []
        with self._lock:
            if generation != self._generation or self._state is not TrackingState.SAMPLING:
                return
            if len(self._route) >= self.max_points:
                self._complete(pending)
            elif self._sampling:
                self._logger.debug("Sample already outstanding, skipping")
                return
            else:
                self._sampling = True
        if pending:
            self._dispatch(pending, generation)
            return

        coordinate: Optional[Coordinate] = None
        try:
            coordinate = self.location_provider.sample(self.config.sample_timeout_ms)
        except WaypointTrackerError as e:
            self._logger.warning(
                "Failed to get new position",
                extra={"kind": e.kind.value if e.kind else None, "error": str(e)},
            )
        except Exception:
            self._logger.exception("Location provider raised unexpectedly")

        with self._lock:
            self._sampling = False
            if coordinate is None:
                return
            if generation != self._generation or self._state is not TrackingState.SAMPLING:
                self._logger.info(
                    "Discarding sample from a stopped session",
                    extra={"generation": generation},
                )
                return
            if len(self._route) >= self.max_points:
                self._complete(pending)
            else:
                self._append(coordinate, pending)
        self._dispatch(pending, generation)

    def _dispatch(self, pending: List[Notification], generation: Optional[int] = None) -> None:
        """Deliver queued notifications. Called without the lock.

        Batches are delivered one at a time. A batch tagged with a
        ``generation`` is cut short as soon as a stop or reset supersedes it.
        """
        with self._dispatch_lock:
            for notify in pending:
                if generation is not None and self._is_stale(generation):
                    self._logger.info(
                        "Dropping events from a stopped session",
                        extra={"generation": generation},
                    )
                    break
                try:
                    notify()
                except Exception:
                    self._logger.exception("Render sink raised while handling an event")
        pending.clear()

    def _is_stale(self, generation: int) -> bool:
        with self._lock:
            return generation != self._generation
