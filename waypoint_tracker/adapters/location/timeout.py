"""Timeout wrapper for location providers.

Runs the wrapped provider on a daemon worker thread and waits at most
``timeout_ms`` for it. A provider that hangs is left to finish on its own
and its eventual result is dropped. Until it does, further samples fail
fast instead of starting a second request.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Optional

from ...domain.errors import SampleTimedOutError, SampleUnavailableError, WaypointTrackerError
from ...domain.models import Coordinate
from ...ports.location import LocationProviderPort


class _Outcome:
    __slots__ = ("coordinate", "error")

    def __init__(self) -> None:
        self.coordinate: Optional[Coordinate] = None
        self.error: Optional[Exception] = None


@dataclass
class TimeoutLocationProvider:
    """Enforces the sample timeout around any LocationProviderPort.

    Attributes:
        inner: The provider doing the actual lookup
    """

    inner: LocationProviderPort
    _worker: Optional[threading.Thread] = field(default=None, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def sample(self, timeout_ms: int) -> Coordinate:
        outcome = _Outcome()

        def run() -> None:
            try:
                outcome.coordinate = self.inner.sample(timeout_ms)
            except Exception as e:  # re-raised in the caller thread
                outcome.error = e

        with self._lock:
            if self._worker is not None and self._worker.is_alive():
                raise SampleUnavailableError(
                    "Previous location sample still running",
                    provider=type(self.inner).__name__,
                )
            worker = threading.Thread(target=run, name="location-sample", daemon=True)
            self._worker = worker
            worker.start()
        worker.join(timeout_ms / 1000)

        if worker.is_alive():
            self._logger.warning(
                "Location sample timed out",
                extra={"timeout_ms": timeout_ms, "provider": type(self.inner).__name__},
            )
            raise SampleTimedOutError(
                f"No position within {timeout_ms} ms", timeout_ms=timeout_ms
            )

        if outcome.error is not None:
            if isinstance(outcome.error, WaypointTrackerError):
                raise outcome.error
            raise SampleUnavailableError(
                "Location provider failed",
                provider=type(self.inner).__name__,
                cause=outcome.error,
            )

        assert outcome.coordinate is not None
        return outcome.coordinate
