"""Scheduling port - Cancellable periodic tasks.

RouteTracker holds the handle returned by ``schedule_periodic`` and
cancels it on stop, reset and completion.
"""

from __future__ import annotations

from typing import Callable, Protocol


class ScheduledTaskPort(Protocol):
    """Handle to a scheduled periodic task."""

    @property
    def cancelled(self) -> bool:
        """Whether ``cancel`` has been called."""
        ...

    def cancel(self) -> None:
        """Stop future runs. Idempotent; never waits for a running callback."""
        ...


class SchedulerPort(Protocol):
    """Port for periodic scheduling.

    Implementations:
    - adapters/scheduling/threading_scheduler.py (ThreadingScheduler) - Production
    - adapters/scheduling/manual_scheduler.py (ManualScheduler) - Testing
    """

    def schedule_periodic(
        self,
        interval_seconds: float,
        callback: Callable[[], None],
        name: str = "task",
    ) -> ScheduledTaskPort:
        """Run ``callback`` every ``interval_seconds`` until cancelled.

        The first run happens one interval after scheduling.
        """
        ...

    def shutdown(self) -> None:
        """Cancel every task created by this scheduler."""
        ...
