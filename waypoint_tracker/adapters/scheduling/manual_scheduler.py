"""Manually driven scheduler for testing.

Nothing runs on its own: ``tick`` fires every live task once, in the
caller's thread. This keeps tracker tests deterministic and fast.

Example:
    scheduler = ManualScheduler()
    tracker = RouteTracker(..., scheduler=scheduler)
    tracker.initialize()
    scheduler.tick()  # one sampling period elapses
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List


@dataclass
class ManualTask:
    """Handle of a task registered with ManualScheduler."""

    interval_seconds: float
    callback: Callable[[], None]
    name: str = "task"
    runs: int = 0
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualScheduler:
    """Scheduler whose tasks only run when ``tick`` is called.

    This adapter implements SchedulerPort.
    """

    tasks: List[ManualTask] = field(default_factory=list)

    def schedule_periodic(
        self,
        interval_seconds: float,
        callback: Callable[[], None],
        name: str = "task",
    ) -> ManualTask:
        task = ManualTask(interval_seconds, callback, name)
        self.tasks.append(task)
        return task

    @property
    def active_tasks(self) -> List[ManualTask]:
        return [t for t in self.tasks if not t.cancelled]

    def tick(self, times: int = 1) -> int:
        """Run every live task ``times`` times.

        Returns:
            Number of callback invocations.
        """
        calls = 0
        for _ in range(times):
            for task in self.active_tasks:
                # A previous callback in this tick may have cancelled it.
                if task.cancelled:
                    continue
                task.runs += 1
                task.callback()
                calls += 1
        return calls

    def shutdown(self) -> None:
        for task in self.tasks:
            task.cancel()
