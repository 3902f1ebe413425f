"""Thread-based periodic scheduler.

Each task runs on its own daemon thread that waits on an Event between
runs, so ``cancel`` wakes it immediately instead of after the interval.
A callback that raises is logged and the schedule continues.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Callable, List

logger = logging.getLogger(__name__)


class ThreadTask:
    """Handle of a periodic task running on a daemon thread."""

    def __init__(self, interval_seconds: float, callback: Callable[[], None], name: str) -> None:
        self.interval_seconds = interval_seconds
        self.name = name
        self._callback = callback
        self._cancel_event = threading.Event()
        self._thread = threading.Thread(target=self._run, name=f"scheduler-{name}", daemon=True)

    @property
    def cancelled(self) -> bool:
        return self._cancel_event.is_set()

    def start(self) -> None:
        self._thread.start()

    def cancel(self) -> None:
        self._cancel_event.set()

    def join(self, timeout: float | None = None) -> None:
        """Wait for the worker thread to exit (after ``cancel``)."""
        if self._thread is not threading.current_thread():
            self._thread.join(timeout)

    def _run(self) -> None:
        while not self._cancel_event.wait(self.interval_seconds):
            try:
                self._callback()
            except Exception:
                logger.exception("Scheduled task failed", extra={"task": self.name})


@dataclass
class ThreadingScheduler:
    """Scheduler running every task on a dedicated daemon thread.

    This adapter implements SchedulerPort.
    """

    _tasks: List[ThreadTask] = field(default_factory=list, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def schedule_periodic(
        self,
        interval_seconds: float,
        callback: Callable[[], None],
        name: str = "task",
    ) -> ThreadTask:
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")

        task = ThreadTask(interval_seconds, callback, name)
        with self._lock:
            self._tasks = [t for t in self._tasks if not t.cancelled]
            self._tasks.append(task)
        task.start()
        logger.debug(
            "Periodic task scheduled",
            extra={"task": name, "interval_seconds": interval_seconds},
        )
        return task

    def shutdown(self) -> None:
        with self._lock:
            tasks, self._tasks = self._tasks, []
        for task in tasks:
            task.cancel()
        logger.debug("Scheduler shut down", extra={"tasks": len(tasks)})
