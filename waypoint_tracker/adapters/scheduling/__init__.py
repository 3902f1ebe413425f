"""Scheduling adapters - Implementations of SchedulerPort.

Available implementations:
- ThreadingScheduler: Daemon-thread periodic tasks with immediate cancel
- ManualScheduler: Explicitly ticked tasks for testing
"""

from .manual_scheduler import ManualScheduler, ManualTask
from .threading_scheduler import ThreadingScheduler, ThreadTask

__all__ = ["ManualScheduler", "ManualTask", "ThreadingScheduler", "ThreadTask"]
