"""Step schedulers for transitions."""

from styleshift.scheduler.scheduler import (
    BaseScheduler,
    ManualScheduler,
    MonotonicScheduler,
    Schedulable,
    Scheduler,
)

__all__ = [
    "BaseScheduler",
    "ManualScheduler",
    "MonotonicScheduler",
    "Schedulable",
    "Scheduler",
]
