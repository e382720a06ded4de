"""Cooperative, single-threaded schedulers for transition steps.

A schedulable asks to be called back "no earlier than N milliseconds from
now". Requests of one schedulable coalesce to the earliest requested time.
When a request is due the scheduler calls ``schedulable.step(scheduler,
delay)`` where *delay* is the time that passed since the schedulable last
ran, or since it first asked when it never ran before.

Callbacks requested while a pass is running never run in that same pass,
so a schedulable that keeps asking for the next opportunity cannot starve
the others.
"""

from __future__ import annotations

import logging
import time
from typing import Protocol

logger = logging.getLogger(__name__)


class Schedulable(Protocol):
    def step(self, scheduler: Scheduler, delay: int) -> None: ...


class Scheduler(Protocol):
    def step(self, schedulable: Schedulable, delay: int | None = None) -> None: ...

    def cancel(self, schedulable: Schedulable) -> None: ...


class BaseScheduler:
    """Request queue shared by the manual and the monotonic scheduler."""

    def __init__(self, frame_interval_ms: int = 0) -> None:
        if frame_interval_ms < 0:
            raise ValueError("frame_interval_ms must not be negative")
        self.frame_interval_ms = frame_interval_ms
        self._pending: dict[Schedulable, int] = {}
        self._last_run: dict[Schedulable, int] = {}

    @property
    def now(self) -> int:
        raise NotImplementedError

    @property
    def pending(self) -> int:
        """Number of schedulables waiting for a callback."""
        return len(self._pending)

    def next_due(self) -> int | None:
        """Time of the earliest pending request, ``None`` when idle."""
        if not self._pending:
            return None
        return min(self._pending.values())

    def step(self, schedulable: Schedulable, delay: int | None = None) -> None:
        """Request a callback after *delay* ms, or at the next opportunity."""
        now = self.now
        if delay is None:
            due = now + self.frame_interval_ms
        else:
            due = now + max(delay, 0)
        current = self._pending.get(schedulable)
        if current is None or due < current:
            self._pending[schedulable] = due
        self._last_run.setdefault(schedulable, now)

    def cancel(self, schedulable: Schedulable) -> None:
        """Drop any pending request of *schedulable*."""
        self._pending.pop(schedulable, None)
        self._last_run.pop(schedulable, None)

    def run_pending(self) -> int:
        """Run every request that is due now; return how many ran."""
        now = self.now
        due = sorted(
            ((when, index, item) for index, (item, when) in enumerate(self._pending.items()) if when <= now),
            key=lambda entry: (entry[0], entry[1]),
        )
        for _, _, schedulable in due:
            del self._pending[schedulable]
        for _, _, schedulable in due:
            last = self._last_run.get(schedulable, now)
            self._last_run[schedulable] = now
            schedulable.step(self, now - last)
        for _, _, schedulable in due:
            if schedulable not in self._pending:
                self._last_run.pop(schedulable, None)
        return len(due)


class ManualScheduler(BaseScheduler):
    """A scheduler driven by a virtual clock.

    Time only moves when :meth:`advance` is called, which makes transitions
    fully deterministic.
    """

    def __init__(self, frame_interval_ms: int = 0, start: int = 0) -> None:
        super().__init__(frame_interval_ms)
        self._now = start

    @property
    def now(self) -> int:
        return self._now

    def advance(self, ms: int) -> int:
        """Move the clock forward by *ms* and run one pass of due requests."""
        if ms < 0:
            raise ValueError("time cannot move backwards")
        self._now += ms
        return self.run_pending()


class MonotonicScheduler(BaseScheduler):
    """A scheduler driven by :func:`time.monotonic`, best effort only."""

    def __init__(self, frame_interval_ms: int = 16) -> None:
        super().__init__(frame_interval_ms)
        self._origin = time.monotonic()

    @property
    def now(self) -> int:
        return int((time.monotonic() - self._origin) * 1000)

    def run(self, until_idle: bool = True, max_passes: int | None = None) -> int:
        """Run passes until no request is pending; return the pass count.

        Sleeps between passes until the next request is due. With
        *until_idle* false only one pass runs.
        """
        passes = 0
        while self._pending:
            if max_passes is not None and passes >= max_passes:
                logger.debug("Stopping after %d passes with %d pending", passes, self.pending)
                break
            due = self.next_due()
            wait = due - self.now if due is not None else 0
            if wait > 0:
                time.sleep(wait / 1000.0)
            self.run_pending()
            passes += 1
            if not until_idle:
                break
        return passes
