from __future__ import annotations

import heapq
import itertools
import logging
from threading import Lock
from typing import Callable

from ..core.ports.clock_port import ClockPort
from ..core.ports.scheduler_port import SchedulerPort, TimerHandle

logger = logging.getLogger(__name__)


class ManualClock(ClockPort):
    """Clock that only moves when told to. Starts at ``start`` seconds."""

    def __init__(self, start: float = 0.0) -> None:
        self._now = float(start)
        self._lock = Lock()

    def now(self) -> float:
        with self._lock:
            return self._now

    def sleep(self, seconds: float) -> None:
        self.advance(seconds)

    def advance(self, seconds: float) -> float:
        if seconds < 0:
            raise ValueError("Cannot move a clock backwards")
        with self._lock:
            self._now += seconds
            return self._now

    def set(self, timestamp: float) -> None:
        with self._lock:
            if timestamp < self._now:
                raise ValueError("Cannot move a clock backwards")
            self._now = float(timestamp)


class _ManualTimer:
    __slots__ = ("due", "callback", "cancelled")

    def __init__(self, due: float, callback: Callable[[], None]) -> None:
        self.due = due
        self.callback = callback
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler(SchedulerPort):
    """Discrete-event scheduler driven by a ManualClock.

    Nothing fires until advance()/advance_to() is called; due callbacks then
    run on the calling thread in due-time order (ties in scheduling order),
    with the clock set to each callback's due time while it runs.

    Example:
        clock = ManualClock()
        scheduler = ManualScheduler(clock)
        throttler = Throttler(1.0, clock=clock, scheduler=scheduler)
        throttler.throttle(a)          # runs at t=0
        clock.advance(0.5)
        throttler.throttle(b)          # trailing, due at t=1.0
        scheduler.advance(0.5)         # runs b
    """

    def __init__(self, clock: ManualClock | None = None) -> None:
        self.clock = clock or ManualClock()
        self._lock = Lock()
        self._queue: list[tuple[float, int, _ManualTimer]] = []
        self._seq = itertools.count()

    def schedule_after(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        timer = _ManualTimer(self.clock.now() + max(0.0, delay), callback)
        with self._lock:
            heapq.heappush(self._queue, (timer.due, next(self._seq), timer))
        return timer

    @property
    def pending_count(self) -> int:
        with self._lock:
            return sum(1 for _, _, timer in self._queue if not timer.cancelled)

    def next_due(self) -> float | None:
        with self._lock:
            self._drop_cancelled_locked()
            return self._queue[0][0] if self._queue else None

    def advance(self, seconds: float) -> int:
        """Move time forward by seconds, firing every callback that becomes due. Returns the fire count."""
        if seconds < 0:
            raise ValueError("Cannot move a clock backwards")
        return self.advance_to(self.clock.now() + seconds)

    def advance_to(self, timestamp: float) -> int:
        fired = 0
        while True:
            with self._lock:
                self._drop_cancelled_locked()
                if not self._queue or self._queue[0][0] > timestamp:
                    break
                _, _, timer = heapq.heappop(self._queue)
            if timer.due > self.clock.now():
                self.clock.set(timer.due)
            fired += 1
            timer.callback()
        if timestamp > self.clock.now():
            self.clock.set(timestamp)
        return fired

    def run_all(self) -> int:
        """Fire callbacks until the queue is empty, including ones scheduled by callbacks."""
        fired = 0
        while (due := self.next_due()) is not None:
            fired += self.advance_to(due)
        return fired

    def _drop_cancelled_locked(self) -> None:
        while self._queue and self._queue[0][2].cancelled:
            heapq.heappop(self._queue)
