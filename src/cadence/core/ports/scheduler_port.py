from __future__ import annotations

import itertools
import logging
from threading import Lock, Timer
from typing import Callable, Protocol

from ..errors import SchedulerShutdownError

logger = logging.getLogger(__name__)


class TimerHandle(Protocol):
    def cancel(self) -> None:
        """Prevent the callback from running. Safe to call more than once or after it fired."""


class SchedulerPort(Protocol):
    def schedule_after(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run callback once after delay seconds, on the scheduler's own context."""
        ...


class ThreadingScheduler:
    """Default scheduler: one daemon ``threading.Timer`` per scheduled callback.

    Callbacks run on the timer thread. An exception raised by a callback is
    reported through ``threading.excepthook`` like any other thread failure.
    """

    def __init__(self, *, thread_name_prefix: str = "cadence-timer") -> None:
        self._prefix = thread_name_prefix
        self._lock = Lock()
        self._timers: set[_ThreadTimerHandle] = set()
        self._counter = itertools.count(1)
        self._shutdown = False

    def schedule_after(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        with self._lock:
            if self._shutdown:
                raise SchedulerShutdownError("Cannot schedule callbacks after shutdown")
            handle = _ThreadTimerHandle(
                self,
                max(0.0, delay),
                callback,
                name=f"{self._prefix}-{next(self._counter)}",
            )
            self._timers.add(handle)
        handle.start()
        return handle

    @property
    def active_timers(self) -> int:
        with self._lock:
            return len(self._timers)

    @property
    def is_shutdown(self) -> bool:
        with self._lock:
            return self._shutdown

    def shutdown(self) -> None:
        """Cancel every outstanding timer and refuse new ones."""
        with self._lock:
            if self._shutdown:
                return
            self._shutdown = True
            timers = list(self._timers)
            self._timers.clear()
        for handle in timers:
            handle.cancel()
        if timers:
            logger.debug(f"Scheduler shut down, cancelled {len(timers)} timer(s)")

    def _forget(self, handle: "_ThreadTimerHandle") -> None:
        with self._lock:
            self._timers.discard(handle)


class _ThreadTimerHandle:
    def __init__(self, owner: ThreadingScheduler, delay: float, callback: Callable[[], None], *, name: str) -> None:
        self._owner = owner
        self._callback = callback
        self._timer = Timer(delay, self._run)
        self._timer.daemon = True
        self._timer.name = name

    def start(self) -> None:
        self._timer.start()

    def cancel(self) -> None:
        self._timer.cancel()
        self._owner._forget(self)

    def _run(self) -> None:
        try:
            self._callback()
        finally:
            self._owner._forget(self)
