from __future__ import annotations

import asyncio
from threading import Lock
from typing import Callable, Optional

from ..core.errors import NoEventLoopError
from ..core.ports.scheduler_port import SchedulerPort, TimerHandle


class AsyncioScheduler(SchedulerPort):
    """Schedule callbacks on an asyncio event loop via ``loop.call_later``.

    Deferred actions then run on the loop thread, which suits UI-style code
    that must touch loop-bound state. Without an explicit loop the running
    loop at scheduling time is used. Scheduling from another thread is
    supported when a loop is given explicitly; otherwise scheduling outside
    a running loop raises NoEventLoopError.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def schedule_after(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None
        loop = self._loop or running
        if loop is None:
            raise NoEventLoopError()
        if running is loop:
            return loop.call_later(max(0.0, delay), callback)
        return _ThreadsafeLoopHandle(loop, max(0.0, delay), callback)


class _ThreadsafeLoopHandle:
    def __init__(self, loop: asyncio.AbstractEventLoop, delay: float, callback: Callable[[], None]) -> None:
        self._loop = loop
        self._lock = Lock()
        self._handle: Optional[asyncio.TimerHandle] = None
        self._cancelled = False
        loop.call_soon_threadsafe(self._arm, delay, callback)

    def _arm(self, delay: float, callback: Callable[[], None]) -> None:
        with self._lock:
            if self._cancelled:
                return
            self._handle = self._loop.call_later(delay, callback)

    def cancel(self) -> None:
        with self._lock:
            self._cancelled = True
            handle, self._handle = self._handle, None
        if handle is not None and not self._loop.is_closed():
            self._loop.call_soon_threadsafe(handle.cancel)
