"""Exception types raised by cadence limiters and schedulers."""

from __future__ import annotations


class CadenceError(Exception):
    """Base error for all cadence failures."""


class ValidationError(CadenceError, ValueError):
    """Raised when an interval or action fails validation at the call boundary."""


class DisposedError(CadenceError, RuntimeError):
    """Raised when a disposed limiter is asked to do more work."""

    def __init__(self, obj: object) -> None:
        self.object_name = type(obj).__name__
        super().__init__(f"Cannot access a disposed object: {self.object_name}")


class SchedulerShutdownError(CadenceError, RuntimeError):
    """Raised when a callback is scheduled on a scheduler that was shut down."""


class NoEventLoopError(CadenceError, RuntimeError):
    """Raised when the asyncio backend has no loop to schedule on.

    An AsyncioScheduler built without an explicit loop schedules on the loop
    running at call time, so deferred work must be submitted from inside it.
    """

    def __init__(self) -> None:
        super().__init__(
            "AsyncioScheduler has no event loop: call from a running loop or pass loop= explicitly"
        )
