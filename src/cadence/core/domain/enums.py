from __future__ import annotations

from enum import Enum


class Outcome(Enum):
    """Completion state of an async debounce/throttle handle."""

    EXECUTED = "EXECUTED"
    CANCELLED = "CANCELLED"  # superseded, cancelled, reset or disposed before firing
    DROPPED = "DROPPED"  # throttled with trailing execution disabled

    @property
    def executed(self) -> bool:
        return self is Outcome.EXECUTED
