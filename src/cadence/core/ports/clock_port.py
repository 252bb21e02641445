from __future__ import annotations

from typing import Protocol
import time


class ClockPort(Protocol):
    def now(self) -> float:
        """Return a monotonic timestamp in seconds."""
        ...

    def sleep(self, seconds: float) -> None:
        """Sleep for the given seconds."""


class SystemClock:
    def now(self) -> float:
        return time.monotonic()

    def sleep(self, seconds: float) -> None:
        time.sleep(seconds)
