"""Replay a list of call times through a limiter on virtual time.

Used by the CLI to show which calls a debouncer or throttler would run, and
when, without waiting in real time.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

from ..core.debouncer import Debouncer
from ..core.errors import ValidationError
from ..core.throttler import Throttler
from ..infra.virtual_time import ManualScheduler


@dataclass(frozen=True)
class Execution:
    at_ms: int
    call: int  # 1-based position in the replayed timeline
    called_at_ms: int


def _check_times(times_ms: Sequence[int]) -> None:
    if not times_ms:
        raise ValidationError("At least one call time is required")
    if any(t < 0 for t in times_ms):
        raise ValidationError("Call times must not be negative")
    if any(b < a for a, b in zip(times_ms, times_ms[1:])):
        raise ValidationError("Call times must be in non-decreasing order")


def _replay(
    times_ms: Sequence[int],
    submit: Callable[[Callable[[], None]], object],
    scheduler: ManualScheduler,
) -> list[Execution]:
    executions: list[Execution] = []
    clock = scheduler.clock
    for index, called_at in enumerate(times_ms, start=1):
        scheduler.advance_to(called_at / 1000)

        def action(index: int = index, called_at: int = called_at) -> None:
            executions.append(Execution(round(clock.now() * 1000), index, called_at))

        submit(action)
    scheduler.run_all()
    return executions


def replay_throttle(times_ms: Sequence[int], interval_ms: int, *, execute_trailing: bool = True) -> list[Execution]:
    _check_times(times_ms)
    scheduler = ManualScheduler()
    with Throttler(interval_ms / 1000, clock=scheduler.clock, scheduler=scheduler) as throttler:
        return _replay(times_ms, lambda action: throttler.throttle(action, execute_trailing), scheduler)


def replay_debounce(times_ms: Sequence[int], delay_ms: int) -> list[Execution]:
    _check_times(times_ms)
    scheduler = ManualScheduler()
    with Debouncer(delay_ms / 1000, clock=scheduler.clock, scheduler=scheduler) as debouncer:
        return _replay(times_ms, debouncer.debounce, scheduler)
