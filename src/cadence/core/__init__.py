"""Debouncer/Throttler core: no I/O, timing comes from the clock and scheduler ports."""

from .debouncer import Debouncer
from .decorators import debounced, throttled
from .domain.enums import Outcome
from .errors import CadenceError, DisposedError, NoEventLoopError, SchedulerShutdownError, ValidationError
from .throttler import Throttler

__all__ = [
    "CadenceError",
    "Debouncer",
    "DisposedError",
    "NoEventLoopError",
    "Outcome",
    "SchedulerShutdownError",
    "Throttler",
    "ValidationError",
    "debounced",
    "throttled",
]
