from __future__ import annotations

from datetime import timedelta
from typing import Any, Callable, Union

from ..core.errors import DisposedError, ValidationError

Interval = Union[int, float, timedelta]


def require_callable(value: Any, name: str = "action") -> Callable[..., Any]:
    if value is None:
        raise ValidationError(f"{name} must not be None")
    if not callable(value):
        raise ValidationError(f"{name} must be callable, got {type(value).__name__}")
    return value


def require_positive_interval(value: Interval, name: str = "interval") -> float:
    """Normalize an interval to float seconds, rejecting zero and negatives.

    Accepts seconds as int/float or a ``datetime.timedelta``. ``bool`` is
    rejected even though it is an int subclass.
    """
    if isinstance(value, timedelta):
        seconds = value.total_seconds()
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        seconds = float(value)
    else:
        raise ValidationError(f"{name} must be a number of seconds or a timedelta, got {type(value).__name__}")
    if not seconds > 0:  # also catches NaN
        raise ValidationError(f"{name} must be greater than zero, got {seconds!r}")
    return seconds


def require_not_disposed(disposed: bool, obj: object) -> None:
    if disposed:
        raise DisposedError(obj)
