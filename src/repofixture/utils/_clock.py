"""Commit timestamp sources.

A clock is any zero-argument callable returning a timezone-aware datetime.
Harness functions accept one wherever a commit is created so tests that
assert on ordering do not depend on wall-clock resolution.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Final, TypeAlias

Clock: TypeAlias = Callable[[], datetime]

# 2020-01-01T00:00:00Z
DEFAULT_EPOCH: Final = datetime(2020, 1, 1, tzinfo=UTC)


def utc_now() -> datetime:
    """Return the current time in UTC truncated to whole seconds.

    Git stores commit times with one-second resolution.
    """
    return datetime.now(UTC).replace(microsecond=0)


@dataclass(slots=True)
class StepClock:
    """Deterministic clock that advances by a fixed step on every call.

    Attributes:
        start: Timestamp returned by the first call.
        step: Increment applied after each call. Must be positive.

    Example:
        >>> clock = StepClock()
        >>> clock()
        datetime.datetime(2020, 1, 1, 0, 0, tzinfo=datetime.timezone.utc)
        >>> clock()
        datetime.datetime(2020, 1, 1, 0, 0, 1, tzinfo=datetime.timezone.utc)
    """

    start: datetime = DEFAULT_EPOCH
    step: timedelta = timedelta(seconds=1)
    _next: datetime = field(init=False)

    def __post_init__(self) -> None:
        if self.start.tzinfo is None:
            msg = f"StepClock start must be timezone-aware: {self.start!r}"
            raise ValueError(msg)
        if self.step <= timedelta(0):
            msg = f"StepClock step must be positive: {self.step!r}"
            raise ValueError(msg)
        self._next = self.start

    def __call__(self) -> datetime:
        current = self._next
        self._next = current + self.step
        return current
