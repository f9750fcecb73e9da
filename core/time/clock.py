"""
Back Office Core Time - Injectable Clock
==========================================
Ledger normalization needs a "now" for documents that arrive without a
date, and printed reports carry the day they were generated. Neither
calls datetime.now() directly: both ask a Clock, which callers inject
(SystemClock in production, FixedClock in tests).

Code that is not handed a clock falls back to the process default,
which tests can swap for the duration of a block with using_clock().
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Iterator, Protocol


class Clock(Protocol):
    def now_utc(self) -> datetime:
        ...  # pragma: no cover


class SystemClock:
    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


@dataclass(frozen=True)
class FixedClock:
    """
    Clock pinned to one timezone-aware instant.

        clock = FixedClock(datetime(2024, 1, 1, tzinfo=timezone.utc))
        later = clock.advanced(3600)
    """

    at: datetime

    def __post_init__(self):
        if not isinstance(self.at, datetime):
            raise ValueError("FixedClock requires a datetime.")
        if self.at.tzinfo is None:
            raise ValueError("FixedClock requires timezone-aware datetime.")

    def now_utc(self) -> datetime:
        return self.at.astimezone(timezone.utc)

    def advanced(self, seconds: float) -> FixedClock:
        return FixedClock(self.at + timedelta(seconds=seconds))


_default_clock: Clock = SystemClock()


def get_default_clock() -> Clock:
    return _default_clock


@contextmanager
def using_clock(clock: Clock) -> Iterator[Clock]:
    """Make `clock` the process default inside the with-block."""
    global _default_clock
    previous = _default_clock
    _default_clock = clock
    try:
        yield clock
    finally:
        _default_clock = previous
