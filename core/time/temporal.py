"""
Back Office Core Time - Temporal Helpers
==========================================
Lenient date handling for loosely-typed back-office records.

RULES:
- Parsing never raises. Anything that cannot be read as a date is None.
- Naive values are taken as UTC so every comparison is between
  timezone-aware datetimes.
- Date-only values ("2024-01-05") mean midnight UTC of that day.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Any, Optional


logger = logging.getLogger("backoffice.time")

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


# ══════════════════════════════════════════════════════════════
# PARSING
# ══════════════════════════════════════════════════════════════

def _as_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def parse_datetime(value: Any) -> Optional[datetime]:
    """
    Read a datetime from a record field.

    Accepts datetime, date, epoch milliseconds and ISO-8601 strings
    (with or without a trailing "Z"). Returns None for missing or
    unreadable input.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return _as_utc(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=timezone.utc)
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z") or text.endswith("z"):
            text = text[:-1] + "+00:00"
        try:
            return _as_utc(datetime.fromisoformat(text))
        except ValueError:
            logger.debug(f"Unparseable date value: {value!r}")
            return None
    return None


def sort_key(dt: Optional[datetime]) -> datetime:
    """Missing or unparseable dates sort as the epoch."""
    return dt if dt is not None else EPOCH


def end_of_day(dt: datetime) -> datetime:
    """Last millisecond of dt's calendar day (23:59:59.999)."""
    return dt.replace(hour=23, minute=59, second=59, microsecond=999000)


# ══════════════════════════════════════════════════════════════
# DATE RANGE - closed interval, either side optional
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class DateRange:
    """
    Inclusive [date_from, date_to] bound pair built from raw input.

    date_to is widened to end-of-day so a same-day bound covers the
    whole day. A bound that was supplied but could not be parsed makes
    the range unsatisfiable: contains() is then always False.
    """

    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    unsatisfiable: bool = False

    @classmethod
    def from_bounds(cls, date_from: Any = None, date_to: Any = None) -> DateRange:
        start = parse_datetime(date_from)
        end = parse_datetime(date_to)
        bad_start = date_from not in (None, "") and start is None
        bad_end = date_to not in (None, "") and end is None
        if bad_start or bad_end:
            logger.warning(
                f"Unparseable date-range bound (from={date_from!r}, to={date_to!r}); "
                f"range matches nothing"
            )
        return cls(
            date_from=start,
            date_to=end_of_day(end) if end is not None else None,
            unsatisfiable=bad_start or bad_end,
        )

    @property
    def is_open(self) -> bool:
        """True when no bound restricts anything."""
        return (
            not self.unsatisfiable
            and self.date_from is None
            and self.date_to is None
        )

    def contains(self, dt: Optional[datetime]) -> bool:
        if self.unsatisfiable:
            return False
        if self.is_open:
            return True
        if dt is None:
            return False
        if self.date_from is not None and dt < self.date_from:
            return False
        if self.date_to is not None and dt > self.date_to:
            return False
        return True
