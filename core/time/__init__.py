"""
Back Office Core Time - Public API
====================================
Injectable clock and lenient temporal helpers.
"""

from core.time.clock import (
    Clock,
    FixedClock,
    SystemClock,
    get_default_clock,
    using_clock,
)
from core.time.temporal import (
    EPOCH,
    DateRange,
    end_of_day,
    parse_datetime,
    sort_key,
)

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "get_default_clock",
    "using_clock",
    "EPOCH",
    "DateRange",
    "end_of_day",
    "parse_datetime",
    "sort_key",
]
