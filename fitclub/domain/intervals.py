# fitclub/domain/intervals.py
"""
Wall-clock interval math used by every scheduling check.

Intervals are half-open, [start, end): an interval ending at 10:00 and one
starting at 10:00 are back to back, not overlapping.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time
from enum import Enum

from ..core.exceptions import InvalidIntervalError


class Weekday(str, Enum):
    """Day of week for recurring availability windows."""

    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"
    SATURDAY = "Saturday"
    SUNDAY = "Sunday"

    @property
    def ordinal(self) -> int:
        """1 for Monday through 7 for Sunday."""
        return _WEEKDAY_ORDER.index(self) + 1

    @classmethod
    def from_date(cls, value: date) -> "Weekday":
        return _WEEKDAY_ORDER[value.weekday()]


_WEEKDAY_ORDER = list(Weekday)


@dataclass(frozen=True)
class TimeInterval:
    """A [start, end) range of wall-clock times on a single day."""

    start: time
    end: time

    def __post_init__(self) -> None:
        _require_valid(self)

    @property
    def duration_minutes(self) -> int:
        """Length in whole minutes; seconds are ignored."""
        return _minutes(self.end) - _minutes(self.start)

    def __str__(self) -> str:
        return f"{self.start.strftime('%H:%M')}-{self.end.strftime('%H:%M')}"


def _minutes(value: time) -> int:
    return value.hour * 60 + value.minute


def _require_valid(interval: TimeInterval) -> None:
    # Also guards instances mutated after construction (object.__setattr__)
    if interval.start.tzinfo is not None or interval.end.tzinfo is not None:
        raise InvalidIntervalError(
            interval.start,
            interval.end,
            message="Times must be wall-clock times without a UTC offset",
        )
    if not interval.start < interval.end:
        raise InvalidIntervalError(interval.start, interval.end)


def overlaps(a: TimeInterval, b: TimeInterval) -> bool:
    """True iff the two half-open intervals share at least one instant."""
    _require_valid(a)
    _require_valid(b)
    return a.start < b.end and b.start < a.end


def contains(outer: TimeInterval, inner: TimeInterval) -> bool:
    """True iff inner lies entirely within outer (shared endpoints allowed)."""
    _require_valid(outer)
    _require_valid(inner)
    return outer.start <= inner.start and inner.end <= outer.end


def weekday_for(value: date) -> Weekday:
    """Weekday of a calendar date."""
    return Weekday.from_date(value)
