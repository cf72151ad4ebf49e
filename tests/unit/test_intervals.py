# tests/unit/test_intervals.py
"""
Unit tests for half-open interval math.
"""

from datetime import date, time, timezone

import pytest

from fitclub.core.enums import RejectionReason
from fitclub.core.exceptions import InvalidIntervalError
from fitclub.domain.intervals import TimeInterval, Weekday, contains, overlaps, weekday_for


def iv(start: str, end: str) -> TimeInterval:
    return TimeInterval(time.fromisoformat(start), time.fromisoformat(end))


class TestTimeInterval:
    def test_start_must_precede_end(self):
        with pytest.raises(InvalidIntervalError) as exc_info:
            iv("10:00", "09:00")

        assert exc_info.value.reason == RejectionReason.INVALID_INTERVAL
        assert exc_info.value.details == {"start_time": "10:00:00", "end_time": "09:00:00"}

    def test_empty_interval_rejected(self):
        with pytest.raises(InvalidIntervalError):
            iv("09:00", "09:00")

    def test_str_uses_hours_and_minutes(self):
        assert str(iv("08:00", "12:30")) == "08:00-12:30"

    @pytest.mark.parametrize(
        "start,end",
        [
            (time(9, 0, tzinfo=timezone.utc), time(10, 0)),
            (time(9, 0), time(10, 0, tzinfo=timezone.utc)),
            (time(9, 0, tzinfo=timezone.utc), time(10, 0, tzinfo=timezone.utc)),
        ],
    )
    def test_offset_aware_times_rejected(self, start, end):
        with pytest.raises(InvalidIntervalError) as exc_info:
            TimeInterval(start, end)

        assert exc_info.value.reason == RejectionReason.INVALID_INTERVAL

    def test_duration_minutes(self):
        assert iv("09:00", "10:30").duration_minutes == 90
        assert iv("06:15", "06:16").duration_minutes == 1


class TestOverlaps:
    @pytest.mark.parametrize(
        "a, b",
        [
            (("09:00", "10:00"), ("09:30", "10:30")),
            (("09:00", "12:00"), ("10:00", "11:00")),
            (("09:00", "10:00"), ("09:00", "10:00")),
            (("09:00", "10:00"), ("08:00", "09:01")),
        ],
    )
    def test_overlapping_intervals(self, a, b):
        assert overlaps(iv(*a), iv(*b))
        assert overlaps(iv(*b), iv(*a))

    @pytest.mark.parametrize(
        "a, b",
        [
            (("09:00", "10:00"), ("10:00", "11:00")),
            (("09:00", "10:00"), ("11:00", "12:00")),
            (("13:00", "14:00"), ("08:00", "13:00")),
        ],
    )
    def test_disjoint_or_touching_intervals(self, a, b):
        assert not overlaps(iv(*a), iv(*b))
        assert not overlaps(iv(*b), iv(*a))

    def test_every_valid_interval_overlaps_itself(self):
        interval = iv("06:15", "06:16")
        assert overlaps(interval, interval)

    def test_invalid_instance_rejected(self):
        broken = iv("09:00", "10:00")
        object.__setattr__(broken, "end", time(8, 0))

        with pytest.raises(InvalidIntervalError):
            overlaps(broken, iv("09:00", "10:00"))


class TestContains:
    def test_inner_strictly_inside(self):
        assert contains(iv("08:00", "12:00"), iv("09:00", "10:00"))

    def test_shared_endpoints_allowed(self):
        assert contains(iv("08:00", "12:00"), iv("08:00", "12:00"))
        assert contains(iv("08:00", "12:00"), iv("11:00", "12:00"))

    def test_partial_overlap_not_contained(self):
        assert not contains(iv("08:00", "12:00"), iv("11:30", "12:30"))
        assert not contains(iv("08:00", "12:00"), iv("07:59", "09:00"))

    def test_not_symmetric(self):
        assert not contains(iv("09:00", "10:00"), iv("08:00", "12:00"))


class TestWeekday:
    def test_weekday_for_date(self):
        assert weekday_for(date(2030, 1, 7)) == Weekday.MONDAY
        assert weekday_for(date(2030, 1, 2)) == Weekday.WEDNESDAY
        assert weekday_for(date(2030, 1, 13)) == Weekday.SUNDAY

    def test_ordinal_runs_monday_to_sunday(self):
        assert [day.ordinal for day in Weekday] == [1, 2, 3, 4, 5, 6, 7]
        assert Weekday.SUNDAY.ordinal == 7

    def test_accepts_full_day_names(self):
        assert Weekday("Friday") is Weekday.FRIDAY
        with pytest.raises(ValueError):
            Weekday("Fri")
