"""
tests/intervals/test_intervals.py

Covers:
  - Instant normalisation (dates, naive/aware datetimes, ISO strings)
  - Duration in whole days, including reversed ranges
  - Inclusive containment
  - Progress fraction clamping and the zero-length edge case
  - Assignment status (completed / ending soon / active)
  - Gregorian month helpers
"""

import logging
from datetime import date, datetime, timedelta, timezone

import pytest

from staffr.intervals import (
    AssignmentStatus,
    add_months,
    assignment_status,
    contains_instant,
    day_instant,
    days_in_month,
    duration_days,
    is_on_or_after,
    progress_fraction,
    to_instant,
)


def utc(*args):
    return datetime(*args, tzinfo=timezone.utc)


# ── to_instant ────────────────────────────────────────────────────────────────

class TestToInstant:

    def test_date_is_utc_midnight(self):
        assert to_instant(date(2024, 1, 10)) == utc(2024, 1, 10)

    def test_iso_date_string(self):
        assert to_instant("2024-01-10") == utc(2024, 1, 10)

    def test_iso_string_with_z_suffix(self):
        assert to_instant("2024-01-10T12:30:00.000Z") == utc(2024, 1, 10, 12, 30)

    def test_naive_datetime_taken_as_utc(self):
        assert to_instant(datetime(2024, 1, 10, 8)) == utc(2024, 1, 10, 8)

    def test_aware_datetime_converted_to_utc(self):
        plus_two = timezone(timedelta(hours=2))
        assert to_instant(datetime(2024, 1, 10, 2, tzinfo=plus_two)) == utc(2024, 1, 10)

    def test_result_is_aware(self):
        assert to_instant("2024-01-10").tzinfo is not None

    def test_unparseable_raises_value_error(self):
        with pytest.raises(ValueError):
            to_instant("not a date")

    def test_unsupported_type_raises_value_error(self):
        with pytest.raises(ValueError):
            to_instant(42)


# ── duration_days ─────────────────────────────────────────────────────────────

class TestDurationDays:

    def test_whole_days(self):
        assert duration_days(utc(2024, 1, 10), utc(2024, 1, 20)) == 10

    def test_partial_day_rounds_up(self):
        assert duration_days(utc(2024, 1, 10), utc(2024, 1, 11, 1)) == 2

    def test_same_instant_is_zero(self):
        assert duration_days(utc(2024, 1, 10), utc(2024, 1, 10)) == 0

    def test_reversed_range_clamped_to_zero(self):
        assert duration_days(utc(2024, 1, 20), utc(2024, 1, 10)) == 0

    def test_reversed_range_logs_warning(self, caplog):
        with caplog.at_level(logging.WARNING, logger="staffr.intervals"):
            duration_days(utc(2024, 1, 20), utc(2024, 1, 10))
        assert "Reversed date range" in caplog.text

    def test_leap_february(self):
        assert duration_days(utc(2024, 2, 1), utc(2024, 3, 1)) == 29


# ── contains_instant ──────────────────────────────────────────────────────────

class TestContainsInstant:

    def test_inside(self):
        assert contains_instant(utc(2024, 1, 10), utc(2024, 1, 20), utc(2024, 1, 15))

    def test_start_inclusive(self):
        assert contains_instant(utc(2024, 1, 10), utc(2024, 1, 20), utc(2024, 1, 10))

    def test_end_inclusive(self):
        assert contains_instant(utc(2024, 1, 10), utc(2024, 1, 20), utc(2024, 1, 20))

    def test_before(self):
        assert not contains_instant(utc(2024, 1, 10), utc(2024, 1, 20), utc(2024, 1, 9))

    def test_after(self):
        assert not contains_instant(utc(2024, 1, 10), utc(2024, 1, 20), utc(2024, 1, 21))

    def test_reversed_range_contains_nothing(self):
        assert not contains_instant(utc(2024, 1, 20), utc(2024, 1, 10), utc(2024, 1, 15))


# ── progress_fraction ─────────────────────────────────────────────────────────

class TestProgressFraction:

    def test_halfway(self):
        assert progress_fraction(utc(2024, 1, 1), utc(2024, 1, 11), utc(2024, 1, 6)) == pytest.approx(0.5)

    def test_before_start_is_zero(self):
        assert progress_fraction(utc(2024, 1, 1), utc(2024, 1, 11), utc(2023, 12, 1)) == 0.0

    def test_after_end_is_one(self):
        assert progress_fraction(utc(2024, 1, 1), utc(2024, 1, 11), utc(2024, 2, 1)) == 1.0

    def test_zero_length_is_one(self):
        assert progress_fraction(utc(2024, 1, 1), utc(2024, 1, 1), utc(2023, 1, 1)) == 1.0

    def test_reversed_range_is_one(self):
        assert progress_fraction(utc(2024, 1, 11), utc(2024, 1, 1), utc(2024, 1, 5)) == 1.0

    def test_always_within_unit_interval(self):
        start, end = utc(2024, 1, 1), utc(2024, 3, 1)
        for offset in range(-30, 120, 7):
            f = progress_fraction(start, end, start + timedelta(days=offset))
            assert 0.0 <= f <= 1.0


# ── assignment_status ─────────────────────────────────────────────────────────

class TestAssignmentStatus:

    def test_past_end_is_completed(self):
        assert assignment_status(utc(2024, 1, 10), utc(2024, 1, 11)) == AssignmentStatus.COMPLETED

    def test_within_a_week_is_ending_soon(self):
        assert assignment_status(utc(2024, 1, 16), utc(2024, 1, 10)) == AssignmentStatus.ENDING_SOON

    def test_exactly_a_week_is_active(self):
        assert assignment_status(utc(2024, 1, 17), utc(2024, 1, 10)) == AssignmentStatus.ACTIVE

    def test_end_equal_now_is_ending_soon(self):
        assert assignment_status(utc(2024, 1, 10), utc(2024, 1, 10)) == AssignmentStatus.ENDING_SOON

    def test_naive_now_mixed_with_aware_end(self):
        assert assignment_status(utc(2024, 1, 16), datetime(2024, 1, 10)) == AssignmentStatus.ENDING_SOON
        assert progress_fraction(utc(2024, 1, 1), utc(2024, 1, 11), datetime(2024, 1, 6)) == pytest.approx(0.5)

    def test_is_on_or_after(self):
        assert is_on_or_after(datetime(2024, 1, 15), utc(2024, 1, 15))
        assert is_on_or_after("2024-01-16", datetime(2024, 1, 15))
        assert not is_on_or_after(utc(2024, 1, 14), datetime(2024, 1, 15))


# ── Calendar helpers ──────────────────────────────────────────────────────────

class TestCalendarHelpers:

    @pytest.mark.parametrize("year, month, expected", [
        (2024, 1, 31), (2024, 2, 29), (2023, 2, 28), (1900, 2, 28), (2000, 2, 29), (2024, 4, 30),
    ])
    def test_days_in_month(self, year, month, expected):
        assert days_in_month(year, month) == expected

    def test_day_instant_is_utc_midnight(self):
        assert day_instant(2024, 3, 5) == utc(2024, 3, 5)

    def test_add_months_rolls_over_year(self):
        assert add_months(2024, 11, 2) == (2025, 1)

    def test_add_months_zero(self):
        assert add_months(2024, 5, 0) == (2024, 5)

    def test_add_months_backwards(self):
        assert add_months(2024, 1, -1) == (2023, 12)
