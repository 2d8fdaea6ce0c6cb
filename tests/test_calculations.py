#!/usr/bin/env python3
"""Tests for date helper functions."""
import pytest
from datetime import date, datetime, timedelta, timezone
from garage import ValidationError, ScheduleStatus, check_schedule, start_of_today, to_local_datetime
from garage.calculations import is_due_soon, is_past, lead_window_end

NOW = datetime(2025, 6, 15, 14, 30).astimezone()


class TestToLocalDatetime:
    """Tests for to_local_datetime."""

    def test_date_becomes_local_midnight(self):
        result = to_local_datetime(date(2025, 1, 15))
        assert result.tzinfo is not None
        assert (result.year, result.month, result.day) == (2025, 1, 15)
        assert (result.hour, result.minute) == (0, 0)

    def test_date_only_string_becomes_local_midnight(self):
        result = to_local_datetime("2025-01-15")
        assert result.date() == date(2025, 1, 15)
        assert result.hour == 0

    def test_iso_string_with_offset(self):
        """Aware strings keep their instant."""
        result = to_local_datetime("2025-01-15T10:30:00+00:00")
        assert result == datetime(2025, 1, 15, 10, 30, tzinfo=timezone.utc)

    def test_naive_datetime_is_local(self):
        naive = datetime(2025, 1, 15, 9, 45)
        assert to_local_datetime(naive) == naive.astimezone()

    def test_invalid_string_raises(self):
        with pytest.raises(ValidationError):
            to_local_datetime("not a date")

    @pytest.mark.parametrize("text", ["1", "15", "March", "2025", "2025-01", "March 5"])
    def test_partial_date_raises(self, text):
        """Missing year, month or day is never filled in from today."""
        with pytest.raises(ValidationError):
            to_local_datetime(text)

    def test_compact_date_string(self):
        assert to_local_datetime("20250115").date() == date(2025, 1, 15)

    def test_empty_string_raises(self):
        with pytest.raises(ValidationError):
            to_local_datetime("   ")

    def test_wrong_type_raises(self):
        with pytest.raises(ValidationError):
            to_local_datetime(20250115)


class TestStartOfToday:
    """Tests for start_of_today."""

    def test_truncates_to_midnight(self):
        result = start_of_today(NOW)
        assert result.date() == NOW.date()
        assert (result.hour, result.minute, result.second, result.microsecond) == (0, 0, 0, 0)

    def test_defaults_to_current_time(self):
        assert start_of_today() <= datetime.now().astimezone()


class TestIsPast:
    """Tests for the past/current boundary."""

    def test_midnight_today_is_past(self):
        assert is_past(start_of_today(NOW), NOW)

    def test_earlier_today_after_midnight_is_future(self):
        """Only dates on or before the start of today count as past."""
        assert not is_past(start_of_today(NOW) + timedelta(minutes=1), NOW)

    def test_yesterday_is_past(self):
        assert is_past(NOW - timedelta(days=1), NOW)


class TestLeadWindow:
    """Tests for lead window helpers."""

    def test_window_end(self):
        assert lead_window_end(7, NOW) == NOW + timedelta(days=7)

    def test_zero_days_allowed(self):
        assert lead_window_end(0, NOW) == NOW

    def test_negative_days_raises(self):
        with pytest.raises(ValidationError):
            lead_window_end(-1, NOW)

    def test_non_integer_days_raises(self):
        with pytest.raises(ValidationError):
            lead_window_end(2.5, NOW)
        with pytest.raises(ValidationError):
            lead_window_end(True, NOW)

    def test_due_soon_inside_window(self):
        assert is_due_soon(NOW + timedelta(days=3), 7, NOW)

    def test_not_due_soon_outside_window(self):
        assert not is_due_soon(NOW + timedelta(days=3), 2, NOW)

    def test_upper_bound_inclusive(self):
        assert is_due_soon(NOW + timedelta(days=7), 7, NOW)

    def test_past_not_due_soon(self):
        assert not is_due_soon(NOW - timedelta(days=1), 7, NOW)


class TestCheckSchedule:
    """Tests for check_schedule classification."""

    def test_done(self):
        assert check_schedule(NOW - timedelta(days=10), 7, NOW) == ScheduleStatus.DONE

    def test_due_soon(self):
        assert check_schedule(NOW + timedelta(days=2), 7, NOW) == ScheduleStatus.DUE_SOON

    def test_scheduled(self):
        assert check_schedule(NOW + timedelta(days=30), 7, NOW) == ScheduleStatus.SCHEDULED
