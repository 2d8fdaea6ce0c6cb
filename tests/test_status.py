#!/usr/bin/env python3
"""Tests for ScheduleStatus enum."""

from garage import ScheduleStatus


class TestScheduleStatus:
    """Tests for ScheduleStatus enum ordering."""

    def test_urgency_ordering(self):
        """Lower value = more urgent."""
        assert ScheduleStatus.DUE_SOON.value < ScheduleStatus.SCHEDULED.value
        assert ScheduleStatus.SCHEDULED.value < ScheduleStatus.DONE.value

    def test_sorting_by_value(self):
        statuses = [ScheduleStatus.DONE, ScheduleStatus.DUE_SOON, ScheduleStatus.SCHEDULED]
        assert sorted(statuses, key=lambda s: s.value)[0] == ScheduleStatus.DUE_SOON
