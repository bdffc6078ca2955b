"""Reminder Rules — trigger computation and the ±2 minute due window."""

from datetime import datetime, timedelta, timezone

import pytest

from aurora.core.domain_types import ReminderType
from aurora.core.errors import InvalidInputError
from aurora.core.reminder_rules import calculate_trigger, pending_cutoff

START = datetime(2025, 6, 10, 14, 0, tzinfo=timezone.utc)


def test_fixed_offsets_before_start():
    assert calculate_trigger(START, ReminderType.MINUTES_15) == START - timedelta(minutes=15)
    assert calculate_trigger(START, ReminderType.MINUTES_30) == START - timedelta(minutes=30)


def test_one_day_before_uses_custom_time_on_previous_day():
    trigger = calculate_trigger(START, ReminderType.ONE_DAY_BEFORE, 20, 45)
    assert trigger == datetime(2025, 6, 9, 20, 45, tzinfo=timezone.utc)


def test_one_day_before_requires_custom_time():
    with pytest.raises(InvalidInputError):
        calculate_trigger(START, ReminderType.ONE_DAY_BEFORE)


def test_one_day_before_rejects_out_of_range_hour():
    with pytest.raises(InvalidInputError) as exc:
        calculate_trigger(START, ReminderType.ONE_DAY_BEFORE, 24, 0)
    assert exc.value.field == "custom_time_hours"


def test_pending_cutoff_is_two_minutes_ahead():
    assert pending_cutoff(START) == START + timedelta(minutes=2)
