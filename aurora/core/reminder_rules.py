"""Reminder Rules — when a reminder fires relative to its event.

Invariants:
    - minutes_15 / minutes_30 fire that long before the event start
    - one_day_before fires on the previous UTC calendar day at the custom hour:minute
    - A reminder is pending once its trigger is at most 2 minutes ahead of now,
      overdue reminders included
"""

from datetime import datetime, time, timedelta

from aurora.core.domain_types import ReminderType
from aurora.core.errors import InvalidInputError
from aurora.core.event_rules import as_utc

TRIGGER_TOLERANCE_MINUTES = 2


def calculate_trigger(
    event_start: datetime,
    reminder_type: ReminderType,
    custom_hours: int | None = None,
    custom_minutes: int | None = None,
) -> datetime:
    start = as_utc(event_start)
    if reminder_type == ReminderType.MINUTES_15:
        return start - timedelta(minutes=15)
    if reminder_type == ReminderType.MINUTES_30:
        return start - timedelta(minutes=30)
    if reminder_type == ReminderType.ONE_DAY_BEFORE:
        if custom_hours is None or custom_minutes is None:
            raise InvalidInputError(
                "Custom hour and minutes are required for one-day-before reminders",
                "custom_time_hours",
            )
        if not 0 <= custom_hours <= 23:
            raise InvalidInputError("Hour must be between 0 and 23", "custom_time_hours")
        if not 0 <= custom_minutes <= 59:
            raise InvalidInputError("Minutes must be between 0 and 59", "custom_time_minutes")
        day_before = datetime.combine(start.date() - timedelta(days=1), time.min, tzinfo=start.tzinfo)
        return day_before + timedelta(hours=custom_hours, minutes=custom_minutes)
    raise InvalidInputError(f"Invalid reminder type: {reminder_type}", "reminder_type")


def pending_cutoff(now: datetime) -> datetime:
    """Latest trigger time that counts as pending."""
    return as_utc(now) + timedelta(minutes=TRIGGER_TOLERANCE_MINUTES)
