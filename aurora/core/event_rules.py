"""Event Rules — pure calendar arithmetic shared by services and analytics.

Invariants:
    - Every datetime leaving this module is timezone-aware UTC
    - Intervals are half-open: [start, end)
    - Local time = UTC + offset minutes (offset is negative west of Greenwich)

Design Decisions:
    - as_utc() treats naive values as UTC: SQLite drops tzinfo on round-trip,
      PostgreSQL does not (ADR: same code path for both backends)
"""

import calendar
from datetime import date, datetime, time, timedelta, timezone

from aurora.core.errors import InvalidInputError


def as_utc(value: datetime) -> datetime:
    """Return value as an aware UTC datetime."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_valid_date_range(start: datetime, end: datetime) -> bool:
    return as_utc(start) < as_utc(end)


def duration_minutes(start: datetime, end: datetime) -> int:
    return int((as_utc(end) - as_utc(start)).total_seconds() // 60)


def occurs_on_date(start: datetime, end: datetime, day: date) -> bool:
    """True when the event touches the given calendar day (UTC)."""
    return as_utc(start).date() <= day <= as_utc(end).date()


def overlaps(
    start_a: datetime, end_a: datetime, start_b: datetime, end_b: datetime,
) -> bool:
    """Half-open interval overlap: touching edges do not overlap."""
    return as_utc(start_a) < as_utc(end_b) and as_utc(end_a) > as_utc(start_b)


def week_bounds(week_start: datetime) -> tuple[datetime, datetime]:
    start = as_utc(week_start)
    return start, start + timedelta(days=7)


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    """First instant of the month and first instant of the next (UTC)."""
    if not 1 <= month <= 12:
        raise InvalidInputError("Month must be between 1 and 12", "month")
    start = datetime(year, month, 1, tzinfo=timezone.utc)
    days = calendar.monthrange(year, month)[1]
    return start, start + timedelta(days=days)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def to_local(value: datetime, offset_minutes: int) -> datetime:
    """UTC instant → naive wall-clock time at the given offset."""
    return (as_utc(value) + timedelta(minutes=offset_minutes)).replace(tzinfo=None)


def local_to_utc(value: datetime, offset_minutes: int) -> datetime:
    """Naive wall-clock time at the given offset → aware UTC instant."""
    if value.tzinfo is not None:
        return as_utc(value)
    return (value - timedelta(minutes=offset_minutes)).replace(tzinfo=timezone.utc)


def local_midnight_utc(now: datetime, offset_minutes: int) -> datetime:
    """UTC instant of the most recent local midnight."""
    local_day = to_local(now, offset_minutes).date()
    return local_to_utc(datetime.combine(local_day, time.min), offset_minutes)
