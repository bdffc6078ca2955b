"""Event Rules — UTC normalisation, half-open overlap, month/week bounds, local offsets."""

from datetime import date, datetime, timedelta, timezone

import pytest

from aurora.core.errors import InvalidInputError
from aurora.core.event_rules import (
    as_utc, days_in_month, duration_minutes, is_valid_date_range,
    local_midnight_utc, local_to_utc, month_bounds, occurs_on_date,
    overlaps, to_local, week_bounds,
)

UTC = timezone.utc


def test_as_utc_treats_naive_values_as_utc():
    naive = datetime(2025, 3, 10, 9, 0)
    assert as_utc(naive) == datetime(2025, 3, 10, 9, 0, tzinfo=UTC)


def test_as_utc_converts_other_offsets():
    brt = timezone(timedelta(hours=-3))
    assert as_utc(datetime(2025, 3, 10, 9, 0, tzinfo=brt)) == datetime(2025, 3, 10, 12, 0, tzinfo=UTC)


def test_valid_range_requires_start_before_end():
    start = datetime(2025, 1, 1, 9, tzinfo=UTC)
    assert is_valid_date_range(start, start + timedelta(minutes=1))
    assert not is_valid_date_range(start, start)
    assert not is_valid_date_range(start, start - timedelta(hours=1))


def test_duration_minutes_mixes_naive_and_aware():
    assert duration_minutes(datetime(2025, 1, 1, 9), datetime(2025, 1, 1, 10, 30, tzinfo=UTC)) == 90


def test_touching_intervals_do_not_overlap():
    a = datetime(2025, 1, 1, 9, tzinfo=UTC)
    b = a + timedelta(hours=1)
    c = b + timedelta(hours=1)
    assert not overlaps(a, b, b, c)
    assert overlaps(a, b + timedelta(minutes=1), b, c)


def test_occurs_on_date_spans_multiple_days():
    start = datetime(2025, 1, 1, 22, tzinfo=UTC)
    end = datetime(2025, 1, 3, 1, tzinfo=UTC)
    assert occurs_on_date(start, end, date(2025, 1, 2))
    assert not occurs_on_date(start, end, date(2025, 1, 4))


def test_week_bounds_span_seven_days():
    start, end = week_bounds(datetime(2025, 2, 3))
    assert start.tzinfo is not None
    assert end - start == timedelta(days=7)


def test_month_bounds_handle_leap_february():
    start, end = month_bounds(2024, 2)
    assert start == datetime(2024, 2, 1, tzinfo=UTC)
    assert end == datetime(2024, 3, 1, tzinfo=UTC)
    assert days_in_month(2024, 2) == 29


def test_month_bounds_reject_invalid_month():
    with pytest.raises(InvalidInputError) as exc:
        month_bounds(2025, 13)
    assert exc.value.field == "month"


def test_local_conversions_round_trip():
    instant = datetime(2025, 5, 1, 2, 30, tzinfo=UTC)
    local = to_local(instant, -180)
    assert local == datetime(2025, 4, 30, 23, 30)
    assert local_to_utc(local, -180) == instant


def test_local_midnight_follows_the_offset():
    # 02:30 UTC is still the previous evening at UTC-3
    now = datetime(2025, 5, 1, 2, 30, tzinfo=UTC)
    assert local_midnight_utc(now, -180) == datetime(2025, 4, 30, 3, 0, tzinfo=UTC)
    assert local_midnight_utc(now, 0) == datetime(2025, 5, 1, tzinfo=UTC)
