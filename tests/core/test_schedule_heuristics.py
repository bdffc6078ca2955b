"""Schedule Heuristics — conflicts, tight gaps, overloaded days and weekly balance."""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from uuid import uuid4

from aurora.core.domain_types import SuggestionType
from aurora.core.schedule_heuristics import (
    detect_conflicts, generate_heuristic_suggestions, identify_patterns, suggest_distribution,
)

UTC = timezone.utc
# Monday
NOW = datetime(2025, 6, 2, 6, 0, tzinfo=UTC)


def _event(title, start, minutes):
    return SimpleNamespace(
        id=uuid4(), title=title, start_date=start, end_date=start + timedelta(minutes=minutes),
        event_category_id=None, mood_rating=None, user_id=uuid4(),
    )


def _at(day_offset, hour, minute=0):
    return NOW.replace(hour=hour, minute=minute) + timedelta(days=day_offset)


def test_overlap_suggests_moving_the_later_event():
    a = _event("Standup", _at(0, 9), 60)
    b = _event("Review", _at(0, 9, 30), 30)
    [draft] = detect_conflicts([b, a], NOW)
    assert draft.type == SuggestionType.RESOLVE_CONFLICT
    assert draft.event_id == b.id
    assert draft.priority == 5
    assert draft.confidence_score == 95
    assert draft.suggested_datetime == _at(0, 10, 15)


def test_tight_gap_suggests_break():
    a = _event("A", _at(1, 9), 60)
    b = _event("B", _at(1, 10, 5), 30)
    [draft] = detect_conflicts([a, b], NOW)
    assert draft.type == SuggestionType.SUGGEST_BREAK
    assert draft.confidence_score == 80


def test_events_beyond_seven_days_are_ignored_for_conflicts():
    a = _event("A", _at(8, 9), 60)
    b = _event("B", _at(8, 9, 30), 60)
    assert detect_conflicts([a, b], NOW) == []


def test_day_over_eight_hours_is_flagged():
    events = [_event("Deep work", _at(2, 8), 300), _event("More work", _at(2, 14), 240)]
    alerts = [d for d in identify_patterns(events, NOW) if d.type == SuggestionType.PATTERN_ALERT]
    assert len(alerts) == 1
    assert alerts[0].priority == 4


def test_long_block_break_suggested_once_per_day():
    events = [
        _event("A", _at(3, 8), 290),
        _event("B", _at(3, 12, 55), 290),
        _event("C", _at(3, 17, 50), 60),
    ]
    breaks = [
        d for d in identify_patterns(events, NOW)
        if d.type == SuggestionType.SUGGEST_BREAK
    ]
    assert len(breaks) == 1
    assert breaks[0].suggested_datetime == _at(3, 12, 50) + timedelta(hours=2)


def test_uneven_week_suggests_redistribution():
    events = [_event(f"M{i}", _at(0, 8 + i), 30) for i in range(6)]
    events += [_event("T", _at(1, 9), 30), _event("W", _at(2, 9), 30)]
    [draft] = suggest_distribution(events, NOW)
    assert draft.type == SuggestionType.OPTIMIZE_DISTRIBUTION
    assert "6 events on Monday" in draft.reason


def test_quiet_calendar_produces_nothing():
    events = [_event("Lunch", _at(1, 12), 60)]
    assert generate_heuristic_suggestions(events, NOW) == []
