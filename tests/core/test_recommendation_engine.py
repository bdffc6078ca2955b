"""Recommendation Engine — layered heuristics, confidence math and feedback summary."""

from datetime import date, datetime, time, timedelta, timezone
from types import SimpleNamespace
from uuid import uuid4

from aurora.core.recommendation_engine import (
    CategorySnapshot, build_category_snapshots, build_recommendations,
    calculate_confidence, clamp_recommendation_count, find_next_available_slot,
    recent_mood_average, sanitize_feedback_notes, summarize_feedback,
)

UTC = timezone.utc
REFERENCE = date(2025, 5, 12)
NOW = datetime(2025, 5, 12, 7, 0, tzinfo=UTC)


def _event(start, hours=1, category_id=None, mood=None):
    return SimpleNamespace(
        id=uuid4(), title="e", start_date=start, end_date=start + timedelta(hours=hours),
        event_category_id=category_id, mood_rating=mood, user_id=uuid4(),
    )


def _entry(day, rating):
    return SimpleNamespace(entry_date=day, mood_rating=rating, notes=None)


def _snapshot(average, count):
    return CategorySnapshot(uuid4(), "Gym", None, [object()] * count, average, 0.5)


def test_count_clamped_to_five_through_ten():
    assert clamp_recommendation_count(None) == 6
    assert clamp_recommendation_count(1) == 5
    assert clamp_recommendation_count(50) == 10
    assert clamp_recommendation_count(7) == 7


def test_recent_average_uses_latest_seven_entries():
    entries = [_entry(date(2025, 5, d), 1) for d in range(1, 4)]
    entries += [_entry(date(2025, 5, d), 5) for d in range(4, 11)]
    assert recent_mood_average(entries) == 5.0
    assert recent_mood_average([]) is None


def test_confidence_formula():
    # base 0.8 + participation 0.1 + mood bonus 0.05
    assert calculate_confidence(_snapshot(4.0, 5), 4.0) == 0.95
    # base falls back to 0.4 without mood, bonus clamps at -0.1
    assert calculate_confidence(_snapshot(0.0, 1), 1.0) == 0.32


def test_slot_skips_past_and_busy_times():
    busy = [(datetime(2025, 5, 13, 6, 30, tzinfo=UTC), datetime(2025, 5, 13, 7, 30, tzinfo=UTC))]
    # 06:00 on the reference day is already past, so the probe starts tomorrow
    slot = find_next_available_slot(REFERENCE, time(6), busy, NOW)
    assert slot == datetime(2025, 5, 14, 6, 0, tzinfo=UTC)


def test_snapshots_ordered_by_mood_then_volume():
    work, gym = uuid4(), uuid4()
    categories = {
        work: SimpleNamespace(name="Work", color="#3b82f6"),
        gym: SimpleNamespace(name="Gym", color="#10b981"),
    }
    history = [
        _event(NOW - timedelta(days=3), category_id=work, mood=3),
        _event(NOW - timedelta(days=2), category_id=gym, mood=5),
    ]
    snapshots = build_category_snapshots(history, categories)
    assert [s.category_name for s in snapshots] == ["Gym", "Work"]


def test_no_data_yields_routine_evening_only():
    recs = build_recommendations(REFERENCE, [], [], [], {}, 6, NOW)
    assert [r.id for r in recs] == ["routine-evening-20250512"]


def test_low_mood_adds_reset_and_category_ids_embed_the_day():
    gym = uuid4()
    categories = {gym: SimpleNamespace(name="Gym", color="#10b981")}
    history = [_event(datetime(2025, 5, 10, 18, tzinfo=UTC), category_id=gym, mood=5)]
    entries = [_entry(date(2025, 5, d), 2) for d in (9, 10, 11)]

    recs = build_recommendations(REFERENCE, history, [], entries, categories, 6, NOW)
    ids = [r.id for r in recs]
    assert f"category-{gym}-20250512" in ids
    assert "mood-reset-20250512" in ids
    assert recs == sorted(recs, key=lambda r: (-r.confidence, r.suggested_start))
    assert all(0.2 <= r.confidence <= 0.95 for r in recs)


def test_category_slot_keeps_peak_time_and_minimum_duration():
    gym = uuid4()
    categories = {gym: SimpleNamespace(name="Gym", color="#10b981")}
    history = [_event(datetime(2025, 5, 10, 18, tzinfo=UTC), hours=0.25, category_id=gym, mood=5)]
    rec = build_recommendations(REFERENCE, history, [], [], categories, 6, NOW)[0]
    assert rec.suggested_start == datetime(2025, 5, 12, 18, 0, tzinfo=UTC)
    assert rec.suggested_duration_minutes == 30


def test_feedback_notes_trimmed_and_capped():
    assert sanitize_feedback_notes("   ") is None
    assert sanitize_feedback_notes("  ok ") == "ok"
    assert len(sanitize_feedback_notes("x" * 900)) == 500


def test_feedback_summary_rates():
    rows = [
        SimpleNamespace(accepted=True, mood_after=4),
        SimpleNamespace(accepted=True, mood_after=None),
        SimpleNamespace(accepted=False, mood_after=2),
    ]
    summary = summarize_feedback(rows, NOW - timedelta(days=30), NOW)
    assert summary["accepted_count"] == 2
    assert summary["rejected_count"] == 1
    assert summary["acceptance_rate"] == 66.7
    assert summary["average_mood_after"] == 3.0
