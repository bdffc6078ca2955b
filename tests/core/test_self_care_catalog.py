"""Self-Care Catalog — contextual pools, history scoring, usage filter and mixing."""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from uuid import uuid4

from aurora.core.domain_types import SelfCareType
from aurora.core.self_care_catalog import (
    AFTERNOON_ITEMS, EVENING_ITEMS, GENERIC_ITEMS, MORNING_ITEMS,
    ai_item_from_payload, combine, contextual_pool, filter_recent,
    generic_recommendations, parse_self_care_type, prune_usage, score_item, time_of_day,
)

UTC = timezone.utc
# Monday
NOW = datetime(2025, 6, 2, 12, 0, tzinfo=UTC)


def _event(title, days_ago, mood=None):
    end = NOW - timedelta(days=days_ago)
    return SimpleNamespace(
        id=uuid4(), title=title, start_date=end - timedelta(minutes=30), end_date=end,
        event_category_id=None, mood_rating=mood, user_id=uuid4(),
    )


def test_time_of_day_buckets():
    assert time_of_day(6) == "morning"
    assert time_of_day(12) == "afternoon"
    assert time_of_day(18) == "evening"
    assert time_of_day(2) == "evening"


def test_monday_morning_pool_adds_energy_item():
    pool = contextual_pool(datetime(2025, 6, 2, 9, 0), None)
    ids = [item.id for item in pool]
    assert len(pool) == len(MORNING_ITEMS) + 1
    assert "monday-energy" in ids


def test_low_mood_adds_calming_items():
    pool = contextual_pool(datetime(2025, 6, 3, 15, 0), 2)
    ids = [item.id for item in pool]
    assert len(pool) == len(AFTERNOON_ITEMS) + 2
    assert "lowmood-breathe" in ids


def test_sunday_evening_adds_rest():
    pool = contextual_pool(datetime(2025, 6, 8, 21, 0), 4)
    assert len(pool) == len(EVENING_ITEMS) + 1
    assert pool[-1].id == "sunday-rest"


def test_unmatched_item_scores_neutral():
    scored = score_item(MORNING_ITEMS[0], [], NOW)
    assert scored["confidence_score"] == 50
    assert scored["historical_mood_impact"] is None


def test_happy_history_a_few_days_ago_raises_confidence():
    history = [_event("Walk in the park", days_ago=3, mood=5)]
    scored = score_item(MORNING_ITEMS[0], history, NOW)
    # 100·0.5 + 100·0.3 + 80·0.2
    assert scored["confidence_score"] == 96
    assert scored["historical_mood_impact"] == 100
    assert scored["completion_rate"] == 100


def test_usage_older_than_two_days_is_forgotten():
    usage = [("morning-walk", NOW - timedelta(hours=3)), ("evening-tea", NOW - timedelta(days=3))]
    assert prune_usage(usage, NOW) == [usage[0]]

    suggestions = [{"id": "morning-walk"}, {"id": "evening-tea"}]
    assert filter_recent(suggestions, usage, NOW) == [{"id": "evening-tea"}]


def test_combine_mixes_three_traditional_and_two_ai():
    ranked = [{"id": f"t{i}"} for i in range(6)]
    ai = [{"id": "ai-1"}, {"id": "ai-2"}, {"id": "ai-3"}]
    assert [r["id"] for r in combine(ranked, ai, 5)] == ["t0", "t1", "t2", "ai-1", "ai-2"]


def test_combine_tops_up_when_ai_is_silent():
    ranked = [{"id": f"t{i}"} for i in range(6)]
    assert [r["id"] for r in combine(ranked, [], 5)] == ["t0", "t1", "t2", "t3", "t4"]


def test_generic_list_sorted_by_confidence():
    items = generic_recommendations(10)
    assert len(items) == len(GENERIC_ITEMS)
    scores = [i["confidence_score"] for i in items]
    assert scores == sorted(scores, reverse=True)
    assert items[0]["id"] == "generic-breathe"


def test_ai_payload_normalised():
    item = ai_item_from_payload({
        "type": "Physical", "title": " Dance ", "durationMinutes": 10,
        "personalizedReason": "You liked it", "confidence": 140,
    })
    assert item["id"].startswith("ai-")
    assert item["type"] == SelfCareType.PHYSICAL
    assert item["title"] == "Dance"
    assert item["confidence_score"] == 100
    assert item["icon"] == "✨"


def test_unknown_type_defaults_to_mental():
    assert parse_self_care_type("cooking") == SelfCareType.MENTAL
