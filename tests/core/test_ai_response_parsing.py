"""AI Response Parsing — JSON extraction, drafts, plans and suggestion lists."""

from datetime import datetime, timezone
from types import SimpleNamespace
from uuid import uuid4

import pytest

from aurora.core.ai_response_parsing import (
    extract_json_array, extract_json_object, normalize_ai_date,
    parse_assistant_recommendations, parse_natural_language_reply, parse_plan_reply,
    parse_schedule_suggestions, parse_self_care_suggestions, parse_suggestion_type,
    parse_validation,
)
from aurora.core.domain_types import EventPriority, SuggestionType, ValidationSeverity
from aurora.core.errors import AIResponseError

UTC = timezone.utc
NOW = datetime(2025, 6, 2, 12, 0, tzinfo=UTC)


def _category(name, sort_order):
    return SimpleNamespace(
        id=uuid4(), name=name, color="#3b82f6", icon="category",
        is_system_default=True, sort_order=sort_order, user_id=None, is_active=True,
    )


WORK = _category("Work", 1)
HEALTH = _category("Health", 3)
CATEGORIES = [HEALTH, WORK]


def test_object_extracted_from_fenced_reply():
    text = 'Sure!\n```json\n{"approved": false}\n```'
    assert extract_json_object(text) == {"approved": False}


def test_missing_json_raises():
    with pytest.raises(AIResponseError):
        extract_json_object("no json here")
    with pytest.raises(AIResponseError):
        extract_json_array("{}")


def test_offsetless_dates_read_as_local_time():
    assert normalize_ai_date("2025-06-03T09:00:00", -180) == datetime(2025, 6, 3, 12, 0, tzinfo=UTC)
    assert normalize_ai_date("2025-06-03T09:00:00Z", -180) == datetime(2025, 6, 3, 9, 0, tzinfo=UTC)
    assert normalize_ai_date("tomorrow", 0) is None


def test_validation_keys_are_case_insensitive():
    result = parse_validation(
        '{"Approved": false, "Message": "Too late at night", "severity": "WARNING", '
        '"suggestions": ["Move it to 20:00", ""]}'
    )
    assert result["is_approved"] is False
    assert result["severity"] == ValidationSeverity.WARNING
    assert result["suggestions"] == ["Move it to 20:00"]
    assert result["used_ai"] is True


def test_prose_validation_reply_approves():
    result = parse_validation("Looks fine to me.")
    assert result["is_approved"] is True
    assert result["recommendation_message"] == "Looks fine to me."


def test_natural_language_reply_with_nested_event_and_analysis():
    text = """{
        "event": {"title": "Dentist", "startDate": "2025-06-04T15:00:00",
                  "categoryName": "health", "priority": 3},
        "analysis": {"approved": true, "message": "ok"}
    }"""
    draft, validation = parse_natural_language_reply(text, CATEGORIES, 0, NOW)
    assert draft["title"] == "Dentist"
    assert draft["event_category_id"] == HEALTH.id
    assert draft["priority"] == EventPriority.HIGH
    assert (draft["end_date"] - draft["start_date"]).total_seconds() == 3600
    assert validation["is_approved"] is True


def test_unknown_category_falls_back_and_is_suggested():
    draft, validation = parse_natural_language_reply(
        '{"title": "Guitar class", "category": "Music"}', CATEGORIES, 0, NOW,
    )
    assert draft["event_category_id"] == WORK.id
    assert draft["suggested_category_name"] == "Music"
    assert validation is None


def test_untitled_event_is_rejected():
    with pytest.raises(AIResponseError):
        parse_natural_language_reply('{"description": "something"}', CATEGORIES, 0, NOW)


def test_plan_warns_about_overlaps_with_existing_events():
    existing = SimpleNamespace(
        id=uuid4(), title="Team meeting",
        start_date=datetime(2025, 6, 3, 9, 0, tzinfo=UTC),
        end_date=datetime(2025, 6, 3, 10, 0, tzinfo=UTC),
        event_category_id=WORK.id, mood_rating=None, user_id=uuid4(),
    )
    text = """{"planTitle": "Running", "durationWeeks": 2, "events": [
        {"title": "Run", "startDate": "2025-06-03T09:30:00Z", "endDate": "2025-06-03T10:15:00Z"},
        {"title": ""},
        {"title": "Run", "startDate": "2025-06-05T09:30:00Z", "endDate": "2025-06-05T10:15:00Z"}
    ]}"""
    plan = parse_plan_reply(text, CATEGORIES, 0, [existing], NOW)
    assert plan["plan_title"] == "Running"
    assert plan["duration_weeks"] == 2
    assert plan["total_sessions"] == 2
    assert plan["has_potential_conflicts"] is True
    assert "Team meeting" in plan["conflict_warnings"][0]


def test_suggestion_type_accepts_numbers_and_camel_case():
    assert parse_suggestion_type(2) == SuggestionType.RESOLVE_CONFLICT
    assert parse_suggestion_type("suggestBreak") == SuggestionType.SUGGEST_BREAK
    assert parse_suggestion_type("nonsense") == SuggestionType.GENERAL_REORGANIZATION


def test_schedule_suggestions_bound_priority_and_drop_unknown_events():
    known = uuid4()
    text = f"""[
        {{"type": "moveEvent", "eventId": "{known}", "description": "Move it",
          "priority": 9, "confidenceScore": "high"}},
        {{"type": 4, "eventId": "{uuid4()}", "description": "Busy week",
          "relatedEventTitles": ["A", "B"]}},
        {{"type": 1, "description": ""}}
    ]"""
    drafts = parse_schedule_suggestions(text, {known})
    assert len(drafts) == 2
    assert drafts[0]["event_id"] == known
    assert drafts[0]["priority"] == 5
    assert drafts[0]["confidence_score"] == 70
    assert drafts[1]["event_id"] is None
    assert drafts[1]["metadata"] == {"related_event_titles": ["A", "B"]}


def test_self_care_suggestions_read_from_wrapper():
    text = '{"suggestions": [{"title": "Dance"}, "bad"]}'
    assert parse_self_care_suggestions(text) == [{"title": "Dance"}]


def test_assistant_recommendations_never_start_in_the_past():
    text = """[{"title": "Walk", "suggestedStart": "2025-06-01T08:00:00Z",
                "suggestedDurationMinutes": 5, "confidence": 1.5}]"""
    [rec] = parse_assistant_recommendations(text, NOW)
    assert rec["suggested_start"] == datetime(2025, 6, 2, 12, 5, tzinfo=UTC)
    assert rec["suggested_duration_minutes"] == 10
    assert rec["confidence"] == 0.95
    assert rec["id"].startswith("ai-")


def test_assistant_recommendation_text_fields_coerced():
    text = """[{"title": "Walk", "subtitle": 5, "summary": {"a": 1},
                "categoryName": "  Health ", "moodImpact": ["up"]}]"""
    [rec] = parse_assistant_recommendations(text, NOW)
    assert rec["subtitle"] == "5"
    assert rec["summary"] is None
    assert rec["category_name"] == "Health"
    assert rec["mood_impact"] is None
