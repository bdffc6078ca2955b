"""Recommendation routes — heuristics, feedback, assistant and self-care."""

from datetime import date, datetime, timedelta, timezone

from aurora.services import mood_service, recommendation_service
from aurora.services.ai_assistant import CHAT_SYSTEM


async def test_empty_history_gives_evening_routine(client, headers):
    response = await client.get(
        "/api/v1/recommendations", params={"reference_date": "2030-05-12"}, headers=headers,
    )
    assert response.status_code == 200
    assert [r["id"] for r in response.json()] == ["routine-evening-20300512"]


async def test_mood_window_covers_the_rest_of_the_reference_month(test_db, user_id):
    for day in (12, 13):
        await mood_service.upsert_entry(test_db, user_id, date(2030, 1, day), 5)
    await mood_service.upsert_entry(test_db, user_id, date(2030, 2, 1), 1)

    recs = await recommendation_service.get_recommendations(
        test_db, user_id, reference_date=date(2030, 1, 10),
        now=datetime(2030, 1, 10, 8, 0, tzinfo=timezone.utc),
    )
    ids = [r["id"] for r in recs]
    assert "mood-celebration-20300110" in ids
    assert "mood-reset-20300110" not in ids


async def test_feedback_is_upserted_per_recommendation(client, headers):
    url = "/api/v1/recommendations/feedback"
    first = await client.post(
        url, json={"recommendation_id": "mood-reset-20300512", "accepted": True, "mood_after": 4},
        headers=headers,
    )
    second = await client.post(
        url, json={"recommendation_id": " mood-reset-20300512 ", "accepted": False, "notes": "  "},
        headers=headers,
    )
    assert first.status_code == second.status_code == 200
    assert first.json()["id"] == second.json()["id"]
    assert second.json()["notes"] is None

    summary = (await client.get("/api/v1/recommendations/feedback/summary", headers=headers)).json()
    assert summary["total_feedback"] == 1
    assert summary["rejected_count"] == 1
    assert summary["acceptance_rate"] == 0


async def test_feedback_mood_out_of_range(client, headers):
    response = await client.post(
        "/api/v1/recommendations/feedback",
        json={"recommendation_id": "x", "accepted": True, "mood_after": 7},
        headers=headers,
    )
    assert response.status_code == 400


async def test_summary_cannot_start_in_the_future(client, headers):
    future = (datetime.now(timezone.utc) + timedelta(days=2)).isoformat()
    response = await client.get(
        "/api/v1/recommendations/feedback/summary",
        params={"period_start": future}, headers=headers,
    )
    assert response.status_code == 400


async def test_assistant_needs_a_message(client, headers):
    response = await client.post(
        "/api/v1/recommendations/assistant",
        json={"conversation": [{"role": "user", "content": "   "}]},
        headers=headers,
    )
    assert response.status_code == 400


async def test_assistant_unavailable_without_ai(client, headers):
    response = await client.post(
        "/api/v1/recommendations/assistant",
        json={"conversation": [{"role": "user", "content": "I feel stressed"}]},
        headers=headers,
    )
    assert response.status_code == 503
    assert response.json()["error"]["code"] == "ANTHROPIC_API_ERROR"


async def test_assistant_recommendations_from_model(client, headers, ai_replies):
    mock = ai_replies(
        '[{"title": "Evening walk", "reason": "You mentioned stress",'
        ' "suggestedStart": "2099-01-01T18:00:00Z", "suggestedDurationMinutes": 25,'
        ' "confidence": 0.7}]'
    )
    response = await client.post(
        "/api/v1/recommendations/assistant",
        json={"conversation": [{"role": "user", "content": "I feel stressed"}], "current_mood": 2},
        headers=headers,
    )
    assert response.status_code == 200
    [rec] = response.json()
    assert rec["title"] == "Evening walk"
    assert rec["suggested_duration_minutes"] == 25
    assert "I feel stressed" in mock.calls[0]["prompt"]


async def test_assistant_tolerates_non_string_fields(client, headers, ai_replies):
    ai_replies('[{"title": "Walk", "subtitle": 5, "summary": {"a": 1}}]')
    response = await client.post(
        "/api/v1/recommendations/assistant",
        json={"conversation": [{"role": "user", "content": "I feel stressed"}]},
        headers=headers,
    )
    assert response.status_code == 200
    [rec] = response.json()
    assert rec["subtitle"] == "5"
    assert rec["summary"] is None


async def test_assistant_chat_reply(client, headers, ai_replies):
    mock = ai_replies("  A short walk could help.  ")
    response = await client.post(
        "/api/v1/recommendations/assistant/chat",
        json={"conversation": [{"role": "user", "content": "Any ideas?"}]},
        headers=headers,
    )
    assert response.json() == {"reply": "A short walk could help."}
    assert mock.calls[0]["system"] == CHAT_SYSTEM


async def test_self_care_returns_requested_count(client, headers):
    response = await client.post(
        "/api/v1/recommendations/self-care", json={"count": 4}, headers=headers,
    )
    assert response.status_code == 200
    assert len(response.json()) == 4


async def test_used_self_care_item_not_repeated(client, headers):
    url = "/api/v1/recommendations/self-care"
    first = (await client.post(url, json={}, headers=headers)).json()
    used = first[0]["id"]

    feedback = await client.post(
        f"{url}/feedback",
        json={"recommendation_id": used, "action": "completed_now", "mood_after": 4},
        headers=headers,
    )
    assert feedback.status_code == 204

    again = (await client.post(url, json={}, headers=headers)).json()
    assert used not in [item["id"] for item in again]


async def test_self_care_mixes_in_ai_items(client, headers, ai_replies):
    ai_replies(
        '{"suggestions": [{"title": "Dance break", "type": "creative",'
        ' "durationMinutes": 5, "personalizedReason": "You enjoy music", "confidence": 90}]}'
    )
    items = (await client.post(
        "/api/v1/recommendations/self-care", json={"current_mood": 3}, headers=headers,
    )).json()
    ai_items = [i for i in items if i["id"].startswith("ai-")]
    assert [i["title"] for i in ai_items] == ["Dance break"]
    assert len(items) == 5


async def test_generic_self_care_list(client):
    response = await client.get("/api/v1/recommendations/self-care/generic", params={"count": 3})
    assert [i["id"] for i in response.json()] == [
        "generic-breathe", "generic-walk", "generic-call",
    ]
    too_many = await client.get("/api/v1/recommendations/self-care/generic", params={"count": 11})
    assert too_many.status_code == 400
