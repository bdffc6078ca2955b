"""AI routes — review, natural-language drafts and plans against a mocked model."""

EVENT = {
    "title": "Late meeting",
    "start_date": "2099-06-01T23:00:00Z",
    "end_date": "2099-06-02T00:30:00Z",
}


async def test_validation_approves_when_ai_disabled(client, headers):
    response = await client.post("/api/v1/ai/validate-event", json=EVENT, headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["is_approved"] is True
    assert body["used_ai"] is False


async def test_validation_reports_model_verdict(client, headers, ai_replies):
    ai_replies('{"approved": false, "message": "Very late", "severity": "warning"}')
    body = (await client.post("/api/v1/ai/validate-event", json=EVENT, headers=headers)).json()
    assert body["is_approved"] is False
    assert body["severity"] == "warning"
    assert body["used_ai"] is True


async def test_parsing_unavailable_without_ai(client, headers):
    response = await client.post(
        "/api/v1/ai/parse-natural-language", json={"text": "dentist tomorrow at 3pm"}, headers=headers,
    )
    assert response.status_code == 503


async def test_parsing_with_embedded_analysis(client, headers, ai_replies):
    mock = ai_replies(
        '```json\n{"event": {"title": "Dentist", "startDate": "2099-06-02T15:00:00",'
        ' "endDate": "2099-06-02T16:00:00", "categoryName": "Health"},'
        ' "analysis": {"approved": true, "message": "Fine"}}\n```'
    )
    response = await client.post(
        "/api/v1/ai/parse-natural-language",
        json={"text": "dentist on the 2nd at 3pm", "timezone_offset_minutes": -180},
        headers=headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["event"]["title"] == "Dentist"
    assert body["event"]["start_date"].startswith("2099-06-02T18:00:00")
    assert body["validation"]["recommendation_message"] == "Fine"
    assert len(mock.calls) == 1

    categories = (await client.get("/api/v1/event-categories", headers=headers)).json()
    health = next(c for c in categories if c["name"] == "Health")
    assert body["event"]["event_category_id"] == health["id"]


async def test_parsing_validates_separately_without_analysis(client, headers, ai_replies):
    mock = ai_replies(
        '{"title": "Guitar class", "startDate": "2099-06-03T19:00:00Z", "category": "Music"}',
        '{"approved": true, "message": "Enjoy"}',
    )
    body = (await client.post(
        "/api/v1/ai/parse-natural-language", json={"text": "guitar class wednesday"}, headers=headers,
    )).json()
    assert body["event"]["suggested_category_name"] == "Music"
    assert body["validation"]["recommendation_message"] == "Enjoy"
    assert len(mock.calls) == 2


async def test_unusable_parse_reply_is_bad_gateway(client, headers, ai_replies):
    ai_replies("Sorry, I cannot help with that.")
    response = await client.post(
        "/api/v1/ai/parse-natural-language", json={"text": "something vague"}, headers=headers,
    )
    assert response.status_code == 502
    assert response.json()["error"]["code"] == "AI_RESPONSE_INVALID"


async def test_plan_generation(client, headers, ai_replies):
    ai_replies(
        '{"planTitle": "Couch to 5k", "planDescription": "Build up slowly", "durationWeeks": 1,'
        ' "events": ['
        '{"title": "Run 1", "startDate": "2099-06-02T07:00:00Z", "endDate": "2099-06-02T07:30:00Z",'
        '  "categoryName": "Health"},'
        '{"title": "Run 2", "startDate": "2099-06-04T07:00:00Z", "endDate": "2099-06-04T07:30:00Z",'
        '  "categoryName": "Health"}'
        '], "additionalTips": "Hydrate"}'
    )
    response = await client.post(
        "/api/v1/ai/generate-plan",
        json={"goal": "Run a 5k", "duration_weeks": 1, "sessions_per_week": 2,
              "start_date": "2099-06-01T00:00:00Z"},
        headers=headers,
    )
    assert response.status_code == 200
    plan = response.json()
    assert plan["plan_title"] == "Couch to 5k"
    assert plan["total_sessions"] == 2
    assert plan["has_potential_conflicts"] is False
    assert (await client.get("/api/v1/events", headers=headers)).json() == []


async def test_plan_without_sessions_is_bad_gateway(client, headers, ai_replies):
    ai_replies('{"planTitle": "Empty", "events": []}')
    response = await client.post(
        "/api/v1/ai/generate-plan", json={"goal": "Learn piano"}, headers=headers,
    )
    assert response.status_code == 502


async def test_short_goal_rejected(client, headers):
    response = await client.post("/api/v1/ai/generate-plan", json={"goal": "  run "}, headers=headers)
    assert response.status_code == 400


async def test_generate_text_strips_reply(assistant, ai_replies, user_id):
    mock = ai_replies("\n  Three focus blocks before lunch.  \n")
    text = await assistant.generate_text("Summarize my week", user_id)
    assert text == "Three focus blocks before lunch."
    assert mock.calls[0]["prompt"] == "Summarize my week"
    assert mock.calls[0]["context"].user_id == str(user_id)
