"""Daily mood and wellness summary routes."""


async def _mood(client, headers, day, rating, notes=None):
    response = await client.post(
        "/api/v1/moods",
        json={"entry_date": day, "mood_rating": rating, "notes": notes},
        headers=headers,
    )
    assert response.status_code == 200, response.text
    return response.json()


async def test_upsert_replaces_same_day(client, headers):
    first = await _mood(client, headers, "2030-04-02", 2, "tired")
    second = await _mood(client, headers, "2030-04-02", 5, "   ")

    assert first["id"] == second["id"]
    assert second["mood_rating"] == 5
    assert second["notes"] is None

    monthly = (await client.get(
        "/api/v1/moods/monthly", params={"year": 2030, "month": 4}, headers=headers,
    )).json()
    assert len(monthly["entries"]) == 1


async def test_rating_out_of_range_rejected(client, headers):
    response = await client.post(
        "/api/v1/moods", json={"entry_date": "2030-04-02", "mood_rating": 0}, headers=headers,
    )
    assert response.status_code == 400


async def test_delete_then_reinsert_reuses_row(client, headers):
    entry = await _mood(client, headers, "2030-04-03", 3)
    assert (await client.delete("/api/v1/moods/2030-04-03", headers=headers)).status_code == 204
    assert (await client.delete("/api/v1/moods/2030-04-03", headers=headers)).status_code == 404

    again = await _mood(client, headers, "2030-04-03", 4)
    assert again["id"] == entry["id"]


async def test_monthly_summary_combines_moods_and_rated_events(client, headers):
    for day, rating in (("2030-04-01", 5), ("2030-04-02", 4), ("2030-04-03", 1)):
        await _mood(client, headers, day, rating)
    event = (await client.post("/api/v1/events", json={
        "title": "Climbing",
        "start_date": "2030-04-05T17:00:00Z",
        "end_date": "2030-04-05T19:00:00Z",
        "suggested_category_name": "Health",
    }, headers=headers)).json()
    await client.patch(f"/api/v1/events/{event['id']}/mood", json={"mood_rating": 5}, headers=headers)

    response = await client.get(
        "/api/v1/wellness/summary", params={"year": 2030, "month": 4}, headers=headers,
    )
    summary = response.json()
    assert summary["tracked_days"] == 3
    assert summary["days_in_month"] == 30
    assert summary["average_mood"] == 3.33
    assert summary["streaks"]["longest_positive_streak"] == 2
    assert summary["best_day"]["date"] == "2030-04-01"
    assert summary["worst_day"]["date"] == "2030-04-03"
    assert summary["has_event_mood_data"] is True
    assert summary["category_impacts"][0]["category_name"] == "Health"


async def test_empty_month_summary(client, headers):
    response = await client.get(
        "/api/v1/wellness/summary", params={"year": 2030, "month": 2}, headers=headers,
    )
    summary = response.json()
    assert summary["average_mood"] == 0
    assert summary["best_day"] is None
    assert len(summary["mood_trend"]) == 28


async def test_invalid_month_rejected(client, headers):
    response = await client.get(
        "/api/v1/wellness/summary", params={"year": 2030, "month": 13}, headers=headers,
    )
    assert response.status_code == 400
