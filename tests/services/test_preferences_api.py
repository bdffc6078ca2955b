"""Preferences routes — lazy defaults and partial updates."""


async def test_defaults_created_on_first_read(client, headers):
    response = await client.get("/api/v1/preferences", headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert body["work_days_of_week"] == [1, 2, 3, 4, 5]
    assert body["work_start_time"] == "09:00"
    assert body["work_end_time"] == "18:00"
    assert body["theme"] == "light"


async def test_partial_update_keeps_other_fields(client, headers):
    response = await client.put(
        "/api/v1/preferences",
        json={"theme": "dark", "exercise_days_of_week": [6, 2, 2], "nlp_keywords": [" gym ", ""]},
        headers=headers,
    )
    assert response.status_code == 200
    body = response.json()
    assert body["theme"] == "dark"
    assert body["exercise_days_of_week"] == [2, 6]
    assert body["nlp_keywords"] == ["gym"]
    assert body["work_start_time"] == "09:00"


async def test_work_start_after_stored_end_rejected(client, headers):
    response = await client.put(
        "/api/v1/preferences", json={"work_start_time": "19:00"}, headers=headers,
    )
    assert response.status_code == 400
    assert (await client.get("/api/v1/preferences", headers=headers)).json()["work_start_time"] == "09:00"


async def test_invalid_values_rejected(client, headers):
    for payload in (
        {"work_days_of_week": [7]},
        {"time_format": "36h"},
        {"work_start_time": "9am"},
        {"work_start_time": "10:00", "work_end_time": "08:00"},
    ):
        response = await client.put("/api/v1/preferences", json=payload, headers=headers)
        assert response.status_code == 400, payload
