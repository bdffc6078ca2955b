"""Reminders — triggers, ownership through the event and the pending window."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from aurora.core.domain_types import ReminderType
from aurora.core.errors import InvalidInputError
from aurora.schemas.event import EventCreate
from aurora.services import event_service, reminder_service

UTC = timezone.utc
FUTURE_EVENT = {
    "title": "Dentist",
    "start_date": "2099-03-10T15:00:00Z",
    "end_date": "2099-03-10T16:00:00Z",
}


async def _event(client, headers):
    response = await client.post("/api/v1/events", json=FUTURE_EVENT, headers=headers)
    return response.json()["id"]


async def test_fifteen_minute_reminder(client, headers):
    event_id = await _event(client, headers)
    response = await client.post(
        "/api/v1/reminders", json={"event_id": event_id, "reminder_type": "minutes_15"},
        headers=headers,
    )
    assert response.status_code == 201
    body = response.json()
    assert body["trigger_datetime"].startswith("2099-03-10T14:45:00")
    assert body["is_sent"] is False
    assert body["custom_time_hours"] is None


async def test_day_before_reminder_uses_custom_time(client, headers):
    event_id = await _event(client, headers)
    response = await client.post("/api/v1/reminders", json={
        "event_id": event_id, "reminder_type": "one_day_before",
        "custom_time_hours": 20, "custom_time_minutes": 30,
    }, headers=headers)
    assert response.json()["trigger_datetime"].startswith("2099-03-09T20:30:00")
    assert response.json()["custom_time_hours"] == 20


async def test_day_before_without_time_is_invalid(client, headers):
    event_id = await _event(client, headers)
    response = await client.post(
        "/api/v1/reminders", json={"event_id": event_id, "reminder_type": "one_day_before"},
        headers=headers,
    )
    assert response.status_code == 400


async def test_reminder_for_someone_elses_event(client, headers):
    event_id = await _event(client, headers)
    response = await client.post(
        "/api/v1/reminders", json={"event_id": event_id, "reminder_type": "minutes_30"},
        headers={"X-User-Id": str(uuid4())},
    )
    assert response.status_code == 404


async def test_list_mark_sent_and_delete(client, headers):
    event_id = await _event(client, headers)
    created = (await client.post(
        "/api/v1/reminders", json={"event_id": event_id, "reminder_type": "minutes_30"},
        headers=headers,
    )).json()

    listed = (await client.get(f"/api/v1/reminders/event/{event_id}", headers=headers)).json()
    assert [r["id"] for r in listed] == [created["id"]]

    sent = await client.put(f"/api/v1/reminders/{created['id']}/mark-sent", headers=headers)
    assert sent.json()["is_sent"] is True

    assert (await client.delete(f"/api/v1/reminders/{created['id']}", headers=headers)).status_code == 204
    assert (await client.get(f"/api/v1/reminders/{created['id']}", headers=headers)).status_code == 404


async def test_delete_all_for_one_event(client, headers):
    first = await _event(client, headers)
    second = await _event(client, headers)
    for event_id in (first, second):
        await client.post(
            "/api/v1/reminders", json={"event_id": event_id, "reminder_type": "minutes_15"},
            headers=headers,
        )

    response = await client.delete(
        "/api/v1/reminders/all", params={"event_id": first}, headers=headers,
    )
    assert response.status_code == 204
    assert (await client.get(f"/api/v1/reminders/event/{first}", headers=headers)).json() == []
    assert len((await client.get(f"/api/v1/reminders/event/{second}", headers=headers)).json()) == 1


async def test_pending_window_and_past_triggers(test_db, user_id):
    now = datetime(2030, 5, 1, 12, 0, tzinfo=UTC)
    event = await event_service.create_event(test_db, user_id, EventCreate(
        title="Call", start_date=now + timedelta(minutes=16), end_date=now + timedelta(minutes=46),
    ))

    with pytest.raises(InvalidInputError):
        await reminder_service.create_reminder(
            test_db, user_id, event.id, ReminderType.MINUTES_30, now=now,
        )

    reminder = await reminder_service.create_reminder(
        test_db, user_id, event.id, ReminderType.MINUTES_15, now=now,
    )
    assert await reminder_service.get_pending(test_db, user_id, now=now) == [reminder]
    assert await reminder_service.get_pending(
        test_db, user_id, now=now - timedelta(minutes=5),
    ) == []

    await reminder_service.mark_sent(test_db, user_id, reminder.id)
    assert await reminder_service.get_pending(test_db, user_id, now=now) == []
