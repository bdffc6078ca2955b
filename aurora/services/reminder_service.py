"""Reminder Service — event reminders owned through their event.

Invariants:
    - A reminder is only created for an active event the caller owns
    - Its trigger must lie in the future at creation time
    - Pending = active, unsent, trigger ≤ now + 2 minutes

Design Decisions:
    - Reminders have no user column; ownership is always checked through the event join
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from aurora.core.domain_types import ReminderType
from aurora.core.errors import InvalidInputError, ResourceNotFoundError
from aurora.core.event_rules import as_utc
from aurora.core.reminder_rules import calculate_trigger, pending_cutoff
from aurora.models.event import Event
from aurora.models.event_reminder import EventReminder
from aurora.services import event_service

logger = logging.getLogger(__name__)


def _owned(user_id: UUID):
    return (
        select(EventReminder)
        .join(Event, EventReminder.event_id == Event.id)
        .where(
            Event.user_id == user_id,
            Event.is_active.is_(True),
            EventReminder.is_active.is_(True),
        )
        .order_by(EventReminder.trigger_datetime)
    )


async def create_reminder(
    db: AsyncSession,
    user_id: UUID,
    event_id: UUID,
    reminder_type: ReminderType,
    custom_hours: int | None = None,
    custom_minutes: int | None = None,
    now: datetime | None = None,
) -> EventReminder:
    now = now or datetime.now(timezone.utc)
    event = await event_service.get_event(db, user_id, event_id)
    if event is None:
        raise ResourceNotFoundError("Event", str(event_id))

    trigger = calculate_trigger(event.start_date, reminder_type, custom_hours, custom_minutes)
    if trigger <= as_utc(now):
        raise InvalidInputError("The reminder would trigger in the past", "reminder_type")

    one_day = reminder_type == ReminderType.ONE_DAY_BEFORE
    reminder = EventReminder(
        event_id=event.id,
        reminder_type=reminder_type.value,
        custom_time_hours=custom_hours if one_day else None,
        custom_time_minutes=custom_minutes if one_day else None,
        trigger_datetime=trigger,
        is_sent=False,
        created_at=now,
    )
    db.add(reminder)
    await db.commit()
    logger.info(
        f"Reminder {reminder_type.value} scheduled for {trigger.isoformat()}",
        extra={"user_id": str(user_id), "event_id": str(event_id)},
    )
    return reminder


async def get_pending(
    db: AsyncSession, user_id: UUID, now: datetime | None = None,
) -> list[EventReminder]:
    now = now or datetime.now(timezone.utc)
    result = await db.execute(
        _owned(user_id).where(
            EventReminder.is_sent.is_(False),
            EventReminder.trigger_datetime <= pending_cutoff(now),
        ),
    )
    return list(result.scalars().all())


async def get_reminder(
    db: AsyncSession, user_id: UUID, reminder_id: UUID,
) -> EventReminder | None:
    result = await db.execute(_owned(user_id).where(EventReminder.id == reminder_id))
    return result.scalar_one_or_none()


async def list_for_event(db: AsyncSession, user_id: UUID, event_id: UUID) -> list[EventReminder]:
    result = await db.execute(_owned(user_id).where(EventReminder.event_id == event_id))
    return list(result.scalars().all())


async def delete_reminder(db: AsyncSession, user_id: UUID, reminder_id: UUID) -> bool:
    reminder = await get_reminder(db, user_id, reminder_id)
    if reminder is None:
        return False
    reminder.is_active = False
    await db.commit()
    return True


async def delete_all(db: AsyncSession, user_id: UUID, event_id: UUID | None = None) -> int:
    """Soft-delete every reminder of the user, or only those of one event."""
    query = _owned(user_id)
    if event_id is not None:
        query = query.where(EventReminder.event_id == event_id)
    reminders = list((await db.execute(query)).scalars().all())
    for reminder in reminders:
        reminder.is_active = False
    await db.commit()
    logger.info(
        f"Deleted {len(reminders)} reminders",
        extra={"user_id": str(user_id), "event_id": str(event_id) if event_id else None},
    )
    return len(reminders)


async def mark_sent(db: AsyncSession, user_id: UUID, reminder_id: UUID) -> EventReminder | None:
    reminder = await get_reminder(db, user_id, reminder_id)
    if reminder is None:
        return None
    reminder.is_sent = True
    await db.commit()
    return reminder
