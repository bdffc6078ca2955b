"""Event Service — calendar event storage scoped to one user.

Invariants:
    - Every query filters on user_id and is_active; other users' events are invisible
    - Stored datetimes are UTC and start_date < end_date
    - Every saved event points at a category the owner can use

Design Decisions:
    - "Not found" is None/False, not an exception: routes turn it into a 404
      so services stay reusable from other services (ADR: get_session_or_404 pattern)
    - Unknown AI-suggested category names create a user category on the fly
      instead of rejecting the event
"""

import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from aurora.core.category_rules import find_by_name
from aurora.core.errors import BusinessRuleError, InvalidInputError
from aurora.core.event_rules import as_utc, is_valid_date_range, month_bounds, week_bounds
from aurora.models.event import Event
from aurora.models.event_category import EventCategory
from aurora.schemas.event import EventCreate, EventUpdate
from aurora.services import category_service

logger = logging.getLogger(__name__)


def _user_events(user_id: UUID):
    return (
        select(Event)
        .where(Event.user_id == user_id, Event.is_active.is_(True))
        .order_by(Event.start_date, Event.title)
    )


async def _scalars(db: AsyncSession, query) -> list[Event]:
    result = await db.execute(query)
    return list(result.scalars().all())


async def list_events(db: AsyncSession, user_id: UUID) -> list[Event]:
    return await _scalars(db, _user_events(user_id))


async def get_event(db: AsyncSession, user_id: UUID, event_id: UUID) -> Event | None:
    result = await db.execute(_user_events(user_id).where(Event.id == event_id))
    return result.scalar_one_or_none()


async def get_weekly_events(
    db: AsyncSession,
    user_id: UUID,
    week_start: datetime,
    category_id: UUID | None = None,
) -> dict:
    """Events starting in [week_start, week_start + 7d), plus the user's categories."""
    start, end = week_bounds(week_start)
    query = _user_events(user_id).where(Event.start_date >= start, Event.start_date < end)
    if category_id is not None:
        query = query.where(Event.event_category_id == category_id)
    events = await _scalars(db, query)
    return {
        "week_start": start,
        "week_end": end,
        "events": events,
        "categories": await category_service.list_available(db, user_id),
        "total_events": len(events),
        "has_more_events": False,
    }


async def get_monthly_events(
    db: AsyncSession,
    user_id: UUID,
    year: int,
    month: int,
    category_id: UUID | None = None,
) -> list[Event]:
    start, end = month_bounds(year, month)
    query = _user_events(user_id).where(Event.start_date >= start, Event.start_date < end)
    if category_id is not None:
        query = query.where(Event.event_category_id == category_id)
    return await _scalars(db, query)


async def get_events_in_range(
    db: AsyncSession, user_id: UUID, start: datetime, end: datetime,
) -> list[Event]:
    """Events whose start falls within [start, end]."""
    if as_utc(start) > as_utc(end):
        raise InvalidInputError("Range start must not be after range end", "start")
    return await _scalars(
        db,
        _user_events(user_id).where(
            Event.start_date >= as_utc(start), Event.start_date <= as_utc(end),
        ),
    )


async def get_events_starting_between(
    db: AsyncSession, user_id: UUID, start: datetime, end: datetime,
) -> list[Event]:
    """Events whose start falls within [start, end)."""
    return await _scalars(
        db,
        _user_events(user_id).where(
            Event.start_date >= as_utc(start), Event.start_date < as_utc(end),
        ),
    )


async def get_events_overlapping(
    db: AsyncSession, user_id: UUID, start: datetime, end: datetime,
) -> list[Event]:
    """Events that intersect [start, end) at all."""
    return await _scalars(
        db,
        _user_events(user_id).where(
            Event.start_date < as_utc(end), Event.end_date > as_utc(start),
        ),
    )


async def get_events_by_category(
    db: AsyncSession, user_id: UUID, category_id: UUID,
) -> list[Event]:
    return await _scalars(
        db, _user_events(user_id).where(Event.event_category_id == category_id),
    )


async def find_conflicts(
    db: AsyncSession,
    user_id: UUID,
    start: datetime,
    end: datetime,
    exclude_id: UUID | None = None,
) -> list[Event]:
    """Timed events overlapping [start, end). All-day events never conflict."""
    query = _user_events(user_id).where(
        Event.is_all_day.is_(False),
        Event.start_date < as_utc(end),
        Event.end_date > as_utc(start),
    )
    if exclude_id is not None:
        query = query.where(Event.id != exclude_id)
    return await _scalars(db, query)


async def _resolve_category(
    db: AsyncSession,
    user_id: UUID,
    category_id: UUID | None,
    suggested_name: str | None,
) -> EventCategory:
    if category_id is not None:
        category = await category_service.get_category(db, user_id, category_id)
        if category is not None:
            return category

    available = await category_service.list_available(db, user_id)
    if suggested_name and suggested_name.strip():
        match = find_by_name(available, suggested_name)
        if match is not None:
            return match
        return await category_service.create_auto_category(db, user_id, suggested_name)

    if not available:
        raise BusinessRuleError(
            "No category is available for this event", "NO_CATEGORY_AVAILABLE",
        )
    return available[0]


def _apply(event: Event, data: EventCreate, category: EventCategory) -> None:
    event.title = data.title
    event.description = data.description
    event.start_date = as_utc(data.start_date)
    event.end_date = as_utc(data.end_date)
    event.is_all_day = data.is_all_day
    event.location = data.location
    event.color = data.color
    event.notes = data.notes
    event.priority = int(data.priority)
    event.is_recurring = data.is_recurring
    event.recurrence_pattern = data.recurrence_pattern
    event.event_category = category


def _check_range(start: datetime, end: datetime) -> None:
    if not is_valid_date_range(start, end):
        raise InvalidInputError("End date must be after start date", "end_date")


async def create_event(db: AsyncSession, user_id: UUID, data: EventCreate) -> Event:
    _check_range(data.start_date, data.end_date)
    category = await _resolve_category(
        db, user_id, data.event_category_id, data.suggested_category_name,
    )
    event = Event(user_id=user_id)
    _apply(event, data, category)
    db.add(event)
    await db.commit()
    logger.info(
        f"Event created: {event.title}",
        extra={"user_id": str(user_id), "event_id": str(event.id)},
    )
    return event


async def update_event(
    db: AsyncSession, user_id: UUID, event_id: UUID, data: EventUpdate,
) -> Event | None:
    event = await get_event(db, user_id, event_id)
    if event is None:
        return None
    _check_range(data.start_date, data.end_date)

    category = event.event_category
    if data.event_category_id is not None and data.event_category_id != event.event_category_id:
        category = await category_service.get_category(db, user_id, data.event_category_id)
        if category is None:
            raise InvalidInputError(
                "The selected category is not available", "event_category_id",
            )
    _apply(event, data, category)
    await db.commit()
    logger.info(
        f"Event updated: {event.title}",
        extra={"user_id": str(user_id), "event_id": str(event.id)},
    )
    return event


async def update_event_mood(
    db: AsyncSession,
    user_id: UUID,
    event_id: UUID,
    mood_rating: int | None,
    mood_notes: str | None,
) -> Event | None:
    if mood_rating is not None and not 1 <= mood_rating <= 5:
        raise InvalidInputError("Mood rating must be between 1 and 5", "mood_rating")
    event = await get_event(db, user_id, event_id)
    if event is None:
        return None
    event.mood_rating = mood_rating
    event.mood_notes = mood_notes.strip() or None if mood_notes else None
    await db.commit()
    return event


async def delete_event(db: AsyncSession, user_id: UUID, event_id: UUID) -> bool:
    event = await get_event(db, user_id, event_id)
    if event is None:
        return False
    event.is_active = False
    await db.commit()
    logger.info(
        "Event deleted",
        extra={"user_id": str(user_id), "event_id": str(event_id)},
    )
    return True
