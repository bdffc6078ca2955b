"""Event Routes — calendar CRUD, range views and per-event mood.

Invariants:
    - Every handler is scoped to the X-User-Id caller
    - POST /events runs AI validation first; a rejected event is never stored (400)
    - Missing or foreign events are 404, never 403: existence is not leaked

Design Decisions:
    - Static paths (/weekly, /monthly, /range, /conflicts) are declared before
      /{event_id} so they are not parsed as UUIDs
"""

import logging
from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from aurora.api.dependencies import get_ai_assistant, get_current_user_id, not_found
from aurora.infrastructure.database import get_db
from aurora.schemas.event import (
    EventCreate, EventMoodUpdate, EventResponse, EventUpdate,
    MonthlyEventsResponse, WeeklyEventsResponse,
)
from aurora.services import ai_planning_service, event_service
from aurora.services.ai_assistant import AIAssistant

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/events", tags=["events"])


@router.get("", response_model=list[EventResponse])
async def list_events(
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await event_service.list_events(db, user_id)


@router.get("/weekly", response_model=WeeklyEventsResponse)
async def get_weekly_events(
    week_start: datetime = Query(...),
    category_id: UUID | None = Query(None),
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Events starting in [week_start, week_start + 7 days) plus available categories."""
    return await event_service.get_weekly_events(db, user_id, week_start, category_id)


@router.get("/monthly", response_model=MonthlyEventsResponse)
async def get_monthly_events(
    year: int = Query(..., ge=1, le=9999),
    month: int = Query(..., ge=1, le=12),
    category_id: UUID | None = Query(None),
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    events = await event_service.get_monthly_events(db, user_id, year, month, category_id)
    return {"year": year, "month": month, "events": events, "total_events": len(events)}


@router.get("/range", response_model=list[EventResponse])
async def get_events_in_range(
    start: datetime = Query(...),
    end: datetime = Query(...),
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await event_service.get_events_in_range(db, user_id, start, end)


@router.get("/conflicts", response_model=list[EventResponse])
async def find_conflicts(
    start: datetime = Query(...),
    end: datetime = Query(...),
    exclude_id: UUID | None = Query(None),
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await event_service.find_conflicts(db, user_id, start, end, exclude_id)


@router.get("/by-category/{category_id}", response_model=list[EventResponse])
async def get_events_by_category(
    category_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await event_service.get_events_by_category(db, user_id, category_id)


@router.get("/{event_id}", response_model=EventResponse)
async def get_event(
    event_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    event = await event_service.get_event(db, user_id, event_id)
    if event is None:
        raise not_found("Event", event_id)
    return event


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    body: EventCreate,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    assistant: AIAssistant = Depends(get_ai_assistant),
):
    """Validate with AI against the surrounding calendar, then store."""
    event, validation = await ai_planning_service.create_validated_event(
        db, user_id, body, assistant,
    )
    logger.info(
        f"Event approved (used_ai={validation['used_ai']})",
        extra={"user_id": str(user_id), "event_id": str(event.id)},
    )
    return event


@router.put("/{event_id}", response_model=EventResponse)
async def update_event(
    event_id: UUID,
    body: EventUpdate,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    event = await event_service.update_event(db, user_id, event_id, body)
    if event is None:
        raise not_found("Event", event_id)
    return event


@router.patch("/{event_id}/mood", response_model=EventResponse)
async def update_event_mood(
    event_id: UUID,
    body: EventMoodUpdate,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    event = await event_service.update_event_mood(
        db, user_id, event_id, body.mood_rating, body.mood_notes,
    )
    if event is None:
        raise not_found("Event", event_id)
    return event


@router.delete("/{event_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_event(
    event_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    if not await event_service.delete_event(db, user_id, event_id):
        raise not_found("Event", event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
