"""Reminder Routes — event reminders and the pending queue.

Invariants:
    - /pending and /all are declared before /{reminder_id}
    - Reminders of other users' events are 404
"""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from aurora.api.dependencies import get_current_user_id, not_found
from aurora.infrastructure.database import get_db
from aurora.schemas.reminder import ReminderCreate, ReminderResponse
from aurora.services import reminder_service

router = APIRouter(prefix="/api/v1/reminders", tags=["reminders"])


@router.post("", response_model=ReminderResponse, status_code=status.HTTP_201_CREATED)
async def create_reminder(
    body: ReminderCreate,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await reminder_service.create_reminder(
        db, user_id, body.event_id, body.reminder_type,
        body.custom_time_hours, body.custom_time_minutes,
    )


@router.get("/pending", response_model=list[ReminderResponse])
async def get_pending(
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Unsent reminders due within the next two minutes (or overdue)."""
    return await reminder_service.get_pending(db, user_id)


@router.get("/event/{event_id}", response_model=list[ReminderResponse])
async def list_for_event(
    event_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await reminder_service.list_for_event(db, user_id, event_id)


@router.delete("/all", status_code=status.HTTP_204_NO_CONTENT)
async def delete_all(
    event_id: UUID | None = Query(None),
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    await reminder_service.delete_all(db, user_id, event_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{reminder_id}", response_model=ReminderResponse)
async def get_reminder(
    reminder_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    reminder = await reminder_service.get_reminder(db, user_id, reminder_id)
    if reminder is None:
        raise not_found("EventReminder", reminder_id)
    return reminder


@router.delete("/{reminder_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_reminder(
    reminder_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    if not await reminder_service.delete_reminder(db, user_id, reminder_id):
        raise not_found("EventReminder", reminder_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{reminder_id}/mark-sent", response_model=ReminderResponse)
async def mark_sent(
    reminder_id: UUID,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    reminder = await reminder_service.mark_sent(db, user_id, reminder_id)
    if reminder is None:
        raise not_found("EventReminder", reminder_id)
    return reminder
