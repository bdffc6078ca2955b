"""Daily Mood Routes — one rating per user per calendar day."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from aurora.api.dependencies import get_current_user_id, not_found
from aurora.infrastructure.database import get_db
from aurora.schemas.mood import DailyMoodEntryResponse, DailyMoodUpsert, MonthlyMoodResponse
from aurora.services import mood_service

router = APIRouter(prefix="/api/v1/moods", tags=["moods"])


@router.get("/monthly", response_model=MonthlyMoodResponse)
async def get_monthly_moods(
    year: int = Query(..., ge=1, le=9999),
    month: int = Query(..., ge=1, le=12),
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await mood_service.get_monthly_entries(db, user_id, year, month)


@router.post("", response_model=DailyMoodEntryResponse)
async def upsert_mood(
    body: DailyMoodUpsert,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    """Create or replace the entry for body.entry_date."""
    return await mood_service.upsert_entry(
        db, user_id, body.entry_date, body.mood_rating, body.notes,
    )


@router.delete("/{entry_date}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_mood(
    entry_date: date,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    if not await mood_service.delete_entry(db, user_id, entry_date):
        raise not_found("DailyMoodEntry", entry_date.isoformat())
    return Response(status_code=status.HTTP_204_NO_CONTENT)
