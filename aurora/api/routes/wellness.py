"""Wellness Routes — monthly mood summary."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from aurora.api.dependencies import get_current_user_id
from aurora.infrastructure.database import get_db
from aurora.schemas.wellness import WellnessSummary
from aurora.services import wellness_service

router = APIRouter(prefix="/api/v1/wellness", tags=["wellness"])


@router.get("/summary", response_model=WellnessSummary)
async def get_summary(
    year: int = Query(..., ge=1, le=9999),
    month: int = Query(..., ge=1, le=12),
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await wellness_service.get_monthly_summary(db, user_id, year, month)
