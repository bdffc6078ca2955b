"""Productivity Routes — golden hours and productivity patterns."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from aurora.api.dependencies import get_current_user_id
from aurora.infrastructure.database import get_db
from aurora.schemas.productivity import ProductivityAnalysis
from aurora.services import productivity_service

router = APIRouter(prefix="/api/v1/productivity", tags=["productivity"])


@router.get("/analysis", response_model=ProductivityAnalysis)
async def analyze(
    period_days: int = Query(30, ge=1, le=365),
    timezone_offset_minutes: int | None = Query(None, ge=-840, le=840),
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await productivity_service.analyze(db, user_id, period_days, timezone_offset_minutes)
