"""User Preferences Routes — defaults are created on first read."""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from aurora.api.dependencies import get_current_user_id
from aurora.infrastructure.database import get_db
from aurora.schemas.preferences import UserPreferencesResponse, UserPreferencesUpdate
from aurora.services import preferences_service

router = APIRouter(prefix="/api/v1/preferences", tags=["preferences"])


@router.get("", response_model=UserPreferencesResponse)
async def get_preferences(
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await preferences_service.get_preferences(db, user_id)


@router.put("", response_model=UserPreferencesResponse)
async def update_preferences(
    body: UserPreferencesUpdate,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await preferences_service.update_preferences(db, user_id, body)
