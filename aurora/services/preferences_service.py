"""Preferences Service — lazily created per-user preferences.

Invariants:
    - get_preferences() always returns a row: defaults are inserted on first access
    - Defaults: Monday-Friday work days, 09:00-18:00 work hours
"""

import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from aurora.core.errors import InvalidInputError
from aurora.models.user_preferences import UserPreferences
from aurora.schemas.preferences import UserPreferencesUpdate

logger = logging.getLogger(__name__)

DEFAULT_WORK_DAYS = [1, 2, 3, 4, 5]
DEFAULT_WORK_START = "09:00"
DEFAULT_WORK_END = "18:00"


async def find_preferences(db: AsyncSession, user_id: UUID) -> UserPreferences | None:
    """Existing row or None; never inserts (safe inside read-only flows)."""
    result = await db.execute(
        select(UserPreferences).where(UserPreferences.user_id == user_id),
    )
    return result.scalar_one_or_none()


async def get_preferences(db: AsyncSession, user_id: UUID) -> UserPreferences:
    preferences = await find_preferences(db, user_id)
    if preferences is not None:
        return preferences

    preferences = UserPreferences(
        user_id=user_id,
        work_start_time=DEFAULT_WORK_START,
        work_end_time=DEFAULT_WORK_END,
        work_days_of_week=list(DEFAULT_WORK_DAYS),
        exercise_days_of_week=[],
        nlp_keywords=[],
    )
    db.add(preferences)
    await db.commit()
    logger.info("Default preferences created", extra={"user_id": str(user_id)})
    return preferences


async def update_preferences(
    db: AsyncSession, user_id: UUID, data: UserPreferencesUpdate,
) -> UserPreferences:
    preferences = await get_preferences(db, user_id)
    for field, value in data.model_dump(exclude_unset=True).items():
        if value is None and field not in ("work_start_time", "work_end_time"):
            continue
        setattr(preferences, field, value)
    if (
        preferences.work_start_time and preferences.work_end_time
        and preferences.work_start_time >= preferences.work_end_time
    ):
        await db.rollback()
        raise InvalidInputError("Work start time must be before work end time", "work_start_time")
    await db.commit()
    return preferences
