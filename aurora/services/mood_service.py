"""Mood Service — one daily mood entry per user per calendar day.

Invariants:
    - Upserting a soft-deleted day reactivates the same row (unique user/date)
    - Ratings outside 1-5 are rejected before touching the database
"""

import logging
from datetime import date
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from aurora.core.domain_types import MAX_MOOD_RATING, MIN_MOOD_RATING
from aurora.core.errors import InvalidInputError
from aurora.core.event_rules import days_in_month
from aurora.models.daily_mood_entry import DailyMoodEntry

logger = logging.getLogger(__name__)


def _check_month(month: int) -> None:
    if not 1 <= month <= 12:
        raise InvalidInputError("Month must be between 1 and 12", "month")


async def get_entries_between(
    db: AsyncSession, user_id: UUID, start: date, end: date,
) -> list[DailyMoodEntry]:
    """Active entries with start <= entry_date <= end, oldest first."""
    result = await db.execute(
        select(DailyMoodEntry)
        .where(
            DailyMoodEntry.user_id == user_id,
            DailyMoodEntry.is_active.is_(True),
            DailyMoodEntry.entry_date >= start,
            DailyMoodEntry.entry_date <= end,
        )
        .order_by(DailyMoodEntry.entry_date),
    )
    return list(result.scalars().all())


async def get_monthly_entries(
    db: AsyncSession, user_id: UUID, year: int, month: int,
) -> dict:
    _check_month(month)
    entries = await get_entries_between(
        db, user_id, date(year, month, 1), date(year, month, days_in_month(year, month)),
    )
    return {"year": year, "month": month, "entries": entries}


async def _find(db: AsyncSession, user_id: UUID, entry_date: date) -> DailyMoodEntry | None:
    result = await db.execute(
        select(DailyMoodEntry).where(
            DailyMoodEntry.user_id == user_id,
            DailyMoodEntry.entry_date == entry_date,
        ),
    )
    return result.scalar_one_or_none()


async def upsert_entry(
    db: AsyncSession,
    user_id: UUID,
    entry_date: date,
    mood_rating: int,
    notes: str | None = None,
) -> DailyMoodEntry:
    if not MIN_MOOD_RATING <= mood_rating <= MAX_MOOD_RATING:
        raise InvalidInputError("Mood rating must be between 1 and 5", "mood_rating")
    cleaned = notes.strip() if notes else None

    entry = await _find(db, user_id, entry_date)
    if entry is None:
        entry = DailyMoodEntry(user_id=user_id, entry_date=entry_date)
        db.add(entry)
    entry.mood_rating = mood_rating
    entry.notes = cleaned or None
    entry.is_active = True
    await db.commit()
    logger.info(
        f"Mood recorded for {entry_date.isoformat()}: {mood_rating}",
        extra={"user_id": str(user_id)},
    )
    return entry


async def delete_entry(db: AsyncSession, user_id: UUID, entry_date: date) -> bool:
    entry = await _find(db, user_id, entry_date)
    if entry is None or not entry.is_active:
        return False
    entry.is_active = False
    await db.commit()
    return True
