"""Wellness Service — loads a month of mood data and hands it to the pure fold."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from aurora.core.wellness_summary import compute_monthly_summary
from aurora.services import category_service, event_service, mood_service


async def get_monthly_summary(
    db: AsyncSession, user_id: UUID, year: int, month: int,
) -> dict:
    """Monthly wellness summary (see core/wellness_summary.py)."""
    monthly = await mood_service.get_monthly_entries(db, user_id, year, month)
    events = await event_service.get_monthly_events(db, user_id, year, month)
    categories = {c.id: c for c in await category_service.list_available(db, user_id)}
    # events may still reference a category that was deleted after they were rated
    for event in events:
        if event.event_category is not None:
            categories.setdefault(event.event_category_id, event.event_category)
    return compute_monthly_summary(year, month, monthly["entries"], events, categories)
