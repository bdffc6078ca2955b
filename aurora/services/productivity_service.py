"""Productivity Service — loads the analysis window and delegates scoring to core.

Invariants:
    - period_days is 1–365; the window ends with the user's local today
    - Only events overlapping the window are analyzed
"""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from aurora.config import get_settings
from aurora.core.errors import InvalidInputError
from aurora.core.productivity_scoring import analysis_window, analyze_productivity, overlaps_window
from aurora.services import category_service, event_service

logger = logging.getLogger(__name__)

DEFAULT_PERIOD_DAYS = 30
MAX_PERIOD_DAYS = 365


async def analyze(
    db: AsyncSession,
    user_id: UUID,
    period_days: int = DEFAULT_PERIOD_DAYS,
    timezone_offset_minutes: int | None = None,
    now: datetime | None = None,
) -> dict:
    if not 1 <= period_days <= MAX_PERIOD_DAYS:
        raise InvalidInputError(
            f"period_days must be between 1 and {MAX_PERIOD_DAYS}", "period_days",
        )
    now = now or datetime.now(timezone.utc)
    offset = (
        timezone_offset_minutes if timezone_offset_minutes is not None
        else get_settings().default_timezone_offset_minutes
    )
    start, end = analysis_window(now, period_days, offset)

    events = await event_service.get_events_overlapping(db, user_id, start, end)
    events = [e for e in events if overlaps_window(e, start, end)]
    categories = {c.id: c for c in await category_service.list_available(db, user_id)}
    for event in events:
        if event.event_category is not None:
            categories.setdefault(event.event_category.id, event.event_category)

    analysis = analyze_productivity(events, categories, now, period_days, offset)
    logger.info(
        f"Productivity analysis over {period_days} days: "
        f"{analysis['total_events_analyzed']} events, {len(analysis['golden_hours'])} golden runs",
        extra={"user_id": str(user_id)},
    )
    return analysis
