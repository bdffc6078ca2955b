"""AI Planning Service — gathers calendar context from the database for AIAssistant.

Invariants:
    - Validation context spans start - 1 day to start + 7 days
    - An event the AI does not approve is never stored (EventRejectedError, 400)
    - Preferences are read, never created, here (find_preferences)
    - Missing timezone offsets fall back to settings.default_timezone_offset_minutes

Design Decisions:
    - Split from ai_assistant.py: the assistant knows prompts and models, this
      module knows queries (ADR: impureim sandwich)
"""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from aurora.config import get_settings
from aurora.core.ai_prompts import plan_start_date
from aurora.core.errors import EventRejectedError
from aurora.core.event_rules import as_utc, local_to_utc
from aurora.models.event import Event
from aurora.schemas.ai import GeneratePlanRequest
from aurora.schemas.event import EventCreate
from aurora.services import category_service, event_service, preferences_service
from aurora.services.ai_assistant import AIAssistant

logger = logging.getLogger(__name__)

CONTEXT_DAYS_BEFORE = 1
CONTEXT_DAYS_AFTER = 7
PARSING_LOOKAHEAD_DAYS = 30
DEFAULT_PLAN_WEEKS = 12


def _offset(value: int | None) -> int:
    return value if value is not None else get_settings().default_timezone_offset_minutes


async def validate_new_event(
    db: AsyncSession,
    user_id: UUID,
    data: EventCreate,
    assistant: AIAssistant,
    exclude_id: UUID | None = None,
) -> dict:
    """AI review of an event against the surrounding calendar."""
    start = as_utc(data.start_date)
    existing = await event_service.get_events_overlapping(
        db, user_id,
        start - timedelta(days=CONTEXT_DAYS_BEFORE),
        start + timedelta(days=CONTEXT_DAYS_AFTER),
    )
    if exclude_id is not None:
        existing = [e for e in existing if e.id != exclude_id]
    categories = await category_service.list_available(db, user_id)
    preferences = await preferences_service.find_preferences(db, user_id)
    return await assistant.validate_event(
        data.model_dump(), existing, categories, preferences, user_id,
    )


async def create_validated_event(
    db: AsyncSession, user_id: UUID, data: EventCreate, assistant: AIAssistant,
) -> tuple[Event, dict]:
    validation = await validate_new_event(db, user_id, data, assistant)
    if not validation["is_approved"]:
        logger.info(
            f"Event rejected by AI review: {data.title}",
            extra={"user_id": str(user_id)},
        )
        raise EventRejectedError(
            validation["recommendation_message"] or "The event was not approved",
            validation["severity"].value,
            validation["suggestions"],
        )
    event = await event_service.create_event(db, user_id, data)
    return event, validation


async def parse_event_text(
    db: AsyncSession,
    user_id: UUID,
    text: str,
    offset_minutes: int | None,
    assistant: AIAssistant,
    now: datetime | None = None,
) -> dict:
    now = now or datetime.now(timezone.utc)
    offset = _offset(offset_minutes)
    categories = await category_service.list_available(db, user_id)
    upcoming = await event_service.get_events_overlapping(
        db, user_id, now, now + timedelta(days=PARSING_LOOKAHEAD_DAYS),
    )
    preferences = await preferences_service.find_preferences(db, user_id)
    return await assistant.parse_natural_language(
        text, categories, offset, upcoming, preferences, now, user_id,
    )


async def generate_plan(
    db: AsyncSession,
    user_id: UUID,
    request: GeneratePlanRequest,
    assistant: AIAssistant,
    now: datetime | None = None,
) -> dict:
    now = now or datetime.now(timezone.utc)
    payload = request.model_dump()
    payload["timezone_offset_minutes"] = _offset(request.timezone_offset_minutes)

    offset = payload["timezone_offset_minutes"]
    first_day = plan_start_date(request.start_date, offset, now)
    window_start = local_to_utc(datetime.combine(first_day, datetime.min.time()), offset)
    weeks = request.duration_weeks or DEFAULT_PLAN_WEEKS
    existing = await event_service.get_events_overlapping(
        db, user_id, window_start, window_start + timedelta(weeks=weeks),
    )
    categories = await category_service.list_available(db, user_id)
    preferences = await preferences_service.find_preferences(db, user_id)
    return await assistant.generate_plan(
        payload, categories, existing, preferences, now, user_id,
    )
