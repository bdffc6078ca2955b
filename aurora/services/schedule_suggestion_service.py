"""Schedule Suggestion Service — AI-first schedule review with heuristic fallback.

Invariants:
    - generate() replaces the user's pending suggestions: stale ones (> 7 days)
      are marked expired first, the remaining pending ones are deleted
    - The model sees events starting in the next 14 days; heuristics run when it
      returns nothing
    - Accepting a suggestion that names an event and a time moves the event,
      keeping its duration

Design Decisions:
    - Expire-then-delete keeps an audit trail of suggestions the user never answered
    - to_response() renders labels here, not in the ORM (ADR: models stay storage-only)
"""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from aurora.config import get_settings
from aurora.core.domain_types import (
    SUGGESTION_STATUS_LABELS, SUGGESTION_TYPE_LABELS, SuggestionStatus, SuggestionType,
)
from aurora.core.errors import ErrorContext, ForbiddenError, ResourceNotFoundError
from aurora.core.event_rules import as_utc
from aurora.core.schedule_heuristics import DISTRIBUTION_WINDOW_DAYS, generate_heuristic_suggestions
from aurora.models.schedule_suggestion import ScheduleSuggestion
from aurora.services import category_service, event_service
from aurora.services.ai_assistant import AIAssistant

logger = logging.getLogger(__name__)

EXPIRY_DAYS = 7


def to_response(suggestion: ScheduleSuggestion) -> dict:
    kind = SuggestionType(suggestion.type)
    status = SuggestionStatus(suggestion.status)
    return {
        "id": suggestion.id,
        "event_id": suggestion.event_id,
        "event_title": suggestion.event.title if suggestion.event else None,
        "type": kind,
        "type_description": SUGGESTION_TYPE_LABELS[kind],
        "description": suggestion.description,
        "reason": suggestion.reason,
        "priority": suggestion.priority,
        "suggested_datetime": suggestion.suggested_datetime,
        "status": status,
        "status_description": SUGGESTION_STATUS_LABELS[status],
        "created_at": suggestion.created_at,
        "responded_at": suggestion.responded_at,
        "confidence_score": suggestion.confidence_score,
        "metadata": suggestion.extra or {},
    }


async def _clear_pending(db: AsyncSession, user_id: UUID, now: datetime) -> None:
    pending = (
        ScheduleSuggestion.user_id == user_id,
        ScheduleSuggestion.status == SuggestionStatus.PENDING.value,
    )
    await db.execute(
        update(ScheduleSuggestion)
        .where(*pending, ScheduleSuggestion.created_at < now - timedelta(days=EXPIRY_DAYS))
        .values(status=SuggestionStatus.EXPIRED.value),
    )
    await db.execute(delete(ScheduleSuggestion).where(*pending))


async def generate(
    db: AsyncSession,
    user_id: UUID,
    assistant: AIAssistant,
    timezone_offset_minutes: int | None = None,
    now: datetime | None = None,
) -> list[ScheduleSuggestion]:
    now = now or datetime.now(timezone.utc)
    offset = (
        timezone_offset_minutes if timezone_offset_minutes is not None
        else get_settings().default_timezone_offset_minutes
    )
    await _clear_pending(db, user_id, now)

    events = await event_service.get_events_in_range(
        db, user_id, now, now + timedelta(days=DISTRIBUTION_WINDOW_DAYS),
    )
    categories = {c.id: c for c in await category_service.list_available(db, user_id)}
    drafts = await assistant.generate_schedule_suggestions(events, categories, offset, user_id)

    if drafts:
        source = "ai"
    else:
        source = "heuristics"
        drafts = [
            {
                "type": d.type,
                "event_id": d.event_id,
                "description": d.description,
                "reason": d.reason,
                "priority": d.priority,
                "suggested_datetime": d.suggested_datetime,
                "confidence_score": d.confidence_score,
                "metadata": d.metadata,
            }
            for d in generate_heuristic_suggestions(events, now)
        ]

    suggestions = []
    for draft in drafts:
        suggestion = ScheduleSuggestion(
            user_id=user_id,
            event_id=draft["event_id"],
            type=SuggestionType(draft["type"]).value,
            description=draft["description"][:500],
            reason=draft["reason"],
            priority=draft["priority"],
            suggested_datetime=draft["suggested_datetime"],
            status=SuggestionStatus.PENDING.value,
            confidence_score=draft["confidence_score"],
            extra=draft["metadata"],
            created_at=now,
        )
        db.add(suggestion)
        suggestions.append(suggestion)
    await db.commit()
    for suggestion in suggestions:
        await db.refresh(suggestion, attribute_names=["event"])

    logger.info(
        f"Generated {len(suggestions)} schedule suggestions from {source}",
        extra={"user_id": str(user_id)},
    )
    return suggestions


async def get_pending(db: AsyncSession, user_id: UUID) -> list[ScheduleSuggestion]:
    """Pending suggestions, highest priority first."""
    result = await db.execute(
        select(ScheduleSuggestion)
        .where(
            ScheduleSuggestion.user_id == user_id,
            ScheduleSuggestion.status == SuggestionStatus.PENDING.value,
            ScheduleSuggestion.is_active.is_(True),
        )
        .order_by(ScheduleSuggestion.priority.desc(), ScheduleSuggestion.created_at),
    )
    return list(result.scalars().all())


async def respond(
    db: AsyncSession,
    user_id: UUID,
    suggestion_id: UUID,
    status: SuggestionStatus,
    comment: str | None = None,
    now: datetime | None = None,
) -> ScheduleSuggestion:
    now = now or datetime.now(timezone.utc)
    suggestion = await db.get(ScheduleSuggestion, suggestion_id)
    if suggestion is None or not suggestion.is_active:
        raise ResourceNotFoundError("ScheduleSuggestion", str(suggestion_id))
    if suggestion.user_id != user_id:
        raise ForbiddenError(
            "You cannot respond to another user's suggestion",
            context=ErrorContext(user_id=str(user_id), resource_id=str(suggestion_id)),
        )

    suggestion.status = status.value
    suggestion.responded_at = now
    if comment and comment.strip():
        suggestion.extra = {
            **(suggestion.extra or {}),
            "user_comment": comment.strip(),
            "responded_at": now.isoformat(),
        }

    if status == SuggestionStatus.ACCEPTED:
        await _apply(db, user_id, suggestion)

    await db.commit()
    logger.info(
        f"Suggestion {suggestion_id} marked {status.value}",
        extra={"user_id": str(user_id)},
    )
    return suggestion


async def _apply(db: AsyncSession, user_id: UUID, suggestion: ScheduleSuggestion) -> None:
    """Move the referenced event to the suggested time, keeping its duration."""
    if suggestion.event_id is None or suggestion.suggested_datetime is None:
        return
    event = await event_service.get_event(db, user_id, suggestion.event_id)
    if event is None:
        logger.warning(
            f"Accepted suggestion references a missing event {suggestion.event_id}",
            extra={"user_id": str(user_id)},
        )
        return
    duration = as_utc(event.end_date) - as_utc(event.start_date)
    event.start_date = as_utc(suggestion.suggested_datetime)
    event.end_date = event.start_date + duration
    logger.info(
        f"Event moved to {event.start_date.isoformat()} by accepted suggestion",
        extra={"user_id": str(user_id), "event_id": str(event.id)},
    )
