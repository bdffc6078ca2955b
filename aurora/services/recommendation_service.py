"""Recommendation Service — heuristic recommendations, feedback and the AI assistant.

Invariants:
    - History window: [reference - 45 days, reference); upcoming: [reference, reference + 7 days)
    - Mood window: the whole reference month and the month before it, including
      days after the reference date
    - Feedback is upserted per (user, recommendation_id)
    - A feedback summary cannot start in the future

Design Decisions:
    - All ranking lives in core/recommendation_engine.py; this module only loads rows
    - The conversational assistant keeps the last 10 non-blank messages
      (ADR: bounded prompt size regardless of client history length)
"""

import logging
from dataclasses import asdict
from datetime import date, datetime, time, timedelta, timezone
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from aurora.core.domain_types import MAX_MOOD_RATING, MIN_MOOD_RATING
from aurora.core.errors import InvalidInputError
from aurora.core.event_rules import as_utc, days_in_month
from aurora.core.recommendation_engine import (
    LOOKAHEAD_DAYS, LOOKBACK_DAYS, build_recommendations,
    clamp_recommendation_count, sanitize_feedback_notes, summarize_feedback,
)
from aurora.models.recommendation_feedback import RecommendationFeedback
from aurora.services import category_service, event_service, mood_service
from aurora.services.ai_assistant import AIAssistant

logger = logging.getLogger(__name__)

DEFAULT_SUMMARY_DAYS = 30
MAX_CONVERSATION_MESSAGES = 10


def _mood_window(day: date) -> tuple[date, date]:
    """First day of the previous month through the last day of day's month."""
    first = day.replace(day=1)
    start = (first - timedelta(days=1)).replace(day=1)
    return start, first.replace(day=days_in_month(day.year, day.month))


async def get_recommendations(
    db: AsyncSession,
    user_id: UUID,
    reference_date: date | None = None,
    limit: int | None = None,
    current_mood: int | None = None,
    now: datetime | None = None,
) -> list[dict]:
    now = now or datetime.now(timezone.utc)
    reference_day = reference_date or now.date()
    reference = datetime.combine(reference_day, time.min, tzinfo=timezone.utc)
    desired = clamp_recommendation_count(limit)

    history = await event_service.get_events_starting_between(
        db, user_id, reference - timedelta(days=LOOKBACK_DAYS), reference,
    )
    upcoming = await event_service.get_events_starting_between(
        db, user_id, reference, reference + timedelta(days=LOOKAHEAD_DAYS),
    )
    mood_start, mood_end = _mood_window(reference_day)
    mood_entries = await mood_service.get_entries_between(db, user_id, mood_start, mood_end)
    categories = {c.id: c for c in await category_service.list_available(db, user_id)}

    recommendations = build_recommendations(
        reference_day, history, upcoming, mood_entries, categories, desired, now, current_mood,
    )
    logger.info(
        f"Built {len(recommendations)} recommendations",
        extra={"user_id": str(user_id)},
    )
    return [asdict(r) for r in recommendations]


async def record_feedback(
    db: AsyncSession,
    user_id: UUID,
    recommendation_id: str,
    accepted: bool,
    notes: str | None = None,
    mood_after: int | None = None,
    submitted_at: datetime | None = None,
) -> RecommendationFeedback:
    recommendation_id = (recommendation_id or "").strip()
    if not recommendation_id:
        raise InvalidInputError("Recommendation id is required", "recommendation_id")
    if mood_after is not None and not MIN_MOOD_RATING <= mood_after <= MAX_MOOD_RATING:
        raise InvalidInputError("mood_after must be between 1 and 5", "mood_after")

    result = await db.execute(
        select(RecommendationFeedback).where(
            RecommendationFeedback.user_id == user_id,
            RecommendationFeedback.recommendation_id == recommendation_id,
        ),
    )
    feedback = result.scalar_one_or_none()
    if feedback is None:
        feedback = RecommendationFeedback(user_id=user_id, recommendation_id=recommendation_id)
        db.add(feedback)

    feedback.accepted = accepted
    feedback.notes = sanitize_feedback_notes(notes)
    feedback.mood_after = mood_after
    feedback.submitted_at_utc = submitted_at or datetime.now(timezone.utc)
    feedback.is_active = True
    await db.commit()
    logger.info(
        f"Feedback recorded for {recommendation_id}: accepted={accepted}",
        extra={"user_id": str(user_id)},
    )
    return feedback


async def get_feedback_summary(
    db: AsyncSession,
    user_id: UUID,
    period_start: datetime | None = None,
    now: datetime | None = None,
) -> dict:
    now = now or datetime.now(timezone.utc)
    start = as_utc(period_start) if period_start else now - timedelta(days=DEFAULT_SUMMARY_DAYS)
    if start > now:
        raise InvalidInputError("The period start cannot be in the future", "period_start")

    result = await db.execute(
        select(RecommendationFeedback).where(
            RecommendationFeedback.user_id == user_id,
            RecommendationFeedback.is_active.is_(True),
            RecommendationFeedback.submitted_at_utc >= start,
        ),
    )
    return summarize_feedback(list(result.scalars().all()), start, now)


def _trim_conversation(conversation: list[dict]) -> list[dict]:
    messages = [m for m in conversation if m.get("content") and m["content"].strip()]
    messages = messages[-MAX_CONVERSATION_MESSAGES:]
    if not messages:
        raise InvalidInputError(
            "At least one conversation message is required", "conversation",
        )
    return messages


async def generate_assistant_recommendations(
    db: AsyncSession,
    user_id: UUID,
    assistant: AIAssistant,
    conversation: list[dict],
    current_mood: int | None = None,
    external_context: str | None = None,
    reference_date: date | None = None,
    now: datetime | None = None,
) -> list[dict]:
    """Conversational recommendations, grounded on the heuristic list."""
    now = now or datetime.now(timezone.utc)
    messages = _trim_conversation(conversation)
    fallback = await get_recommendations(
        db, user_id, reference_date, None, current_mood, now,
    )
    logger.info(
        f"Generating assistant recommendations from {len(messages)} messages",
        extra={"user_id": str(user_id)},
    )
    return await assistant.assistant_recommendations(
        messages, current_mood, external_context, fallback, now, user_id,
    )


async def generate_assistant_reply(
    user_id: UUID,
    assistant: AIAssistant,
    conversation: list[dict],
    current_mood: int | None = None,
    external_context: str | None = None,
) -> str:
    messages = _trim_conversation(conversation)
    return await assistant.assistant_reply(messages, current_mood, external_context, user_id)
