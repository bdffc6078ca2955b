"""Self-Care Service — contextual, history-scored self-care suggestions.

Invariants:
    - History = the user's events starting in the last 30 days
    - Items used in the last 48 hours are not suggested again
    - Result = top 3 scored items + up to 2 AI items, topped up to `count`
    - Any failure returns the generic list instead of an error

Design Decisions:
    - Recent usage lives in process memory keyed by user
      (ADR: lost on restart, no table for a 48h window)
    - Local time comes from the request offset, so suggestions follow the user's clock
"""

import logging
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from aurora.config import get_settings
from aurora.core.domain_types import POSITIVE_MOOD_THRESHOLD, SelfCareFeedbackAction
from aurora.core.event_rules import to_local
from aurora.core.self_care_catalog import (
    ai_item_from_payload, combine, contextual_pool, filter_recent,
    generic_recommendations, prune_usage, score_item, time_of_day,
)
from aurora.services import event_service
from aurora.services.ai_assistant import AIAssistant

logger = logging.getLogger(__name__)

HISTORY_DAYS = 30

_recent_usage: dict[UUID, list[tuple[str, datetime]]] = defaultdict(list)


async def get_recommendations(
    db: AsyncSession,
    user_id: UUID,
    assistant: AIAssistant,
    current_mood: int | None = None,
    count: int = 5,
    timezone_offset_minutes: int | None = None,
    now: datetime | None = None,
) -> list[dict]:
    now = now or datetime.now(timezone.utc)
    offset = (
        timezone_offset_minutes if timezone_offset_minutes is not None
        else get_settings().default_timezone_offset_minutes
    )
    try:
        history = await event_service.get_events_in_range(
            db, user_id, now - timedelta(days=HISTORY_DAYS), now,
        )
        local_now = to_local(now, offset)

        ranked = sorted(
            (score_item(item, history, now) for item in contextual_pool(local_now, current_mood)),
            key=lambda s: -s["confidence_score"],
        )
        ranked = filter_recent(ranked, _recent_usage.get(user_id, []), now)

        uplifting = [
            e.title for e in history
            if e.mood_rating is not None and e.mood_rating >= POSITIVE_MOOD_THRESHOLD
        ]
        payloads = await assistant.generate_self_care(
            time_of_day(local_now.hour), local_now, current_mood, uplifting, len(history), user_id,
        )
        ai_items = [
            item for item in (ai_item_from_payload(p) for p in payloads) if item["title"]
        ]

        recommendations = combine(ranked, ai_items, count)
        logger.info(
            f"Self-care: {len(recommendations)} suggestions "
            f"({min(len(ai_items), 2)} from AI)",
            extra={"user_id": str(user_id)},
        )
        return recommendations
    except Exception as e:
        logger.error(
            f"Self-care suggestions failed, returning generic list: {e}",
            exc_info=True,
            extra={"user_id": str(user_id)},
        )
        return generic_recommendations(count)


def register_feedback(
    user_id: UUID,
    recommendation_id: str,
    action: SelfCareFeedbackAction,
    mood_after: int | None = None,
    notes: str | None = None,
    timestamp: datetime | None = None,
) -> None:
    """Remember the suggestion as used so it is not repeated for 48 hours."""
    now = datetime.now(timezone.utc)
    used_at = timestamp or now
    logger.info(
        f"Self-care feedback for {recommendation_id}: {action.value}"
        + (f", mood after {mood_after}" if mood_after is not None else ""),
        extra={"user_id": str(user_id)},
    )
    usage = _recent_usage[user_id]
    usage.append((recommendation_id, used_at))
    _recent_usage[user_id] = prune_usage(usage, now)


def get_generic(count: int = 5) -> list[dict]:
    return generic_recommendations(count)


def clear_usage() -> None:
    _recent_usage.clear()
