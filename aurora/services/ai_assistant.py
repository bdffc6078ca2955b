"""AI Assistant — every model-backed feature behind one class.

Invariants:
    - Prompts come from core/ai_prompts.py, replies are parsed by core/ai_response_parsing.py
    - Validation never blocks: any failure approves by default with used_ai=False
    - Schedule and self-care generation degrade to None / [] so callers can fall back
    - NL parsing, plans and the conversational assistant raise on failure
      (AnthropicAPIError → 503, AIResponseError → 502)

Design Decisions:
    - client=None means AI is disabled (settings.ai_enabled=False or tests); the
      class still exists so routes depend on one type (ADR: AI is advisory)
    - Injected through FastAPI Depends(get_ai_assistant) so tests override it
"""

import logging
from datetime import datetime
from uuid import UUID

from aurora.core.ai_prompts import (
    build_assistant_prompt, build_chat_prompt, build_parsing_prompt,
    build_plan_prompt, build_schedule_prompt, build_self_care_prompt,
    build_validation_prompt,
)
from aurora.core.ai_response_parsing import (
    approved_by_default, parse_assistant_recommendations,
    parse_natural_language_reply, parse_plan_reply, parse_schedule_suggestions,
    parse_self_care_suggestions, parse_validation,
)
from aurora.core.errors import AIResponseError, AnthropicAPIError, AuroraError, ErrorContext
from aurora.core.repository_protocols import CategoryLike, EventLike, PreferencesLike
from aurora.infrastructure.anthropic_client import ResilientAnthropicClient

logger = logging.getLogger(__name__)

PLANNER_SYSTEM = (
    "You are Aurora, a calendar and wellbeing planning assistant. "
    "When asked for JSON, answer with JSON only."
)
CHAT_SYSTEM = "You are Aurora, a warm personal planning assistant focused on wellbeing."


class AIAssistant:
    """Model-backed validation, parsing, planning and suggestions."""

    def __init__(
        self,
        client: ResilientAnthropicClient | None,
        model: str = "claude-sonnet-4-5",
        max_tokens: int = 2048,
    ):
        self.client = client
        self.model = model
        self.max_tokens = max_tokens

    @property
    def enabled(self) -> bool:
        return self.client is not None

    async def _complete(
        self,
        prompt: str,
        operation: str,
        user_id: UUID | None = None,
        system: str = PLANNER_SYSTEM,
    ) -> str:
        ctx = ErrorContext(
            user_id=str(user_id) if user_id else None, operation=operation,
        )
        if self.client is None:
            raise AnthropicAPIError("AI features are disabled", "disabled", context=ctx)
        text = await self.client.complete(
            model=self.model,
            max_tokens=self.max_tokens,
            system=system,
            prompt=prompt,
            context=ctx,
        )
        if not text.strip():
            raise AIResponseError("The AI returned an empty reply", context=ctx)
        return text

    async def generate_text(
        self, prompt: str, user_id: UUID | None = None, system: str = PLANNER_SYSTEM,
    ) -> str:
        """Free-form reply, stripped. Raises like every other generator."""
        return (await self._complete(prompt, "generate_text", user_id, system=system)).strip()

    # ─── Validation ──────────────────────────────────────────────

    async def validate_event(
        self,
        draft: dict,
        existing: list[EventLike],
        categories: list[CategoryLike],
        preferences: PreferencesLike | None = None,
        user_id: UUID | None = None,
    ) -> dict:
        """AI review of an event. Approves by default whenever the model is unusable."""
        if not self.enabled:
            return approved_by_default(
                "AI validation is not available. Event approved by default.",
            )
        prompt = build_validation_prompt(
            draft, existing, {c.id: c for c in categories}, preferences,
        )
        try:
            result = parse_validation(await self._complete(prompt, "validate_event", user_id))
        except AuroraError as e:
            logger.warning(
                f"AI validation failed, approving by default: {e.message}",
                extra={"user_id": str(user_id) if user_id else None, "error_code": e.code},
            )
            return approved_by_default(
                "AI validation could not be completed. Event approved by default.",
            )
        logger.info(
            f"AI validation: approved={result['is_approved']} severity={result['severity'].value}",
            extra={"user_id": str(user_id) if user_id else None},
        )
        return result

    # ─── Natural language parsing ────────────────────────────────

    async def parse_natural_language(
        self,
        text: str,
        categories: list[CategoryLike],
        offset_minutes: int,
        existing: list[EventLike],
        preferences: PreferencesLike | None,
        now: datetime,
        user_id: UUID | None = None,
    ) -> dict:
        """Free text → {event, validation}. Raises when the model cannot be used."""
        prompt = build_parsing_prompt(text, categories, offset_minutes, existing, preferences, now)
        reply = await self._complete(prompt, "parse_natural_language", user_id)
        draft, validation = parse_natural_language_reply(reply, categories, offset_minutes, now)
        if validation is None:
            validation = await self.validate_event(
                draft, existing, categories, preferences, user_id,
            )
        logger.info(
            f"Parsed natural language into event {draft['title']!r}",
            extra={"user_id": str(user_id) if user_id else None},
        )
        return {"event": draft, "validation": validation}

    # ─── Plans ───────────────────────────────────────────────────

    async def generate_plan(
        self,
        request: dict,
        categories: list[CategoryLike],
        existing: list[EventLike],
        preferences: PreferencesLike | None,
        now: datetime,
        user_id: UUID | None = None,
    ) -> dict:
        prompt = build_plan_prompt(request, categories, existing, preferences, now)
        reply = await self._complete(prompt, "generate_plan", user_id)
        plan = parse_plan_reply(
            reply, categories, request.get("timezone_offset_minutes") or 0, existing, now,
        )
        if not plan["events"]:
            raise AIResponseError("The AI did not produce any plan sessions")
        logger.info(
            f"Generated plan {plan['plan_title']!r} with {plan['total_sessions']} sessions",
            extra={"user_id": str(user_id) if user_id else None},
        )
        return plan

    # ─── Schedule suggestions ────────────────────────────────────

    async def generate_schedule_suggestions(
        self,
        events: list[EventLike],
        categories: dict[UUID, CategoryLike],
        offset_minutes: int = 0,
        user_id: UUID | None = None,
    ) -> list[dict] | None:
        """Suggestion dicts, or None when the model is disabled or unusable."""
        if not self.enabled or not events:
            return None
        try:
            reply = await self._complete(
                build_schedule_prompt(events, categories, offset_minutes),
                "schedule_suggestions",
                user_id,
            )
            return parse_schedule_suggestions(reply, {e.id for e in events})
        except AuroraError as e:
            logger.warning(
                f"AI schedule suggestions unavailable: {e.message}",
                extra={"user_id": str(user_id) if user_id else None, "error_code": e.code},
            )
            return None

    # ─── Self-care ───────────────────────────────────────────────

    async def generate_self_care(
        self,
        time_of_day: str,
        local_now: datetime,
        current_mood: int | None,
        uplifting_titles: list[str],
        total_events: int,
        user_id: UUID | None = None,
    ) -> list[dict]:
        """Raw self-care suggestion payloads; [] when the model is unusable."""
        if not self.enabled:
            return []
        prompt = build_self_care_prompt(
            time_of_day, local_now, current_mood, uplifting_titles, total_events,
        )
        try:
            return parse_self_care_suggestions(
                await self._complete(prompt, "self_care", user_id),
            )
        except AuroraError as e:
            logger.warning(
                f"AI self-care suggestions unavailable: {e.message}",
                extra={"user_id": str(user_id) if user_id else None, "error_code": e.code},
            )
            return []

    # ─── Conversational assistant ────────────────────────────────

    async def assistant_recommendations(
        self,
        conversation: list[dict],
        current_mood: int | None,
        external_context: str | None,
        fallback: list[dict] | None,
        now: datetime,
        user_id: UUID | None = None,
    ) -> list[dict]:
        prompt = build_assistant_prompt(conversation, current_mood, external_context, fallback)
        reply = await self._complete(prompt, "assistant_recommendations", user_id)
        recommendations = parse_assistant_recommendations(reply, now)
        if not recommendations:
            raise AIResponseError("The AI did not produce usable recommendations")
        return recommendations

    async def assistant_reply(
        self,
        conversation: list[dict],
        current_mood: int | None,
        external_context: str | None,
        user_id: UUID | None = None,
    ) -> str:
        prompt = build_chat_prompt(conversation, current_mood, external_context)
        return await self.generate_text(prompt, user_id, system=CHAT_SYSTEM)
