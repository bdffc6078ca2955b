"""Schedule Suggestion Routes — generate, list and answer schedule suggestions.

Invariants:
    - POST /generate replaces the caller's pending suggestions
    - Responding to another user's suggestion is 403; an unknown id is 404
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from aurora.api.dependencies import get_ai_assistant, get_current_user_id
from aurora.core.domain_types import SuggestionStatus
from aurora.infrastructure.database import get_db
from aurora.schemas.schedule_suggestion import (
    GenerateSuggestionsRequest, RespondToSuggestion, ScheduleSuggestionResponse,
)
from aurora.services import schedule_suggestion_service
from aurora.services.ai_assistant import AIAssistant

router = APIRouter(prefix="/api/v1/schedule-suggestions", tags=["schedule-suggestions"])


@router.get("", response_model=list[ScheduleSuggestionResponse])
async def get_pending(
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    suggestions = await schedule_suggestion_service.get_pending(db, user_id)
    return [schedule_suggestion_service.to_response(s) for s in suggestions]


@router.post("/generate", response_model=list[ScheduleSuggestionResponse])
async def generate(
    body: GenerateSuggestionsRequest | None = None,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    assistant: AIAssistant = Depends(get_ai_assistant),
):
    suggestions = await schedule_suggestion_service.generate(
        db, user_id, assistant, body.timezone_offset_minutes if body else None,
    )
    return [schedule_suggestion_service.to_response(s) for s in suggestions]


@router.post("/{suggestion_id}/respond", response_model=ScheduleSuggestionResponse)
async def respond(
    suggestion_id: UUID,
    body: RespondToSuggestion,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    suggestion = await schedule_suggestion_service.respond(
        db, user_id, suggestion_id, SuggestionStatus(body.status), body.user_comment,
    )
    return schedule_suggestion_service.to_response(suggestion)
