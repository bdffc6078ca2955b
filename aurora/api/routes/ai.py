"""AI Routes — event review, natural-language drafts and multi-week plans.

Invariants:
    - Nothing here writes events; drafts are returned for the client to confirm
    - validate-event always answers (approve-by-default); parse and plan surface
      AI failures as 503 (unavailable) or 502 (unusable reply)
"""

from uuid import UUID

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from aurora.api.dependencies import get_ai_assistant, get_current_user_id
from aurora.infrastructure.database import get_db
from aurora.schemas.ai import (
    AIValidationResult, GeneratePlanRequest, GeneratePlanResponse,
    ParseNaturalLanguageRequest, ParseNaturalLanguageResponse,
)
from aurora.schemas.event import EventCreate
from aurora.services import ai_planning_service
from aurora.services.ai_assistant import AIAssistant

router = APIRouter(prefix="/api/v1/ai", tags=["ai"])


@router.post("/validate-event", response_model=AIValidationResult)
async def validate_event(
    body: EventCreate,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    assistant: AIAssistant = Depends(get_ai_assistant),
):
    return await ai_planning_service.validate_new_event(db, user_id, body, assistant)


@router.post("/parse-natural-language", response_model=ParseNaturalLanguageResponse)
async def parse_natural_language(
    body: ParseNaturalLanguageRequest,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    assistant: AIAssistant = Depends(get_ai_assistant),
):
    return await ai_planning_service.parse_event_text(
        db, user_id, body.text, body.timezone_offset_minutes, assistant,
    )


@router.post("/generate-plan", response_model=GeneratePlanResponse)
async def generate_plan(
    body: GeneratePlanRequest,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    assistant: AIAssistant = Depends(get_ai_assistant),
):
    return await ai_planning_service.generate_plan(db, user_id, body, assistant)
