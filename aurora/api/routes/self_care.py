"""Self-Care Routes — contextual suggestions, usage feedback and the generic fallback list."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from aurora.api.dependencies import get_ai_assistant, get_current_user_id
from aurora.infrastructure.database import get_db
from aurora.schemas.self_care import SelfCareFeedback, SelfCareRecommendation, SelfCareRequest
from aurora.services import self_care_service
from aurora.services.ai_assistant import AIAssistant

router = APIRouter(prefix="/api/v1/recommendations/self-care", tags=["self-care"])


@router.post("", response_model=list[SelfCareRecommendation])
async def get_self_care(
    body: SelfCareRequest,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    assistant: AIAssistant = Depends(get_ai_assistant),
):
    return await self_care_service.get_recommendations(
        db, user_id, assistant, body.current_mood, body.count, body.timezone_offset_minutes,
    )


@router.post("/feedback", status_code=status.HTTP_204_NO_CONTENT)
async def register_feedback(
    body: SelfCareFeedback,
    user_id: UUID = Depends(get_current_user_id),
):
    self_care_service.register_feedback(
        user_id, body.recommendation_id, body.action, body.mood_after, body.notes, body.timestamp,
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/generic", response_model=list[SelfCareRecommendation])
async def get_generic(count: int = Query(5, ge=1, le=10)):
    return self_care_service.get_generic(count)
