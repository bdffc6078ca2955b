"""Recommendation Routes — heuristic suggestions, feedback and the conversational assistant.

Invariants:
    - GET /recommendations never calls the model
    - /assistant and /assistant/chat need AI; disabled or failing AI is 503/502
"""

from datetime import date, datetime
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from aurora.api.dependencies import get_ai_assistant, get_current_user_id
from aurora.infrastructure.database import get_db
from aurora.schemas.recommendation import (
    AssistantReply, AssistantRequest, FeedbackSummary,
    RecommendationFeedbackCreate, RecommendationFeedbackResponse, RecommendationResponse,
)
from aurora.services import recommendation_service
from aurora.services.ai_assistant import AIAssistant

router = APIRouter(prefix="/api/v1/recommendations", tags=["recommendations"])


@router.get("", response_model=list[RecommendationResponse])
async def get_recommendations(
    reference_date: date | None = Query(None),
    limit: int | None = Query(None),
    current_mood: int | None = Query(None, ge=1, le=5),
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await recommendation_service.get_recommendations(
        db, user_id, reference_date, limit, current_mood,
    )


@router.post("/assistant", response_model=list[RecommendationResponse])
async def assistant_recommendations(
    body: AssistantRequest,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
    assistant: AIAssistant = Depends(get_ai_assistant),
):
    return await recommendation_service.generate_assistant_recommendations(
        db, user_id, assistant,
        [m.model_dump() for m in body.conversation],
        body.current_mood, body.external_context, body.reference_date,
    )


@router.post("/assistant/chat", response_model=AssistantReply)
async def assistant_chat(
    body: AssistantRequest,
    user_id: UUID = Depends(get_current_user_id),
    assistant: AIAssistant = Depends(get_ai_assistant),
):
    reply = await recommendation_service.generate_assistant_reply(
        user_id, assistant,
        [m.model_dump() for m in body.conversation],
        body.current_mood, body.external_context,
    )
    return {"reply": reply}


@router.post("/feedback", response_model=RecommendationFeedbackResponse)
async def record_feedback(
    body: RecommendationFeedbackCreate,
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await recommendation_service.record_feedback(
        db, user_id, body.recommendation_id, body.accepted,
        body.notes, body.mood_after, body.submitted_at_utc,
    )


@router.get("/feedback/summary", response_model=FeedbackSummary)
async def feedback_summary(
    period_start: datetime | None = Query(None),
    user_id: UUID = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
):
    return await recommendation_service.get_feedback_summary(db, user_id, period_start)
