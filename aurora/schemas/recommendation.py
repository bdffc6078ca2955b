"""Recommendation Schemas — heuristic and conversational activity suggestions.

Invariants:
    - Conversation messages have role "user" or "assistant"; the service keeps the last 10 non-blank
    - Feedback recommendation_id: non-blank, at most 200 chars; mood_after 1-5
"""

from datetime import date
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator

from aurora.schemas.common import UtcDatetime


class RecommendationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    subtitle: str | None = None
    reason: str
    recommendation_type: str
    suggested_start: UtcDatetime
    suggested_duration_minutes: int
    confidence: float
    category_id: UUID | None = None
    category_name: str | None = None
    mood_impact: str | None = None
    summary: str | None = None


class ConversationMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str = Field(max_length=4000)


class AssistantRequest(BaseModel):
    conversation: list[ConversationMessage] = Field(default_factory=list, max_length=50)
    current_mood: int | None = Field(None, ge=1, le=5)
    external_context: str | None = Field(None, max_length=1000)
    reference_date: date | None = None


class AssistantReply(BaseModel):
    reply: str


class RecommendationFeedbackCreate(BaseModel):
    recommendation_id: str = Field(min_length=1, max_length=200)
    accepted: bool
    notes: str | None = Field(None, max_length=2000)
    mood_after: int | None = None
    submitted_at_utc: UtcDatetime | None = None

    @field_validator("recommendation_id")
    @classmethod
    def strip_id(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("recommendation_id cannot be empty or whitespace")
        return v


class RecommendationFeedbackResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    recommendation_id: str
    accepted: bool
    notes: str | None = None
    mood_after: int | None = None
    submitted_at_utc: UtcDatetime


class FeedbackSummary(BaseModel):
    total_feedback: int
    accepted_count: int
    rejected_count: int
    acceptance_rate: float
    average_mood_after: float | None = None
    period_start_utc: UtcDatetime
    period_end_utc: UtcDatetime
