"""Self-Care Schemas — request context, suggestions and feedback."""

from datetime import datetime, timezone
from uuid import UUID

from pydantic import BaseModel, Field

from aurora.core.domain_types import SelfCareFeedbackAction, SelfCareType
from aurora.schemas.common import OffsetMinutes, UtcDatetime


class SelfCareRequest(BaseModel):
    context: str | None = Field(None, max_length=1000)
    current_mood: int | None = Field(None, ge=1, le=5)
    count: int = Field(5, ge=1, le=10)
    timezone_offset_minutes: OffsetMinutes | None = None


class SelfCareRecommendation(BaseModel):
    id: str
    type: SelfCareType
    type_description: str
    title: str
    description: str
    duration_minutes: int
    personalized_reason: str
    confidence_score: int
    icon: str
    historical_mood_impact: int | None = None
    completion_rate: int | None = None
    suggested_datetime: UtcDatetime | None = None
    category_id: UUID | None = None


class SelfCareFeedback(BaseModel):
    recommendation_id: str = Field(..., min_length=1, max_length=100)
    action: SelfCareFeedbackAction
    mood_after: int | None = Field(None, ge=1, le=5)
    notes: str | None = Field(None, max_length=1000)
    timestamp: UtcDatetime = Field(default_factory=lambda: datetime.now(timezone.utc))
