"""AI Schemas — validation results, natural-language drafts and generated plans.

Invariants:
    - ParseNaturalLanguageRequest.text: 3-500 chars, stripped
    - GeneratePlanRequest.goal: 5-500 chars, stripped
    - Drafts are never persisted by these endpoints; clients POST them to /events
"""

from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from aurora.core.domain_types import EventPriority, ValidationSeverity
from aurora.schemas.common import OffsetMinutes, UtcDatetime


class AIValidationResult(BaseModel):
    is_approved: bool
    recommendation_message: str = ""
    severity: ValidationSeverity = ValidationSeverity.INFO
    suggestions: list[str] = []
    used_ai: bool = True


class EventDraft(BaseModel):
    title: str
    description: str | None = None
    start_date: UtcDatetime
    end_date: UtcDatetime
    is_all_day: bool = False
    location: str | None = None
    priority: EventPriority = EventPriority.MEDIUM
    event_category_id: UUID
    suggested_category_name: str | None = None
    timezone_offset_minutes: int | None = None


class ParseNaturalLanguageRequest(BaseModel):
    text: str = Field(min_length=3, max_length=500)
    timezone_offset_minutes: OffsetMinutes | None = None

    @field_validator("text")
    @classmethod
    def strip_text(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 3:
            raise ValueError("text must contain at least 3 characters")
        return v


class ParseNaturalLanguageResponse(BaseModel):
    event: EventDraft
    validation: AIValidationResult


class GeneratePlanRequest(BaseModel):
    goal: str = Field(min_length=5, max_length=500)
    timezone_offset_minutes: OffsetMinutes | None = None
    start_date: UtcDatetime | None = None
    duration_weeks: int | None = Field(None, ge=1, le=52)
    sessions_per_week: int | None = Field(None, ge=1, le=14)
    session_duration_minutes: int | None = Field(None, ge=10, le=480)
    preferred_time_of_day: str | None = Field(None, max_length=50)

    @field_validator("goal")
    @classmethod
    def strip_goal(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 5:
            raise ValueError("goal must contain at least 5 characters")
        return v


class GeneratePlanResponse(BaseModel):
    plan_title: str
    plan_description: str
    duration_weeks: int
    total_sessions: int
    events: list[EventDraft]
    additional_tips: str | None = None
    conflict_warnings: list[str] = []
    has_potential_conflicts: bool = False
