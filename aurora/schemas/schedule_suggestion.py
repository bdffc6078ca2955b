"""Schedule Suggestion Schemas — suggestion responses and user decisions.

Invariants:
    - Responses carry human-readable type and status labels
    - A response can only move a suggestion to accepted, rejected or postponed
"""

from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field

from aurora.core.domain_types import SuggestionStatus, SuggestionType
from aurora.schemas.common import OffsetMinutes, UtcDatetime


class GenerateSuggestionsRequest(BaseModel):
    timezone_offset_minutes: OffsetMinutes | None = None


class ScheduleSuggestionResponse(BaseModel):
    id: UUID
    event_id: UUID | None = None
    event_title: str | None = None
    type: SuggestionType
    type_description: str
    description: str
    reason: str
    priority: int
    suggested_datetime: UtcDatetime | None = None
    status: SuggestionStatus
    status_description: str
    created_at: UtcDatetime
    responded_at: UtcDatetime | None = None
    confidence_score: int
    metadata: dict = {}


class RespondToSuggestion(BaseModel):
    status: Literal["accepted", "rejected", "postponed"]
    user_comment: str | None = Field(None, max_length=500)
