"""Event Schemas — Pydantic models with field-level validation for event endpoints.

Invariants:
    - EventCreate.title: 1-200 chars, stripped, non-empty
    - start_date < end_date (cross-field check)
    - Datetimes are normalised to UTC on the way in and on the way out

Design Decisions:
    - suggested_category_name lets AI-drafted events name a category that does not
      exist yet; the service creates it on demand
    - EventUpdate is a full replacement, not a patch (ADR: the UI always sends the form)
"""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from aurora.core.domain_types import EventPriority
from aurora.schemas.category import EventCategoryResponse
from aurora.schemas.common import OffsetMinutes, UtcDatetime


class EventCreate(BaseModel):
    """Event creation — validates title, range and category hints."""
    title: str = Field(min_length=1, max_length=200)
    description: str | None = Field(None, max_length=2000)
    start_date: UtcDatetime
    end_date: UtcDatetime
    is_all_day: bool = False
    location: str | None = Field(None, max_length=200)
    color: str | None = Field(None, pattern=r"^#[0-9a-fA-F]{6}$")
    notes: str | None = Field(None, max_length=2000)
    priority: EventPriority = EventPriority.MEDIUM
    is_recurring: bool = False
    recurrence_pattern: str | None = Field(None, max_length=100)
    event_category_id: UUID | None = None
    suggested_category_name: str | None = Field(None, max_length=50)
    timezone_offset_minutes: OffsetMinutes | None = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty or whitespace")
        return v

    @model_validator(mode="after")
    def check_range(self):
        if self.start_date >= self.end_date:
            raise ValueError("end_date must be after start_date")
        return self


class EventUpdate(EventCreate):
    """Full replacement of an event's editable fields."""


class EventMoodUpdate(BaseModel):
    mood_rating: int | None = Field(None, ge=1, le=5)
    mood_notes: str | None = Field(None, max_length=1000)


class EventResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    description: str | None = None
    start_date: UtcDatetime
    end_date: UtcDatetime
    is_all_day: bool
    location: str | None = None
    color: str | None = None
    notes: str | None = None
    priority: EventPriority
    is_recurring: bool = False
    recurrence_pattern: str | None = None
    mood_rating: int | None = None
    mood_notes: str | None = None
    event_category_id: UUID
    event_category: EventCategoryResponse | None = None
    created_at: UtcDatetime
    updated_at: UtcDatetime


class WeeklyEventsResponse(BaseModel):
    week_start: UtcDatetime
    week_end: UtcDatetime
    events: list[EventResponse]
    categories: list[EventCategoryResponse]
    total_events: int
    has_more_events: bool = False


class MonthlyEventsResponse(BaseModel):
    year: int
    month: int
    events: list[EventResponse]
    total_events: int
