"""Mood Schemas — daily mood entries.

Invariants:
    - mood_rating is 1-5
    - notes at most 500 chars; blank notes are stored as NULL by the service
"""

from datetime import date
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class DailyMoodUpsert(BaseModel):
    entry_date: date
    mood_rating: int = Field(ge=1, le=5)
    notes: str | None = Field(None, max_length=500)


class DailyMoodEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    entry_date: date
    mood_rating: int
    notes: str | None = None


class MonthlyMoodResponse(BaseModel):
    year: int
    month: int
    entries: list[DailyMoodEntryResponse]
