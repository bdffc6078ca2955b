"""Reminder Schemas — creation input and reminder responses."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from aurora.core.domain_types import ReminderType
from aurora.schemas.common import UtcDatetime


class ReminderCreate(BaseModel):
    event_id: UUID
    reminder_type: ReminderType
    custom_time_hours: int | None = Field(None, ge=0, le=23)
    custom_time_minutes: int | None = Field(None, ge=0, le=59)


class ReminderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    event_id: UUID
    reminder_type: ReminderType
    custom_time_hours: int | None = None
    custom_time_minutes: int | None = None
    trigger_datetime: UtcDatetime
    is_sent: bool
    created_at: UtcDatetime
