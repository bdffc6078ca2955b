"""Preferences Schemas — per-user display and scheduling preferences.

Invariants:
    - Day lists hold 0 (Sunday) … 6 (Saturday), without duplicates
    - Work hours are HH:MM strings and start before end when both are set
    - Update fields are optional: only the ones sent are changed
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

_HHMM = r"^([01]\d|2[0-3]):[0-5]\d$"


def _check_days(value: list[int] | None) -> list[int] | None:
    if value is None:
        return None
    if any(d < 0 or d > 6 for d in value):
        raise ValueError("days of week must be between 0 (Sunday) and 6 (Saturday)")
    return sorted(set(value))


class UserPreferencesResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    time_zone: str
    date_format: str
    time_format: str
    first_day_of_week: int
    language: str
    theme: str
    email_notifications: bool
    notifications_enabled: bool
    default_reminder_minutes: int
    default_calendar_view: str
    work_start_time: str | None = None
    work_end_time: str | None = None
    work_days_of_week: list[int] | None = None
    exercise_days_of_week: list[int] | None = None
    nlp_keywords: list[str] | None = None


class UserPreferencesUpdate(BaseModel):
    time_zone: str | None = Field(None, min_length=1, max_length=50)
    date_format: str | None = Field(None, min_length=1, max_length=20)
    time_format: str | None = Field(None, pattern=r"^(12h|24h)$")
    first_day_of_week: int | None = Field(None, ge=0, le=6)
    language: str | None = Field(None, min_length=2, max_length=10)
    theme: str | None = Field(None, pattern=r"^(light|dark|system)$")
    email_notifications: bool | None = None
    notifications_enabled: bool | None = None
    default_reminder_minutes: int | None = Field(None, ge=0, le=10_080)
    default_calendar_view: str | None = Field(None, pattern=r"^(day|week|month|agenda)$")
    work_start_time: str | None = Field(None, pattern=_HHMM)
    work_end_time: str | None = Field(None, pattern=_HHMM)
    work_days_of_week: list[int] | None = None
    exercise_days_of_week: list[int] | None = None
    nlp_keywords: list[str] | None = Field(None, max_length=50)

    @field_validator("work_days_of_week", "exercise_days_of_week")
    @classmethod
    def valid_days(cls, v: list[int] | None) -> list[int] | None:
        return _check_days(v)

    @field_validator("nlp_keywords")
    @classmethod
    def clean_keywords(cls, v: list[str] | None) -> list[str] | None:
        if v is None:
            return None
        return [k.strip() for k in v if k and k.strip()]

    @model_validator(mode="after")
    def check_work_hours(self):
        if self.work_start_time and self.work_end_time and self.work_start_time >= self.work_end_time:
            raise ValueError("work_start_time must be before work_end_time")
        return self
