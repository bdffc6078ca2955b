"""Wellness Schemas — monthly mood summary returned by /api/v1/wellness."""

from datetime import date
from uuid import UUID

from pydantic import BaseModel


class MoodTrendPoint(BaseModel):
    date: date
    mood: float | None = None
    entries: int


class MoodDistributionSlice(BaseModel):
    rating: int
    count: int
    percentage: float


class MoodStreaks(BaseModel):
    current_positive_streak: int
    longest_positive_streak: int
    current_negative_streak: int
    longest_negative_streak: int


class MoodDaySnapshot(BaseModel):
    date: date
    mood_rating: int
    notes: str | None = None


class CategoryMoodImpact(BaseModel):
    category_id: UUID | None = None
    category_name: str
    category_color: str
    average_mood: float
    event_count: int
    positive_count: int
    negative_count: int


class WellnessSummary(BaseModel):
    year: int
    month: int
    average_mood: float
    tracked_days: int
    days_in_month: int
    tracking_coverage: float
    positive_days: int
    neutral_days: int
    negative_days: int
    mood_trend: list[MoodTrendPoint]
    distribution: list[MoodDistributionSlice]
    streaks: MoodStreaks
    best_day: MoodDaySnapshot | None = None
    worst_day: MoodDaySnapshot | None = None
    category_impacts: list[CategoryMoodImpact]
    has_event_mood_data: bool
