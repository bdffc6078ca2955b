"""Productivity Schemas — the analysis report returned by /productivity."""

from uuid import UUID

from pydantic import BaseModel

from aurora.schemas.common import UtcDatetime


class HourlyProductivity(BaseModel):
    hour: int
    average_mood: float
    events_completed: int
    total_events: int
    completion_rate: float
    productivity_score: float


class DailyProductivity(BaseModel):
    day_of_week: int
    day_name: str
    average_mood: float
    productivity_score: float
    total_events: int


class HourRun(BaseModel):
    start_hour: int
    end_hour: int
    average_productivity_score: float
    description: str


class CategoryProductivity(BaseModel):
    category_id: UUID
    category_name: str
    category_color: str
    optimal_hours: list[int]
    average_productivity_score: float
    best_day_of_week: int


class ProductivityRecommendation(BaseModel):
    title: str
    description: str
    priority: int
    type: str
    affected_categories: list[str] = []
    suggested_hours: list[int] = []


class ProductivityAnalysis(BaseModel):
    hourly_productivity: list[HourlyProductivity]
    daily_productivity: list[DailyProductivity]
    golden_hours: list[HourRun]
    low_energy_hours: list[HourRun]
    category_productivity: list[CategoryProductivity]
    recommendations: list[ProductivityRecommendation]
    analysis_period_start: UtcDatetime
    analysis_period_end: UtcDatetime
    total_events_analyzed: int
    total_mood_records_analyzed: int
