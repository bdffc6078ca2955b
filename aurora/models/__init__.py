"""ORM Models — SQLAlchemy declarative models for all planner entities.

Invariants:
    - All models inherit from Base and RowMixin (db/base.py)
    - Every user-owned row is scoped by user_id

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs (ADR: standard SQLAlchemy pattern)
"""

from aurora.models.event_category import EventCategory  # noqa: F401
from aurora.models.event import Event  # noqa: F401
from aurora.models.daily_mood_entry import DailyMoodEntry  # noqa: F401
from aurora.models.recommendation_feedback import RecommendationFeedback  # noqa: F401
from aurora.models.schedule_suggestion import ScheduleSuggestion  # noqa: F401
from aurora.models.event_reminder import EventReminder  # noqa: F401
from aurora.models.user_preferences import UserPreferences  # noqa: F401
