"""UserPreferences ORM — per-user display and scheduling preferences.

Invariants:
    - At most one row per user_id
    - Day-of-week lists use 0 = Sunday … 6 = Saturday

Design Decisions:
    - JSON lists for work/exercise days and NLP keywords (ADR: read whole, never queried)
"""

import uuid

from sqlalchemy import JSON, Boolean, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from aurora.db.base import Base, RowMixin


class UserPreferences(RowMixin, Base):
    __tablename__ = "user_preferences"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, unique=True,
    )
    time_zone: Mapped[str] = mapped_column(String(50), nullable=False, default="UTC")
    date_format: Mapped[str] = mapped_column(String(20), nullable=False, default="dd/MM/yyyy")
    time_format: Mapped[str] = mapped_column(String(10), nullable=False, default="24h")
    first_day_of_week: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    language: Mapped[str] = mapped_column(String(10), nullable=False, default="es-ES")
    theme: Mapped[str] = mapped_column(String(20), nullable=False, default="light")
    email_notifications: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    notifications_enabled: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    default_reminder_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=15)
    default_calendar_view: Mapped[str] = mapped_column(String(20), nullable=False, default="week")
    work_start_time: Mapped[str | None] = mapped_column(String(5), nullable=True)
    work_end_time: Mapped[str | None] = mapped_column(String(5), nullable=True)
    work_days_of_week: Mapped[list | None] = mapped_column(JSON, nullable=True)
    exercise_days_of_week: Mapped[list | None] = mapped_column(JSON, nullable=True)
    nlp_keywords: Mapped[list | None] = mapped_column(JSON, nullable=True)
