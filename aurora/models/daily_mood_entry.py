"""DailyMoodEntry ORM — one wellness rating per user per calendar day.

Invariants:
    - (user_id, entry_date) is unique; soft-deleted days are reactivated on upsert
    - mood_rating is 1–5
"""

import uuid
from datetime import date

from sqlalchemy import Date, Integer, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from aurora.db.base import Base, RowMixin


class DailyMoodEntry(RowMixin, Base):
    __tablename__ = "daily_mood_entries"
    __table_args__ = (
        UniqueConstraint("user_id", "entry_date", name="uq_daily_mood_user_date"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)
    entry_date: Mapped[date] = mapped_column(Date, nullable=False)
    mood_rating: Mapped[int] = mapped_column(Integer, nullable=False)
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)
