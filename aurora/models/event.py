"""Event ORM — a calendar item owned by one user.

Invariants:
    - start_date < end_date, both stored in UTC
    - Always belongs to an EventCategory (event_category_id FK)
    - mood_rating is NULL or 1–5
    - priority is stored as EventPriority's integer value (1–4)

Design Decisions:
    - Category loaded with lazy="selectin": every response renders the category
      colour, so the extra query is always paid anyway
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from aurora.core.domain_types import EventPriority
from aurora.db.base import Base, RowMixin


class Event(RowMixin, Base):
    """Calendar event."""
    __tablename__ = "events"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    start_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True,
    )
    end_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
    is_all_day: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    location: Mapped[str | None] = mapped_column(String(200), nullable=True)
    color: Mapped[str | None] = mapped_column(String(7), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    priority: Mapped[int] = mapped_column(
        Integer, nullable=False, default=EventPriority.MEDIUM.value,
    )
    is_recurring: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    recurrence_pattern: Mapped[str | None] = mapped_column(String(100), nullable=True)
    mood_rating: Mapped[int | None] = mapped_column(Integer, nullable=True)
    mood_notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    event_category_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("event_categories.id"), nullable=False,
    )

    event_category: Mapped["EventCategory"] = relationship(
        "EventCategory", back_populates="events", lazy="selectin",
    )
