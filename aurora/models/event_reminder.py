"""EventReminder ORM — a notification scheduled relative to an event.

Invariants:
    - trigger_datetime is computed once at creation (core/reminder_rules.py)
    - custom_time_* are set only for one_day_before reminders
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from aurora.db.base import Base, RowMixin


class EventReminder(RowMixin, Base):
    __tablename__ = "event_reminders"

    event_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    reminder_type: Mapped[str] = mapped_column(String(20), nullable=False)
    custom_time_hours: Mapped[int | None] = mapped_column(Integer, nullable=True)
    custom_time_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
    trigger_datetime: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, index=True,
    )
    is_sent: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    event: Mapped["Event"] = relationship("Event", lazy="selectin")
