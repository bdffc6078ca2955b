"""ScheduleSuggestion ORM — a proposed change to the user's schedule.

Invariants:
    - status starts as pending; responding sets responded_at
    - event_id is NULL for suggestions about the calendar as a whole
    - priority 1–5, confidence_score 0–100

Design Decisions:
    - JSON metadata column: related event titles and the user's comment vary per
      suggestion type (ADR: avoid a side table for free-form extras)
    - event FK uses ON DELETE SET NULL: a suggestion outlives the event it named
"""

import uuid
from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from aurora.core.domain_types import SuggestionStatus
from aurora.db.base import Base, RowMixin


class ScheduleSuggestion(RowMixin, Base):
    __tablename__ = "schedule_suggestions"

    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    event_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), ForeignKey("events.id", ondelete="SET NULL"), nullable=True,
    )
    type: Mapped[str] = mapped_column(String(40), nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False)
    reason: Mapped[str] = mapped_column(Text, nullable=False, default="")
    priority: Mapped[int] = mapped_column(Integer, nullable=False, default=3)
    suggested_datetime: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default=SuggestionStatus.PENDING.value,
    )
    responded_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
    )
    confidence_score: Mapped[int] = mapped_column(Integer, nullable=False, default=70)
    extra: Mapped[dict] = mapped_column("metadata", JSON, nullable=False, default=dict)

    event: Mapped["Event | None"] = relationship("Event", lazy="selectin")
