"""RecommendationFeedback ORM — what the user did with a recommendation.

Invariants:
    - (user_id, recommendation_id) is unique: resubmitting updates the row
    - mood_after is NULL or 1–5; notes at most 500 characters
"""

import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Integer, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from aurora.db.base import Base, RowMixin, utc_now


class RecommendationFeedback(RowMixin, Base):
    __tablename__ = "recommendation_feedback"
    __table_args__ = (
        UniqueConstraint("user_id", "recommendation_id", name="uq_feedback_user_recommendation"),
    )

    user_id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), nullable=False)
    recommendation_id: Mapped[str] = mapped_column(String(200), nullable=False)
    accepted: Mapped[bool] = mapped_column(Boolean, nullable=False)
    notes: Mapped[str | None] = mapped_column(String(500), nullable=True)
    mood_after: Mapped[int | None] = mapped_column(Integer, nullable=True)
    submitted_at_utc: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )
