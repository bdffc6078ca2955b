"""EventCategory ORM — system default or user-owned tag for events.

Invariants:
    - System defaults have is_system_default = True and user_id NULL
    - Custom categories always carry the owner's user_id
    - color is a #rrggbb hex string

Design Decisions:
    - No users table: user_id is a bare UUID supplied by the caller
      (ADR: authentication lives outside this service)
"""

import uuid

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from aurora.db.base import Base, RowMixin


class EventCategory(RowMixin, Base):
    """Event category — groups events under a colour and icon."""
    __tablename__ = "event_categories"

    name: Mapped[str] = mapped_column(String(50), nullable=False)
    description: Mapped[str | None] = mapped_column(String(200), nullable=True)
    color: Mapped[str] = mapped_column(String(7), nullable=False)
    icon: Mapped[str | None] = mapped_column(String(50), nullable=True)
    is_system_default: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    user_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True, index=True,
    )

    events: Mapped[list["Event"]] = relationship(
        "Event", back_populates="event_category",
    )
