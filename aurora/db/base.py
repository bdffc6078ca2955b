"""SQLAlchemy Declarative Base — shared base class and row columns for all ORM models.

Invariants:
    - All models inherit from Base
    - Every row carries id, created_at, updated_at and is_active
    - Deleting a row means is_active = False; queries filter on it

Design Decisions:
    - Separate file for Base: avoids circular imports between models
    - RowMixin instead of repeating the four columns in seven models
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for all Aurora ORM models."""
    pass


class RowMixin:
    """Primary key, audit timestamps and soft-delete flag."""

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utc_now, onupdate=utc_now,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
