"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Pure functions receive ORM rows through these structural types
    - Datetimes may arrive naive (SQLite) — core normalizes with as_utc()

Design Decisions:
    - Protocol over ABC: structural subtyping, ORM models satisfy them without inheritance
      (ADR: core stays testable with plain dataclasses/SimpleNamespace fakes)
"""

from datetime import date, datetime
from typing import Protocol
from uuid import UUID


class CategoryLike(Protocol):
    """Structural contract for event categories."""
    id: UUID
    name: str
    description: str | None
    color: str
    icon: str | None
    is_system_default: bool
    sort_order: int
    user_id: UUID | None
    is_active: bool


class EventLike(Protocol):
    """Structural contract for calendar events consumed by analytics."""
    id: UUID
    title: str
    start_date: datetime
    end_date: datetime
    event_category_id: UUID | None
    mood_rating: int | None
    user_id: UUID


class MoodEntryLike(Protocol):
    """Structural contract for daily mood entries."""
    entry_date: date
    mood_rating: int
    notes: str | None


class PreferencesLike(Protocol):
    """Scheduling preferences fed into AI prompts."""
    work_days_of_week: list[int] | None
    work_start_time: str | None
    work_end_time: str | None
    default_reminder_minutes: int
