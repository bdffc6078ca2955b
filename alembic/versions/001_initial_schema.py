"""Initial schema — categories, events, moods, feedback, suggestions, reminders, preferences.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-17

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _row_columns() -> list[sa.Column]:
    return [
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
    ]


def upgrade() -> None:
    op.create_table(
        "event_categories",
        *_row_columns(),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("description", sa.String(200), nullable=True),
        sa.Column("color", sa.String(7), nullable=False),
        sa.Column("icon", sa.String(50), nullable=True),
        sa.Column("is_system_default", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("sort_order", sa.Integer, nullable=False, server_default="0"),
        sa.Column("user_id", UUID(as_uuid=True), nullable=True),
    )
    op.create_index("ix_event_categories_user_id", "event_categories", ["user_id"])

    op.create_table(
        "events",
        *_row_columns(),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_all_day", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("location", sa.String(200), nullable=True),
        sa.Column("color", sa.String(7), nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("priority", sa.Integer, nullable=False, server_default="2"),
        sa.Column("is_recurring", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("recurrence_pattern", sa.String(100), nullable=True),
        sa.Column("mood_rating", sa.Integer, nullable=True),
        sa.Column("mood_notes", sa.Text, nullable=True),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False),
        sa.Column(
            "event_category_id", UUID(as_uuid=True),
            sa.ForeignKey("event_categories.id"), nullable=False,
        ),
    )
    op.create_index("ix_events_user_id", "events", ["user_id"])
    op.create_index("ix_events_start_date", "events", ["start_date"])

    op.create_table(
        "daily_mood_entries",
        *_row_columns(),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False),
        sa.Column("entry_date", sa.Date, nullable=False),
        sa.Column("mood_rating", sa.Integer, nullable=False),
        sa.Column("notes", sa.String(500), nullable=True),
        sa.UniqueConstraint("user_id", "entry_date", name="uq_daily_mood_user_date"),
    )

    op.create_table(
        "recommendation_feedback",
        *_row_columns(),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False),
        sa.Column("recommendation_id", sa.String(200), nullable=False),
        sa.Column("accepted", sa.Boolean, nullable=False),
        sa.Column("notes", sa.String(500), nullable=True),
        sa.Column("mood_after", sa.Integer, nullable=True),
        sa.Column("submitted_at_utc", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("user_id", "recommendation_id", name="uq_feedback_user_recommendation"),
    )

    op.create_table(
        "schedule_suggestions",
        *_row_columns(),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False),
        sa.Column(
            "event_id", UUID(as_uuid=True),
            sa.ForeignKey("events.id", ondelete="SET NULL"), nullable=True,
        ),
        sa.Column("type", sa.String(40), nullable=False),
        sa.Column("description", sa.String(500), nullable=False),
        sa.Column("reason", sa.Text, nullable=False, server_default=""),
        sa.Column("priority", sa.Integer, nullable=False, server_default="3"),
        sa.Column("suggested_datetime", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("responded_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("confidence_score", sa.Integer, nullable=False, server_default="70"),
        sa.Column("metadata", sa.JSON, nullable=False),
    )
    op.create_index("ix_schedule_suggestions_user_id", "schedule_suggestions", ["user_id"])

    op.create_table(
        "event_reminders",
        *_row_columns(),
        sa.Column(
            "event_id", UUID(as_uuid=True),
            sa.ForeignKey("events.id", ondelete="CASCADE"), nullable=False,
        ),
        sa.Column("reminder_type", sa.String(20), nullable=False),
        sa.Column("custom_time_hours", sa.Integer, nullable=True),
        sa.Column("custom_time_minutes", sa.Integer, nullable=True),
        sa.Column("trigger_datetime", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_sent", sa.Boolean, nullable=False, server_default=sa.false()),
    )
    op.create_index("ix_event_reminders_event_id", "event_reminders", ["event_id"])
    op.create_index("ix_event_reminders_trigger_datetime", "event_reminders", ["trigger_datetime"])

    op.create_table(
        "user_preferences",
        *_row_columns(),
        sa.Column("user_id", UUID(as_uuid=True), nullable=False, unique=True),
        sa.Column("time_zone", sa.String(50), nullable=False, server_default="UTC"),
        sa.Column("date_format", sa.String(20), nullable=False, server_default="dd/MM/yyyy"),
        sa.Column("time_format", sa.String(10), nullable=False, server_default="24h"),
        sa.Column("first_day_of_week", sa.Integer, nullable=False, server_default="1"),
        sa.Column("language", sa.String(10), nullable=False, server_default="es-ES"),
        sa.Column("theme", sa.String(20), nullable=False, server_default="light"),
        sa.Column("email_notifications", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("notifications_enabled", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("default_reminder_minutes", sa.Integer, nullable=False, server_default="15"),
        sa.Column("default_calendar_view", sa.String(20), nullable=False, server_default="week"),
        sa.Column("work_start_time", sa.String(5), nullable=True),
        sa.Column("work_end_time", sa.String(5), nullable=True),
        sa.Column("work_days_of_week", sa.JSON, nullable=True),
        sa.Column("exercise_days_of_week", sa.JSON, nullable=True),
        sa.Column("nlp_keywords", sa.JSON, nullable=True),
    )


def downgrade() -> None:
    op.drop_table("user_preferences")
    op.drop_index("ix_event_reminders_trigger_datetime", table_name="event_reminders")
    op.drop_index("ix_event_reminders_event_id", table_name="event_reminders")
    op.drop_table("event_reminders")
    op.drop_index("ix_schedule_suggestions_user_id", table_name="schedule_suggestions")
    op.drop_table("schedule_suggestions")
    op.drop_table("recommendation_feedback")
    op.drop_table("daily_mood_entries")
    op.drop_index("ix_events_start_date", table_name="events")
    op.drop_index("ix_events_user_id", table_name="events")
    op.drop_table("events")
    op.drop_index("ix_event_categories_user_id", table_name="event_categories")
    op.drop_table("event_categories")
