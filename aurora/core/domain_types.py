"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId, EventId, CategoryId wrap UUIDs — never use bare UUID in domain logic
    - MoodRating is bounded 1–5
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
    - EventPriority is an int Enum: priorities are compared and stored as 1–4
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", UUID)
EventId = NewType("EventId", UUID)
CategoryId = NewType("CategoryId", UUID)


# ─── Value Types ─────────────────────────────────────────────────

MoodRating = NewType("MoodRating", int)     # 1–5
Confidence = NewType("Confidence", float)   # 0.0–1.0

MIN_MOOD_RATING = 1
MAX_MOOD_RATING = 5
POSITIVE_MOOD_THRESHOLD = 4
NEGATIVE_MOOD_THRESHOLD = 2


# ─── Enums ───────────────────────────────────────────────────────

class EventPriority(int, Enum):
    """Event priority — stored as integer column."""
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    CRITICAL = 4


class SuggestionType(str, Enum):
    """Kinds of schedule suggestion."""
    MOVE_EVENT = "move_event"
    RESOLVE_CONFLICT = "resolve_conflict"
    OPTIMIZE_DISTRIBUTION = "optimize_distribution"
    PATTERN_ALERT = "pattern_alert"
    SUGGEST_BREAK = "suggest_break"
    GENERAL_REORGANIZATION = "general_reorganization"


class SuggestionStatus(str, Enum):
    """Schedule suggestion lifecycle — pending until the user responds."""
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    POSTPONED = "postponed"
    EXPIRED = "expired"


SUGGESTION_TYPE_LABELS: dict[SuggestionType, str] = {
    SuggestionType.MOVE_EVENT: "Move event",
    SuggestionType.RESOLVE_CONFLICT: "Resolve conflict",
    SuggestionType.OPTIMIZE_DISTRIBUTION: "Optimize distribution",
    SuggestionType.PATTERN_ALERT: "Pattern alert",
    SuggestionType.SUGGEST_BREAK: "Suggest break",
    SuggestionType.GENERAL_REORGANIZATION: "General reorganization",
}

SUGGESTION_STATUS_LABELS: dict[SuggestionStatus, str] = {
    SuggestionStatus.PENDING: "Pending",
    SuggestionStatus.ACCEPTED: "Accepted",
    SuggestionStatus.REJECTED: "Rejected",
    SuggestionStatus.POSTPONED: "Postponed",
    SuggestionStatus.EXPIRED: "Expired",
}


class SelfCareType(str, Enum):
    """Self-care activity families."""
    PHYSICAL = "physical"
    MENTAL = "mental"
    SOCIAL = "social"
    CREATIVE = "creative"
    REST = "rest"


class SelfCareFeedbackAction(str, Enum):
    """What the user did with a self-care suggestion."""
    SCHEDULED = "scheduled"
    COMPLETED_NOW = "completed_now"
    DISMISSED = "dismissed"
    IGNORED = "ignored"


class ValidationSeverity(str, Enum):
    """Severity attached to an AI review of an event."""
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class ReminderType(str, Enum):
    """When a reminder fires relative to its event."""
    MINUTES_15 = "minutes_15"
    MINUTES_30 = "minutes_30"
    ONE_DAY_BEFORE = "one_day_before"
