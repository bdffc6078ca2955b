"""Schedule Heuristics — rule-based schedule suggestions when the model offers none.

Invariants:
    - Pure: receives upcoming events and "now", returns SuggestionDraft values
    - Conflicts and patterns look 7 days ahead; distribution looks 14 days ahead
    - Days are UTC calendar days keyed by event start
    - At most one long-block break suggestion per day

Design Decisions:
    - Drafts are dataclasses, not ORM rows: the service decides persistence
      (ADR: core never imports models/)
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from uuid import UUID

from aurora.core.domain_types import SuggestionType
from aurora.core.event_rules import as_utc
from aurora.core.repository_protocols import EventLike

CONFLICT_WINDOW_DAYS = 7
DISTRIBUTION_WINDOW_DAYS = 14
MIN_BREAK_MINUTES = 15
LONG_BLOCK_HOURS = 4
LONG_BLOCK_BREAK_MINUTES = 30
OVERLOADED_DAY_HOURS = 8


@dataclass
class SuggestionDraft:
    type: SuggestionType
    description: str
    reason: str
    priority: int
    confidence_score: int
    event_id: UUID | None = None
    suggested_datetime: datetime | None = None
    metadata: dict = field(default_factory=dict)


def _window(events: list[EventLike], now: datetime, days: int) -> list[EventLike]:
    limit = as_utc(now) + timedelta(days=days)
    return [e for e in events if as_utc(e.start_date) < limit]


def _by_day(events: list[EventLike]) -> dict:
    days = defaultdict(list)
    for event in sorted(events, key=lambda e: as_utc(e.start_date)):
        days[as_utc(event.start_date).date()].append(event)
    return days


def detect_conflicts(events: list[EventLike], now: datetime) -> list[SuggestionDraft]:
    """Overlapping or back-to-back consecutive events on the same day."""
    drafts = []
    for day_events in _by_day(_window(events, now, CONFLICT_WINDOW_DAYS)).values():
        for current, nxt in zip(day_events, day_events[1:]):
            current_end = as_utc(current.end_date)
            next_start = as_utc(nxt.start_date)
            if current_end > next_start:
                drafts.append(SuggestionDraft(
                    type=SuggestionType.RESOLVE_CONFLICT,
                    event_id=nxt.id,
                    description=f"Conflict detected: '{nxt.title}' overlaps with '{current.title}'",
                    reason=(
                        f"The event starts at {next_start:%H:%M} but '{current.title}' "
                        f"ends at {current_end:%H:%M}"
                    ),
                    priority=5,
                    suggested_datetime=current_end + timedelta(minutes=MIN_BREAK_MINUTES),
                    confidence_score=95,
                ))
            elif (next_start - current_end) < timedelta(minutes=MIN_BREAK_MINUTES):
                drafts.append(SuggestionDraft(
                    type=SuggestionType.SUGGEST_BREAK,
                    event_id=nxt.id,
                    description=f"Very little time between '{current.title}' and '{nxt.title}'",
                    reason="At least 15 minutes of rest between events is recommended",
                    priority=3,
                    suggested_datetime=current_end + timedelta(minutes=MIN_BREAK_MINUTES),
                    confidence_score=80,
                ))
    return drafts


def identify_patterns(events: list[EventLike], now: datetime) -> list[SuggestionDraft]:
    """Overloaded days and long stretches without a real break."""
    drafts = []
    for day, day_events in _by_day(_window(events, now, CONFLICT_WINDOW_DAYS)).items():
        total_hours = sum(
            (as_utc(e.end_date) - as_utc(e.start_date)).total_seconds() / 3600
            for e in day_events
        )
        if total_hours > OVERLOADED_DAY_HOURS:
            drafts.append(SuggestionDraft(
                type=SuggestionType.PATTERN_ALERT,
                description=f"Overloaded day: {day:%d/%m/%Y}",
                reason=(
                    f"You have {total_hours:.1f} hours of scheduled events. "
                    "Consider redistributing some tasks"
                ),
                priority=4,
                confidence_score=85,
            ))

        for current, nxt in zip(day_events, day_events[1:]):
            span = as_utc(nxt.start_date) - as_utc(current.start_date)
            gap = as_utc(nxt.start_date) - as_utc(current.end_date)
            if span > timedelta(hours=LONG_BLOCK_HOURS) and gap < timedelta(
                minutes=LONG_BLOCK_BREAK_MINUTES,
            ):
                drafts.append(SuggestionDraft(
                    type=SuggestionType.SUGGEST_BREAK,
                    description="Long period without meaningful breaks",
                    reason="A block of more than 4 hours without adequate rest was detected",
                    priority=3,
                    suggested_datetime=as_utc(current.end_date) + timedelta(hours=2),
                    confidence_score=75,
                ))
                break
    return drafts


def suggest_distribution(events: list[EventLike], now: datetime) -> list[SuggestionDraft]:
    """Flag ISO weeks mixing overloaded days (>1.5×avg) with light days (<0.5×avg)."""
    weeks: dict[tuple[int, int], dict[str, int]] = defaultdict(lambda: defaultdict(int))
    for event in _window(events, now, DISTRIBUTION_WINDOW_DAYS):
        start = as_utc(event.start_date)
        iso = start.isocalendar()
        weeks[(iso[0], iso[1])][start.strftime("%A")] += 1

    drafts = []
    for day_counts in weeks.values():
        average = sum(day_counts.values()) / len(day_counts)
        overloaded = [(d, n) for d, n in day_counts.items() if n > average * 1.5]
        light = [(d, n) for d, n in day_counts.items() if n < average * 0.5]
        if overloaded and light:
            busy_day, busy_count = overloaded[0]
            light_day, light_count = light[0]
            drafts.append(SuggestionDraft(
                type=SuggestionType.OPTIMIZE_DISTRIBUTION,
                description="Uneven distribution of events across the week",
                reason=(
                    f"You have {busy_count} events on {busy_day} "
                    f"but only {light_count} on {light_day}"
                ),
                priority=2,
                confidence_score=70,
            ))
    return drafts


def generate_heuristic_suggestions(
    events: list[EventLike], now: datetime,
) -> list[SuggestionDraft]:
    return (
        detect_conflicts(events, now)
        + identify_patterns(events, now)
        + suggest_distribution(events, now)
    )
