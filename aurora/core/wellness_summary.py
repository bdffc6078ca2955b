"""Wellness Summary — pure monthly fold over mood entries and mood-rated events.

Invariants:
    - Input is bounded to a single month (≤ 31 entries), no IO
    - Positive ≥ 4, negative ≤ 2, neutral == 3
    - A day without an entry breaks both positive and negative streaks
    - Ratios rounded to 4 decimals, averages to 2
    - Ties for best/worst day resolve to the earliest date

Design Decisions:
    - Returns plain dicts shaped like schemas.wellness.WellnessSummary: the route
      validates them once at the boundary
"""

from collections import defaultdict
from datetime import date, timedelta
from uuid import UUID

from aurora.core.domain_types import (
    MAX_MOOD_RATING, MIN_MOOD_RATING,
    NEGATIVE_MOOD_THRESHOLD, POSITIVE_MOOD_THRESHOLD,
)
from aurora.core.event_rules import days_in_month
from aurora.core.repository_protocols import CategoryLike, EventLike, MoodEntryLike

UNCATEGORIZED_NAME = "Uncategorized"
UNCATEGORIZED_COLOR = "#9ca3af"


def compute_monthly_summary(
    year: int,
    month: int,
    entries: list[MoodEntryLike],
    events: list[EventLike],
    categories: dict[UUID, CategoryLike],
) -> dict:
    """Build the monthly wellness summary. Pure, no IO."""
    month_days = days_in_month(year, month)
    by_date = {e.entry_date: e for e in entries}
    ratings = [e.mood_rating for e in entries]
    total = len(ratings)

    positive = sum(1 for r in ratings if r >= POSITIVE_MOOD_THRESHOLD)
    negative = sum(1 for r in ratings if r <= NEGATIVE_MOOD_THRESHOLD)
    neutral = sum(1 for r in ratings if r == 3)

    rated_events = [e for e in events if e.mood_rating is not None]

    return {
        "year": year,
        "month": month,
        "average_mood": round(sum(ratings) / total, 2) if total else 0,
        "tracked_days": total,
        "days_in_month": month_days,
        "tracking_coverage": round(total / month_days, 4),
        "positive_days": positive,
        "neutral_days": neutral,
        "negative_days": negative,
        "mood_trend": _build_trend(year, month, month_days, by_date),
        "distribution": _build_distribution(ratings),
        "streaks": compute_streaks(year, month, by_date),
        "best_day": _pick_day(entries, best=True),
        "worst_day": _pick_day(entries, best=False),
        "category_impacts": compute_category_impacts(rated_events, categories),
        "has_event_mood_data": bool(rated_events),
    }


def _build_trend(
    year: int, month: int, month_days: int, by_date: dict[date, MoodEntryLike],
) -> list[dict]:
    start = date(year, month, 1)
    trend = []
    for offset in range(month_days):
        day = start + timedelta(days=offset)
        entry = by_date.get(day)
        trend.append({
            "date": day,
            "mood": float(entry.mood_rating) if entry else None,
            "entries": 1 if entry else 0,
        })
    return trend


def _build_distribution(ratings: list[int]) -> list[dict]:
    total = len(ratings)
    slices = []
    for rating in range(MIN_MOOD_RATING, MAX_MOOD_RATING + 1):
        count = ratings.count(rating)
        slices.append({
            "rating": rating,
            "count": count,
            "percentage": round(count / total, 4) if total else 0,
        })
    return slices


def compute_streaks(
    year: int, month: int, by_date: dict[date, MoodEntryLike],
) -> dict:
    """Walk the month day by day; missing days reset both runs."""
    current_positive = longest_positive = 0
    current_negative = longest_negative = 0

    day = date(year, month, 1)
    for _ in range(days_in_month(year, month)):
        entry = by_date.get(day)
        day += timedelta(days=1)
        if entry is None:
            current_positive = current_negative = 0
            continue
        if entry.mood_rating >= POSITIVE_MOOD_THRESHOLD:
            current_positive += 1
            current_negative = 0
            longest_positive = max(longest_positive, current_positive)
        elif entry.mood_rating <= NEGATIVE_MOOD_THRESHOLD:
            current_negative += 1
            current_positive = 0
            longest_negative = max(longest_negative, current_negative)
        else:
            current_positive = current_negative = 0

    return {
        "current_positive_streak": current_positive,
        "longest_positive_streak": longest_positive,
        "current_negative_streak": current_negative,
        "longest_negative_streak": longest_negative,
    }


def _pick_day(entries: list[MoodEntryLike], *, best: bool) -> dict | None:
    if not entries:
        return None
    # earliest date wins ties: sort by date first, then take the first extreme
    ordered = sorted(entries, key=lambda e: e.entry_date)
    pick = ordered[0]
    for entry in ordered[1:]:
        if (best and entry.mood_rating > pick.mood_rating) or (
            not best and entry.mood_rating < pick.mood_rating
        ):
            pick = entry
    return {"date": pick.entry_date, "mood_rating": pick.mood_rating, "notes": pick.notes}


def compute_category_impacts(
    rated_events: list[EventLike], categories: dict[UUID, CategoryLike],
) -> list[dict]:
    """Average event mood per category, best categories first."""
    groups: dict[UUID | None, list[int]] = defaultdict(list)
    for event in rated_events:
        groups[event.event_category_id].append(event.mood_rating)

    impacts = []
    for category_id, moods in groups.items():
        category = categories.get(category_id) if category_id else None
        impacts.append({
            "category_id": category_id,
            "category_name": category.name if category else UNCATEGORIZED_NAME,
            "category_color": category.color if category else UNCATEGORIZED_COLOR,
            "average_mood": round(sum(moods) / len(moods), 2),
            "event_count": len(moods),
            "positive_count": sum(1 for m in moods if m >= POSITIVE_MOOD_THRESHOLD),
            "negative_count": sum(1 for m in moods if m <= NEGATIVE_MOOD_THRESHOLD),
        })
    impacts.sort(key=lambda i: (-i["average_mood"], -i["event_count"]))
    return impacts
