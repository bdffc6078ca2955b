"""Productivity Scoring — hourly, daily and per-category scores from mood-rated events.

Invariants:
    - Pure: events, categories, "now" and the user's UTC offset in; dict out
    - All bucketing happens in the user's local wall-clock time
    - Hourly stats cover exactly 24 hours; daily stats exactly 7 days (Sunday = 0)
    - Scores are 0–100, rounded to 2 decimals
    - Golden hours: score ≥ 70; low-energy hours: 0 < score ≤ 30; both grouped into
      consecutive runs

Design Decisions:
    - Hourly accumulation splits each event by overlap minutes so long events weigh
      every hour they cover, not only their start hour
    - Hourly window is the last 7 complete local days: today is still in progress
"""

from collections import Counter, defaultdict
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from uuid import UUID

from aurora.core.category_rules import is_work_category
from aurora.core.event_rules import as_utc, local_midnight_utc, to_local
from aurora.core.repository_protocols import CategoryLike, EventLike

GOLDEN_HOUR_THRESHOLD = 70.0
LOW_ENERGY_THRESHOLD = 30.0
LOW_ENERGY_RECOMMENDATION_THRESHOLD = 40.0
HOURLY_WINDOW_DAYS = 7

DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


@dataclass
class _LocalEvent:
    event: EventLike
    start: datetime
    end: datetime


@dataclass
class _HourAccumulator:
    event_ids: set = field(default_factory=set)
    events_with_mood: set = field(default_factory=set)
    activity_dates: set = field(default_factory=set)
    total_minutes: float = 0.0
    mood_minutes: float = 0.0
    mood_weighted_sum: float = 0.0


def normalize_mood_score(mood: float) -> float:
    """Map a 1–5 mood onto 0–1."""
    return min(1.0, max(0.0, (mood - 1) / 4.0))


def time_of_day_label(hour: int) -> str:
    if 5 <= hour < 12:
        return "Morning"
    if 12 <= hour < 14:
        return "Midday"
    if 14 <= hour < 20:
        return "Afternoon"
    if 20 <= hour < 24:
        return "Night"
    return "Early morning"


def _day_index(value: datetime) -> int:
    return (value.weekday() + 1) % 7


def analysis_window(now: datetime, period_days: int, offset_minutes: int) -> tuple[datetime, datetime]:
    """UTC [start, end) covering period_days local days ending today."""
    today = local_midnight_utc(now, offset_minutes)
    start = today - timedelta(days=period_days - 1)
    return start, start + timedelta(days=period_days)


def select_events(
    events: list[EventLike], categories: dict[UUID, CategoryLike],
) -> list[EventLike]:
    """Work-category events, or everything when none qualify."""
    work = [
        e for e in events
        if is_work_category(categories.get(e.event_category_id))
    ]
    return work or list(events)


def calculate_hourly(
    events: list[_LocalEvent], window_start: datetime, window_end: datetime,
) -> list[dict]:
    accumulators = [_HourAccumulator() for _ in range(24)]
    for snapshot in events:
        start = max(snapshot.start, window_start)
        end = min(snapshot.end, window_end)
        cursor = start
        while cursor < end:
            hour_start = cursor.replace(minute=0, second=0, microsecond=0)
            hour_end = hour_start + timedelta(hours=1)
            minutes = (min(end, hour_end) - cursor).total_seconds() / 60
            if minutes > 0:
                acc = accumulators[hour_start.hour]
                acc.total_minutes += minutes
                acc.event_ids.add(snapshot.event.id)
                acc.activity_dates.add(hour_start.date())
                if snapshot.event.mood_rating is not None:
                    acc.mood_minutes += minutes
                    acc.mood_weighted_sum += snapshot.event.mood_rating * minutes
                    acc.events_with_mood.add(snapshot.event.id)
            cursor = hour_end

    stats = []
    for hour, acc in enumerate(accumulators):
        if acc.total_minutes <= 0:
            stats.append({
                "hour": hour, "average_mood": 0, "events_completed": 0,
                "total_events": 0, "completion_rate": 0, "productivity_score": 0,
            })
            continue
        average_mood = (
            round(acc.mood_weighted_sum / acc.mood_minutes, 2) if acc.mood_minutes > 0 else 0
        )
        coverage = acc.mood_minutes / acc.total_minutes
        mood_score = normalize_mood_score(average_mood) if acc.mood_minutes > 0 else 0
        consistency = min(len(acc.activity_dates) / 5.0, 1.0)
        volume = min(len(acc.event_ids) / 4.0, 1.0)
        score = (mood_score * 0.6 + coverage * 0.25 + consistency * 0.1 + volume * 0.05) * 100
        stats.append({
            "hour": hour,
            "average_mood": average_mood,
            "events_completed": len(acc.events_with_mood),
            "total_events": len(acc.event_ids),
            "completion_rate": round(coverage * 100, 2),
            "productivity_score": round(score, 2),
        })
    return stats


def calculate_daily(events: list[_LocalEvent]) -> list[dict]:
    stats = []
    for day in range(7):
        in_day = [e for e in events if _day_index(e.start) == day]
        rated = [e.event.mood_rating for e in in_day if e.event.mood_rating is not None]
        if not in_day:
            stats.append({
                "day_of_week": day, "day_name": DAY_NAMES[day],
                "average_mood": 0, "productivity_score": 0, "total_events": 0,
            })
            continue
        average = sum(rated) / len(rated) if rated else 0
        coverage = len(rated) / len(in_day)
        mood_score = normalize_mood_score(average) if rated else 0
        volume = min(len(in_day) / 6.0, 1.0)
        score = (mood_score * 0.55 + coverage * 0.3 + volume * 0.15) * 100
        stats.append({
            "day_of_week": day,
            "day_name": DAY_NAMES[day],
            "average_mood": round(average, 2),
            "productivity_score": round(score, 2),
            "total_events": len(in_day),
        })
    return stats


def _group_consecutive(hours: list[dict]) -> list[list[dict]]:
    groups: list[list[dict]] = []
    for hour in sorted(hours, key=lambda h: h["hour"]):
        if groups and hour["hour"] == groups[-1][-1]["hour"] + 1:
            groups[-1].append(hour)
        else:
            groups.append([hour])
    return groups


def _describe_runs(groups: list[list[dict]]) -> list[dict]:
    runs = []
    for group in groups:
        start, end = group[0]["hour"], group[-1]["hour"] + 1
        average = sum(h["productivity_score"] for h in group) / len(group)
        runs.append({
            "start_hour": start,
            "end_hour": end,
            "average_productivity_score": round(average, 2),
            "description": f"{time_of_day_label(start)}: {start:02d}:00 - {end:02d}:00",
        })
    return runs


def identify_golden_hours(hourly: list[dict]) -> list[dict]:
    picked = [
        h for h in hourly
        if h["productivity_score"] >= GOLDEN_HOUR_THRESHOLD and h["total_events"] > 0
    ]
    return _describe_runs(_group_consecutive(picked))


def identify_low_energy_hours(hourly: list[dict]) -> list[dict]:
    picked = [
        h for h in hourly
        if 0 < h["productivity_score"] <= LOW_ENERGY_THRESHOLD and h["total_events"] > 0
    ]
    return _describe_runs(_group_consecutive(picked))


def calculate_category_productivity(
    events: list[_LocalEvent], categories: dict[UUID, CategoryLike],
) -> list[dict]:
    groups: dict[UUID, list[_LocalEvent]] = defaultdict(list)
    for snapshot in events:
        if snapshot.event.event_category_id in categories:
            groups[snapshot.event.event_category_id].append(snapshot)

    stats = []
    for category_id, group in groups.items():
        category = categories[category_id]
        rated = [e.event.mood_rating for e in group if e.event.mood_rating is not None]
        average = sum(rated) / len(rated) if rated else 0
        coverage = len(rated) / len(group) if rated else 0
        mood_score = normalize_mood_score(average) if rated else 0
        score = (mood_score * 0.6 + coverage * 0.4) * 100
        hours = Counter(e.start.hour for e in group)
        days = Counter(_day_index(e.start) for e in group)
        stats.append({
            "category_id": category_id,
            "category_name": category.name,
            "category_color": category.color,
            "optimal_hours": [hour for hour, _ in hours.most_common(3)],
            "average_productivity_score": round(score, 2),
            "best_day_of_week": days.most_common(1)[0][0] if days else 0,
        })
    return stats


def generate_recommendations(
    hourly: list[dict], daily: list[dict], category_stats: list[dict],
) -> list[dict]:
    recommendations = []

    top_hours = sorted(
        (h for h in hourly if h["productivity_score"] >= GOLDEN_HOUR_THRESHOLD and h["total_events"] > 0),
        key=lambda h: -h["productivity_score"],
    )[:3]
    if top_hours:
        recommendations.append({
            "title": "Make the most of your most productive hours",
            "description": (
                f"You perform best between {top_hours[0]['hour']:02d}:00 and "
                f"{top_hours[-1]['hour'] + 1:02d}:00{_mood_suffix(top_hours)}. "
                "Schedule important tasks in these hours."
            ),
            "priority": 5,
            "type": "golden-hours",
            "affected_categories": [],
            "suggested_hours": [h["hour"] for h in top_hours],
        })

    low_hours = [
        h for h in hourly
        if 0 < h["productivity_score"] < LOW_ENERGY_RECOMMENDATION_THRESHOLD and h["total_events"] > 0
    ]
    if low_hours:
        recommendations.append({
            "title": "Avoid demanding tasks during low-energy hours",
            "description": (
                f"Your performance drops between {low_hours[0]['hour']:02d}:00 and "
                f"{low_hours[-1]['hour'] + 1:02d}:00{_mood_suffix(low_hours)}. "
                "Save these moments for light tasks or breaks."
            ),
            "priority": 4,
            "type": "low-energy-warning",
            "affected_categories": [],
            "suggested_hours": [h["hour"] for h in low_hours],
        })

    best_day = max(daily, key=lambda d: d["productivity_score"], default=None)
    if best_day and best_day["total_events"] > 0:
        recommendations.append({
            "title": f"{best_day['day_name']}s are your most productive days",
            "description": (
                f"Consider scheduling your most important activities on "
                f"{best_day['day_name']}s, where your average productivity is "
                f"{best_day['productivity_score']:.1f}%."
            ),
            "priority": 3,
            "type": "best-day",
            "affected_categories": [],
            "suggested_hours": [],
        })

    ranked = sorted(category_stats, key=lambda c: -c["average_productivity_score"])[:2]
    for category in ranked:
        if category["optimal_hours"]:
            recommendations.append({
                "title": f"Best time for {category['category_name']}",
                "description": (
                    f"Your '{category['category_name']}' activities work best around "
                    f"{category['optimal_hours'][0]:02d}:00. Consider scheduling them then."
                ),
                "priority": 2,
                "type": "category-optimization",
                "affected_categories": [category["category_name"]],
                "suggested_hours": category["optimal_hours"],
            })

    return sorted(recommendations, key=lambda r: -r["priority"])


def _mood_suffix(hours: list[dict]) -> str:
    if not any(h["average_mood"] > 0 for h in hours):
        return ""
    average = sum(h["average_mood"] for h in hours) / len(hours)
    return f" (average mood {average:.1f}/5)"


def analyze_productivity(
    events: list[EventLike],
    categories: dict[UUID, CategoryLike],
    now: datetime,
    period_days: int,
    offset_minutes: int,
) -> dict:
    """Full productivity analysis. Events must already overlap the analysis window."""
    period_start, period_end = analysis_window(now, period_days, offset_minutes)
    selected = select_events(events, categories)

    localized = [
        _LocalEvent(e, to_local(e.start_date, offset_minutes), to_local(e.end_date, offset_minutes))
        for e in selected
    ]
    localized = [e for e in localized if e.end > e.start]

    hourly_end = to_local(local_midnight_utc(now, offset_minutes), offset_minutes)
    hourly_start = max(
        hourly_end - timedelta(days=HOURLY_WINDOW_DAYS), to_local(period_start, offset_minutes),
    )
    hourly_events = [e for e in localized if e.start < hourly_end and e.end > hourly_start]

    hourly = calculate_hourly(hourly_events, hourly_start, hourly_end)
    daily = calculate_daily(localized)
    category_stats = calculate_category_productivity(localized, categories)

    return {
        "hourly_productivity": hourly,
        "daily_productivity": daily,
        "golden_hours": identify_golden_hours(hourly),
        "low_energy_hours": identify_low_energy_hours(hourly),
        "category_productivity": category_stats,
        "recommendations": generate_recommendations(hourly, daily, category_stats),
        "analysis_period_start": period_start,
        "analysis_period_end": period_end - timedelta(microseconds=1),
        "total_events_analyzed": len(localized),
        "total_mood_records_analyzed": sum(
            1 for e in localized if e.event.mood_rating is not None
        ),
    }


def overlaps_window(event: EventLike, start: datetime, end: datetime) -> bool:
    return as_utc(event.start_date) < end and as_utc(event.end_date) > start
