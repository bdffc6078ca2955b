"""Recommendation Engine — heuristic activity suggestions from event and mood history.

Invariants:
    - Pure: callers pass history, upcoming events, mood entries and "now"
    - Requested count clamped to 5–10 (default 6)
    - Layers run in order: category → mood trend → routine → fallback;
      later layers only run while fewer than 5 candidates exist
    - Output deduplicated by id, sorted by confidence desc then start, truncated
    - Confidence always within 0.2–0.95, rounded to 2 decimals

Design Decisions:
    - Ids embed the reference day (e.g. "mood-reset-20250101") so feedback from
      the same day upserts onto one row
    - Slots are 60-minute probes over the next 7 days; if every probe collides the
      first candidate is returned anyway (a suggestion beats no suggestion)
"""

from collections import defaultdict
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from uuid import UUID

from aurora.core.domain_types import POSITIVE_MOOD_THRESHOLD
from aurora.core.event_rules import as_utc
from aurora.core.repository_protocols import CategoryLike, EventLike, MoodEntryLike

DEFAULT_RECOMMENDATION_COUNT = 6
MIN_RECOMMENDATION_COUNT = 5
MAX_RECOMMENDATION_COUNT = 10
LOOKBACK_DAYS = 45
LOOKAHEAD_DAYS = 7
SLOT_DURATION_MINUTES = 60
MAX_FEEDBACK_NOTES = 500


@dataclass
class Recommendation:
    id: str
    title: str
    reason: str
    recommendation_type: str
    suggested_start: datetime
    suggested_duration_minutes: int
    confidence: float
    subtitle: str | None = None
    category_id: UUID | None = None
    category_name: str | None = None
    mood_impact: str | None = None
    summary: str | None = None


@dataclass
class CategorySnapshot:
    category_id: UUID
    category_name: str
    category_color: str | None
    events: list
    mood_average: float
    positive_share: float


def clamp_recommendation_count(requested: int | None) -> int:
    if requested is None:
        return DEFAULT_RECOMMENDATION_COUNT
    return max(MIN_RECOMMENDATION_COUNT, min(MAX_RECOMMENDATION_COUNT, requested))


def build_category_snapshots(
    events: list[EventLike], categories: dict[UUID, CategoryLike],
) -> list[CategorySnapshot]:
    """Group history by category; best mood first, then most events."""
    groups: dict[UUID, list[EventLike]] = defaultdict(list)
    for event in events:
        if event.event_category_id:
            groups[event.event_category_id].append(event)

    snapshots = []
    for category_id, group in groups.items():
        category = categories.get(category_id)
        rated = [e.mood_rating for e in group if e.mood_rating is not None]
        positives = sum(1 for m in rated if m >= POSITIVE_MOOD_THRESHOLD)
        snapshots.append(CategorySnapshot(
            category_id=category_id,
            category_name=category.name if category else "Activity",
            category_color=category.color if category else None,
            events=group,
            mood_average=sum(rated) / len(rated) if rated else 0.0,
            positive_share=round(positives / len(group), 2),
        ))
    snapshots.sort(key=lambda s: (-s.mood_average, -len(s.events)))
    return snapshots


def recent_mood_average(entries: list[MoodEntryLike]) -> float | None:
    """Mean of the 7 most recent entries, 2 decimals."""
    if not entries:
        return None
    ordered = sorted(entries, key=lambda e: e.entry_date)[-7:]
    return round(sum(e.mood_rating for e in ordered) / len(ordered), 2)


def find_next_available_slot(
    reference_day: date,
    preferred_time: time,
    occupied: list[tuple[datetime, datetime]],
    now: datetime,
) -> datetime:
    candidate = datetime.combine(reference_day, preferred_time, tzinfo=timezone.utc)
    if candidate <= as_utc(now):
        candidate += timedelta(days=1)
    for offset in range(LOOKAHEAD_DAYS):
        start = candidate + timedelta(days=offset)
        end = start + timedelta(minutes=SLOT_DURATION_MINUTES)
        if not any(as_utc(s) < end and as_utc(e) > start for s, e in occupied):
            return start
    return candidate


def calculate_confidence(snapshot: CategorySnapshot, recent_average: float | None) -> float:
    if snapshot.mood_average > 0:
        base = min(0.95, max(0.3, snapshot.mood_average / 5))
    else:
        base = 0.4
    participation = min(0.2, len(snapshot.events) * 0.02)
    mood_bonus = 0.0
    if recent_average is not None:
        mood_bonus = min(0.1, max(-0.1, (recent_average - 3) * 0.05))
    return round(min(0.95, max(0.2, base + participation + mood_bonus)), 2)


def _descriptor(average: float) -> str:
    if average >= 4.5:
        return "excellent"
    if average >= 4:
        return "very good"
    return "positive"


def build_category_recommendations(
    reference_day: date,
    snapshots: list[CategorySnapshot],
    recent_average: float | None,
    occupied: list[tuple[datetime, datetime]],
    desired: int,
    now: datetime,
) -> list[Recommendation]:
    suggestions = []
    stamp = reference_day.strftime("%Y%m%d")
    for snapshot in snapshots[:desired]:
        if not snapshot.events:
            continue
        rated = [e for e in snapshot.events if e.mood_rating is not None]
        if rated:
            peak = sorted(rated, key=lambda e: (-e.mood_rating, as_utc(e.start_date)))[0]
        else:
            peak = snapshot.events[0]
        peak_start = as_utc(peak.start_date)
        start = find_next_available_slot(
            reference_day, peak_start.time().replace(tzinfo=None), occupied, now,
        )
        duration = (as_utc(peak.end_date) - peak_start).total_seconds() / 60
        suggestions.append(Recommendation(
            id=f"category-{snapshot.category_id}-{stamp}",
            title=f"Get back to {snapshot.category_name}",
            subtitle="Based on your best recent moments",
            reason=(
                f"Your {snapshot.category_name} events had {_descriptor(snapshot.mood_average)} "
                f"results ({snapshot.mood_average:.1f}/5)."
            ),
            summary="Repeating what works reinforces your energy.",
            recommendation_type="activity",
            suggested_start=start,
            suggested_duration_minutes=int(max(30, duration)),
            confidence=calculate_confidence(snapshot, recent_average),
            category_id=snapshot.category_id,
            category_name=snapshot.category_name,
            mood_impact=(
                f"Expected impact: {snapshot.mood_average:.1f}/5"
                if snapshot.mood_average > 0 else None
            ),
        ))
    return suggestions


def build_mood_trend_recommendations(
    reference_day: date,
    entries: list[MoodEntryLike],
    recent_average: float | None,
    current_mood: int | None,
) -> list[Recommendation]:
    suggestions = []
    stamp = reference_day.strftime("%Y%m%d")
    midnight = datetime.combine(reference_day, time.min, tzinfo=timezone.utc)
    samples = [e.mood_rating for e in sorted(entries, key=lambda e: e.entry_date)[-5:]]
    has_downtrend = len(samples) >= 3 and sum(samples) / len(samples) <= 3
    mood_reference = current_mood if current_mood is not None else (
        samples[-1] if samples else None
    )

    if has_downtrend or (mood_reference is not None and mood_reference <= 2):
        suggestions.append(Recommendation(
            id=f"mood-reset-{stamp}",
            title="Restorative micro-break",
            subtitle="When energy drops, 20 minutes make a difference",
            reason=(
                "We noticed several challenging days in a row. A short active "
                "break helps interrupt the streak."
            ),
            recommendation_type="wellbeing",
            suggested_start=midnight + timedelta(hours=17),
            suggested_duration_minutes=20,
            confidence=0.65,
            mood_impact="Supports recovery and releases tension",
            summary="Breathing + mindful stretching",
        ))

    if recent_average is not None and recent_average >= 4:
        suggestions.append(Recommendation(
            id=f"mood-celebration-{stamp}",
            title="Celebrate your progress",
            subtitle="Recognizing what works is part of progress too",
            reason=(
                f"Your mood average over the last week was {recent_average:.1f}/5. "
                "Let's consolidate that good run."
            ),
            recommendation_type="reflection",
            suggested_start=midnight + timedelta(days=1, hours=21),
            suggested_duration_minutes=15,
            confidence=0.55,
            mood_impact="Boosts motivation",
            summary="Write down 3 things that worked this week",
        ))
    return suggestions


def build_routine_recommendations(
    reference_day: date,
    snapshots: list[CategorySnapshot],
    occupied: list[tuple[datetime, datetime]],
    now: datetime,
) -> list[Recommendation]:
    suggestions = []
    stamp = reference_day.strftime("%Y%m%d")
    positive_mornings = [
        e.mood_rating
        for s in snapshots for e in s.events
        if e.mood_rating is not None
        and e.mood_rating >= POSITIVE_MOOD_THRESHOLD
        and as_utc(e.start_date).hour < 12
    ]
    morning_average = (
        sum(positive_mornings) / len(positive_mornings) if positive_mornings else 0
    )

    if morning_average >= 4:
        suggestions.append(Recommendation(
            id=f"routine-morning-{stamp}",
            title="Energizing morning routine",
            subtitle="Anchor your morning to activities that already work for you",
            reason=(
                "Your best days started early. Replicating that structure "
                "sustains your energy."
            ),
            recommendation_type="routine",
            suggested_start=find_next_available_slot(reference_day, time(8), occupied, now),
            suggested_duration_minutes=25,
            confidence=0.5,
            mood_impact="Increases clarity and focus",
            summary="Breathing + quick planning",
        ))

    if not snapshots:
        suggestions.append(Recommendation(
            id=f"routine-evening-{stamp}",
            title="Guided wind-down",
            subtitle="Prepare your rest with intention",
            reason=(
                "Even without previous activities, reserving a close to the day "
                "helps you sleep better."
            ),
            recommendation_type="rest",
            suggested_start=find_next_available_slot(reference_day, time(19), occupied, now),
            suggested_duration_minutes=30,
            confidence=0.45,
            mood_impact="Encourages restorative sleep",
            summary="Gentle stretching + short reading",
        ))
    return suggestions


def build_fallback_recommendation(reference_day: date) -> Recommendation:
    midnight = datetime.combine(reference_day, time.min, tzinfo=timezone.utc)
    return Recommendation(
        id=f"fallback-{reference_day.strftime('%Y%m%d')}",
        title="Take a breather",
        summary="We don't have enough information yet, try a short walk.",
        reason="When there is no recent data it's healthy to schedule a mindful pause.",
        recommendation_type="wellbeing",
        suggested_start=midnight + timedelta(hours=18),
        suggested_duration_minutes=20,
        confidence=0.3,
        mood_impact="Reduces stress and helps you reconnect with your body",
    )


def build_recommendations(
    reference_day: date,
    history: list[EventLike],
    upcoming: list[EventLike],
    mood_entries: list[MoodEntryLike],
    categories: dict[UUID, CategoryLike],
    desired: int,
    now: datetime,
    current_mood: int | None = None,
) -> list[Recommendation]:
    """Run every heuristic layer and return the final ranked list."""
    snapshots = build_category_snapshots(history, categories)
    recent_average = recent_mood_average(mood_entries)
    occupied = [(e.start_date, e.end_date) for e in upcoming]

    candidates = build_category_recommendations(
        reference_day, snapshots, recent_average, occupied, desired, now,
    )
    if len(candidates) < MIN_RECOMMENDATION_COUNT:
        candidates += build_mood_trend_recommendations(
            reference_day, mood_entries, recent_average, current_mood,
        )
    if len(candidates) < MIN_RECOMMENDATION_COUNT:
        candidates += build_routine_recommendations(reference_day, snapshots, occupied, now)
    if not candidates:
        candidates.append(build_fallback_recommendation(reference_day))

    unique: dict[str, Recommendation] = {}
    for rec in candidates:
        unique.setdefault(rec.id, rec)
    ranked = sorted(unique.values(), key=lambda r: (-r.confidence, r.suggested_start))
    return ranked[:desired]


def sanitize_feedback_notes(notes: str | None) -> str | None:
    if notes is None or not notes.strip():
        return None
    return notes.strip()[:MAX_FEEDBACK_NOTES]


def summarize_feedback(
    entries: list, period_start: datetime, period_end: datetime,
) -> dict:
    """Acceptance rate (%) and average post-recommendation mood."""
    total = len(entries)
    accepted = sum(1 for e in entries if e.accepted)
    moods = [e.mood_after for e in entries if e.mood_after is not None]
    return {
        "total_feedback": total,
        "accepted_count": accepted,
        "rejected_count": total - accepted,
        "acceptance_rate": round(accepted / total * 100, 1) if total else 0,
        "average_mood_after": round(sum(moods) / len(moods), 2) if moods else None,
        "period_start_utc": period_start,
        "period_end_utc": period_end,
    }
