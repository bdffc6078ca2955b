"""Self-Care Catalog — contextual self-care pools and history-based scoring.

Invariants:
    - Pools are chosen by local hour: morning [6, 12), afternoon [12, 18), evening otherwise
    - Monday adds an energy boost, Friday a social item, Sunday a rest item
    - Low-mood items are added only when the current mood is ≤ 2
    - Scored confidence is an int clamped to 0–100

Design Decisions:
    - Catalog entries are frozen dataclasses; scoring returns new dicts so the
      catalog is never mutated between requests
    - "Similar" past events are matched on the first word of the suggestion title,
      case-insensitively
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta

from aurora.core.domain_types import SelfCareType
from aurora.core.event_rules import as_utc
from aurora.core.repository_protocols import EventLike

RECENT_USAGE_HOURS = 48
TRADITIONAL_PICKS = 3
AI_PICKS = 2
NEUTRAL_SCORE = 50.0
DEFAULT_AI_ICON = "✨"

TYPE_DESCRIPTIONS: dict[SelfCareType, str] = {
    SelfCareType.PHYSICAL: "Physical",
    SelfCareType.MENTAL: "Mental",
    SelfCareType.SOCIAL: "Social",
    SelfCareType.CREATIVE: "Creative",
    SelfCareType.REST: "Rest",
}


@dataclass(frozen=True)
class SelfCareItem:
    id: str
    type: SelfCareType
    title: str
    description: str
    duration_minutes: int
    personalized_reason: str
    confidence_score: int
    icon: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.type,
            "type_description": TYPE_DESCRIPTIONS[self.type],
            "title": self.title,
            "description": self.description,
            "duration_minutes": self.duration_minutes,
            "personalized_reason": self.personalized_reason,
            "confidence_score": self.confidence_score,
            "icon": self.icon,
            "historical_mood_impact": None,
            "completion_rate": None,
            "suggested_datetime": None,
            "category_id": None,
        }


P, M, S, C, R = (
    SelfCareType.PHYSICAL, SelfCareType.MENTAL, SelfCareType.SOCIAL,
    SelfCareType.CREATIVE, SelfCareType.REST,
)

GENERIC_ITEMS: tuple[SelfCareItem, ...] = (
    SelfCareItem("generic-walk", P, "Walk for 15 minutes", "A short walk to clear your mind", 15,
                 "Movement helps reduce stress and lift your mood", 80, "👟"),
    SelfCareItem("generic-breathe", M, "Mindful breathing, 5 min", "Deep breathing exercises", 5,
                 "Conscious breathing calms the nervous system", 85, "🫁"),
    SelfCareItem("generic-stretch", P, "Stretching", "Gentle stretches to release tension", 10,
                 "Stretching relieves muscle tension from sitting", 75, "🧘"),
    SelfCareItem("generic-tea", R, "Tea break", "Make a warm drink and enjoy it slowly", 10,
                 "A short pause helps you reset", 70, "🍵"),
    SelfCareItem("generic-music", C, "Listen to music", "Play a few songs you love", 12,
                 "Music improves mood and reduces anxiety", 72, "🎵"),
    SelfCareItem("generic-call", S, "Call a loved one", "Talk to someone you care about", 15,
                 "Social connection is key to wellbeing", 78, "📞"),
    SelfCareItem("generic-journal", C, "Write in a journal", "Write down your thoughts and feelings", 10,
                 "Writing helps you process emotions", 73, "📝"),
    SelfCareItem("generic-nap", R, "Short nap", "A 20-minute power nap", 20,
                 "A short nap restores energy and focus", 68, "😴"),
    SelfCareItem("generic-nature", P, "Connect with nature", "Step outside and look at something green", 10,
                 "Contact with nature lowers stress", 76, "🌿"),
    SelfCareItem("generic-screens", R, "Screen break", "Put your devices away for a while", 15,
                 "Time away from screens rests your eyes and mind", 74, "📵"),
)

MORNING_ITEMS: tuple[SelfCareItem, ...] = (
    SelfCareItem("morning-walk", P, "Walk for 20 minutes", "Walk outdoors to start the day with energy", 20,
                 "Morning walks activate your metabolism and improve your mood", 85, "🌅"),
    SelfCareItem("morning-stretch", P, "Morning stretches", "A stretching routine to wake up your body", 10,
                 "Stretching in the morning improves flexibility and prevents aches", 80, "🧘"),
    SelfCareItem("morning-coffee-mindful", M, "Mindful coffee or breakfast",
                 "Have your coffee or breakfast without screens, just enjoying it", 15,
                 "Starting the day mindfully reduces anxiety", 79, "☕"),
    SelfCareItem("morning-planning", M, "Plan your day", "Spend 10 minutes organizing your priorities", 10,
                 "Planning reduces stress and increases productivity", 77, "📋"),
    SelfCareItem("morning-music", C, "Energizing music", "Listen to music you like while you get ready", 15,
                 "Morning music lifts your mood for the whole day", 75, "🎵"),
)

AFTERNOON_ITEMS: tuple[SelfCareItem, ...] = (
    SelfCareItem("afternoon-break", R, "10-minute break", "Step away from work and rest your eyes", 10,
                 "Regular breaks improve your productivity", 78, "☕"),
    SelfCareItem("afternoon-walk", P, "Walk after lunch", "A short walk to help digestion", 15,
                 "Walking after eating aids digestion and gives you energy", 75, "🚶"),
    SelfCareItem("afternoon-hydrate", P, "Hydration break", "Drink some water and move a little", 5,
                 "Staying hydrated improves concentration", 72, "💧"),
    SelfCareItem("afternoon-snack", P, "Healthy snack", "Eat something nutritious to recover energy", 10,
                 "A healthy snack prevents afternoon fatigue", 74, "🍎"),
    SelfCareItem("afternoon-eyes", R, "Eye rest", "Eye exercises if you work at a screen", 5,
                 "Your eyes need a rest from screens", 76, "👀"),
)

EVENING_ITEMS: tuple[SelfCareItem, ...] = (
    SelfCareItem("evening-meditation", M, "Evening meditation", "10 minutes of meditation to unwind", 10,
                 "Meditating before bed improves sleep quality", 82, "🌙"),
    SelfCareItem("evening-journal", C, "Evening journal", "Write about your day and your emotions", 15,
                 "Writing before bed helps you process the day", 76, "📔"),
    SelfCareItem("evening-reading", R, "Relaxing reading", "Read something you enjoy for 20 minutes", 20,
                 "Reading before bed reduces stress and improves sleep", 80, "📖"),
    SelfCareItem("evening-tea", R, "Warm tea and quiet", "Make a calming tea and enjoy it without screens", 15,
                 "A quiet evening ritual tells your body it is time to rest", 78, "🍵"),
    SelfCareItem("evening-stretch", P, "Gentle stretches", "Slow stretches to release tension", 10,
                 "Stretching before bed relaxes your muscles", 74, "🧘"),
    SelfCareItem("evening-gratitude", M, "Gratitude list", "Write down 3 things you are grateful for today", 5,
                 "Evening gratitude improves mood and sleep quality", 77, "💝"),
)

MONDAY_ITEMS: tuple[SelfCareItem, ...] = (
    SelfCareItem("monday-energy", P, "Energizing workout", "15 minutes of exercise to start the week", 15,
                 "Starting the week with exercise gives you energy for the days ahead", 83, "💪"),
)

FRIDAY_ITEMS: tuple[SelfCareItem, ...] = (
    SelfCareItem("friday-social", S, "Connect with friends", "Call or message a friend", 20,
                 "Friday is perfect for reconnecting socially", 80, "👥"),
)

SUNDAY_ITEMS: tuple[SelfCareItem, ...] = (
    SelfCareItem("sunday-rest", R, "Time for yourself", "Read, watch a show, or simply do nothing", 60,
                 "Sunday is ideal for recharging before the week", 85, "🛋️"),
)

LOW_MOOD_ITEMS: tuple[SelfCareItem, ...] = (
    SelfCareItem("lowmood-breathe", M, "4-7-8 breathing", "A breathing technique to calm anxiety", 5,
                 "This technique quickly reduces stress and anxiety", 90, "🫁"),
    SelfCareItem("lowmood-call", S, "Talk to someone", "Call someone you trust", 15,
                 "When you feel down, talking helps you process emotions", 88, "💬"),
)

del P, M, S, C, R


def time_of_day(hour: int) -> str:
    if 6 <= hour < 12:
        return "morning"
    if 12 <= hour < 18:
        return "afternoon"
    return "evening"


def contextual_pool(local_now: datetime, current_mood: int | None) -> list[SelfCareItem]:
    """Candidate items for the user's local time, weekday and mood."""
    pools = {
        "morning": MORNING_ITEMS,
        "afternoon": AFTERNOON_ITEMS,
        "evening": EVENING_ITEMS,
    }
    items = list(pools[time_of_day(local_now.hour)])

    weekday = local_now.weekday()
    if weekday == 0:
        items.extend(MONDAY_ITEMS)
    elif weekday == 4:
        items.extend(FRIDAY_ITEMS)
    elif weekday == 6:
        items.extend(SUNDAY_ITEMS)

    if current_mood is not None and current_mood <= 2:
        items.extend(LOW_MOOD_ITEMS)
    return items


def score_item(item: SelfCareItem, history: list[EventLike], now: datetime) -> dict:
    """mood impact·0.5 + completion·0.3 + recency·0.2, each on 0–100."""
    result = item.to_dict()
    keyword = item.title.split(" ")[0].lower()
    similar = [e for e in history if keyword in e.title.lower()]

    mood_impact = completion = recency = NEUTRAL_SCORE
    if similar:
        rated = [e.mood_rating for e in similar if e.mood_rating is not None]
        if rated:
            mood_impact = sum(rated) / len(rated) * 20
            result["historical_mood_impact"] = int(mood_impact)

        done = sum(
            1 for e in similar
            if e.mood_rating is not None or as_utc(e.end_date) < as_utc(now)
        )
        completion = done / len(similar) * 100
        result["completion_rate"] = int(completion)

        last_end = max(as_utc(e.end_date) for e in similar)
        days_since = (as_utc(now) - last_end).total_seconds() / 86400
        if 2 <= days_since <= 7:
            recency = 80.0
        elif days_since < 2:
            recency = 30.0

    score = mood_impact * 0.5 + completion * 0.3 + recency * 0.2
    result["confidence_score"] = min(100, max(0, int(score)))
    return result


def prune_usage(
    usage: list[tuple[str, datetime]], now: datetime,
) -> list[tuple[str, datetime]]:
    cutoff = as_utc(now) - timedelta(hours=RECENT_USAGE_HOURS)
    return [(item_id, used_at) for item_id, used_at in usage if as_utc(used_at) > cutoff]


def filter_recent(
    suggestions: list[dict], usage: list[tuple[str, datetime]], now: datetime,
) -> list[dict]:
    recent = {item_id for item_id, _ in prune_usage(usage, now)}
    return [s for s in suggestions if s["id"] not in recent]


def combine(
    ranked: list[dict], ai_items: list[dict], count: int,
) -> list[dict]:
    """Top traditional picks, then up to two AI items, topped up from the ranking."""
    traditional = ranked[:TRADITIONAL_PICKS]
    combined = traditional + ai_items[:AI_PICKS]
    if len(combined) < count:
        combined.extend(ranked[len(traditional):len(traditional) + count - len(combined)])
    return combined[:count]


def generic_recommendations(count: int = 5) -> list[dict]:
    ranked = sorted(GENERIC_ITEMS, key=lambda i: -i.confidence_score)
    return [item.to_dict() for item in ranked[:count]]


def parse_self_care_type(value) -> SelfCareType:
    try:
        return SelfCareType(str(value).strip().lower())
    except ValueError:
        return SelfCareType.MENTAL


def ai_item_from_payload(payload: dict) -> dict:
    """Turn one model suggestion into a recommendation dict with an ai-* id."""
    kind = parse_self_care_type(payload.get("type"))
    return {
        "id": f"ai-{uuid.uuid4().hex[:8]}",
        "type": kind,
        "type_description": TYPE_DESCRIPTIONS[kind],
        "title": str(payload.get("title") or "").strip(),
        "description": str(payload.get("description") or "").strip(),
        "duration_minutes": int(payload.get("durationMinutes") or 0),
        "personalized_reason": str(payload.get("personalizedReason") or "").strip(),
        "confidence_score": min(100, max(0, int(payload.get("confidence") or 0))),
        "icon": payload.get("icon") or DEFAULT_AI_ICON,
        "historical_mood_impact": None,
        "completion_rate": None,
        "suggested_datetime": None,
        "category_id": None,
    }
