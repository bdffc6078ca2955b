"""AI Response Parsing — turns free-form model text into typed drafts.

Invariants:
    - JSON objects are taken from the first "{" to the last "}"; arrays from the
      first "[" to the last "]"; markdown fences are tolerated
    - Keys are matched case-insensitively (models mix camelCase and snake_case)
    - Every parsed event draft has a usable category and end > start
    - Dates carrying an offset are converted to UTC; naive dates are read as the
      user's local time

Design Decisions:
    - Raises AIResponseError on unusable output; callers decide whether that is
      fatal (NL parsing, plans) or falls back (validation, suggestions)
    - Validation parsing is lenient: a reply without JSON approves with the raw
      text as message (ADR: AI is advisory, never a hard dependency)
"""

import json
import logging
import re
from datetime import datetime, timedelta
from uuid import UUID

from aurora.core.category_rules import find_by_name, sort_categories
from aurora.core.domain_types import EventPriority, SuggestionType, ValidationSeverity
from aurora.core.errors import AIResponseError
from aurora.core.event_rules import as_utc, local_to_utc, overlaps
from aurora.core.repository_protocols import CategoryLike, EventLike

logger = logging.getLogger(__name__)

MAX_FALLBACK_MESSAGE = 500

EVENT_KEYS = ("event", "evento", "eventData", "event_details")
ANALYSIS_KEYS = ("analysis", "validation", "aiValidation", "review")
CATEGORY_NAME_KEYS = (
    "categoryName", "category", "eventCategoryName", "eventCategory", "category_label",
)

SUGGESTION_TYPE_BY_NUMBER = {
    1: SuggestionType.MOVE_EVENT,
    2: SuggestionType.RESOLVE_CONFLICT,
    3: SuggestionType.OPTIMIZE_DISTRIBUTION,
    4: SuggestionType.PATTERN_ALERT,
    5: SuggestionType.SUGGEST_BREAK,
    6: SuggestionType.GENERAL_REORGANIZATION,
}

_FENCE = re.compile(r"^```[a-zA-Z]*\s*|\s*```$")


# ─── Extraction ──────────────────────────────────────────────────

def strip_fences(text: str) -> str:
    return _FENCE.sub("", text.strip()).strip()


def extract_json_object(text: str) -> dict:
    """Parse the outermost {...} block of a model reply."""
    cleaned = strip_fences(text or "")
    start, end = cleaned.find("{"), cleaned.rfind("}")
    if start < 0 or end <= start:
        raise AIResponseError("The AI reply did not contain a JSON object")
    try:
        value = json.loads(cleaned[start:end + 1])
    except json.JSONDecodeError as e:
        raise AIResponseError(f"The AI reply contained invalid JSON: {e.msg}") from e
    if not isinstance(value, dict):
        raise AIResponseError("The AI reply JSON is not an object")
    return value


def extract_json_array(text: str) -> list:
    """Parse the outermost [...] block of a model reply."""
    cleaned = strip_fences(text or "")
    start, end = cleaned.find("["), cleaned.rfind("]")
    if start < 0 or end <= start:
        raise AIResponseError("The AI reply did not contain a JSON array")
    try:
        value = json.loads(cleaned[start:end + 1])
    except json.JSONDecodeError as e:
        raise AIResponseError(f"The AI reply contained invalid JSON: {e.msg}") from e
    if not isinstance(value, list):
        raise AIResponseError("The AI reply JSON is not an array")
    return value


def get_key(data: dict, *names: str, default=None):
    """First present key among names, compared case-insensitively."""
    lowered = {str(k).lower(): v for k, v in data.items()}
    for name in names:
        if name.lower() in lowered:
            return lowered[name.lower()]
    return default


def _nested_object(data: dict, names: tuple[str, ...]) -> dict | None:
    for name in names:
        value = get_key(data, name)
        if isinstance(value, dict):
            return value
    return None


# ─── Dates ───────────────────────────────────────────────────────

def normalize_ai_date(raw, offset_minutes: int) -> datetime | None:
    """ISO string → aware UTC. Offset-less strings are the user's local time."""
    if not isinstance(raw, str) or not raw.strip():
        return None
    value = raw.strip()
    if value.endswith(("Z", "z")):
        value = value[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        return as_utc(parsed)
    return local_to_utc(parsed, offset_minutes)


# ─── Validation ──────────────────────────────────────────────────

def parse_severity(value) -> ValidationSeverity:
    text = str(value or "").strip().lower()
    if text == "critical":
        return ValidationSeverity.CRITICAL
    if text == "warning":
        return ValidationSeverity.WARNING
    return ValidationSeverity.INFO


def _string_list(value) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(v).strip() for v in value if isinstance(v, str) and v.strip()]


def validation_from_mapping(data: dict, used_ai: bool = True) -> dict:
    approved = get_key(data, "approved", "isApproved", default=True)
    return {
        "is_approved": bool(approved),
        "recommendation_message": str(get_key(data, "message", "recommendationMessage") or ""),
        "severity": parse_severity(get_key(data, "severity")),
        "suggestions": _string_list(get_key(data, "suggestions")),
        "used_ai": used_ai,
    }


def approved_by_default(message: str) -> dict:
    return {
        "is_approved": True,
        "recommendation_message": message,
        "severity": ValidationSeverity.INFO,
        "suggestions": [],
        "used_ai": False,
    }


def parse_validation(text: str) -> dict:
    """Validation reply → result dict. Unparseable replies approve with the raw text."""
    try:
        data = extract_json_object(text)
    except AIResponseError:
        logger.warning("AI validation reply was not JSON, approving by default")
        return {
            "is_approved": True,
            "recommendation_message": text[:MAX_FALLBACK_MESSAGE],
            "severity": ValidationSeverity.INFO,
            "suggestions": [],
            "used_ai": True,
        }
    return validation_from_mapping(data)


def parse_embedded_validation(root: dict) -> dict | None:
    analysis = _nested_object(root, ANALYSIS_KEYS)
    if analysis is None:
        return None
    return validation_from_mapping(analysis)


# ─── Event drafts ────────────────────────────────────────────────

def parse_priority(value) -> EventPriority:
    try:
        return EventPriority(int(value))
    except (TypeError, ValueError):
        return EventPriority.MEDIUM


def _parse_uuid(value) -> UUID | None:
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        return None


def resolve_category(
    element: dict, categories: list[CategoryLike],
) -> tuple[UUID, str | None]:
    """Category id for a drafted event, plus a suggested name when none matched."""
    by_id = {c.id: c for c in categories}
    category_id = _parse_uuid(get_key(element, "eventCategoryId", "event_category_id", "categoryId"))
    if category_id in by_id:
        return category_id, None

    suggested_name = None
    for key in CATEGORY_NAME_KEYS:
        value = get_key(element, key)
        if isinstance(value, str) and value.strip():
            matched = find_by_name(categories, value)
            if matched is not None:
                return matched.id, None
            suggested_name = value.strip()
            logger.info(f"AI suggested a new category: {suggested_name!r}")
            break

    ordered = sort_categories(categories)
    if not ordered:
        raise AIResponseError("No categories are available for the suggested event")
    return ordered[0].id, suggested_name


def parse_event_draft(
    element: dict,
    categories: list[CategoryLike],
    offset_minutes: int,
    now: datetime,
) -> dict:
    """One event object from a model reply → EventCreate-shaped dict."""
    title = str(get_key(element, "title") or "").strip()
    if not title:
        raise AIResponseError("The AI reply did not describe a valid event")

    start = normalize_ai_date(get_key(element, "startDate", "start_date", "start"), offset_minutes)
    end = normalize_ai_date(get_key(element, "endDate", "end_date", "end"), offset_minutes)
    start = start or as_utc(now)
    if end is None or end <= start:
        end = start + timedelta(hours=1)

    category_id, suggested_name = resolve_category(element, categories)

    description = get_key(element, "description")
    location = get_key(element, "location")
    return {
        "title": title,
        "description": str(description).strip() or None if description else None,
        "start_date": start,
        "end_date": end,
        "is_all_day": bool(get_key(element, "isAllDay", "is_all_day", default=False)),
        "location": str(location).strip() or None if location else None,
        "priority": parse_priority(get_key(element, "priority")),
        "event_category_id": category_id,
        "suggested_category_name": suggested_name,
        "timezone_offset_minutes": offset_minutes,
    }


def parse_natural_language_reply(
    text: str, categories: list[CategoryLike], offset_minutes: int, now: datetime,
) -> tuple[dict, dict | None]:
    root = extract_json_object(text)
    element = _nested_object(root, EVENT_KEYS) or root
    return (
        parse_event_draft(element, categories, offset_minutes, now),
        parse_embedded_validation(root),
    )


# ─── Plans ───────────────────────────────────────────────────────

def _format_warning(planned: dict, existing: EventLike) -> str:
    return (
        f"'{planned['title']}' overlaps with '{existing.title}' "
        f"({as_utc(existing.start_date):%d/%m %H:%M})"
    )


def parse_plan_reply(
    text: str,
    categories: list[CategoryLike],
    offset_minutes: int,
    existing: list[EventLike],
    now: datetime,
) -> dict:
    root = extract_json_object(text)

    events = []
    raw_events = get_key(root, "events")
    for element in raw_events if isinstance(raw_events, list) else []:
        if not isinstance(element, dict):
            continue
        try:
            events.append(parse_event_draft(element, categories, offset_minutes, now))
        except AIResponseError as e:
            logger.warning(f"Skipping unusable plan event: {e.message}")

    warnings = _string_list(get_key(root, "conflictWarnings", "conflict_warnings"))
    for planned in events:
        for other in existing:
            if overlaps(planned["start_date"], planned["end_date"], other.start_date, other.end_date):
                warning = _format_warning(planned, other)
                if warning not in warnings:
                    warnings.append(warning)

    duration = get_key(root, "durationWeeks", "duration_weeks")
    tips = get_key(root, "additionalTips", "additional_tips")
    return {
        "plan_title": str(get_key(root, "planTitle", "plan_title") or "Generated plan"),
        "plan_description": str(get_key(root, "planDescription", "plan_description") or ""),
        "duration_weeks": duration if isinstance(duration, int) and duration > 0 else 1,
        "total_sessions": len(events),
        "events": events,
        "additional_tips": str(tips) if tips else None,
        "conflict_warnings": warnings,
        "has_potential_conflicts": bool(warnings),
    }


# ─── Schedule suggestions ────────────────────────────────────────

def parse_suggestion_type(value) -> SuggestionType:
    if isinstance(value, int) and value in SUGGESTION_TYPE_BY_NUMBER:
        return SUGGESTION_TYPE_BY_NUMBER[value]
    text = str(value or "").strip()
    if text.isdigit() and int(text) in SUGGESTION_TYPE_BY_NUMBER:
        return SUGGESTION_TYPE_BY_NUMBER[int(text)]
    try:
        return SuggestionType(re.sub(r"(?<!^)(?=[A-Z])", "_", text).lower())
    except ValueError:
        return SuggestionType.GENERAL_REORGANIZATION


def _bounded_int(value, low: int, high: int, default: int) -> int:
    try:
        return min(high, max(low, int(value)))
    except (TypeError, ValueError):
        return default


def parse_schedule_suggestions(text: str, known_event_ids: set[UUID]) -> list[dict]:
    """Model array → suggestion dicts. Unknown event ids are dropped to None."""
    drafts = []
    for item in extract_json_array(text):
        if not isinstance(item, dict):
            continue
        description = str(get_key(item, "description") or "").strip()
        if not description:
            continue
        event_id = _parse_uuid(get_key(item, "eventId", "event_id"))
        related = _string_list(get_key(item, "relatedEventTitles", "related_event_titles"))
        drafts.append({
            "type": parse_suggestion_type(get_key(item, "type")),
            "event_id": event_id if event_id in known_event_ids else None,
            "description": description,
            "reason": str(get_key(item, "reason") or "").strip(),
            "priority": _bounded_int(get_key(item, "priority"), 1, 5, 3),
            "suggested_datetime": normalize_ai_date(
                get_key(item, "suggestedDateTime", "suggested_datetime"), 0,
            ),
            "confidence_score": _bounded_int(get_key(item, "confidenceScore", "confidence_score"), 0, 100, 70),
            "metadata": {"related_event_titles": related} if related else {},
        })
    return drafts


# ─── Self-care and assistant ─────────────────────────────────────

def parse_self_care_suggestions(text: str) -> list[dict]:
    """Raw suggestion objects under "suggestions"."""
    root = extract_json_object(text)
    items = get_key(root, "suggestions")
    return [i for i in items if isinstance(i, dict)] if isinstance(items, list) else []


def _float_or(value, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def _optional_text(value) -> str | None:
    """Scalar model output as stripped text; objects and lists are dropped."""
    if value is None or isinstance(value, (dict, list)):
        return None
    return str(value).strip() or None


def parse_assistant_recommendations(text: str, now: datetime) -> list[dict]:
    """Assistant array → Recommendation-shaped dicts, never starting in the past."""
    earliest = as_utc(now) + timedelta(minutes=5)
    stamp = int(as_utc(now).timestamp() * 1000)
    results = []
    for index, item in enumerate(extract_json_array(text), start=1):
        if not isinstance(item, dict):
            continue
        start = normalize_ai_date(get_key(item, "suggestedStart", "suggested_start"), 0) or earliest
        results.append({
            "id": str(get_key(item, "id") or f"ai-{stamp}-{index}"),
            "title": str(get_key(item, "title") or f"Recommendation {index}"),
            "subtitle": _optional_text(get_key(item, "subtitle")),
            "reason": str(get_key(item, "reason") or "Based on your recent conversation."),
            "recommendation_type": str(get_key(item, "recommendationType", "recommendation_type") or "ai"),
            "suggested_start": max(start, earliest),
            "suggested_duration_minutes": max(10, _bounded_int(
                get_key(item, "suggestedDurationMinutes", "suggested_duration_minutes"), 0, 24 * 60, 30,
            )),
            "confidence": min(0.95, max(0.2, _float_or(get_key(item, "confidence"), 0.6))),
            "category_id": _parse_uuid(get_key(item, "categoryId")) if get_key(item, "categoryId") else None,
            "category_name": _optional_text(get_key(item, "categoryName", "category_name")),
            "mood_impact": _optional_text(get_key(item, "moodImpact", "mood_impact")),
            "summary": _optional_text(get_key(item, "summary")),
        })
    return results
