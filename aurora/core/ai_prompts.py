"""AI Prompts — pure prompt builders for every model-backed feature.

Invariants:
    - All functions are pure: "now", offsets and rows are passed in
    - Times shown to the model are the user's local wall-clock time; times the
      model returns must be ISO 8601 UTC
    - Calendar context lists events ordered by start (parsing mode caps it at 10)

Design Decisions:
    - Sections are small helpers joined with blank lines so validation and parsing
      share the calendar, preferences and decision blocks
"""

from datetime import datetime, timedelta
from uuid import UUID

from aurora.core.event_rules import as_utc, to_local
from aurora.core.repository_protocols import CategoryLike, EventLike, PreferencesLike

PARSING_CONTEXT_LIMIT = 10
DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")


def format_offset(offset_minutes: int | None) -> str:
    if offset_minutes is None:
        return "timezone not specified"
    if offset_minutes == 0:
        return "UTC±00:00"
    sign = "+" if offset_minutes > 0 else "-"
    hours, minutes = divmod(abs(offset_minutes), 60)
    return f"UTC{sign}{hours:02d}:{minutes:02d}"


def _category_name(event: EventLike, categories: dict[UUID, CategoryLike]) -> str:
    category = categories.get(event.event_category_id)
    return category.name if category else "Uncategorized"


def calendar_context(
    events: list[EventLike],
    categories: dict[UUID, CategoryLike],
    offset_minutes: int,
    *,
    parsing: bool,
) -> str:
    if not events:
        return "" if parsing else "CALENDAR CONTEXT: no nearby events"

    ordered = sorted(events, key=lambda e: as_utc(e.start_date))
    if parsing:
        ordered = ordered[:PARSING_CONTEXT_LIMIT]

    lines = ["CALENDAR CONTEXT (nearby events):"]
    for event in ordered:
        start = to_local(event.start_date, offset_minutes)
        if parsing:
            lines.append(f'• [{start:%Y-%m-%d %H:%M}] "{event.title}" - {_category_name(event, categories)}')
        else:
            end = to_local(event.end_date, offset_minutes)
            hours = (end - start).total_seconds() / 3600
            lines.append(
                f'• [{start:%Y-%m-%d %H:%M} ({start:%A})] "{event.title}" - '
                f"{hours:.1f}h - {_category_name(event, categories)}"
            )
    if not parsing:
        lines.append(f"Events in context: {len(ordered)}")
    return "\n".join(lines)


def categories_section(categories: list[CategoryLike]) -> str:
    lines = ["AVAILABLE CATEGORIES:"]
    for category in categories:
        lines.append(
            f'• {category.name} - ID: "{category.id}" ({category.description or "no description"})'
        )
    return "\n".join(lines)


def preferences_section(preferences: PreferencesLike | None) -> str:
    if preferences is None:
        return ""
    lines = ["USER PREFERENCES:"]
    if preferences.work_days_of_week:
        names = ", ".join(DAY_NAMES[d % 7] for d in preferences.work_days_of_week)
        lines.append(f"Work days: {names}")
    if preferences.work_start_time and preferences.work_end_time:
        lines.append(f"Work hours: {preferences.work_start_time} - {preferences.work_end_time}")
    if preferences.default_reminder_minutes > 0:
        lines.append(f"Default reminder: {preferences.default_reminder_minutes} minutes before")
    lines += [
        "",
        "Respect these preferences when suggesting dates and times:",
        "• Work events without a day belong on configured work days",
        "• Without an explicit time, suggest one within work hours",
        "• Mention it in the analysis when an event falls outside work hours",
        "• Warn when a work event lands on a non-working day",
    ]
    return "\n".join(lines)


ANALYSIS_CRITERIA = """ANALYZE THE FOLLOWING:
1. Schedule conflicts: does it overlap other events?
2. Workload: does the user already have many events that day or week?
3. Work-life balance: is there enough free and rest time?
4. Appropriate time: is it a suitable hour for this kind of activity?
5. Reasonable duration: is the duration appropriate?
6. Rest between events: is there enough time between events?
7. Healthy patterns: are sleep and rest hours respected?"""

VALIDATION_FORMAT = """Respond in JSON with exactly this structure:
{
  "approved": true/false,
  "severity": "info"/"warning"/"critical",
  "message": "Your personalised message (be specific and mention the context)",
  "suggestions": ["specific suggestion 1", "specific suggestion 2"]
}"""

VALIDATION_RULES = """DECISION CRITERIA:
- approved = false for direct conflicts, clear overload or health risks
- severity = "critical" when very problematic (schedule conflict, more than 12h of work in a row)
- severity = "warning" when questionable but not critical (little rest, a very busy day)
- severity = "info" for general recommendations only

Always mention times in the user's local time, never UTC. Be specific and
refer to events from the context when relevant."""

PARSING_INSTRUCTIONS = """INSTRUCTIONS:
1. Interpret relative dates (today, tomorrow, on Monday...) from the user's current date
2. Without an explicit time, use a sensible hour for the kind of event
3. Without an explicit duration, infer one (meetings: 1h, exercise: 1.5h, ...)
4. Pick the category from the content and use the exact ID from the list
5. Return every date and time as ISO 8601 UTC
6. Priority: 1=Low, 2=Medium, 3=High, 4=Critical (2 by default, 4 only for emergencies)"""

PARSING_RULES = """IMPORTANT:
- eventCategoryId MUST be the exact UUID string from the category list
- priority must be an integer from 1 to 4
- Always include the analysis object, applying the validation criteria:
  approved = false for direct conflicts, overload or evident risk;
  severity "critical" for serious problems, "warning" for worrying signs, "info" for light advice
- Mention times in the user's local time in messages and suggestions, never UTC"""


def build_validation_prompt(
    draft: dict,
    existing: list[EventLike],
    categories: dict[UUID, CategoryLike],
    preferences: PreferencesLike | None,
) -> str:
    offset = draft.get("timezone_offset_minutes")
    local_offset = offset or 0
    start = to_local(draft["start_date"], local_offset)
    end = to_local(draft["end_date"], local_offset)
    hours = (end - start).total_seconds() / 3600

    header = "\n".join([
        "You are a smart, personal calendar assistant. Analyze the following event "
        "considering the context of the user's calendar.",
        "",
        "EVENT TO VALIDATE:",
        f"- Title: {draft['title']}",
        f"- Description: {draft.get('description') or 'no description'}",
        f"- Date and time: {start:%Y-%m-%d %H:%M} ({start:%A}) [{format_offset(offset)}]",
        f"- Duration: {hours:.1f} hours",
        f"- All day: {'yes' if draft.get('is_all_day') else 'no'}",
        f"- Location: {draft.get('location') or 'no location'}",
    ])
    sections = [
        header,
        calendar_context(existing, categories, local_offset, parsing=False),
        preferences_section(preferences),
        ANALYSIS_CRITERIA,
        VALIDATION_FORMAT,
        VALIDATION_RULES,
    ]
    return "\n\n".join(s for s in sections if s)


def _now_header(now: datetime, offset_minutes: int) -> str:
    local_now = to_local(now, offset_minutes)
    label = "UTC" if offset_minutes == 0 else format_offset(offset_minutes)
    return f"User's current date: {local_now:%Y-%m-%d %H:%M} ({label})"


def build_parsing_prompt(
    text: str,
    categories: list[CategoryLike],
    offset_minutes: int,
    existing: list[EventLike],
    preferences: PreferencesLike | None,
    now: datetime,
) -> str:
    if offset_minutes == 0:
        shift = "The user is already on UTC; do not adjust times."
    else:
        verb = "subtracting" if offset_minutes > 0 else "adding"
        shift = (
            f"Convert every date and time to UTC by {verb} "
            f"{abs(offset_minutes) / 60:g} hours from the user's local time."
        )
    sample_id = categories[0].id if categories else "00000000-0000-0000-0000-000000000000"
    response_format = "\n".join([
        "Respond in JSON with exactly this structure:",
        "{",
        '  "event": {',
        '    "title": "Event title",',
        '    "description": "Optional description",',
        '    "startDate": "2025-10-10T15:00:00Z",',
        '    "endDate": "2025-10-10T16:00:00Z",',
        '    "isAllDay": false,',
        '    "location": "Optional location",',
        '    "priority": 2,',
        f'    "eventCategoryId": "{sample_id}"',
        "  },",
        '  "analysis": {',
        '    "approved": true/false,',
        '    "severity": "info"/"warning"/"critical",',
        '    "message": "Your personalised message",',
        '    "suggestions": ["specific suggestion 1", "specific suggestion 2"]',
        "  }",
        "}",
    ])
    by_id = {c.id: c for c in categories}
    sections = [
        "You are a smart calendar assistant. Turn natural language text into a "
        "structured event.\n\n"
        f"{_now_header(now, offset_minutes)}\n{shift}\n"
        "When the user says 'tomorrow 3pm' they mean their local timezone.\n\n"
        f'USER TEXT:\n"{text}"',
        calendar_context(existing, by_id, offset_minutes, parsing=True),
        categories_section(categories),
        preferences_section(preferences),
        PARSING_INSTRUCTIONS,
        ANALYSIS_CRITERIA,
        response_format,
        PARSING_RULES,
    ]
    return "\n\n".join(s for s in sections if s)


def plan_start_date(start: datetime | None, offset_minutes: int, now: datetime):
    """Local calendar date the plan begins on: the requested date, else tomorrow."""
    if start is not None:
        return to_local(start, offset_minutes).date()
    return to_local(now, offset_minutes).date() + timedelta(days=1)


def build_plan_prompt(
    request: dict,
    categories: list[CategoryLike],
    existing: list[EventLike],
    preferences: PreferencesLike | None,
    now: datetime,
) -> str:
    offset = request.get("timezone_offset_minutes") or 0
    start_day = plan_start_date(request.get("start_date"), offset, now)
    source = "set by the user" if request.get("start_date") else "tomorrow"

    plan_prefs = []
    if request.get("duration_weeks"):
        plan_prefs.append(f"- Desired duration: {request['duration_weeks']} weeks")
    if request.get("sessions_per_week"):
        plan_prefs.append(f"- Sessions per week: {request['sessions_per_week']}")
    if request.get("session_duration_minutes"):
        plan_prefs.append(f"- Session length: {request['session_duration_minutes']} minutes")
    if request.get("preferred_time_of_day"):
        plan_prefs.append(f"- Preferred time: {request['preferred_time_of_day']}")

    sample_id = categories[0].id if categories else "00000000-0000-0000-0000-000000000000"
    by_id = {c.id: c for c in categories}
    sections = [
        "You are a smart planning assistant. Create a structured, progressive "
        "MULTI-DAY PLAN to reach a goal.\n\n"
        f"{_now_header(now, offset)}\n"
        "All dates must be ISO 8601 UTC, but mention local times in your messages.",
        f'USER GOAL:\n"{request["goal"]}"',
        f"PLAN START DATE: {start_day:%Y-%m-%d} ({source})",
        "PLAN PREFERENCES:\n" + "\n".join(plan_prefs) if plan_prefs else "",
        calendar_context(existing, by_id, offset, parsing=True),
        categories_section(categories),
        preferences_section(preferences),
        "\n".join([
            "PLAN INSTRUCTIONS:",
            "1. Pick a suitable duration for the goal (respect the preference if given)",
            "2. Make the plan PROGRESSIVE: sessions grow in complexity or intensity",
            "3. Spread sessions evenly, respecting work days and hours",
            "4. Avoid conflicts with existing calendar events",
            "5. Use titles that show progress (e.g. 'Week 1: Fundamentals')",
            "6. Give each session a description with specific objectives",
            "7. Assign the appropriate category from the list",
            "8. Early sessions are Medium priority, key sessions High",
            f"9. Start the plan on {start_day:%Y-%m-%d}",
        ]),
        "\n".join([
            "Respond in JSON with exactly this structure:",
            "{",
            '  "planTitle": "Descriptive plan title",',
            '  "planDescription": "Overview of the plan and its structure",',
            '  "durationWeeks": 8,',
            '  "totalSessions": 24,',
            '  "events": [',
            "    {",
            '      "title": "Week 1 - Session 1: Introduction",',
            '      "description": "Objectives of this session",',
            '      "startDate": "2025-01-20T10:00:00Z",',
            '      "endDate": "2025-01-20T11:30:00Z",',
            '      "isAllDay": false,',
            '      "location": "",',
            '      "priority": 2,',
            f'      "eventCategoryId": "{sample_id}"',
            "    }",
            "  ],",
            '  "additionalTips": "General advice to succeed with the plan",',
            '  "conflictWarnings": ["Warning if a session overlaps an existing event"]',
            "}",
        ]),
    ]
    return "\n\n".join(s for s in sections if s)


def build_schedule_prompt(
    events: list[EventLike],
    categories: dict[UUID, CategoryLike],
    offset_minutes: int = 0,
) -> str:
    lines = [
        "Analyze this calendar and produce optimisation suggestions as JSON.",
        f"Event times are the user's local time ({format_offset(offset_minutes)}); "
        "suggestedDateTime must be ISO 8601 UTC.",
        "",
        "EVENTS:",
    ]
    for event in sorted(events, key=lambda e: as_utc(e.start_date)):
        start = to_local(event.start_date, offset_minutes)
        end = to_local(event.end_date, offset_minutes)
        lines.append(
            f"- [{event.id}] {event.title} | {start:%Y-%m-%d %H:%M} - {end:%H:%M} | "
            f"Cat: {_category_name(event, categories)}"
        )
    lines += [
        "",
        "DETECT: conflicts, overload, missing breaks, poor distribution, duplicated or similar events.",
        "",
        "RESPOND ONLY with a JSON array:",
        "[{",
        '  "eventId": "event uuid or null",',
        '  "type": 1-6 (1=MoveEvent, 2=ResolveConflict, 3=OptimizeDistribution, '
        "4=PatternAlert, 5=SuggestBreak, 6=GeneralReorganization),",
        '  "description": "Short, actionable text",',
        '  "reason": "Why this helps",',
        '  "priority": 1-5,',
        '  "suggestedDateTime": "2025-11-08T15:00:00Z (required for type 1, 2 and 5)",',
        '  "confidenceScore": 70-100,',
        '  "relatedEventTitles": ["Event title 1", "Event title 2"]',
        "}]",
        "",
        "Always include relatedEventTitles when two or more events are involved.",
    ]
    return "\n".join(lines)


def build_self_care_prompt(
    time_of_day: str,
    local_now: datetime,
    current_mood: int | None,
    uplifting_titles: list[str],
    total_events: int,
) -> str:
    weekday = local_now.weekday()
    if weekday == 0:
        day = "Monday (start of the week)"
    elif weekday == 4:
        day = "Friday (end of the work week)"
    elif weekday >= 5:
        day = "the weekend"
    else:
        day = "a work day"
    mood = f"{current_mood}/5" if current_mood is not None else "not specified"
    return "\n".join([
        "You are an expert personal wellbeing assistant. Generate 2 UNIQUE, CREATIVE "
        "self-care suggestions for this user.",
        "",
        "USER CONTEXT:",
        f"- Moment: {time_of_day}, {day}",
        f"- Current mood: {mood}",
        f"- Recent activities that improved their mood: {', '.join(uplifting_titles) or 'none yet'}",
        f"- Activities recorded in the last 30 days: {total_events}",
        "",
        "STRICT REQUIREMENTS:",
        '1. Do NOT suggest generic activities like "walk", "meditate" or "breathe"',
        "2. Be specific, detailed and unusual",
        "3. Duration: 5-30 minutes",
        f"4. Suitable for the {time_of_day}",
        "",
        "JSON FORMAT (respond ONLY with the JSON):",
        "{",
        '  "suggestions": [',
        "    {",
        '      "title": "Specific, descriptive title",',
        '      "description": "Concrete description in 1-2 lines",',
        '      "durationMinutes": 15,',
        '      "type": "physical",',
        '      "personalizedReason": "Why this fits the user right now",',
        '      "confidence": 85,',
        '      "icon": "🎨"',
        "    }",
        "  ]",
        "}",
        "",
        "VALID TYPES: physical, mental, social, creative, rest",
    ])


def _speaker(role: str) -> str:
    return "Aurora" if role.strip().lower() == "assistant" else "User"


def _mood_and_context(current_mood: int | None, external_context: str | None) -> list[str]:
    mood = f"{current_mood}/5" if current_mood is not None else "unknown"
    context = (external_context or "").strip() or "no additional context"
    return [f"Reported mood: {mood}.", f"Stated context: {context}."]


def build_assistant_prompt(
    conversation: list[dict],
    current_mood: int | None,
    external_context: str | None,
    fallback: list[dict] | None = None,
) -> str:
    lines = [
        "You are Aurora, a personal planner focused on wellbeing.",
        "Answer with empathy, but return ONLY a JSON array (no extra text).",
        "Each element is an object with: id (string), title (string), subtitle (optional), "
        "reason (string), recommendationType (string), suggestedStart (ISO 8601), "
        "suggestedDurationMinutes (integer), confidence (0-1), categoryName (optional), "
        "moodImpact (optional) and summary (optional).",
        "Return an empty array without enough context. At most 5 recommendations.",
        "",
        *_mood_and_context(current_mood, external_context),
    ]
    if fallback:
        lines += ["", "Recent heuristic recommendations (for reference, do not repeat verbatim):"]
        for index, item in enumerate(fallback[:3], start=1):
            lines.append(f"{index}. {item['title']} - {item['reason']}")
    lines += ["", "Relevant conversation (newest first):"]
    for message in reversed(conversation):
        lines.append(f"- {_speaker(message['role'])}: {message['content'].strip()}")
    lines += [
        "",
        "Final reminders:",
        "- Return only a valid JSON array.",
        "- Propose realistic activities that can be scheduled soon.",
    ]
    return "\n".join(lines)


def build_chat_prompt(
    conversation: list[dict], current_mood: int | None, external_context: str | None,
) -> str:
    lines = [
        "You are Aurora, a personal planning assistant focused on wellbeing.",
        "Reply warmly and empathetically.",
        "Use short paragraphs or lists of up to four items and offer concrete actions.",
        "If you notice stress or exhaustion, suggest brief breathing or realistic micro-breaks.",
        "Do not promise automatic actions; guide the user to do them manually.",
        "",
        *_mood_and_context(current_mood, external_context),
        "",
        "Recent conversation (oldest to newest):",
    ]
    for message in conversation:
        lines.append(f"- {_speaker(message['role'])}: {message['content'].strip()}")
    lines += ["", "Write Aurora's next reply in the style described."]
    return "\n".join(lines)
