"""
Day-by-day itinerary recovery from free text.

The model is asked for "Day N:" sections with timed entries such as
"9:00 AM - Visit the Museum - Explore ancient artifacts". Each section becomes
a DayPlan; when the text has no day markers at all, everything lands in one
synthetic day so callers always receive at least one DayPlan.

Dates are anchored on `today`, not on the trip's start date. Callers that need
real calendar dates should map by `DayPlan.day` instead.
"""
import re
from datetime import date, timedelta
from typing import List, Optional, Tuple

from models.schemas import Activity, DayPlan

DAY_MARKER = re.compile(r"\bDay\s*(\d+)\s*[:\-–—]?[ \t]*", re.IGNORECASE)
TIME_PREFIX = re.compile(
    r"^(\d{1,2}:\d{2}(?:\s*[AaPp][Mm]\b)?)"
    r"(?:\s*(?:-|–|—|to)\s*\d{1,2}:\d{2}(?:\s*[AaPp][Mm]\b)?)?"
)
DAYPART_PREFIX = re.compile(r"^(morning|afternoon|evening|night)", re.IGNORECASE)
BULLET_PREFIX = re.compile(r"^[-*•]+\s*")
TIMED_SEPARATORS = re.compile(r"[-–—.:;]")
UNTIMED_SEPARATORS = re.compile(r"[-–—.]")
PLACE_AFTER_PREPOSITION = re.compile(r"\b(?:at|in|to|visit)\s+([A-Z][a-zA-Z\s]+?)(?:[,.]|$)")
CAPITALIZED_PHRASE = re.compile(r"\b[A-Z][a-zA-Z\s]{2,20}\b")

UNKNOWN_LOCATION = "Location TBD"

DURATION_HINTS: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    (("museum", "tour"), "2-3 hours"),
    (("meal", "lunch", "dinner"), "1-2 hours"),
    (("shopping", "market"), "1-3 hours"),
    (("walk", "stroll"), "30-60 minutes"),
)
DEFAULT_DURATION = "1-2 hours"


def estimate_duration(description: str) -> str:
    lowered = description.lower()
    for keywords, duration in DURATION_HINTS:
        if any(keyword in lowered for keyword in keywords):
            return duration
    return DEFAULT_DURATION


def extract_location(description: str) -> str:
    """Best-effort place name: "at/in/to/visit <Place>", else any capitalised phrase."""
    match = PLACE_AFTER_PREPOSITION.search(description)
    if match:
        return match.group(1).strip()
    match = CAPITALIZED_PHRASE.search(description)
    if match:
        return match.group(0).strip()
    return UNKNOWN_LOCATION


def _split_parts(text: str, separators: re.Pattern) -> List[str]:
    return [part.strip() for part in separators.split(text) if part.strip()]


def _timed_activity(line: str, match: re.Match) -> Optional[Activity]:
    rest = line[match.end():].lstrip(" \t-:–—")
    if not rest.strip():
        return None
    parts = _split_parts(rest, TIMED_SEPARATORS)
    name = parts[0] if parts else "Activity"
    description = ". ".join(parts[1:]) if len(parts) > 1 else rest
    return Activity(
        name=name,
        description=description,
        duration=estimate_duration(rest),
        location=extract_location(rest),
    )


def _untimed_activity(line: str) -> Activity:
    parts = _split_parts(line, UNTIMED_SEPARATORS)
    return Activity(
        name=parts[0] if parts else "Activity",
        description=line,
        duration=estimate_duration(line),
        location=extract_location(line),
    )


def extract_activities(content: str) -> List[Activity]:
    activities: List[Activity] = []
    for raw_line in content.splitlines():
        line = BULLET_PREFIX.sub("", raw_line.strip())
        if not line:
            continue
        match = TIME_PREFIX.match(line)
        if match:
            activity = _timed_activity(line, match)
            if activity:
                activities.append(activity)
        elif len(line) > 10 and not DAYPART_PREFIX.match(line):
            activities.append(_untimed_activity(line))
    return activities


def split_days(text: str) -> List[Tuple[int, str]]:
    """
    Return (day_number, content) pairs in source order. Text before the first
    marker is dropped; a zero day number falls back to the positional index.
    """
    markers = list(DAY_MARKER.finditer(text or ""))
    sections: List[Tuple[int, str]] = []
    for idx, marker in enumerate(markers):
        end = markers[idx + 1].start() if idx + 1 < len(markers) else len(text)
        number = int(marker.group(1))
        sections.append((number or idx + 1, text[marker.end():end]))
    return sections


def placeholder_activity() -> Activity:
    return Activity(
        name="Explore destination",
        description="General exploration and sightseeing",
        duration="Full day",
        location="Various locations",
    )


def _day_date(today: date, number: int, position: int) -> date:
    # Day numbers past the calendar range fall back to the day's position.
    try:
        return today + timedelta(days=number - 1)
    except (OverflowError, ValueError):
        return today + timedelta(days=position - 1)


def parse_itinerary(text: str, today: Optional[date] = None) -> List[DayPlan]:
    today = today or date.today()
    days: List[DayPlan] = []
    for position, (number, content) in enumerate(split_days(text), start=1):
        days.append(
            DayPlan(
                day=position,
                date=_day_date(today, number, position),
                activities=extract_activities(content),
            )
        )
    if days:
        return days

    activities = extract_activities(text or "")
    return [DayPlan(day=1, date=today, activities=activities or [placeholder_activity()])]
