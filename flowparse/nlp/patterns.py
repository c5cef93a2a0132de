"""
Pattern and keyword tables for the task parser.

Every table is an ordered tuple of rules; ``first_match`` walks a table and
returns the first extraction that is accepted. An extractor may reject its
own match by returning None (an impossible clock time or calendar date), in
which case the next rule is tried.
"""

import re
from datetime import date, timedelta
from typing import Any, Callable, NamedTuple, Optional

from dateutil.relativedelta import relativedelta

from .models import Period, Recurrence, RecurrencePattern

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")
_WEEKDAY_GROUP = "(" + "|".join(WEEKDAYS) + ")"

# Offsets, intervals and durations; longer digit runs are not counts.
_COUNT = r"(\d{1,6})"


class Rule(NamedTuple):
    """A compiled pattern and the function that turns its match into a value."""

    pattern: re.Pattern
    extract: Callable[..., Any]


class TimeOfDay(NamedTuple):
    time: Optional[str]  # "HH:MM" or None when only a period was named
    period: Period


def first_match(rules: tuple[Rule, ...], text: str, *args) -> Any:
    """
    Return the first accepted extraction from ``rules`` against ``text``, else None.

    Rules are tried in order; within a rule every occurrence is tried left to
    right, so a rejected "13pm" does not hide a later "3pm".
    """
    for rule in rules:
        for match in rule.pattern.finditer(text):
            value = rule.extract(match, *args)
            if value is not None:
                return value
    return None


def _rule(pattern: str, extract: Callable[..., Any]) -> Rule:
    return Rule(re.compile(pattern, re.IGNORECASE), extract)


# --- time of day ----------------------------------------------------------


def _to_24h(hour: int, minute: int, ampm: Optional[str]) -> Optional[TimeOfDay]:
    if ampm:
        if not 1 <= hour <= 12:
            return None
        ampm = ampm.lower()
        if ampm == "pm" and hour != 12:
            hour += 12
        elif ampm == "am" and hour == 12:
            hour = 0
    if hour > 23 or minute > 59:
        return None

    period = Period.MORNING if hour < 12 else Period.AFTERNOON
    return TimeOfDay(f"{hour:02d}:{minute:02d}", period)


def _clock_time(match: re.Match) -> Optional[TimeOfDay]:
    return _to_24h(int(match.group(1)), int(match.group(2)), match.group(3))


def _hour_only(match: re.Match) -> Optional[TimeOfDay]:
    return _to_24h(int(match.group(1)), 0, match.group(2))


def _named_period(match: re.Match) -> TimeOfDay:
    # No evening bucket in the task model; evening tasks go to the afternoon list.
    word = match.group(1).lower()
    return TimeOfDay(None, Period.MORNING if word == "morning" else Period.AFTERNOON)


TIME_RULES = (
    _rule(r"(?:\bat\s+)?\b(\d{1,2}):(\d{2})\s*(am|pm)?\b", _clock_time),
    _rule(r"(?:\bat\s+)?\b(\d{1,2})\s*(am|pm)\b", _hour_only),
    _rule(r"(?:\bin\s+the\s+)?\b(morning|afternoon|evening)\b", _named_period),
)


# --- calendar date --------------------------------------------------------


def _days_until(weekday_name: str, today: date) -> int:
    """Days until the next ``weekday_name``; the same weekday is a week away."""
    target = WEEKDAYS.index(weekday_name.lower())
    return (target - today.weekday()) % 7 or 7


def _weekday(match: re.Match, today: date) -> date:
    return today + timedelta(days=_days_until(match.group(1), today))


def _numeric_date(match: re.Match, today: date) -> Optional[date]:
    month, day = int(match.group(1)), int(match.group(2))
    year = match.group(3)
    if year is None:
        year = today.year
    elif len(year) == 2:
        year = 2000 + int(year)
    else:
        year = int(year)

    try:
        return date(year, month, day)
    except ValueError:
        return None


def _relative_date(match: re.Match, today: date) -> Optional[date]:
    amount = int(match.group(1))
    unit = match.group(2).lower()

    try:
        if unit.startswith("day"):
            return today + timedelta(days=amount)
        if unit.startswith("week"):
            return today + timedelta(weeks=amount)
        return today + relativedelta(months=amount)
    except (OverflowError, ValueError):
        return None


DATE_RULES = (
    _rule(r"\btoday\b", lambda match, today: today),
    _rule(r"\btomorrow\b", lambda match, today: today + timedelta(days=1)),
    _rule(r"\bnext\s+" + _WEEKDAY_GROUP + r"\b", _weekday),
    _rule(r"\b" + _WEEKDAY_GROUP + r"\b", _weekday),
    _rule(r"\b(\d{1,2})/(\d{1,2})(?:/(\d{4}|\d{2}))?\b", _numeric_date),
    _rule(r"\bin\s+" + _COUNT + r"\s+(days?|weeks?|months?)\b", _relative_date),
)


# --- recurrence -----------------------------------------------------------

_UNIT_PATTERNS = {
    "day": RecurrencePattern.DAILY,
    "week": RecurrencePattern.WEEKLY,
    "month": RecurrencePattern.MONTHLY,
}


def _every_n(match: re.Match) -> Optional[Recurrence]:
    interval = int(match.group(1))
    if interval < 1:
        return None
    unit = match.group(2).lower().rstrip("s")
    return Recurrence(_UNIT_PATTERNS[unit], interval)


RECURRENCE_RULES = (
    _rule(r"\bevery\s+(?:day|daily)\b", lambda m: Recurrence(RecurrencePattern.DAILY)),
    _rule(r"\bevery\s+(?:week|weekly)\b", lambda m: Recurrence(RecurrencePattern.WEEKLY)),
    _rule(r"\bevery\s+(?:month|monthly)\b", lambda m: Recurrence(RecurrencePattern.MONTHLY)),
    _rule(r"\bevery\s+" + _COUNT + r"\s+(days?|weeks?|months?)\b", _every_n),
    # TODO: keep the weekday once Recurrence grows a by-weekday field
    _rule(r"\bevery\s+" + _WEEKDAY_GROUP + r"\b", lambda m: Recurrence(RecurrencePattern.WEEKLY)),
)


# --- duration -------------------------------------------------------------

DURATION_RULES = (
    _rule(r"\bfor\s+" + _COUNT + r"\s*(?:hours?|hrs?|h)\b", lambda m: int(m.group(1)) * 60),
    _rule(r"\bfor\s+" + _COUNT + r"\s*(?:minutes?|mins?|m)\b", lambda m: int(m.group(1))),
    _rule(
        r"\b" + _COUNT + r"\s*(?:hours?|hrs?|h)\s*(?:" + _COUNT + r"\s*)?(?:minutes?|mins?|m)\b",
        lambda m: int(m.group(1)) * 60 + int(m.group(2) or 0),
    ),
)


# --- keyword tables -------------------------------------------------------

PRIORITY_KEYWORDS = {
    "high": ("urgent", "asap", "critical", "important", "high priority", "!!!", "emergency"),
    "medium": ("medium", "normal", "standard"),
    "low": ("low", "minor", "when possible", "eventually", "someday"),
}

TYPE_KEYWORDS = {
    "brain": (
        "code",
        "design",
        "plan",
        "think",
        "analyze",
        "research",
        "write",
        "create",
        "brainstorm",
        "focus",
        "deep work",
        "strategy",
        "learn",
        "study",
        "review",
        "architect",
        "solve",
        "optimize",
    ),
    "admin": (
        "email",
        "meeting",
        "call",
        "admin",
        "paperwork",
        "file",
        "organize",
        "schedule",
        "book",
        "pay",
        "buy",
        "order",
        "respond",
        "reply",
        "check",
        "update",
        "sync",
        "backup",
        "clean",
        "sort",
    ),
}

HASHTAG_PATTERN = re.compile(r"#(\w+)")
CATEGORY_PATTERN = re.compile(
    r"\b(personal|work|home|health|finance|shopping|travel|urgent|meeting|call|email)\b",
    re.IGNORECASE,
)

CONTEXT_PATTERN = re.compile(r"@(\w+)")
IMPLIED_CONTEXTS = (
    (("call", "phone"), "@calls"),
    (("email", "message"), "@email"),
    (("computer", "code", "type"), "@computer"),
    (("office", "work"), "@office"),
    (("home", "house"), "@home"),
    (("errands", "shopping", "buy"), "@errands"),
    (("waiting", "wait"), "@waiting"),
    (("review", "check"), "@review"),
    (("read", "reading"), "@read"),
)

ENERGY_KEYWORDS = {
    "low": ("simple", "easy", "quick", "routine", "basic", "light"),
    "medium": ("normal", "regular", "standard", "moderate"),
    "high": ("complex", "challenging", "intensive", "creative", "difficult", "deep"),
}

FOCUS_KEYWORDS = {
    "shallow": ("quick", "simple", "call", "email", "message", "check", "update"),
    "deep": ("focus", "deep", "think", "analyze", "design", "code", "write", "create", "plan"),
}


# --- title cleaning -------------------------------------------------------


def _standalone(keyword: str) -> re.Pattern:
    """Match ``keyword`` only where it is not glued to other word characters."""
    return re.compile(r"(?<!\w)" + re.escape(keyword) + r"(?!\w)", re.IGNORECASE)


# Recurrence goes first so "every Tuesday" is removed whole before the
# weekday date rule can take "Tuesday" out of it.
TITLE_STRIP_PATTERNS = tuple(
    rule.pattern for rule in RECURRENCE_RULES + DURATION_RULES + TIME_RULES + DATE_RULES
) + tuple(_standalone(keyword) for keywords in PRIORITY_KEYWORDS.values() for keyword in keywords)

PREPOSITION_PATTERN = re.compile(r"\b(?:at|on|in|for|due|by|until|before|after)\b", re.IGNORECASE)
WHITESPACE_PATTERN = re.compile(r"\s+")
EDGE_PUNCTUATION_PATTERN = re.compile(r"^[\s,.;:!?\-\u2013\u2014]+|[\s,.;:!?\-\u2013\u2014]+$")
