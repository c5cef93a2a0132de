"""Natural language parser that turns free text into a structured task."""

import logging
from dataclasses import replace
from datetime import date
from typing import Optional

from ..core import clock
from ..platform.errors import InvalidInputError
from ..platform.logging import get_logger
from . import patterns
from .models import Energy, Focus, ParsedTask, Priority, Recurrence, TaskType
from .patterns import TimeOfDay, first_match

logger = get_logger(__name__)

EXAMPLES = (
    "Meeting with John tomorrow at 3pm",
    "Code review every Tuesday at 2pm #work",
    "Buy groceries today high priority",
    "Deep work session for 2 hours in the morning",
    "Call mom this weekend",
    "Workout every day at 7am for 1 hour",
    "Write blog post by Friday #personal",
    "Team standup daily at 9:30am",
    "Review quarterly reports urgent!!!",
    "Plan vacation in 2 weeks #personal",
)

BASE_CONFIDENCE = 0.3


def get_examples() -> list[str]:
    """Sample inputs that exercise most extraction stages."""
    return list(EXAMPLES)


def _keyword_hits(text: str, keywords: tuple[str, ...]) -> int:
    """Number of distinct keywords that occur in ``text`` as substrings."""
    return sum(1 for keyword in keywords if keyword in text)


def extract_time(text: str) -> Optional[TimeOfDay]:
    return first_match(patterns.TIME_RULES, text)


def extract_date(text: str, today: date) -> Optional[date]:
    return first_match(patterns.DATE_RULES, text, today)


def extract_recurrence(text: str) -> Optional[Recurrence]:
    return first_match(patterns.RECURRENCE_RULES, text)


def extract_priority(text: str) -> Optional[Priority]:
    """
    Detect priority from exclamation marks, then from keywords.

    Three or more "!" mean high and exactly two mean medium, without
    looking at keywords. Otherwise the first of high, medium, low whose
    keyword list has a substring hit wins.
    """
    bangs = text.count("!")
    if bangs >= 3:
        return Priority.HIGH
    if bangs == 2:
        return Priority.MEDIUM

    for level, keywords in patterns.PRIORITY_KEYWORDS.items():
        if _keyword_hits(text, keywords):
            return Priority(level)

    return None


def extract_type(text: str) -> Optional[TaskType]:
    brain = _keyword_hits(text, patterns.TYPE_KEYWORDS["brain"])
    admin = _keyword_hits(text, patterns.TYPE_KEYWORDS["admin"])

    if brain > admin:
        return TaskType.BRAIN
    if admin > brain:
        return TaskType.ADMIN
    return None


def extract_tags(text: str) -> list[str]:
    """Hashtags followed by category words, lower-cased, first occurrence kept."""
    tags = [tag.lower() for tag in patterns.HASHTAG_PATTERN.findall(text)]
    tags += [word.lower() for word in patterns.CATEGORY_PATTERN.findall(text)]
    return list(dict.fromkeys(tags))


def extract_context_tags(text: str) -> list[str]:
    """Explicit @contexts followed by contexts implied by keywords."""
    lowered = text.lower()
    contexts = [f"@{name.lower()}" for name in patterns.CONTEXT_PATTERN.findall(text)]

    for words, context in patterns.IMPLIED_CONTEXTS:
        if any(word in lowered for word in words):
            contexts.append(context)

    return list(dict.fromkeys(contexts))


def extract_energy(text: str) -> Optional[Energy]:
    low = _keyword_hits(text, patterns.ENERGY_KEYWORDS["low"])
    medium = _keyword_hits(text, patterns.ENERGY_KEYWORDS["medium"])
    high = _keyword_hits(text, patterns.ENERGY_KEYWORDS["high"])

    if high > low and high > medium:
        return Energy.HIGH
    if low > medium and low > high:
        return Energy.LOW
    if medium > 0:
        return Energy.MEDIUM
    return None


def extract_focus(text: str) -> Optional[Focus]:
    shallow = _keyword_hits(text, patterns.FOCUS_KEYWORDS["shallow"])
    deep = _keyword_hits(text, patterns.FOCUS_KEYWORDS["deep"])

    if deep > shallow:
        return Focus.DEEP
    if shallow > deep:
        return Focus.SHALLOW
    return None


def extract_duration(text: str) -> Optional[int]:
    return first_match(patterns.DURATION_RULES, text)


def clean_title(original: str) -> str:
    """
    Remove every span the extractors understand and return what is left.

    Falls back to ``original`` unchanged if nothing would remain.
    """
    title = original
    for pattern in patterns.TITLE_STRIP_PATTERNS:
        title = pattern.sub(" ", title)

    title = patterns.PREPOSITION_PATTERN.sub(" ", title)
    title = patterns.WHITESPACE_PATTERN.sub(" ", title)
    title = patterns.EDGE_PUNCTUATION_PATTERN.sub("", title)

    return title or original


def calculate_confidence(task: ParsedTask) -> float:
    """
    Score how much structure was recovered from the text.

    Starts at 0.3 and adds a fixed amount per populated field, plus
    cumulative bonuses at 3, 5 and 7 suggestions. Capped at 1.0.
    """
    confidence = BASE_CONFIDENCE

    if task.due_date:
        confidence += 0.12
    if task.due_time:
        confidence += 0.12
    if task.recurrence:
        confidence += 0.08
    if task.priority != Priority.MEDIUM:
        confidence += 0.08
    if task.type != TaskType.BRAIN:
        confidence += 0.08
    if task.tags:
        confidence += 0.08
    if task.context_tags:
        confidence += 0.08
    if task.time_block:
        confidence += 0.08
    if task.energy and task.energy != Energy.MEDIUM:
        confidence += 0.05
    if task.focus and task.focus != Focus.SHALLOW:
        confidence += 0.05

    suggestion_count = len(task.suggestions)
    if suggestion_count >= 3:
        confidence += 0.08
    if suggestion_count >= 5:
        confidence += 0.08
    if suggestion_count >= 7:
        confidence += 0.04

    return min(confidence, 1.0)


def _describe_recurrence(recurrence: Recurrence) -> str:
    if recurrence.interval == 1:
        return f"Repeats {recurrence.pattern.value}"
    unit = {"daily": "days", "weekly": "weeks", "monthly": "months"}[recurrence.pattern.value]
    return f"Repeats every {recurrence.interval} {unit}"


def parse(text: str, today: Optional[date] = None) -> ParsedTask:
    """
    Parse free-form task text into a ParsedTask.

    Args:
        text: Raw user input like "Meeting with John tomorrow at 3pm #work"
        today: Date that relative expressions resolve against; defaults to
            the current date in the configured timezone

    Returns:
        ParsedTask with defaults wherever nothing matched

    Raises:
        InvalidInputError: If ``text`` is not a string

    Examples:
        >>> parse("Finish report!!!").priority
        <Priority.HIGH: 'high'>
    """
    if not isinstance(text, str):
        raise InvalidInputError(text)

    if today is None:
        today = clock.today()

    # Match against the normalized text, clean the title from the original
    normalized = text.strip().lower()
    suggestions = []
    fields = {}

    time_of_day = extract_time(normalized)
    if time_of_day:
        fields["period"] = time_of_day.period
        if time_of_day.time:
            fields["due_time"] = time_of_day.time
            suggestions.append(f"Set time to {time_of_day.time} ({time_of_day.period.value})")
        else:
            suggestions.append(f"Scheduled for {time_of_day.period.value}")

    due_date = extract_date(normalized, today)
    if due_date:
        fields["due_date"] = due_date
        suggestions.append(f"Due date: {due_date:%b %d, %Y}")

    recurrence = extract_recurrence(normalized)
    if recurrence:
        fields["recurrence"] = recurrence
        suggestions.append(_describe_recurrence(recurrence))

    priority = extract_priority(normalized)
    if priority:
        fields["priority"] = priority
        suggestions.append(f"Priority: {priority.value}")

    task_type = extract_type(normalized)
    if task_type:
        fields["type"] = task_type
        suggestions.append(f"Task type: {task_type.value}")

    tags = extract_tags(normalized)
    if tags:
        fields["tags"] = tuple(tags)
        suggestions.append(f"Tags: {', '.join(tags)}")

    context_tags = extract_context_tags(normalized)
    if context_tags:
        fields["context_tags"] = tuple(context_tags)
        suggestions.append(f"Contexts: {', '.join(context_tags)}")

    energy = extract_energy(normalized)
    if energy:
        fields["energy"] = energy
        suggestions.append(f"Energy: {energy.value}")

    focus = extract_focus(normalized)
    if focus:
        fields["focus"] = focus
        suggestions.append(f"Focus: {focus.value}")

    time_block = extract_duration(normalized)
    if time_block:
        fields["time_block"] = time_block
        suggestions.append(f"Time block: {time_block} minutes")

    draft = ParsedTask(
        title=clean_title(text),
        original_input=text,
        suggestions=tuple(suggestions),
        **fields,
    )
    task = replace(draft, confidence=calculate_confidence(draft))

    if logger.is_enabled_for(logging.DEBUG):
        logger.debug(
            f"Parsed task input with confidence {task.confidence:.2f}",
            action="parse",
            stages=sorted(fields),
            suggestions=len(suggestions),
        )

    return task
