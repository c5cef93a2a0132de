"""FlowParse: turn free-form task text into structured tasks."""

from .nlp import (
    Energy,
    Focus,
    ParsedTask,
    Period,
    Priority,
    Recurrence,
    RecurrencePattern,
    TaskType,
    get_examples,
    parse,
)

__version__ = "0.1.0"

__all__ = [
    "parse",
    "get_examples",
    "ParsedTask",
    "Recurrence",
    "RecurrencePattern",
    "TaskType",
    "Period",
    "Priority",
    "Energy",
    "Focus",
]
