"""Natural language processing modules for FlowParse."""

from .models import (
    Energy,
    Focus,
    ParsedTask,
    Period,
    Priority,
    Recurrence,
    RecurrencePattern,
    TaskType,
)
from .parser import get_examples, parse

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
