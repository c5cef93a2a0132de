"""Data types produced by the natural language task parser."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Optional


class TaskType(str, Enum):
    """Kind of work a task needs."""

    BRAIN = "brain"
    ADMIN = "admin"


class Period(str, Enum):
    """Coarse time-of-day bucket a task is scheduled into."""

    MORNING = "morning"
    AFTERNOON = "afternoon"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Energy(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Focus(str, Enum):
    SHALLOW = "shallow"
    DEEP = "deep"


class RecurrencePattern(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class Recurrence:
    """How often a task repeats."""

    pattern: RecurrencePattern
    interval: int = 1
    end_date: Optional[date] = None

    def __post_init__(self):
        if self.interval < 1:
            raise ValueError(f"Recurrence interval must be positive, got {self.interval}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "pattern": self.pattern.value,
            "interval": self.interval,
            "endDate": self.end_date.isoformat() if self.end_date else None,
        }


@dataclass(frozen=True)
class ParsedTask:
    """Structured task extracted from free text."""

    title: str
    original_input: str
    type: TaskType = TaskType.BRAIN
    period: Period = Period.MORNING
    priority: Priority = Priority.MEDIUM
    tags: tuple[str, ...] = ()
    context_tags: tuple[str, ...] = ()
    description: Optional[str] = None
    due_date: Optional[date] = None
    due_time: Optional[str] = None  # "HH:MM", 24-hour
    time_block: Optional[int] = None  # minutes
    energy: Optional[Energy] = None
    focus: Optional[Focus] = None
    recurrence: Optional[Recurrence] = None
    confidence: float = 0.0
    suggestions: tuple[str, ...] = field(default_factory=tuple)

    @property
    def confidence_level(self) -> str:
        """Bucket used to decide whether to auto-apply or ask the user to confirm."""
        if self.confidence >= 0.8:
            return "high"
        if self.confidence >= 0.6:
            return "medium"
        return "low"

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready representation using the client's field names."""
        return {
            "title": self.title,
            "description": self.description,
            "type": self.type.value,
            "period": self.period.value,
            "priority": self.priority.value,
            "tags": list(self.tags),
            "contextTags": list(self.context_tags),
            "dueDate": self.due_date.isoformat() if self.due_date else None,
            "dueTime": self.due_time,
            "timeBlock": self.time_block,
            "energy": self.energy.value if self.energy else None,
            "focus": self.focus.value if self.focus else None,
            "recurrence": self.recurrence.to_dict() if self.recurrence else None,
            "confidence": round(self.confidence, 4),
            "originalInput": self.original_input,
            "suggestions": list(self.suggestions),
        }

    def to_task_payload(self) -> dict[str, Any]:
        """
        Fields accepted by task storage when creating a task.

        Returns:
            Mapping with title, description, type, period, priority, tags,
            timeBlock and scheduledFor (ISO date or None)
        """
        return {
            "title": self.title,
            "description": self.description or "",
            "type": self.type.value,
            "period": self.period.value,
            "priority": self.priority.value,
            "tags": list(self.tags),
            "timeBlock": self.time_block,
            "scheduledFor": self.due_date.isoformat() if self.due_date else None,
        }
