"""
Logging for FlowParse.

Records carry a correlation id and any fields bound with ``log_context``, so
every line emitted while one input is being parsed can be tied back to it.
``setup_structured_logging`` picks JSON lines or a plain console format.
"""

import json
import logging
import uuid
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import UTC, datetime
from typing import Any, Iterator

# Correlation id and bound fields for the current parse or command
correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)
_bound_fields: ContextVar[dict[str, Any]] = ContextVar("bound_fields", default={})

PLAIN_FORMAT = "%(levelname)s: %(message)s"


class StructuredFormatter(logging.Formatter):
    """One JSON object per record: base fields, bound context, then per-call fields."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "correlation_id": getattr(record, "correlation_id", None) or correlation_id.get(),
        }
        log_entry.update(getattr(record, "context", None) or {})
        log_entry.update(getattr(record, "fields", None) or {})

        if getattr(record, "action", None):
            log_entry["action"] = record.action

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


class ContextLogger:
    """
    Logger wrapper that stamps records with the active log context.

    Keyword arguments to the level methods become per-record fields, and
    ``action`` names the operation the record belongs to:

        logger.debug("Parsed task", action="parse", confidence=0.78)
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def is_enabled_for(self, level: int) -> bool:
        return self.logger.isEnabledFor(level)

    def _log(self, level: int, message: str, action: str | None = None, **fields: Any) -> None:
        if not self.logger.isEnabledFor(level):
            return

        extra = {
            "correlation_id": correlation_id.get(),
            "context": dict(_bound_fields.get()),
            "fields": fields,
            "action": action,
        }
        self.logger.log(level, message, extra=extra)

    def debug(self, message: str, **fields: Any) -> None:
        self._log(logging.DEBUG, message, **fields)

    def info(self, message: str, **fields: Any) -> None:
        self._log(logging.INFO, message, **fields)

    def warning(self, message: str, **fields: Any) -> None:
        self._log(logging.WARNING, message, **fields)

    def error(self, message: str, **fields: Any) -> None:
        self._log(logging.ERROR, message, **fields)


@contextmanager
def log_context(corr_id: str | None = None, **fields: Any) -> Iterator[str]:
    """
    Bind a correlation id and extra fields for records logged inside the block.

    Nested contexts inherit the outer id and fields; an explicit ``corr_id``
    replaces the inherited id. Yields the id in effect.
    """
    corr_id = corr_id or correlation_id.get() or new_correlation_id()
    id_token = correlation_id.set(corr_id)
    fields_token = _bound_fields.set({**_bound_fields.get(), **fields})
    try:
        yield corr_id
    finally:
        _bound_fields.reset(fields_token)
        correlation_id.reset(id_token)


def setup_structured_logging(log_level: str = "INFO", structured: bool = True) -> None:
    """
    Configure the root logger with a single console handler.

    Args:
        log_level: Level name such as "DEBUG" or "info"
        structured: Emit JSON records when True, plain "LEVEL: message" otherwise
    """
    formatter = StructuredFormatter() if structured else logging.Formatter(PLAIN_FORMAT)

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper()))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


def new_correlation_id() -> str:
    return str(uuid.uuid4())


def get_correlation_id() -> str | None:
    return correlation_id.get()


def get_logger(name: str) -> ContextLogger:
    return ContextLogger(name)
