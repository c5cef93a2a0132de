"""Calendar-date resolution in the configured timezone."""

import logging
import os
from datetime import date, datetime

import pytz

logger = logging.getLogger(__name__)


def default_timezone():
    """
    Zone named by FC_DEFAULT_TIMEZONE, falling back to UTC.

    Only the timezone is read here so parsing does not depend on the rest of
    the settings being valid.
    """
    name = os.getenv("FC_DEFAULT_TIMEZONE", "UTC").strip() or "UTC"
    try:
        return pytz.timezone(name)
    except pytz.UnknownTimeZoneError:
        logger.warning(f"Unknown FC_DEFAULT_TIMEZONE {name!r}, using UTC")
        return pytz.utc


def now(tz=None) -> datetime:
    """Current aware datetime in ``tz`` (a pytz zone or name), or the configured zone."""
    if tz is None:
        tz = default_timezone()
    elif isinstance(tz, str):
        tz = pytz.timezone(tz)
    return datetime.now(pytz.utc).astimezone(tz)


def today(tz=None) -> date:
    """Current calendar date in ``tz``, or the configured zone."""
    return now(tz).date()
