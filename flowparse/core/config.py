"""
Configuration module for FlowParse.

Settings come from environment variables, optionally seeded from a local
.env file in development.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

import pytz
from dotenv import load_dotenv

from ..platform.errors import ConfigError

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
LOG_FORMATS = ("plain", "json")


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""

    log_level: str = "INFO"
    log_format: str = "plain"
    timezone: str = "UTC"
    env: str = "local"

    @property
    def structured_logging(self) -> bool:
        return self.log_format == "json"

    @property
    def tzinfo(self):
        return pytz.timezone(self.timezone)


def bootstrap_env(start: Path | None = None) -> bool:
    """
    Load a .env file when running locally.

    Conditions for auto-loading:
    - FC_ENV=local (default) or FC_AUTO_LOAD_ENV=1
    - a .env file exists in the start directory or one of its parents

    Existing environment variables are never overridden.

    Returns:
        True if a .env file was loaded
    """
    fc_env = os.getenv("FC_ENV", "local").lower()
    auto_load = os.getenv("FC_AUTO_LOAD_ENV", "0") == "1"

    if fc_env != "local" and not auto_load:
        logger.debug("EnvBootstrap: skipped (not local mode)")
        return False

    current_dir = (start or Path.cwd()).resolve()
    for parent in [current_dir] + list(current_dir.parents):
        env_path = parent / ".env"
        if env_path.is_file():
            load_dotenv(env_path, override=False)
            logger.info(f"EnvBootstrap: loaded {env_path}")
            return True

    logger.debug("EnvBootstrap: skipped (no .env found)")
    return False


def get_settings(env_vars: dict[str, str] | None = None) -> Settings:
    """
    Build settings from environment variables.

    Args:
        env_vars: Mapping to read instead of os.environ

    Returns:
        Settings

    Raises:
        ConfigError: If a value is present but invalid
    """
    env = os.environ if env_vars is None else env_vars

    log_level = env.get("LOG_LEVEL", "INFO").strip().upper() or "INFO"
    if log_level not in LOG_LEVELS:
        raise ConfigError("LOG_LEVEL", log_level, f"use one of {', '.join(LOG_LEVELS)}")

    log_format = env.get("FC_LOG_FORMAT", "plain").strip().lower() or "plain"
    if log_format not in LOG_FORMATS:
        raise ConfigError("FC_LOG_FORMAT", log_format, "use 'plain' or 'json'")

    timezone = env.get("FC_DEFAULT_TIMEZONE", "UTC").strip() or "UTC"
    try:
        pytz.timezone(timezone)
    except pytz.UnknownTimeZoneError:
        raise ConfigError(
            "FC_DEFAULT_TIMEZONE", timezone, "use an IANA name such as America/Denver"
        ) from None

    return Settings(
        log_level=log_level,
        log_format=log_format,
        timezone=timezone,
        env=env.get("FC_ENV", "local").strip().lower() or "local",
    )
