"""Exception hierarchy for FlowParse."""

from typing import Any


class FlowParseError(Exception):
    """Base exception for FlowParse errors."""

    def __init__(
        self,
        message: str,
        user_hint: str | None = None,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize FlowParse error.

        Args:
            message: Technical error message
            user_hint: User-friendly hint for fixing the issue
            error_code: Error code for categorization
            details: Extra context for structured logs
        """
        super().__init__(message)
        self.user_hint = user_hint
        self.error_code = error_code
        self.details = details or {}


class InvalidInputError(FlowParseError):
    """The parser was handed something other than text."""

    def __init__(self, value: Any):
        super().__init__(
            f"Task input must be a string, got {type(value).__name__}",
            user_hint="Pass the raw text the user typed",
            error_code="INPUT_INVALID",
        )


class ConfigError(FlowParseError):
    """Configuration is missing or invalid."""

    def __init__(self, config_key: str, value: str, description: str | None = None):
        message = f"Invalid configuration for {config_key}: {value!r}"
        hint = f"Fix {config_key} in your environment or .env file"
        if description:
            hint += f" - {description}"
        super().__init__(
            message,
            user_hint=hint,
            error_code="CONFIG_INVALID",
            details={"key": config_key, "value": value},
        )
        self.config_key = config_key
