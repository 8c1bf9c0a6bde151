"""Operational error system for stackerr."""

from stackerr.foundation.errors.errors import (
    ERROR_MESSAGES,
    RECOVERY_HINTS,
    ConfigError,
    ErrorCode,
    ScrapeError,
    StackerrError,
    config_error,
    scrape_error,
)

__all__ = [
    "ErrorCode",
    "ERROR_MESSAGES",
    "RECOVERY_HINTS",
    "StackerrError",
    "ScrapeError",
    "ConfigError",
    "config_error",
    "scrape_error",
]
