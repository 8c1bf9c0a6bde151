"""Stackerr operational errors.

The error values built by ``stackerr.core`` never raise. This module covers
the places that do: scraping rendered text back into frames, loading
configuration, and the CLI.

Provides structured error handling with:
- Numeric error codes for programmatic handling
- User-friendly messages
- Recovery hints for the CLI
- Context for debugging
"""

from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Numeric error codes organized by category.

    Format: XYYY where X = category, YYY = specific error

    Categories:
        1xxx - Scrape errors
        2xxx - Configuration errors
        3xxx - IO errors
        4xxx - Runtime errors
    """

    # 1xxx - Scrape Errors
    SCRAPE_EMPTY_INPUT = 1001
    SCRAPE_MISSING_MESSAGE = 1002

    # 2xxx - Configuration Errors
    CONFIG_UNREADABLE = 2001
    CONFIG_INVALID_YAML = 2002
    CONFIG_UNKNOWN_KEY = 2003
    CONFIG_INVALID_VALUE = 2004

    # 3xxx - IO Errors
    FILE_NOT_FOUND = 3001

    # 4xxx - Runtime Errors
    RUNTIME_UNEXPECTED = 4001

    @property
    def category(self) -> str:
        """Get the error category name."""
        prefix = self.value // 1000
        return {
            1: "scrape",
            2: "config",
            3: "io",
            4: "runtime",
        }.get(prefix, "unknown")


# Human-readable error messages
ERROR_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.SCRAPE_EMPTY_INPUT: "No text to parse.",
    ErrorCode.SCRAPE_MISSING_MESSAGE: "Line {line} should hold the error message but is empty.",
    ErrorCode.CONFIG_UNREADABLE: "Cannot read config file '{path}': {detail}",
    ErrorCode.CONFIG_INVALID_YAML: "Config file '{path}' is not valid YAML: {detail}",
    ErrorCode.CONFIG_UNKNOWN_KEY: "Unknown configuration key '{key}' in {path}.",
    ErrorCode.CONFIG_INVALID_VALUE: "Invalid value for '{key}' in {path}: {detail}",
    ErrorCode.FILE_NOT_FOUND: "File not found: {path}",
    ErrorCode.RUNTIME_UNEXPECTED: "Unexpected error: {detail}",
}


RECOVERY_HINTS: dict[ErrorCode, list[str]] = {
    ErrorCode.SCRAPE_EMPTY_INPUT: [
        "Pass a file containing output rendered with f\"{err:+v}\"",
        "Pipe text on stdin: some-command | stackerr parse",
    ],
    ErrorCode.SCRAPE_MISSING_MESSAGE: [
        "The first line must be the error message, followed by name / \\tfile:line pairs",
    ],
    ErrorCode.CONFIG_UNKNOWN_KEY: [
        "Run 'stackerr config show' to list valid keys",
        "Remove '{key}' from {path}",
    ],
    ErrorCode.CONFIG_INVALID_VALUE: [
        "Check the type of '{key}' with 'stackerr config show'",
    ],
    ErrorCode.FILE_NOT_FOUND: [
        "Check the path is correct",
        "Create a default file with 'stackerr config init'",
    ],
}


class StackerrError(Exception):
    """Base error type for stackerr operational errors.

    Example:
        >>> err = StackerrError(
        ...     code=ErrorCode.FILE_NOT_FOUND,
        ...     context={"path": "missing.yaml"},
        ... )
        >>> print(err)
        [SE-3001] File not found: missing.yaml
    """

    def __init__(
        self,
        code: ErrorCode,
        context: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ):
        self.code = code
        self.context = context or {}
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause
        super().__init__(str(self))

    @property
    def message(self) -> str:
        """Get the formatted user-friendly message."""
        template = ERROR_MESSAGES.get(self.code, "An error occurred: {detail}")
        try:
            return template.format(**self.context)
        except KeyError:
            # Fallback if context doesn't have all keys
            return template

    @property
    def recovery_hints(self) -> list[str]:
        """Get recovery suggestions for this error."""
        formatted = []
        for hint in RECOVERY_HINTS.get(self.code, []):
            try:
                formatted.append(hint.format(**self.context))
            except KeyError:
                formatted.append(hint)
        return formatted

    @property
    def category(self) -> str:
        """Get the error category."""
        return self.code.category

    @property
    def error_id(self) -> str:
        """Get the error ID string (e.g., 'SE-2001')."""
        return f"SE-{self.code.value}"

    def __str__(self) -> str:
        return f"[{self.error_id}] {self.message}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code!r}, context={self.context!r})"

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dict for logging and JSON output."""
        return {
            "error_id": self.error_id,
            "code": self.code.value,
            "category": self.category,
            "message": self.message,
            "recovery_hints": self.recovery_hints,
            "context": self.context,
        }


class ScrapeError(StackerrError, ValueError):
    """Rendered text could not be parsed back into a message and frames."""


class ConfigError(StackerrError):
    """A configuration file could not be used."""


def scrape_error(code: ErrorCode, line: int = 0) -> ScrapeError:
    """Create a scrape error."""
    return ScrapeError(code=code, context={"line": line})


def config_error(
    code: ErrorCode,
    path: str = "",
    key: str = "",
    detail: str = "",
    cause: BaseException | None = None,
) -> ConfigError:
    """Create a configuration error."""
    return ConfigError(
        code=code,
        context={"path": path, "key": key, "detail": detail},
        cause=cause,
    )
