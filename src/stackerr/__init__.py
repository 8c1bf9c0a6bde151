"""stackerr - Error values with lazily rendered call paths.

Build errors, wrap them with context, and optionally capture the call path
at each step. Paths cost a few reference copies to capture and are only
symbolicated when someone renders them.

    err = stackerr.new_with_path("boom")
    print(f"{err:+v}")
"""

from stackerr.core import (
    MAX_DEPTH,
    CapturedPath,
    Error,
    FormatMode,
    JoinedBaseError,
    JoinedError,
    ParsedError,
    ResolvedFrame,
    TracedError,
    WrappedError,
    as_kind,
    capture_path,
    format_chain,
    format_error,
    format_path,
    is_,
    join,
    new,
    new_with_path,
    new_with_pathf,
    newf,
    parse_verbose,
    render_path,
    unwrap,
    walk,
    wrap,
    wrap_with_path,
    wrap_with_pathf,
    wrapf,
)
from stackerr.foundation.errors import ConfigError, ErrorCode, ScrapeError, StackerrError

__version__ = "0.1.0"

__all__ = [
    # Construction
    "new",
    "newf",
    "new_with_path",
    "new_with_pathf",
    "wrap",
    "wrapf",
    "wrap_with_path",
    "wrap_with_pathf",
    # Chain
    "unwrap",
    "is_",
    "as_kind",
    "join",
    "walk",
    # Formatting
    "FormatMode",
    "format_error",
    "format_chain",
    # Values
    "Error",
    "TracedError",
    "WrappedError",
    "JoinedError",
    "JoinedBaseError",
    # Call paths
    "MAX_DEPTH",
    "CapturedPath",
    "ResolvedFrame",
    "capture_path",
    "format_path",
    "render_path",
    # Scraping
    "ParsedError",
    "parse_verbose",
    # Operational errors
    "ErrorCode",
    "StackerrError",
    "ScrapeError",
    "ConfigError",
]
