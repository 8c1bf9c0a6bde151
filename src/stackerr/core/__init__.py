"""Core domain - error values, call-path capture, chain operations.

Depends only on ``stackerr.foundation``.
"""

from stackerr.core.chain import JoinedBaseError, JoinedError, as_kind, is_, join, unwrap, walk
from stackerr.core.errors import (
    Error,
    FormatMode,
    TracedError,
    WrappedError,
    format_chain,
    format_error,
    new,
    new_with_path,
    new_with_pathf,
    newf,
    wrap,
    wrap_with_path,
    wrap_with_pathf,
    wrapf,
)
from stackerr.core.path import (
    MAX_DEPTH,
    SKIP_INTERNAL_FRAMES,
    CapturedPath,
    ResolvedFrame,
    capture_path,
    format_path,
    render_path,
)
from stackerr.core.scrape import ParsedError, parse_verbose

__all__ = [
    # === Construction ===
    "new",
    "newf",
    "new_with_path",
    "new_with_pathf",
    "wrap",
    "wrapf",
    "wrap_with_path",
    "wrap_with_pathf",
    # === Values ===
    "Error",
    "TracedError",
    "WrappedError",
    "JoinedError",
    "JoinedBaseError",
    # === Formatting ===
    "FormatMode",
    "format_chain",
    "format_error",
    # === Chain ===
    "as_kind",
    "is_",
    "join",
    "unwrap",
    "walk",
    # === Call paths ===
    "MAX_DEPTH",
    "SKIP_INTERNAL_FRAMES",
    "CapturedPath",
    "ResolvedFrame",
    "capture_path",
    "format_path",
    "render_path",
    # === Scraping ===
    "ParsedError",
    "parse_verbose",
]
