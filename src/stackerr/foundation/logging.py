"""Logging configuration for stackerr.

Library modules only call ``logging.getLogger(__name__)``; handlers are
installed by configure_logging(), which the CLI calls at startup.

Provides centralized logging setup with sensible defaults:
- Default: WARNING level (quiet operation)
- --debug flag: DEBUG level with full context
- STACKERR_DEBUG=true or STACKERR_LOG_LEVEL=DEBUG env vars: Override for CI/scripting
- Config file: debug: true in .stackerr/config.yaml (persistent)

Logged exceptions get their captured call paths appended below the
standard traceback by PathFormatter.

Usage:
    from stackerr.foundation.logging import configure_logging
    configure_logging(debug=args.debug)

Priority for level resolution (highest to lowest):
    1. Explicit `level` parameter (programmatic override)
    2. STACKERR_LOG_LEVEL env var (any level: DEBUG, INFO, WARNING, etc.)
    3. STACKERR_DEBUG=true env var (simple boolean)
    4. `debug=True` parameter (--debug flag)
    5. Config file: debug: true, then log_level
    6. WARNING (default)
"""

import logging
import os
import sys
from types import TracebackType

from stackerr.core.chain import walk
from stackerr.core.errors import FormatMode, TracedError, format_error
from stackerr.foundation.config import TRUTHY, StackerrConfig, get_config
from stackerr.foundation.errors import ConfigError
from stackerr.foundation.types import Writer

# Format includes module path for tracing issues
_DEBUG_FORMAT = "%(asctime)s %(name)s [%(levelname)s] %(message)s"
_DEFAULT_FORMAT = "%(name)s: %(message)s"

type ExcInfo = tuple[type[BaseException], BaseException, TracebackType | None]


class PathFormatter(logging.Formatter):
    """Formatter that appends captured call paths to logged exceptions.

    Args:
        fmt: Record format string.
        datefmt: Date format string.
        render: VERBOSE lists every frame; COMPACT only the innermost
            frame of each layer.
        chain: Include every layer of the cause chain, not just the
            logged exception.
    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        *,
        render: FormatMode = FormatMode.VERBOSE,
        chain: bool = True,
    ) -> None:
        super().__init__(fmt, datefmt)
        self.render = render
        self.chain = chain

    def formatException(self, ei: ExcInfo) -> str:  # noqa: N802 - logging API
        text = super().formatException(ei)
        exc = ei[1]
        if exc is None:
            return text

        layers = walk(exc) if self.chain else iter((exc,))
        sections = [
            self._render_layer(layer)
            for layer in layers
            if isinstance(layer, TracedError) and layer.path is not None
        ]
        if not sections:
            return text
        return text + "\nCaptured path:\n" + "\n".join(s.rstrip("\n") for s in sections)

    def _render_layer(self, layer: TracedError) -> str:
        if self.render is FormatMode.VERBOSE:
            return format_error(layer, FormatMode.VERBOSE)

        frames = layer.path.frames() if layer.path is not None else ()
        if not frames:
            return layer.message
        innermost = frames[0]
        return f"{layer.message} ({innermost.name} at {innermost.file}:{innermost.line})"


def configure_logging(
    *,
    debug: bool = False,
    level: int | str | None = None,
    stream: Writer | None = None,
) -> None:
    """Configure logging for the stackerr CLI.

    Call this early in the CLI entrypoint before any other imports
    that might trigger logging.

    Args:
        debug: Enable DEBUG level with detailed format
        level: Override log level (int or string like "DEBUG", "INFO")
               Also reads STACKERR_LOG_LEVEL env var
        stream: Output stream (default: stderr)
    """
    try:
        config = get_config()
    except ConfigError as e:
        sys.stderr.write(f"Warning: Ignoring configuration: {e}\n")
        config = StackerrConfig()

    # Resolve level with priority
    resolved_level: int
    if level is not None:
        resolved_level = _parse_level(level)
    elif env_level := os.environ.get("STACKERR_LOG_LEVEL"):
        resolved_level = _parse_level(env_level)
    elif os.environ.get("STACKERR_DEBUG", "").strip().lower() in TRUTHY:
        resolved_level = logging.DEBUG
    elif debug or config.debug:
        resolved_level = logging.DEBUG
    else:
        resolved_level = _parse_level(config.log_level)

    # Choose format based on verbosity
    console_format = _DEBUG_FORMAT if resolved_level <= logging.DEBUG else _DEFAULT_FORMAT
    render = FormatMode.COMPACT if config.log_render == "compact" else FormatMode.VERBOSE

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved_level)
    root_logger.handlers.clear()  # Remove existing handlers

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setLevel(resolved_level)
    handler.setFormatter(
        PathFormatter(console_format, render=render, chain=config.chain_in_logs)
    )
    root_logger.addHandler(handler)

    # Log that we're configured (only visible in debug mode)
    logger = logging.getLogger(__name__)
    logger.debug(
        "Logging configured: level=%s, debug=%s, render=%s, chain=%s",
        logging.getLevelName(resolved_level),
        debug,
        render.value,
        config.chain_in_logs,
    )


def _parse_level(level: int | str) -> int:
    """Parse log level from int or string."""
    if isinstance(level, int):
        return level
    # Handle string levels like "DEBUG", "INFO", etc.
    numeric = getattr(logging, level.upper(), None)
    if isinstance(numeric, int):
        return numeric
    # Try parsing as int string
    try:
        return int(level)
    except ValueError:
        return logging.WARNING
