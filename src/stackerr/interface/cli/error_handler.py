"""CLI Error Handler.

Provides unified error handling for the CLI with support for:
- Human-readable output (default)
- JSON output for machine consumption
- Recovery suggestions from the error code
"""

import json
import logging
from typing import NoReturn

import click
from rich.console import Console
from rich.text import Text

from stackerr.foundation.errors import ErrorCode, StackerrError

logger = logging.getLogger(__name__)


def _as_stackerr_error(error: BaseException) -> StackerrError:
    if isinstance(error, StackerrError):
        return error
    return StackerrError(
        code=ErrorCode.RUNTIME_UNEXPECTED,
        context={"detail": str(error)},
        cause=error,
    )


def handle_error(error: BaseException, json_output: bool = False) -> NoReturn:
    """Handle an error with optional JSON output for machine consumption.

    Args:
        error: The error to handle (StackerrError or any exception)
        json_output: If True, output JSON to stderr

    Raises:
        SystemExit: Always exits with code 1
    """
    if not isinstance(error, StackerrError):
        # Visible with --debug; PathFormatter adds any captured paths
        logger.debug("Unhandled error", exc_info=error)

    wrapped = _as_stackerr_error(error)

    if json_output:
        click.echo(format_error_for_json(wrapped), err=True)
        raise SystemExit(1)

    _print_human_error(wrapped)
    raise SystemExit(1)


def _print_human_error(error: StackerrError) -> None:
    """Print error in human-readable format."""
    console = Console(stderr=True)

    header = Text()
    header.append("✗ ", style="bold red")
    header.append(error.error_id, style="bold red")
    header.append(f" {error.message}")
    console.print(header)

    if error.recovery_hints:
        console.print("\n[bold]What you can do:[/]")
        for i, hint in enumerate(error.recovery_hints, 1):
            console.print(f"  {i}. {hint}", markup=False, highlight=False)


def format_error_for_json(error: BaseException) -> str:
    """Format an error as JSON string.

    Args:
        error: The error to format

    Returns:
        JSON string representation of the error
    """
    wrapped = _as_stackerr_error(error)
    error_dict = wrapped.to_dict()
    if wrapped.cause is not None:
        error_dict["cause"] = str(wrapped.cause)
    return json.dumps(error_dict)
