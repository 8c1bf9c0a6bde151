"""stackerr command-line interface."""

from stackerr.interface.cli.main import cli_entrypoint, main

__all__ = ["cli_entrypoint", "main"]
