"""CLI subcommands."""

from stackerr.interface.cli.commands.config_cmd import config
from stackerr.interface.cli.commands.parse_cmd import parse

__all__ = ["config", "parse"]
