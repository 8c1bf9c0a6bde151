"""Main CLI entry point.

    stackerr parse crash.txt
    stackerr config show
"""

import sys

import click

from stackerr import __version__
from stackerr.foundation.logging import configure_logging
from stackerr.interface.cli.commands import config, parse
from stackerr.interface.cli.error_handler import handle_error


def cli_entrypoint() -> None:
    """Wrapped entrypoint with global error handling.

    Catches errors that escape a command and reports them through
    handle_error() instead of a raw traceback. Called from
    pyproject.toml [project.scripts].
    """
    try:
        main(standalone_mode=False)
    except click.ClickException as e:
        # Let Click handle its own exceptions
        e.show()
        sys.exit(e.exit_code)
    except click.Abort:
        sys.exit(130)
    except Exception as e:
        handle_error(e, json_output=False)


@click.group()
@click.version_option(__version__, prog_name="stackerr")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool) -> None:
    """stackerr - inspect errors rendered with captured call paths."""
    configure_logging(debug=debug)


main.add_command(parse)
main.add_command(config)
