"""Parse command - Turn verbose error text back into structured frames."""

import json
from typing import TextIO

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from stackerr.core.scrape import parse_verbose
from stackerr.foundation.errors import ScrapeError
from stackerr.interface.cli.error_handler import handle_error

console = Console()


@click.command()
@click.argument("source", type=click.File("r"), default="-")
@click.option("--json", "json_output", is_flag=True, help="Output JSON for scripting")
def parse(source: TextIO, json_output: bool) -> None:
    """Parse verbose error output into a message and frames.

    Reads text rendered with f"{err:+v}" (or format_error(err, VERBOSE))
    from SOURCE, or stdin when SOURCE is omitted or "-".

    Examples:

        stackerr parse crash.txt
        my-service 2>&1 | stackerr parse --json
    """
    text = source.read()
    try:
        parsed = parse_verbose(text)
    except ScrapeError as e:
        handle_error(e, json_output=json_output)

    if json_output:
        click.echo(json.dumps(parsed.to_dict(), indent=2))
        return

    console.print(Text(parsed.message, style="bold red"))
    if not parsed.frames:
        console.print("[dim]No captured frames.[/dim]")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Function", style="cyan")
    table.add_column("Location")
    for i, frame in enumerate(parsed.frames):
        table.add_row(str(i), frame.name, f"{frame.file}:{frame.line}")
    console.print(table)
