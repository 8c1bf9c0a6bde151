"""Config command - Inspect and initialize stackerr configuration."""

from dataclasses import asdict, fields
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel

from stackerr.foundation.config import get_config, load_config, save_default_config
from stackerr.foundation.config.loader import StackerrConfig
from stackerr.foundation.errors import ConfigError
from stackerr.interface.cli.error_handler import handle_error

console = Console()


def _load(path: str | None) -> StackerrConfig:
    try:
        return load_config(path) if path else get_config()
    except ConfigError as e:
        handle_error(e)


@click.group()
def config() -> None:
    """Manage stackerr configuration.

    Configuration is loaded from (in priority order):
    1. Environment variables (STACKERR_*)
    2. .stackerr/config.yaml (project-local)
    3. ~/.stackerr/config.yaml (user-global)
    4. Built-in defaults

    Examples:

        stackerr config show              # Show current config
        stackerr config init              # Create default config file
        stackerr config get log_render

    Environment overrides:

        STACKERR_LOG_RENDER=compact stackerr ...
        STACKERR_DEBUG=true stackerr ...
    """


@config.command()
@click.option("--path", type=click.Path(), help="Config file path to show")
def show(path: str | None) -> None:
    """Show current configuration.

    Examples:
        stackerr config show
        stackerr config show --path ~/.stackerr/config.yaml
    """
    cfg = _load(path)

    console.print(Panel("[bold]stackerr Configuration[/bold]", border_style="cyan"))
    for key, value in asdict(cfg).items():
        console.print(f"  {key}: {value}")

    console.print("\n[dim]Config sources:[/dim]")
    for candidate in (Path(".stackerr/config.yaml"), Path.home() / ".stackerr" / "config.yaml"):
        if candidate.exists():
            console.print(f"  [green]✓[/green] {candidate}")
        else:
            console.print(f"  [dim]○[/dim] {candidate} (not found)")


@config.command()
@click.argument("key")
@click.option("--path", type=click.Path(), help="Config file path")
def get(key: str, path: str | None) -> None:
    """Get a configuration value.

    Examples:
        stackerr config get log_level
        stackerr config get chain_in_logs
    """
    cfg = _load(path)

    valid = [f.name for f in fields(cfg)]
    if key not in valid:
        console.print(f"[red]✗[/red] Key not found: {key}")
        console.print(f"\n[dim]Available keys:[/dim] {', '.join(valid)}")
        raise SystemExit(1)

    # Print value without Rich formatting for scripting
    value = getattr(cfg, key)
    click.echo(str(value).lower() if isinstance(value, bool) else value)


@config.command()
@click.option(
    "--path",
    type=click.Path(),
    default=".stackerr/config.yaml",
    help="Config file path (default: .stackerr/config.yaml)",
)
@click.option("--global", "global_config", is_flag=True, help="Create in ~/.stackerr/ instead")
def init(path: str, global_config: bool) -> None:
    """Create default config file.

    Examples:
        stackerr config init                    # Create .stackerr/config.yaml
        stackerr config init --global           # Create ~/.stackerr/config.yaml
        stackerr config init --path custom.yaml
    """
    config_path = Path.home() / ".stackerr" / "config.yaml" if global_config else path
    saved_path = save_default_config(config_path)
    console.print(f"[green]✓[/green] Config file created: {saved_path}")
