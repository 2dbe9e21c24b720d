"""Configuration commands.

Provides commands to show the effective configuration and to write a
default configuration file.
"""

from typing import Annotated

import typer
from rich.table import Table

from garbage.cli.types import home_trash, require_config
from garbage.core.config import ConfigError, GarbageConfig, save_config
from garbage.core.paths import ensure_config_dir, get_config_path
from garbage.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Show or initialize the configuration file.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective configuration."""
    config = require_config()
    path = get_config_path()

    table = Table(
        title=f"Configuration ({path})" if path.exists() else "Configuration (defaults)",
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", style="bold")
    table.add_column("Value")

    trash_dir = config.trash_dir or f"{home_trash().path} (home trash)"
    table.add_row("trash_dir", str(trash_dir))
    table.add_row("confirm_copy", str(config.confirm_copy).lower())
    days = config.empty_older_than_days
    table.add_row("empty_older_than_days", "-" if days is None else str(days))

    console.print(table)


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing configuration file."),
    ] = False,
) -> None:
    """Write a configuration file with default settings."""
    path = get_config_path()
    if path.exists() and not force:
        print_info(f"Configuration already exists: {path} (use --force to overwrite)")
        raise typer.Exit(code=0)

    try:
        ensure_config_dir()
        saved = save_config(GarbageConfig(), path)
    except (ConfigError, RuntimeError) as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Configuration written to {saved}")
