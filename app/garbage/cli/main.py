"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer

from garbage import __version__
from garbage.cli.commands import config, empty, list_cmd, put, restore

app = typer.Typer(
    name="garbage",
    help="Move files to the trash instead of deleting them (FreeDesktop Trash).",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"garbage version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """garbage - put files in the trash, list, restore and empty it.

    Trash locations follow the FreeDesktop Trash specification, so files
    show up in your desktop's trash can too.
    """
    if verbose and quiet:
        raise typer.BadParameter("--verbose and --quiet are mutually exclusive")

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet

    _configure_logging(verbose=verbose, quiet=quiet)


def _configure_logging(*, verbose: bool, quiet: bool) -> None:
    """Route engine log records to stderr at the requested level."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


app.command(name="put")(put.put_command)
app.command(name="list")(list_cmd.list_command)
app.command(name="restore")(restore.restore_command)
app.command(name="empty")(empty.empty_command)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
