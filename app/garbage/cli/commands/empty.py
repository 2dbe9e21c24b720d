"""Empty command for permanently deleting trashed files."""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from garbage.cli.types import home_trash, require_config, select_trash_dir
from garbage.trash.errors import TrashError
from garbage.trash.operations import EmptyResult, empty
from garbage.utils.formatting import (
    console,
    format_date,
    print_error,
    print_info,
    print_success,
    print_warning,
)


def empty_command(
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Only show what would be deleted."),
    ] = False,
    days: Annotated[
        int | None,
        typer.Option(
            "--days",
            min=0,
            help="Only delete files trashed more than this many days ago.",
        ),
    ] = None,
    trash_dir: Annotated[
        Path | None,
        typer.Option("--trash-dir", help="Trash directory to empty (default: home trash)."),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Permanently delete files from the trash.

    Examples:
        garbage empty --dry-run     # Preview only
        garbage empty --days 30     # Keep the last 30 days
        garbage empty -y            # No confirmation
    """
    config = require_config()
    trash, explicit = select_trash_dir(trash_dir, config, home_trash())
    older_than_days = days if days is not None else config.empty_older_than_days

    if not dry_run and not yes:
        scope = f"older than {older_than_days} day(s) " if older_than_days else ""
        confirmed = typer.confirm(
            f"Permanently delete all files {scope}in {trash.path}?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    try:
        result = empty(
            trash,
            dry_run=dry_run,
            older_than_days=older_than_days,
            explicit=explicit,
        )
    except TrashError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    for error in result.errors:
        print_warning(f"skipped: {error}")

    _print_result(result, dry_run)

    if result.failed:
        raise typer.Exit(code=1)


def _print_result(result: EmptyResult, dry_run: bool) -> None:
    """Display purged entries and a summary."""
    if not result.purged:
        print_info("Nothing to delete.")
        return

    title = "Emptied (dry-run)" if dry_run else "Emptied"
    table = Table(title=title, header_style="bold_header", border_style="border")
    table.add_column("Deleted", style="trash.date", no_wrap=True)
    table.add_column("Original Path", style="trash.path", overflow="fold")
    table.add_column("Status", width=10)

    for purge in result.purged:
        if purge.dry_run:
            status = "[info]dry-run[/]"
        elif purge.success:
            status = "[success]deleted[/]"
        else:
            status = f"[error]{purge.error or 'failed'}[/]"
        table.add_row(format_date(purge.record.deletion_date), str(purge.record.path), status)

    console.print(table)

    count = len(result.purged)
    if dry_run:
        print_info(f"Dry-run: {count} file(s) would be deleted, {result.kept} kept.")
    elif result.failed:
        failed = sum(1 for p in result.purged if not p.success)
        print_warning(f"{count - failed} deleted, {failed} failed")
    else:
        print_success(f"Deleted {count} file(s), {result.kept} kept.")
