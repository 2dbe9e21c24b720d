"""Put command for moving files into the trash.

If no trash directory is given, the best one is picked for every path
according to the FreeDesktop Trash specification.
"""

from pathlib import Path
from typing import Annotated

import typer
from rich.table import Table

from garbage.cli.types import confirm_copy, require_config, require_context
from garbage.trash.operations import PutResult, put
from garbage.utils.formatting import console, print_error, print_info, print_success


def put_command(
    ctx: typer.Context,
    paths: Annotated[
        list[Path],
        typer.Argument(help="Files or directories to trash."),
    ],
    recursive: Annotated[
        bool,
        typer.Option("--recursive", "-r", help="Trash directories and their contents."),
    ] = False,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Don't ask before copying across filesystems."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", "-n", help="Show where each path would go."),
    ] = False,
    trash_dir: Annotated[
        Path | None,
        typer.Option(
            "--trash-dir",
            help="Put everything into this trash directory regardless of filesystem.",
        ),
    ] = None,
) -> None:
    """Put files into the trash.

    Each path goes to the home trash when it lives on the same filesystem,
    otherwise to the trash at the top of its own filesystem. When neither
    works the path is copied into the home trash, after confirmation.

    Examples:
        garbage put notes.txt
        garbage put -r build/
        garbage put --trash-dir /data/.Trash-1000 big.iso
    """
    config = require_config()
    context = require_context()
    quiet = bool(ctx.obj and ctx.obj.get("quiet"))

    results = put(
        context,
        paths,
        recursive=recursive,
        force=force or not config.confirm_copy,
        dry_run=dry_run,
        trash_dir=trash_dir.expanduser() if trash_dir else None,
        confirm=confirm_copy,
    )

    if dry_run:
        _print_plan(results)
    else:
        _print_results(results, quiet=quiet)

    if any(not r.success for r in results):
        raise typer.Exit(code=1)


def _print_plan(results: list[PutResult]) -> None:
    """Display where each path would be trashed."""
    table = Table(
        title="Planned Trash (dry-run)",
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Path", style="trash.path")
    table.add_column("Strategy", width=8)

    for r in results:
        if r.success:
            table.add_row(str(r.path), r.strategy.value if r.strategy else "-")
        else:
            table.add_row(str(r.path), f"[error]{r.error}[/]")

    console.print(table)
    print_info(f"Dry-run: {sum(1 for r in results if r.success)} path(s) would be trashed.")


def _print_results(results: list[PutResult], *, quiet: bool) -> None:
    """Report failures, and successes unless quiet."""
    for r in results:
        if not r.success:
            print_error(r.error or f"Failed to trash {r.path}")
        elif not quiet and r.record is not None:
            console.print(f"[muted]trashed[/] [trash.path]{r.record.path}[/]")

    success_count = sum(1 for r in results if r.success)
    if not quiet and success_count == len(results) and results:
        print_success(f"{success_count} path(s) moved to the trash.")
