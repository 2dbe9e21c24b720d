"""List command for showing the contents of a trash directory."""

import json
from pathlib import Path
from typing import Annotated

import typer

from garbage.cli.types import OutputFormat, home_trash, require_config, select_trash_dir
from garbage.trash.errors import TrashError
from garbage.trash.operations import RecordListing, list_records
from garbage.utils.formatting import (
    console,
    create_records_table,
    format_date,
    print_error,
    print_info,
    print_warning,
)


def list_command(
    trash_dir: Annotated[
        Path | None,
        typer.Option("--trash-dir", help="Trash directory to list (default: home trash)."),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """List trashed files, oldest first.

    The index in the first column is the one expected by `garbage restore`.
    """
    config = require_config()
    trash, explicit = select_trash_dir(trash_dir, config, home_trash())

    try:
        listing = list_records(trash, explicit=explicit)
    except TrashError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    for error in listing.errors:
        print_warning(f"failed to get file info: {error}")

    if output_format == OutputFormat.JSON:
        _print_json(listing)
        return

    if not listing.records:
        print_info(f"Trash is empty ({trash.path}).")
        return

    console.print(create_records_table(listing.records, title=f"Trash: {trash.path}"))


def _print_json(listing: RecordListing) -> None:
    """Display records as JSON."""
    data = [
        {
            "index": index,
            "path": str(record.path),
            "deletion_date": format_date(record.deletion_date),
            "deleted_path": str(record.deleted_path),
            "info_path": str(record.info_path),
        }
        for index, record in enumerate(listing.records)
    ]
    console.print_json(json.dumps(data))
