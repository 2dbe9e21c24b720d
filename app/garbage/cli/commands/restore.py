"""Restore command for moving trashed files back to where they came from."""

from pathlib import Path
from typing import Annotated

import typer

from garbage.cli.types import home_trash, require_config, select_trash_dir
from garbage.trash.directory import TrashDirectory
from garbage.trash.errors import TrashError
from garbage.trash.operations import list_records, restore
from garbage.utils.formatting import (
    console,
    create_records_table,
    print_error,
    print_info,
    print_success,
    print_warning,
)


def restore_command(
    index: Annotated[
        int | None,
        typer.Argument(help="Index of the file to restore, as shown by `garbage list`."),
    ] = None,
    trash_dir: Annotated[
        Path | None,
        typer.Option("--trash-dir", help="Trash directory to restore from (default: home trash)."),
    ] = None,
    overwrite: Annotated[
        bool,
        typer.Option("--overwrite", help="Replace a file that now exists at the original path."),
    ] = False,
) -> None:
    """Restore a file from the trash.

    Without an index, the trash contents are listed and you are asked
    which file to restore.

    Examples:
        garbage restore        # Pick interactively
        garbage restore 0      # Restore the oldest file
    """
    config = require_config()
    trash, explicit = select_trash_dir(trash_dir, config, home_trash())

    try:
        if index is None:
            index = _prompt_index(trash, explicit)
            if index is None:
                return
        result = restore(trash, index, overwrite=overwrite, explicit=explicit)
    except TrashError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Restored {result.destination}")


def _prompt_index(trash: TrashDirectory, explicit: bool) -> int | None:
    """Show the listing and ask which entry to restore.

    Returns:
        Chosen index, or None if the trash is empty.
    """
    listing = list_records(trash, explicit=explicit)
    for error in listing.errors:
        print_warning(f"failed to get file info: {error}")

    if not listing.records:
        print_info("Trash is empty, nothing to restore.")
        return None

    console.print(create_records_table(listing.records, title=f"Trash: {trash.path}"))
    last = len(listing.records) - 1
    return typer.prompt(f"Which file to restore? [0..{last}]", type=int)
