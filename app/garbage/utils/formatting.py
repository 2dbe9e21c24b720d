"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

import sys
from datetime import datetime

from rich.console import Console
from rich.table import Table

from garbage.core.theme import get_theme
from garbage.trash.record import DATE_FORMAT, TrashRecord


def _detect_color_system() -> str | None:
    """Return "truecolor" for interactive terminals, None to let Rich decide."""
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())


def format_date(date: datetime) -> str:
    """Format a deletion date the way it is stored in records."""
    return date.strftime(DATE_FORMAT)


def create_records_table(records: list[TrashRecord], title: str = "Trash") -> Table:
    """Create a table listing trash records with their restore index.

    Args:
        records: Records in display order.
        title: Table title.

    Returns:
        Rich Table with Index, Deleted and Original Path columns.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],
    )
    table.add_column("#", justify="right", style="trash.index")
    table.add_column("Deleted", style="trash.date", no_wrap=True)
    table.add_column("Original Path", style="trash.path", overflow="fold")

    for index, record in enumerate(records):
        table.add_row(str(index), format_date(record.deletion_date), str(record.path))
    return table


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
