"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from enum import Enum
from pathlib import Path

import typer

from garbage.core.config import ConfigError, GarbageConfig, load_config
from garbage.core.context import TrashContext
from garbage.core.paths import get_data_home
from garbage.trash.directory import TrashDirectory
from garbage.trash.errors import MountTableError
from garbage.trash.strategy import DeletionStrategy, StrategyKind
from garbage.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options for listings."""

    TABLE = "table"
    JSON = "json"


def require_config() -> GarbageConfig:
    """Load the user configuration or exit with an error.

    Raises:
        typer.Exit: If the configuration is invalid.
    """
    try:
        return load_config()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def require_context() -> TrashContext:
    """Load the run context or exit with an error.

    Without a mount table no routing decision is possible, so a failure
    here ends the run.

    Raises:
        typer.Exit: If the mount table cannot be read.
    """
    try:
        return TrashContext.load()
    except MountTableError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def home_trash() -> TrashDirectory:
    """The home trash of the current user ($XDG_DATA_HOME/Trash)."""
    return TrashDirectory.home(get_data_home())


def select_trash_dir(
    option: Path | None,
    config: GarbageConfig,
    home: TrashDirectory,
) -> tuple[TrashDirectory, bool]:
    """Pick the trash directory for list/restore/empty.

    Priority: command line option, then config file, then home trash.

    Returns:
        Tuple of (trash directory, whether it was chosen explicitly).
    """
    chosen = option or config.trash_dir
    if chosen is None:
        return home, False
    return TrashDirectory.from_optional(chosen.expanduser(), home), True


def confirm_copy(target: Path, strategy: DeletionStrategy) -> bool:
    """Ask before a deletion that may need a recursive copy."""
    if strategy.kind == StrategyKind.COPY_TO:
        reason = "requires potentially expensive copying"
    else:
        reason = f"may require copying into {strategy.trash_dir.path}"
    return typer.confirm(f"Removing '{target}' {reason}. Continue?", default=True)
