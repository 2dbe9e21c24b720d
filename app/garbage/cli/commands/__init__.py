"""CLI commands for garbage.

This package contains all subcommand implementations.
"""

from garbage.cli.commands import config, empty, list_cmd, put, restore

__all__ = ["config", "empty", "list_cmd", "put", "restore"]
