"""CLI package for garbage.

This package contains the Typer application and all subcommands.
"""

from garbage.cli.main import app

__all__ = ["app"]
