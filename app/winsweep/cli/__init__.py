"""CLI package for winsweep.

This package contains the Typer application and all subcommands.
"""

from winsweep.cli.main import app

__all__ = ["app"]
