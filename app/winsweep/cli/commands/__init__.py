"""CLI commands for winsweep.

This package contains all subcommand implementations.
"""

from winsweep.cli.commands import check, clean, whitelist

__all__ = ["check", "clean", "whitelist"]
