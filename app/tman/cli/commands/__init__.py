"""CLI commands for tman.

This package contains all subcommand implementations.
"""

from tman.cli.commands import delete, empty, listing, restore, settings

__all__ = ["delete", "empty", "listing", "restore", "settings"]
