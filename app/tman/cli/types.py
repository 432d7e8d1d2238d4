"""Shared types and utilities for CLI commands.

This module provides helpers used across multiple CLI command modules
to avoid code duplication.
"""

import typer

from tman.core.errors import TrashError
from tman.core.store import TrashStore
from tman.models.result import TrashActionResult
from tman.models.selector import VersionSelector
from tman.utils.formatting import print_error


def parse_selector(value: str) -> VersionSelector:
    """Typer parser turning --version text into a VersionSelector.

    Raises:
        typer.BadParameter: If value is not latest, all or a version number.
    """
    try:
        return VersionSelector.parse(value)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


def require_store() -> TrashStore:
    """Open the trash store or exit with a helpful error message.

    Returns:
        The opened TrashStore.

    Raises:
        typer.Exit: If the trash cannot be opened (e.g. corrupt ledger).
    """
    try:
        return TrashStore()
    except TrashError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def exit_on_failures(results: list[TrashActionResult]) -> None:
    """Exit with code 1 if any result failed.

    Raises:
        typer.Exit: If at least one result failed.
    """
    if any(r.failed for r in results):
        raise typer.Exit(code=1)
