"""Delete command for moving paths into the trash.

This module provides the `tman delete` command. Every path becomes a new
version of its origin in the trash; nothing is unlinked.
"""

from typing import Annotated

import typer

from tman.cli.display import print_results, print_results_summary
from tman.cli.types import exit_on_failures, require_store
from tman.core.errors import TrashError
from tman.utils.formatting import print_error


def delete(
    paths: Annotated[
        list[str],
        typer.Argument(
            help="Files, directories or symlinks to move to the trash.",
            show_default=False,
        ),
    ],
) -> None:
    """Move files to the trash.

    Each path is trashed independently: a missing path is reported
    and the remaining paths are still trashed. Trashing a path again
    adds a new version instead of replacing the old one.

    Examples:
        tman delete notes.txt
        tman delete build/ old.log ~/Downloads/setup.iso
    """
    store = require_store()
    try:
        results = store.delete(paths)
    except TrashError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_results(results, "Trashed")
    if len(results) > 1:
        print_results_summary(results)

    exit_on_failures(results)
