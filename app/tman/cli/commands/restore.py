"""Restore command for moving trashed versions back.

This module provides the `tman restore` command for restoring the
latest, a specific, or every trashed version of a path.
"""

from typing import Annotated

import typer

from tman.cli.display import print_results
from tman.cli.types import exit_on_failures, parse_selector, require_store
from tman.core.errors import TrashError
from tman.models.selector import SelectorKind
from tman.utils.formatting import print_error, print_info


def restore(
    path: Annotated[
        str,
        typer.Argument(
            help="Original path (or bare file name) of the trashed item.",
            show_default=False,
        ),
    ],
    origin: Annotated[
        str | None,
        typer.Option(
            "--origin",
            "-o",
            help="Restore to this path instead of the original location.",
        ),
    ] = None,
    version: Annotated[
        str,
        typer.Option(
            "--version",
            "-v",
            metavar="latest|all|N",
            help="Version to restore: latest, all, or a version number.",
        ),
    ] = "latest",
) -> None:
    """Restore a trashed item.

    Restores the newest version by default. Nothing is overwritten: if
    the target path exists, the restore is refused.

    With --version all, every version is restored oldest first onto the
    same target, each replacing the previous one; only the newest version
    is left on disk and the older ones are discarded.

    Examples:
        tman restore ~/notes.txt
        tman restore notes.txt -v 2
        tman restore notes.txt -o ~/notes-old.txt -v 1
    """
    selector = parse_selector(version)
    store = require_store()
    try:
        results = store.restore(path, selector=selector, target=origin)
    except TrashError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_results(results, "Restored")

    if selector.kind == SelectorKind.ALL and len(results) > 1 and all(r.success for r in results):
        print_info(f"{len(results) - 1} older version(s) were superseded by the newest one.")

    exit_on_failures(results)
