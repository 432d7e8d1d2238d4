"""Empty command for permanently deleting the trash contents."""

from typing import Annotated

import typer

from tman.cli.display import print_results, print_results_summary
from tman.cli.types import exit_on_failures, require_store
from tman.core.errors import TrashError
from tman.utils.formatting import print_error, print_info

app = typer.Typer(
    name="empty",
    help="Permanently delete everything in the trash.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def empty(
    ctx: typer.Context,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip confirmation prompt.",
        ),
    ] = False,
) -> None:
    """Permanently delete everything in the trash.

    This cannot be undone.

    Examples:
        tman empty        # Empty with confirmation
        tman empty -y     # Skip confirmation
    """
    if ctx.invoked_subcommand is not None:
        return

    store = require_store()

    count = len(store.ledger)
    if count == 0:
        print_info("Your trash is already empty.")
        return

    if not yes:
        confirmed = typer.confirm(
            f"Permanently delete {count} trashed version(s)?",
            default=False,
        )
        if not confirmed:
            print_info("Aborted.")
            raise typer.Exit(code=0)

    try:
        results = store.empty()
    except TrashError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_results(results, "Purged")
    print_results_summary(results, noun="version")
    exit_on_failures(results)
