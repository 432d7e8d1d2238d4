"""List command for viewing trash contents.

This module provides the `tman list` command for viewing trashed items
and their version history.
"""

import json
from typing import Annotated

import typer

from tman.cli.display import print_listing, print_simple_listing
from tman.cli.types import require_store
from tman.core.errors import TrashError
from tman.utils.formatting import console, print_error

app = typer.Typer(
    name="list",
    help="List items in the trash.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def list_trash(
    ctx: typer.Context,
    pattern: Annotated[
        str | None,
        typer.Option(
            "--pattern",
            "-p",
            help="Regular expression searched in the original paths.",
        ),
    ] = None,
    simple: Annotated[
        bool,
        typer.Option(
            "--simple",
            "-s",
            help="Only show the latest version, one line per item.",
        ),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """List items in the trash.

    Examples:
        tman list                   # Everything, with version history
        tman list -p '\\.log$'       # Only paths ending in .log
        tman list --simple          # Path and latest version per line
        tman list --json            # JSON output for scripting
    """
    if ctx.invoked_subcommand is not None:
        return

    store = require_store()

    try:
        entries = store.list(pattern=pattern, simple=simple)
    except TrashError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if json_output:
        console.print_json(json.dumps([entry.to_dict() for entry in entries]))
    elif simple:
        print_simple_listing(entries)
    else:
        print_listing(entries, pattern=pattern)
