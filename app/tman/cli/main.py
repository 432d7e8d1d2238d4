"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer

from tman import __version__
from tman.cli.commands import delete, empty, listing, restore, settings
from tman.core.settings import SettingsError, load_settings
from tman.utils.formatting import apply_settings, print_warning

# Create main Typer app
app = typer.Typer(
    name="tman",
    help="Safely manage your trash.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"tman version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
) -> None:
    """tman - move files to a versioned trash instead of deleting them.

    Every trashed path keeps its history, so any earlier version can be
    restored to its original location.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        display = load_settings()
    except SettingsError as e:
        print_warning(f"{e}. Using default settings.")
    else:
        apply_settings(display)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


# Register commands
# delete and restore take positional arguments, so they are plain commands:
# a group callback stops parsing options at the first positional argument
app.command(name="delete")(delete.delete)
app.command(name="restore")(restore.restore)
app.add_typer(listing.app, name="list")
app.add_typer(empty.app, name="empty")
app.add_typer(settings.app, name="settings")


if __name__ == "__main__":
    app()
