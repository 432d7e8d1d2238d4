"""Settings command for viewing and changing display preferences."""

from typing import Annotated

import typer
from rich.table import Table

from tman.core.paths import get_settings_path
from tman.core.settings import SettingsError, load_settings, save_settings
from tman.utils.formatting import apply_settings, console, print_error, print_success

app = typer.Typer(
    name="settings",
    help="Show or change display settings.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def settings(
    ctx: typer.Context,
    unicode: Annotated[
        bool | None,
        typer.Option(
            "--unicode/--no-unicode",
            help="Use unicode glyphs in output.",
            show_default=False,
        ),
    ] = None,
    color: Annotated[
        bool | None,
        typer.Option(
            "--color/--no-color",
            help="Use colors in output.",
            show_default=False,
        ),
    ] = None,
) -> None:
    """Show or change display settings.

    Without options the current settings are shown.

    Examples:
        tman settings                     # Show settings
        tman settings --unicode --color   # Enable glyphs and colors
    """
    if ctx.invoked_subcommand is not None:
        return

    path = get_settings_path()

    try:
        current = load_settings(path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    updates: dict[str, bool] = {}
    if unicode is not None:
        updates["use_unicode"] = unicode
    if color is not None:
        updates["use_colors"] = color

    if updates:
        current = current.model_copy(update=updates)
        try:
            save_settings(current, path)
        except SettingsError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
        apply_settings(current)
        print_success(f"Settings saved to {path}")

    table = Table(title="Display Settings", show_header=True)
    table.add_column("Setting", style="bold")
    table.add_column("Value")
    table.add_row("use_unicode", str(current.use_unicode).lower())
    table.add_row("use_colors", str(current.use_colors).lower())
    console.print(table)
