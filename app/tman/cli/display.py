"""Shared Rich display functions for trash results and listings.

Renders the structured results of the trash store. Glyphs and colors
follow the display settings applied to the shared consoles.
"""

from datetime import datetime

import typer
from rich.markup import escape

from tman.core.query import ListingEntry
from tman.models.item import TrashedItem
from tman.models.result import TrashActionResult
from tman.utils.formatting import console, err_console, glyph, print_success


def format_timestamp(iso_timestamp: str) -> str:
    """Format ISO timestamp for display.

    Args:
        iso_timestamp: ISO format timestamp string.

    Returns:
        Formatted timestamp string (YYYY-MM-DD HH:MM:SS), or the input
        unchanged if it cannot be parsed.
    """
    try:
        dt = datetime.fromisoformat(iso_timestamp.replace("Z", "+00:00"))
    except ValueError:
        return iso_timestamp
    return dt.strftime("%Y-%m-%d %H:%M:%S")


def format_version(item: TrashedItem) -> str:
    """Format one revision as "v<id>  <timestamp>  (<kind>)" with markup."""
    return (
        f"[version]v{item.version_id}[/version]  "
        f"[muted]{format_timestamp(item.trashed_at)}  ({item.kind.value})[/muted]"
    )


def print_results(results: list[TrashActionResult], verb: str) -> None:
    """Print one line per result.

    Successful results go to stdout, failures to stderr.

    Args:
        results: Results returned by a trash operation.
        verb: Past-tense verb describing the operation (e.g. "Trashed").
    """
    for result in results:
        path = escape(result.path)
        if result.success:
            line = f"[success]{glyph('ok')}[/success] {verb} {path}"
            if result.item is not None:
                line += f" [version](v{result.item.version_id})[/version]"
            if result.target is not None and result.target != result.path:
                line += f" {glyph('version')} {escape(result.target)}"
            console.print(line)
        else:
            kind = result.error_kind.value if result.error_kind else "error"
            err_console.print(
                f"[error]{glyph('fail')}[/error] {path}: "
                f"{escape(result.error or 'Unknown error')} [muted]({kind})[/muted]"
            )


def print_results_summary(results: list[TrashActionResult], noun: str = "item") -> None:
    """Print a summary of results.

    Shows a success message when all items succeed, or a count of
    succeeded/failed items when there are failures.

    Args:
        results: Results returned by a trash operation.
        noun: What the results count (e.g. "item", "version").
    """
    success_count = sum(1 for r in results if r.success)
    fail_count = sum(1 for r in results if r.failed)

    if fail_count == 0:
        print_success(f"All {success_count} {noun}(s) processed successfully.")
    else:
        console.print(
            f"\n[success]{success_count} succeeded[/success], [error]{fail_count} failed[/error]"
        )


def print_listing(entries: list[ListingEntry], pattern: str | None = None) -> None:
    """Print trashed groups with their version history.

    Each group shows its name and origin, followed by its versions
    newest first.

    Args:
        entries: Listing entries from the query engine.
        pattern: Pattern the listing was filtered with, for the header.
    """
    if pattern:
        console.print(f"Showing results for '{escape(pattern)}' in trash.")
    else:
        console.print("Showing results in trash.")

    if not entries:
        if pattern:
            console.print(f"No results for '{escape(pattern)}'.")
        else:
            console.print("Your trash is empty!")
        return

    for entry in entries:
        console.print(
            f"  {glyph('bullet')} [name]{escape(entry.name)}[/name] "
            f"{glyph('from')} [origin]{escape(entry.origin_path)}[/origin]"
        )
        for item in reversed(entry.items):
            console.print(f"    {glyph('version')} {format_version(item)}")


def print_simple_listing(entries: list[ListingEntry]) -> None:
    """Print one line per group: origin path and latest version id.

    Designed for scripting; no header and no styling.

    Args:
        entries: Listing entries from the query engine.
    """
    for entry in entries:
        typer.echo(f"{entry.origin_path}\t{entry.latest.version_id}")
