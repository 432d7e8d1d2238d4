"""Unit tests for display functions.

Tests for the Rich rendering of trash results and listings.
"""

import pytest
from tman.cli.display import (
    format_timestamp,
    print_listing,
    print_results,
    print_results_summary,
)
from tman.core.errors import ItemNotFoundError
from tman.core.query import ListingEntry
from tman.models.item import ItemKind, TrashedItem
from tman.models.result import TrashActionResult


def make_item(version_id: int) -> TrashedItem:
    return TrashedItem(
        origin_path="/home/user/notes.txt",
        version_id=version_id,
        storage_path=f"%2Fhome%2Fuser%2Fnotes.txt/{version_id}",
        kind=ItemKind.FILE,
        trashed_at=f"2026-01-0{version_id}T09:15:00+00:00",
    )


class TestFormatTimestamp:
    """Tests for format_timestamp function."""

    def test_iso_timestamp(self) -> None:
        assert format_timestamp("2026-01-26T14:30:45+00:00") == "2026-01-26 14:30:45"

    def test_zulu_suffix(self) -> None:
        assert format_timestamp("2026-01-26T14:30:45Z") == "2026-01-26 14:30:45"

    def test_invalid_returned_unchanged(self) -> None:
        assert format_timestamp("yesterday") == "yesterday"


class TestPrintResults:
    """Tests for print_results and print_results_summary."""

    def test_success_and_failure(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Successes go to stdout, failures to stderr."""
        results = [
            TrashActionResult.ok("/home/user/notes.txt", item=make_item(1)),
            TrashActionResult.from_error(
                "/home/user/gone.txt", ItemNotFoundError("Path does not exist")
            ),
        ]

        print_results(results, "Trashed")

        captured = capsys.readouterr()
        assert captured.out.strip() == "OK Trashed /home/user/notes.txt (v1)"
        assert "FAIL /home/user/gone.txt: Path does not exist (not_found)" in captured.err

    def test_restore_target_shown(self, capsys: pytest.CaptureFixture[str]) -> None:
        """A target different from the path is shown after an arrow."""
        result = TrashActionResult.ok(
            "/home/user/notes.txt", item=make_item(2), target="/tmp/notes.txt"
        )

        print_results([result], "Restored")

        assert "Restored /home/user/notes.txt (v2) -> /tmp/notes.txt" in capsys.readouterr().out

    def test_summary_all_ok(self, capsys: pytest.CaptureFixture[str]) -> None:
        results = [TrashActionResult.ok("/a"), TrashActionResult.ok("/b")]

        print_results_summary(results, noun="version")

        assert "All 2 version(s) processed successfully." in capsys.readouterr().out

    def test_summary_with_failures(self, capsys: pytest.CaptureFixture[str]) -> None:
        results = [
            TrashActionResult.ok("/a"),
            TrashActionResult.from_error("/b", ItemNotFoundError("missing")),
        ]

        print_results_summary(results)

        assert "1 succeeded, 1 failed" in capsys.readouterr().out


class TestPrintListing:
    """Tests for print_listing function."""

    def test_versions_newest_first(self, capsys: pytest.CaptureFixture[str]) -> None:
        entry = ListingEntry("/home/user/notes.txt", (make_item(1), make_item(2)))

        print_listing([entry])

        lines = capsys.readouterr().out.splitlines()
        assert lines == [
            "Showing results in trash.",
            "  * notes.txt <- /home/user/notes.txt",
            "    -> v2  2026-01-02 09:15:00  (file)",
            "    -> v1  2026-01-01 09:15:00  (file)",
        ]

    def test_markup_in_paths_is_escaped(self, capsys: pytest.CaptureFixture[str]) -> None:
        item = TrashedItem("/data/[red]x", 1, "%2Fdata%2F%5Bred%5Dx/1", ItemKind.FILE, "t")

        print_listing([ListingEntry(item.origin_path, (item,))])

        assert "[red]x <- /data/[red]x" in capsys.readouterr().out
