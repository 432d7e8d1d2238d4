"""Unit tests for list command.

Tests for the CLI list command implementation.
"""

import json
from pathlib import Path

import pytest
from tman.cli.main import app
from tman.core.store import TrashStore
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture
def populated(workspace: Path) -> Path:
    """Trash holding two versions of app.log and one of app.conf."""
    store = TrashStore()
    for name in ("app.log", "app.conf", "app.log"):
        path = workspace / name
        path.write_text(name)
        store.delete([str(path)])
    return workspace


class TestListCommand:
    """Tests for the list command."""

    def test_empty_trash(self) -> None:
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "Showing results in trash." in result.output
        assert "Your trash is empty!" in result.output

    def test_lists_versions(self, populated: Path) -> None:
        """list shows every group with all its versions."""
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "Showing results in trash." in result.output
        assert f"* app.log <- {populated / 'app.log'}" in result.output
        log_section = result.output.split("app.log <-", 1)[1]
        assert log_section.index("-> v2") < log_section.index("-> v1")

    def test_pattern(self, populated: Path) -> None:
        """--pattern filters on the origin path."""
        result = runner.invoke(app, ["list", "-p", r"\.conf$"])

        assert result.exit_code == 0
        assert "Showing results for '\\.conf$' in trash." in result.output
        assert "app.conf" in result.output
        assert "app.log" not in result.output

    def test_pattern_without_match(self, populated: Path) -> None:
        result = runner.invoke(app, ["list", "--pattern", "zzz"])

        assert result.exit_code == 0
        assert "No results for 'zzz'." in result.output

    def test_invalid_pattern(self, populated: Path) -> None:
        """An invalid regular expression is reported with exit code 1."""
        result = runner.invoke(app, ["list", "-p", "("])

        assert result.exit_code == 1
        assert "Invalid pattern" in result.output

    def test_simple(self, populated: Path) -> None:
        """--simple prints origin and latest version per line."""
        result = runner.invoke(app, ["list", "--simple"])

        assert result.exit_code == 0
        assert result.output.splitlines() == [
            f"{populated / 'app.conf'}\t1",
            f"{populated / 'app.log'}\t2",
        ]

    def test_json(self, populated: Path) -> None:
        """--json prints machine-readable entries."""
        result = runner.invoke(app, ["list", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.output)
        assert [entry["name"] for entry in data] == ["app.conf", "app.log"]
        assert [v["version_id"] for v in data[1]["versions"]] == [1, 2]

    def test_unicode_glyphs(self, populated: Path, isolated_xdg: Path) -> None:
        """Unicode glyphs are used when enabled in settings."""
        settings_path = isolated_xdg / "config" / "tman" / "settings.toml"
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text("use_unicode = true\n")

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "• app.log ←" in result.output
        assert "→ v1" in result.output

    def test_broken_settings_fall_back(self, populated: Path, isolated_xdg: Path) -> None:
        """Unreadable settings produce a warning and default output."""
        settings_path = isolated_xdg / "config" / "tman" / "settings.toml"
        settings_path.parent.mkdir(parents=True)
        settings_path.write_text("use_unicode = = true\n")

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "Using default settings." in result.output
        assert "* app.log <-" in result.output
