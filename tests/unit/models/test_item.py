"""Unit tests for trashed item models.

Tests for ItemKind, TrashedItem and VersionGroup.
"""

from pathlib import Path

import pytest
from tman.models.item import ItemKind, TrashedItem, VersionGroup


def make_item(version_id: int, origin: str = "/tmp/a.txt") -> TrashedItem:
    return TrashedItem(
        origin_path=origin,
        version_id=version_id,
        storage_path=f"%2Ftmp%2Fa.txt/{version_id}",
        kind=ItemKind.FILE,
        trashed_at="2026-01-26T14:30:00+00:00",
    )


class TestItemKind:
    """Tests for ItemKind.of classification."""

    def test_file(self, tmp_path: Path) -> None:
        path = tmp_path / "f"
        path.write_text("")
        assert ItemKind.of(path) == ItemKind.FILE

    def test_directory(self, tmp_path: Path) -> None:
        assert ItemKind.of(tmp_path) == ItemKind.DIRECTORY

    def test_symlink_to_directory(self, tmp_path: Path) -> None:
        """A link to a directory is classified as a symlink."""
        link = tmp_path / "link"
        link.symlink_to(tmp_path)
        assert ItemKind.of(link) == ItemKind.SYMLINK


class TestTrashedItem:
    """Tests for TrashedItem model."""

    def test_name(self) -> None:
        """name is the basename of the origin path."""
        assert make_item(1).name == "a.txt"

    def test_root_name(self) -> None:
        """The root directory keeps its path as name."""
        item = TrashedItem("/", 1, "%2F/1", ItemKind.DIRECTORY, "t")
        assert item.name == "/"

    def test_is_frozen(self) -> None:
        """TrashedItem is immutable."""
        item = make_item(1)
        with pytest.raises(AttributeError):
            item.version_id = 2  # type: ignore[misc]

    @pytest.mark.parametrize(
        ("origin", "version", "storage"),
        [("", 1, "x/1"), ("/a", 0, "x/0"), ("/a", 1, "")],
    )
    def test_validation(self, origin: str, version: int, storage: str) -> None:
        """Invalid fields raise ValueError."""
        with pytest.raises(ValueError):
            TrashedItem(origin, version, storage, ItemKind.FILE, "t")

    def test_to_dict_omits_origin(self) -> None:
        """to_dict leaves the origin to the enclosing group."""
        data = make_item(3).to_dict()

        assert data == {
            "version_id": 3,
            "storage_path": "%2Ftmp%2Fa.txt/3",
            "kind": "file",
            "trashed_at": "2026-01-26T14:30:00+00:00",
        }

    def test_from_dict(self) -> None:
        """from_dict restores an item with the given origin."""
        item = TrashedItem.from_dict("/tmp/a.txt", make_item(2).to_dict())

        assert item == make_item(2)

    def test_from_dict_rejects_string_version(self) -> None:
        """from_dict refuses non-integer version ids."""
        data = make_item(2).to_dict() | {"version_id": "2"}

        with pytest.raises(ValueError, match="integer"):
            TrashedItem.from_dict("/tmp/a.txt", data)


class TestVersionGroup:
    """Tests for VersionGroup model."""

    def test_empty_group(self) -> None:
        """A new group is empty and starts at version 1."""
        group = VersionGroup("/tmp/a.txt")

        assert group.is_empty
        assert group.latest is None
        assert group.next_version == 1

    def test_latest_and_next(self) -> None:
        """latest is the last item; next_version follows the high-water mark."""
        group = VersionGroup("/tmp/a.txt", (make_item(1), make_item(3)), last_version=4)

        assert group.latest == make_item(3)
        assert group.next_version == 5

    def test_get(self) -> None:
        group = VersionGroup("/tmp/a.txt", (make_item(1), make_item(2)), last_version=2)

        assert group.get(2) == make_item(2)
        assert group.get(5) is None

    def test_rejects_unordered_items(self) -> None:
        """Items must be strictly increasing by version."""
        with pytest.raises(ValueError, match="strictly increasing"):
            VersionGroup("/tmp/a.txt", (make_item(2), make_item(1)), last_version=2)

    def test_rejects_foreign_items(self) -> None:
        """Items must share the group's origin path."""
        with pytest.raises(ValueError, match="does not belong"):
            VersionGroup("/tmp/b.txt", (make_item(1),), last_version=1)

    def test_rejects_low_high_water_mark(self) -> None:
        """last_version cannot be below the newest item."""
        with pytest.raises(ValueError, match="high-water mark"):
            VersionGroup("/tmp/a.txt", (make_item(3),), last_version=2)

    def test_dict_round_trip(self) -> None:
        """from_dict(to_dict()) yields an equal group."""
        group = VersionGroup("/tmp/a.txt", (make_item(1), make_item(2)), last_version=5)

        assert VersionGroup.from_dict(group.to_dict()) == group

    def test_from_dict_rejects_bad_last_version(self) -> None:
        with pytest.raises(ValueError, match="last_version"):
            VersionGroup.from_dict({"origin_path": "/a", "last_version": "1", "items": []})
