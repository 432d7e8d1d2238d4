"""Unit tests for trash action results."""

from tman.core.errors import DestinationOccupiedError, ErrorKind
from tman.models.item import ItemKind, TrashedItem
from tman.models.result import TrashActionResult

ITEM = TrashedItem(
    origin_path="/tmp/a.txt",
    version_id=2,
    storage_path="%2Ftmp%2Fa.txt/2",
    kind=ItemKind.FILE,
    trashed_at="2026-01-26T14:30:00+00:00",
)


class TestTrashActionResult:
    """Tests for TrashActionResult model."""

    def test_ok(self) -> None:
        result = TrashActionResult.ok("/tmp/a.txt", item=ITEM, target="/tmp/b.txt")

        assert result.success
        assert not result.failed
        assert result.error is None
        assert result.error_kind is None

    def test_from_error(self) -> None:
        """from_error copies message and kind of the exception."""
        error = DestinationOccupiedError("Restore target already exists: /tmp/a.txt")

        result = TrashActionResult.from_error("/tmp/a.txt", error, item=ITEM)

        assert result.failed
        assert result.item == ITEM
        assert result.error == "Restore target already exists: /tmp/a.txt"
        assert result.error_kind == ErrorKind.DESTINATION_OCCUPIED

    def test_to_dict_success(self) -> None:
        result = TrashActionResult.ok("/tmp/a.txt", item=ITEM, target="/tmp/b.txt")

        assert result.to_dict() == {
            "path": "/tmp/a.txt",
            "success": True,
            "version_id": 2,
            "kind": "file",
            "target": "/tmp/b.txt",
        }

    def test_to_dict_failure(self) -> None:
        result = TrashActionResult.from_error("/tmp/a.txt", DestinationOccupiedError("taken"))

        data = result.to_dict()

        assert data["success"] is False
        assert data["error"] == "taken"
        assert data["error_kind"] == "destination_occupied"
        assert "version_id" not in data
