"""Per-item results of trash operations.

Mutating trash operations never raise for a single item; they return
one TrashActionResult per item so a batch can partially succeed.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from tman.core.errors import ErrorKind, TrashError
from tman.models.item import TrashedItem


@dataclass(frozen=True, slots=True)
class TrashActionResult:
    """Result of a single trash operation on one item.

    Attributes:
        path: Path the operation was requested for.
        success: Whether the operation completed successfully.
        item: Trashed revision that was created, restored, or purged.
        target: Destination of a restore, None otherwise.
        error: Error message if the operation failed, None otherwise.
        error_kind: Failure category if the operation failed, None otherwise.
    """

    path: str
    success: bool
    item: TrashedItem | None = None
    target: str | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None

    @property
    def failed(self) -> bool:
        """Check if the operation failed."""
        return not self.success

    @classmethod
    def ok(
        cls,
        path: str,
        item: TrashedItem | None = None,
        target: str | None = None,
    ) -> TrashActionResult:
        """Create a successful result."""
        return cls(path=path, success=True, item=item, target=target)

    @classmethod
    def from_error(
        cls,
        path: str,
        error: TrashError,
        item: TrashedItem | None = None,
    ) -> TrashActionResult:
        """Create a failed result from a trash exception.

        Args:
            path: Path the operation was requested for.
            error: Exception describing the failure.
            item: Revision involved in the failure, if known.

        Returns:
            Failed TrashActionResult carrying the error kind and message.
        """
        return cls(
            path=path,
            success=False,
            item=item,
            error=str(error),
            error_kind=error.kind,
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON output.

        Returns:
            Dictionary representation of the result.
        """
        result: dict[str, Any] = {"path": self.path, "success": self.success}
        if self.item is not None:
            result["version_id"] = self.item.version_id
            result["kind"] = self.item.kind.value
        if self.target is not None:
            result["target"] = self.target
        if self.error is not None:
            result["error"] = self.error
        if self.error_kind is not None:
            result["error_kind"] = self.error_kind.value
        return result
