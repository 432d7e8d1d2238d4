"""Trashed item and version group models.

This module defines the data structures recorded in the ledger: one
TrashedItem per trashed revision, grouped by origin path into
VersionGroups.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any


class ItemKind(str, Enum):
    """Type of a trashed filesystem entry.

    Attributes:
        FILE: Regular file (or anything that is neither a directory nor a link).
        DIRECTORY: Directory tree.
        SYMLINK: Symbolic link, trashed as the link itself.
    """

    FILE = "file"
    DIRECTORY = "directory"
    SYMLINK = "symlink"

    @classmethod
    def of(cls, path: Path) -> ItemKind:
        """Determine the kind of an existing path without following links.

        Args:
            path: Path to inspect.

        Returns:
            The ItemKind for the path.
        """
        if path.is_symlink():
            return cls.SYMLINK
        if path.is_dir():
            return cls.DIRECTORY
        return cls.FILE


@dataclass(frozen=True, slots=True)
class TrashedItem:
    """One historical revision of one trashed path.

    Attributes:
        origin_path: Absolute path the item occupied when it was trashed.
        version_id: Version number, unique within the origin's group.
        storage_path: Location relative to the trash data directory.
        kind: Type of the trashed entry.
        trashed_at: Deletion time in ISO 8601 format with timezone.
    """

    origin_path: str
    version_id: int
    storage_path: str
    kind: ItemKind
    trashed_at: str

    def __post_init__(self) -> None:
        """Validate item data after initialization."""
        if not self.origin_path:
            msg = "Origin path cannot be empty"
            raise ValueError(msg)
        if self.version_id < 1:
            msg = f"Version id must be positive, got {self.version_id}"
            raise ValueError(msg)
        if not self.storage_path:
            msg = "Storage path cannot be empty"
            raise ValueError(msg)

    @property
    def name(self) -> str:
        """Basename of the origin path."""
        return os.path.basename(self.origin_path.rstrip(os.sep)) or self.origin_path

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage.

        The origin path is implied by the enclosing group and omitted.

        Returns:
            Dictionary representation of the item.
        """
        return {
            "version_id": self.version_id,
            "storage_path": self.storage_path,
            "kind": self.kind.value,
            "trashed_at": self.trashed_at,
        }

    @classmethod
    def from_dict(cls, origin_path: str, data: dict[str, Any]) -> TrashedItem:
        """Deserialize from dictionary.

        Args:
            origin_path: Origin path of the enclosing group.
            data: Dictionary containing item data.

        Returns:
            TrashedItem instance.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If kind or version data is invalid.
        """
        version_id = data["version_id"]
        if isinstance(version_id, bool) or not isinstance(version_id, int):
            msg = f"Version id must be an integer, got {version_id!r}"
            raise ValueError(msg)
        return cls(
            origin_path=origin_path,
            version_id=version_id,
            storage_path=str(data["storage_path"]),
            kind=ItemKind(data["kind"]),
            trashed_at=str(data["trashed_at"]),
        )


@dataclass(frozen=True, slots=True)
class VersionGroup:
    """All trashed revisions sharing one origin path.

    Items are ordered by version_id ascending. last_version is the
    highest version ever allocated for the origin and survives the
    removal of every item, so version ids are never handed out twice.

    Attributes:
        origin_path: Absolute origin path shared by all items.
        items: Trashed revisions, oldest first.
        last_version: High-water mark of allocated version ids.
    """

    origin_path: str
    items: tuple[TrashedItem, ...] = ()
    last_version: int = 0

    def __post_init__(self) -> None:
        """Validate ordering and high-water mark."""
        previous = 0
        for item in self.items:
            if item.origin_path != self.origin_path:
                msg = f"Item {item.origin_path} does not belong to group {self.origin_path}"
                raise ValueError(msg)
            if item.version_id <= previous:
                msg = f"Versions of {self.origin_path} must be strictly increasing"
                raise ValueError(msg)
            previous = item.version_id
        if previous > self.last_version:
            msg = f"Version {previous} exceeds high-water mark {self.last_version}"
            raise ValueError(msg)

    @property
    def name(self) -> str:
        """Basename of the origin path."""
        return os.path.basename(self.origin_path.rstrip(os.sep)) or self.origin_path

    @property
    def is_empty(self) -> bool:
        """Check whether no revision is currently trashed."""
        return not self.items

    @property
    def latest(self) -> TrashedItem | None:
        """Newest revision, or None for an empty group."""
        return self.items[-1] if self.items else None

    @property
    def next_version(self) -> int:
        """Version id the next trashed revision will receive."""
        return self.last_version + 1

    def get(self, version_id: int) -> TrashedItem | None:
        """Find the revision with the given version id.

        Args:
            version_id: Version to look up.

        Returns:
            The matching TrashedItem, or None.
        """
        for item in self.items:
            if item.version_id == version_id:
                return item
        return None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON storage.

        Returns:
            Dictionary representation of the group.
        """
        return {
            "origin_path": self.origin_path,
            "last_version": self.last_version,
            "items": [item.to_dict() for item in self.items],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> VersionGroup:
        """Deserialize from dictionary.

        Args:
            data: Dictionary containing group data.

        Returns:
            VersionGroup instance.

        Raises:
            KeyError: If required fields are missing.
            ValueError: If the group violates ordering invariants.
        """
        origin_path = data["origin_path"]
        if not isinstance(origin_path, str):
            msg = f"Origin path must be a string, got {origin_path!r}"
            raise ValueError(msg)
        last_version = data["last_version"]
        if isinstance(last_version, bool) or not isinstance(last_version, int):
            msg = f"last_version must be an integer, got {last_version!r}"
            raise ValueError(msg)
        items = tuple(TrashedItem.from_dict(origin_path, item) for item in data["items"])
        return cls(origin_path=origin_path, items=items, last_version=last_version)
