"""Version ledger persistence and version resolution.

This module provides the Ledger class that records every trashed
revision, grouped by origin path, in a single JSON document.
"""

import json
import logging
import os
import re
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path, PurePath
from tempfile import NamedTemporaryFile
from typing import Any

from tman.core.encoder import decode, encode
from tman.core.errors import (
    EncodingError,
    ItemNotFoundError,
    LedgerCorruptError,
    TrashFilesystemError,
)
from tman.models.item import ItemKind, TrashedItem, VersionGroup
from tman.models.selector import SelectorKind, VersionSelector

logger = logging.getLogger(__name__)

LEDGER_FORMAT = 1


class Ledger:
    """Ordered record of trashed revisions, keyed by origin path.

    The ledger is loaded once on construction and written back to disk
    after every mutation, before the mutating call returns.

    Document layout:

        {"format": 1, "groups": [{"origin_path": ..., "last_version": ...,
                                  "items": [{"version_id": ..., ...}]}]}

    Attributes:
        path: Location of the ledger document.
    """

    def __init__(self, path: Path) -> None:
        """Load the ledger from path.

        Args:
            path: Ledger file. A missing file is an empty ledger.

        Raises:
            LedgerCorruptError: If the document cannot be parsed or validated.
            TrashFilesystemError: If the file exists but cannot be read.
        """
        self._path = path
        self._groups: dict[str, VersionGroup] = self._load()

    @property
    def path(self) -> Path:
        """Path to the ledger document."""
        return self._path

    # =========================================================================
    # Mutations
    # =========================================================================

    def record(
        self,
        origin_path: str,
        kind: ItemKind,
        trashed_at: str | None = None,
    ) -> TrashedItem:
        """Allocate the next version of origin_path and persist it.

        Args:
            origin_path: Absolute path being trashed.
            kind: Type of the entry being trashed.
            trashed_at: ISO 8601 capture time. Defaults to now (UTC).

        Returns:
            The newly recorded TrashedItem.

        Raises:
            EncodingError: If origin_path cannot be encoded.
            TrashFilesystemError: If the ledger cannot be written.
        """
        group = self._groups.get(origin_path) or VersionGroup(origin_path=origin_path)
        version_id = group.next_version

        item = TrashedItem(
            origin_path=origin_path,
            version_id=version_id,
            storage_path=encode(origin_path, version_id),
            kind=kind,
            trashed_at=trashed_at or datetime.now(UTC).isoformat(),
        )

        previous = self._groups.get(origin_path)
        self._groups[origin_path] = replace(
            group, items=(*group.items, item), last_version=version_id
        )
        try:
            self.save()
        except TrashFilesystemError:
            self._restore_group(origin_path, previous)
            raise

        logger.debug("Recorded %s version %d", origin_path, version_id)
        return item

    def remove(self, item: TrashedItem) -> None:
        """Delete the ledger entry for item and persist.

        Storage is not touched. The group's high-water mark is kept.

        Args:
            item: Revision to forget.

        Raises:
            ItemNotFoundError: If the item is not in the ledger.
            TrashFilesystemError: If the ledger cannot be written.
        """
        group = self._groups.get(item.origin_path)
        if group is None or group.get(item.version_id) is None:
            msg = f"Version {item.version_id} of {item.origin_path} is not in the trash"
            raise ItemNotFoundError(msg)

        remaining = tuple(i for i in group.items if i.version_id != item.version_id)
        self._groups[item.origin_path] = replace(group, items=remaining)
        try:
            self.save()
        except TrashFilesystemError:
            self._groups[item.origin_path] = group
            raise

        logger.debug("Removed %s version %d", item.origin_path, item.version_id)

    def clear(self) -> None:
        """Drop every trashed item and persist, keeping version counters.

        Raises:
            TrashFilesystemError: If the ledger cannot be written.
        """
        previous = dict(self._groups)
        self._groups = {
            origin: replace(group, items=()) for origin, group in self._groups.items()
        }
        try:
            self.save()
        except TrashFilesystemError:
            self._groups = previous
            raise

    def _restore_group(self, origin_path: str, group: VersionGroup | None) -> None:
        if group is None:
            self._groups.pop(origin_path, None)
        else:
            self._groups[origin_path] = group

    # =========================================================================
    # Queries
    # =========================================================================

    def resolve(self, origin_path: str, selector: VersionSelector) -> list[TrashedItem]:
        """Select revisions of origin_path.

        Args:
            origin_path: Absolute origin path.
            selector: Which revisions to return.

        Returns:
            Matching revisions, oldest first. LATEST and EXACT return
            exactly one item.

        Raises:
            ItemNotFoundError: If the group is absent or empty, or the
                requested version does not exist.
        """
        group = self._groups.get(origin_path)
        if group is None or group.is_empty:
            msg = f"Nothing trashed from {origin_path}"
            raise ItemNotFoundError(msg)

        if selector.kind == SelectorKind.ALL:
            return list(group.items)

        if selector.kind == SelectorKind.LATEST:
            return [group.items[-1]]

        item = group.get(selector.version) if selector.version is not None else None
        if item is None:
            available = ", ".join(str(i.version_id) for i in group.items)
            msg = (
                f"Version {selector.version} of {origin_path} is not in the trash "
                f"(available: {available})"
            )
            raise ItemNotFoundError(msg)
        return [item]

    def query(self, pattern: re.Pattern[str] | None = None) -> list[VersionGroup]:
        """Return non-empty groups whose origin path matches pattern.

        Args:
            pattern: Compiled expression applied with search semantics.
                None matches every group.

        Returns:
            Matching groups sorted by origin path.
        """
        return [
            group
            for group in self.groups()
            if pattern is None or pattern.search(group.origin_path)
        ]

    def groups(self) -> list[VersionGroup]:
        """Return all non-empty groups sorted by origin path."""
        return [
            self._groups[origin]
            for origin in sorted(self._groups)
            if not self._groups[origin].is_empty
        ]

    def items(self) -> list[TrashedItem]:
        """Return every trashed revision, grouped and oldest first."""
        return [item for group in self.groups() for item in group.items]

    def get(self, origin_path: str) -> VersionGroup | None:
        """Return the non-empty group for origin_path, if any."""
        group = self._groups.get(origin_path)
        if group is None or group.is_empty:
            return None
        return group

    def find_by_name(self, name: str) -> list[VersionGroup]:
        """Return non-empty groups whose origin basename equals name."""
        return [group for group in self.groups() if group.name == name]

    def __len__(self) -> int:
        return sum(len(group.items) for group in self._groups.values())

    # =========================================================================
    # Persistence
    # =========================================================================

    def save(self) -> None:
        """Write the ledger to disk atomically and durably.

        The document is written to a temporary file in the same directory,
        flushed and fsynced, then moved over the ledger with os.replace(). The directory is
        synced afterwards.

        Raises:
            TrashFilesystemError: If the file cannot be written.
        """
        data = self._to_dict()

        tmp_path: Path | None = None
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self._path.parent,
                delete=False,
                suffix=".tmp",
            ) as f:
                tmp_path = Path(f.name)
                json.dump(data, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self._path)
        except OSError as e:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()
            msg = f"Failed to write ledger {self._path}: {e}"
            raise TrashFilesystemError(msg) from e

        self._sync_directory()

    def _sync_directory(self) -> None:
        """Flush the directory entry so the rename survives a crash.

        The new document is already in place at this point, so a failure
        is logged rather than raised.
        """
        try:
            fd = os.open(self._path.parent, os.O_RDONLY)
            try:
                os.fsync(fd)
            finally:
                os.close(fd)
        except OSError as e:
            logger.warning("Could not sync ledger directory %s: %s", self._path.parent, e)

    def _to_dict(self) -> dict[str, Any]:
        return {
            "format": LEDGER_FORMAT,
            "groups": [self._groups[origin].to_dict() for origin in sorted(self._groups)],
        }

    def _load(self) -> dict[str, VersionGroup]:
        """Read and validate the ledger document.

        Returns:
            Groups keyed by origin path.

        Raises:
            LedgerCorruptError: If the document is malformed.
            TrashFilesystemError: If the file cannot be read.
        """
        try:
            text = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except OSError as e:
            msg = f"Failed to read ledger {self._path}: {e}"
            raise TrashFilesystemError(msg) from e

        try:
            data = json.loads(text)
            if data["format"] != LEDGER_FORMAT:
                msg = f"unsupported ledger format {data['format']!r}"
                raise ValueError(msg)
            groups: dict[str, VersionGroup] = {}
            for raw in data["groups"]:
                group = VersionGroup.from_dict(raw)
                if group.origin_path in groups:
                    msg = f"duplicate group for {group.origin_path}"
                    raise ValueError(msg)
                self._verify_storage_paths(group)
                groups[group.origin_path] = group
        except (json.JSONDecodeError, KeyError, TypeError, ValueError, EncodingError) as e:
            msg = f"Ledger {self._path} is corrupt: {e}"
            raise LedgerCorruptError(msg) from e

        logger.debug("Loaded %d group(s) from %s", len(groups), self._path)
        return groups

    @staticmethod
    def _verify_storage_paths(group: VersionGroup) -> None:
        """Check that every storage path decodes back to its own identity."""
        for item in group.items:
            segments = PurePath(item.storage_path).parts
            if len(segments) != 2 or decode(item.storage_path) != (
                item.origin_path,
                item.version_id,
            ):
                msg = (
                    f"storage path {item.storage_path} does not match "
                    f"{item.origin_path} version {item.version_id}"
                )
                raise ValueError(msg)
