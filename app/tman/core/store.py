"""Trash store orchestrating ledger and storage.

The TrashStore implements delete, restore, list and empty on top of the
Ledger (what is trashed) and the ItemMover (where the bytes are). Every
operation mutates both sides so they never diverge.
"""

from __future__ import annotations

import logging
import os
import uuid
from pathlib import Path

from tman.core.encoder import encode_group
from tman.core.errors import (
    AmbiguousNameError,
    DestinationOccupiedError,
    ItemNotFoundError,
    LedgerCorruptError,
    MoveError,
    ProtectedPathError,
    TrashError,
    TrashFilesystemError,
)
from tman.core.ledger import Ledger
from tman.core.mover import ItemMover
from tman.core.paths import get_data_dir, get_ledger_path, get_trash_dir
from tman.core.query import ListingEntry, list_items
from tman.models.item import ItemKind, TrashedItem
from tman.models.result import TrashActionResult
from tman.models.selector import VersionSelector

logger = logging.getLogger(__name__)


def absolute_path(path: str | Path) -> str:
    """Make a user-supplied path absolute without resolving symlinks.

    Args:
        path: Path as typed by the user, "~" allowed.

    Returns:
        Normalized absolute path string.
    """
    return os.path.abspath(os.path.expanduser(os.fspath(path)))


class TrashStore:
    """Versioned trash backed by a directory and a ledger file.

    Layout:
        <trash_dir>/ledger.json
        <trash_dir>/data/<escaped-origin>/<version_id>

    Single-process access is assumed; no file locking is done.

    Attributes:
        trash_dir: Root of the trash.
        ledger: Version ledger owned by this store.
    """

    def __init__(self, trash_dir: Path | None = None, mover: ItemMover | None = None) -> None:
        """Open the trash, creating its directories if needed.

        Args:
            trash_dir: Trash root. Default: ~/.local/share/tman
            mover: Item mover to use. Default: a new ItemMover.

        Raises:
            LedgerCorruptError: If the ledger cannot be parsed.
            TrashFilesystemError: If the trash cannot be created or read.
        """
        self._trash_dir = absolute_path(trash_dir if trash_dir is not None else get_trash_dir())
        self._data_dir = get_data_dir(Path(self._trash_dir))

        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            msg = f"Cannot create trash directory {self._data_dir}: {e}"
            raise TrashFilesystemError(msg) from e

        self._ledger = Ledger(get_ledger_path(Path(self._trash_dir)))
        self._mover = mover if mover is not None else ItemMover()

    @property
    def trash_dir(self) -> Path:
        """Root directory of the trash."""
        return Path(self._trash_dir)

    @property
    def ledger(self) -> Ledger:
        """Version ledger owned by this store."""
        return self._ledger

    def storage_location(self, item: TrashedItem) -> Path:
        """Absolute location of a trashed revision's content."""
        return self._data_dir / item.storage_path

    # =========================================================================
    # Delete
    # =========================================================================

    def delete(self, paths: list[str]) -> list[TrashActionResult]:
        """Move paths into the trash, each as a new version of its origin.

        Paths are processed in order and independently; a failure for
        one path never affects the others.

        Args:
            paths: Paths to trash. Relative paths are resolved against the
                current directory; symlinks are trashed as links.

        Returns:
            One TrashActionResult per input path, in input order.

        Raises:
            LedgerCorruptError: If a failed move cannot be rolled back.
        """
        return [self._delete_single(path) for path in paths]

    def _delete_single(self, path: str) -> TrashActionResult:
        origin = absolute_path(path)

        try:
            if not os.path.lexists(origin):
                msg = f"Path does not exist: {origin}"
                raise ItemNotFoundError(msg)
            self._check_not_protected(origin)
            item = self._ledger.record(origin, ItemKind.of(Path(origin)))
        except TrashError as e:
            logger.debug("Not trashing %s: %s", origin, e)
            return TrashActionResult.from_error(origin, e)

        try:
            self._mover.relocate(Path(origin), self.storage_location(item))
        except MoveError as e:
            self._rollback(item)
            logger.debug("Failed to trash %s: %s", origin, e)
            return TrashActionResult.from_error(origin, e, item=item)

        logger.info("Trashed %s as version %d", origin, item.version_id)
        return TrashActionResult.ok(origin, item=item)

    def _rollback(self, item: TrashedItem) -> None:
        """Forget a recorded item whose content never reached the trash.

        Raises:
            LedgerCorruptError: If the ledger cannot be updated.
        """
        try:
            self._ledger.remove(item)
        except TrashError as e:
            msg = (
                f"Ledger records {item.origin_path} version {item.version_id} "
                f"but its content is not in the trash: {e}"
            )
            raise LedgerCorruptError(msg) from e
        self._prune_group_dir(item.origin_path)

    def _check_not_protected(self, origin: str) -> None:
        """Refuse to trash the trash itself, anything in it, or its ancestors."""
        common = os.path.commonpath([origin, self._trash_dir])
        if common in (origin, self._trash_dir):
            msg = f"Path overlaps the trash directory {self._trash_dir}: {origin}"
            raise ProtectedPathError(msg)

    # =========================================================================
    # Restore
    # =========================================================================

    def restore(
        self,
        origin_path: str,
        selector: VersionSelector | None = None,
        target: str | None = None,
    ) -> list[TrashActionResult]:
        """Move trashed revisions of origin_path back out of the trash.

        LATEST and EXACT restore one revision. ALL restores every revision
        oldest first onto the same target: each one replaces the previously
        restored one, so only the newest survives on disk and the older
        revisions are discarded.

        A bare file name that matches no origin path is looked up by
        basename among the trashed groups.

        Args:
            origin_path: Origin path (or bare name) of the group.
            selector: Revisions to restore. Default: latest.
            target: Restore destination. Default: the origin path.

        Returns:
            One TrashActionResult per restored revision, or a single
            failed result when nothing could be restored.

        Raises:
            LedgerCorruptError: If content left the trash but the ledger
                could not be updated.
        """
        selector = selector or VersionSelector.latest()

        try:
            origin = self._resolve_origin(origin_path)
            items = self._ledger.resolve(origin, selector)
        except TrashError as e:
            return [TrashActionResult.from_error(absolute_path(origin_path), e)]

        destination = Path(absolute_path(target) if target else origin)
        try:
            self._check_not_protected(str(destination))
        except ProtectedPathError as e:
            return [TrashActionResult.from_error(origin, e, item=items[0])]
        if os.path.lexists(destination):
            error = DestinationOccupiedError(f"Restore target already exists: {destination}")
            return [TrashActionResult.from_error(origin, error, item=items[0])]

        results: list[TrashActionResult] = []
        for index, item in enumerate(items):
            try:
                if index == 0:
                    self._mover.relocate(self.storage_location(item), destination)
                else:
                    self._supersede(item, destination)
            except TrashError as e:
                logger.debug("Failed to restore %s version %d: %s", origin, item.version_id, e)
                results.append(TrashActionResult.from_error(origin, e, item=item))
                break

            self._forget_restored(item)
            logger.info("Restored %s version %d to %s", origin, item.version_id, destination)
            results.append(TrashActionResult.ok(origin, item=item, target=str(destination)))

        self._prune_group_dir(origin)
        return results

    def _supersede(self, item: TrashedItem, destination: Path) -> None:
        """Replace the revision restored at destination with item.

        item is first moved next to destination, so the revision already
        restored is only purged once its successor is out of the trash.
        On failure the successor goes back to its storage location.

        Raises:
            TrashError: If item cannot be swapped in.
        """
        staging = destination.with_name(f".{destination.name}.restore-{uuid.uuid4().hex[:8]}")
        storage = self.storage_location(item)

        self._mover.relocate(storage, staging)
        try:
            self._mover.purge(destination)
            self._mover.relocate(staging, destination)
        except TrashError:
            self._mover.relocate(staging, storage)
            raise

    def _resolve_origin(self, argument: str) -> str:
        """Map a restore argument to a trashed origin path.

        Raises:
            AmbiguousNameError: If a bare name matches several origins.
        """
        origin = absolute_path(argument)
        if self._ledger.get(origin) is not None or os.sep in argument:
            return origin
        if os.altsep and os.altsep in argument:
            return origin

        candidates = self._ledger.find_by_name(argument)
        if len(candidates) == 1:
            return candidates[0].origin_path
        if len(candidates) > 1:
            origins = ", ".join(group.origin_path for group in candidates)
            msg = f"'{argument}' matches several trashed paths: {origins}"
            raise AmbiguousNameError(msg)
        return origin

    def _forget_restored(self, item: TrashedItem) -> None:
        try:
            self._ledger.remove(item)
        except TrashError as e:
            msg = (
                f"Restored {item.origin_path} version {item.version_id} "
                f"but could not update the ledger: {e}"
            )
            raise LedgerCorruptError(msg) from e

    # =========================================================================
    # List / empty
    # =========================================================================

    def list(self, pattern: str | None = None, simple: bool = False) -> list[ListingEntry]:
        """List trashed groups whose origin path matches pattern.

        Raises:
            PatternError: If pattern is not a valid regular expression.
        """
        return list_items(self._ledger, pattern=pattern, simple=simple)

    def empty(self) -> list[TrashActionResult]:
        """Permanently delete every trashed revision.

        Revisions whose content cannot be deleted stay in the ledger and
        are reported as failures. This cannot be undone.

        Returns:
            One TrashActionResult per trashed revision.

        Raises:
            LedgerCorruptError: If content was deleted but the ledger could
                not be updated.
        """
        results: list[TrashActionResult] = []
        purged: list[TrashedItem] = []

        for item in self._ledger.items():
            try:
                self._mover.purge(self.storage_location(item))
            except TrashFilesystemError as e:
                logger.debug(
                    "Failed to purge %s version %d: %s", item.origin_path, item.version_id, e
                )
                results.append(TrashActionResult.from_error(item.origin_path, e, item=item))
                continue
            purged.append(item)
            results.append(TrashActionResult.ok(item.origin_path, item=item))

        try:
            if len(purged) == len(self._ledger):
                self._ledger.clear()
            else:
                for item in purged:
                    self._ledger.remove(item)
        except TrashError as e:
            msg = f"Trash content was deleted but the ledger could not be updated: {e}"
            raise LedgerCorruptError(msg) from e

        for origin in {item.origin_path for item in purged}:
            self._prune_group_dir(origin)

        logger.info("Emptied trash: %d purged, %d failed", len(purged), len(results) - len(purged))
        return results

    def _prune_group_dir(self, origin_path: str) -> None:
        """Remove the group directory of origin_path once it is empty."""
        group_dir = self._data_dir / encode_group(origin_path)
        try:
            group_dir.rmdir()
        except FileNotFoundError:
            return
        except OSError as e:
            # Still holds other versions
            logger.debug("Keeping group directory %s: %s", group_dir, e)
