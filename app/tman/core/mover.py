"""Atomic relocation of files and directory trees.

Moves content into and out of the trash. A move is a single rename when
source and destination share a filesystem; across filesystems the tree
is copied to a staging name, verified, and only then is the source
removed.
"""

import errno
import logging
import os
import shutil
import uuid
from pathlib import Path

from tman.core.errors import (
    DestinationExistsError,
    MoveFilesystemError,
    SourceMissingError,
    TrashFilesystemError,
)

logger = logging.getLogger(__name__)

# Snapshot entry: ("dir", ""), ("file", size) or ("link", target)
_Entry = tuple[str, int | str]


class ItemMover:
    """Relocates and purges filesystem entries without following symlinks."""

    def relocate(self, source: Path, destination: Path) -> None:
        """Move source to destination atomically.

        Either the whole entry ends up at destination, or the filesystem is
        left as it was. Destination parents are created as needed.

        Args:
            source: Existing file, directory or symlink.
            destination: Path that must not exist yet.

        Raises:
            SourceMissingError: If nothing exists at source.
            DestinationExistsError: If something already exists at destination.
            MoveFilesystemError: If the filesystem refuses the move.
        """
        if not os.path.lexists(source):
            msg = f"Source does not exist: {source}"
            raise SourceMissingError(msg)
        if os.path.lexists(destination):
            msg = f"Destination already exists: {destination}"
            raise DestinationExistsError(msg)

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            msg = f"Cannot create directory {destination.parent}: {e}"
            raise MoveFilesystemError(msg) from e

        try:
            os.rename(source, destination)
        except OSError as e:
            if e.errno != errno.EXDEV:
                msg = f"Failed to move {source} to {destination}: {e}"
                raise MoveFilesystemError(msg) from e
            logger.debug("Cross-device move, copying %s to %s", source, destination)
            self._copy_across(source, destination)
            return

        logger.debug("Moved %s to %s", source, destination)

    def purge(self, path: Path) -> None:
        """Permanently delete a file, symlink or directory tree.

        A missing path is not an error.

        Args:
            path: Entry to delete.

        Raises:
            TrashFilesystemError: If the entry cannot be deleted.
        """
        try:
            self._remove(path)
        except OSError as e:
            msg = f"Failed to delete {path}: {e}"
            raise TrashFilesystemError(msg) from e

    def _copy_across(self, source: Path, destination: Path) -> None:
        """Copy source next to destination, verify, swap in, drop source.

        Args:
            source: Existing entry on another filesystem.
            destination: Final location (must not exist).

        Raises:
            MoveFilesystemError: If copying or verification fails. The
                source is left untouched in that case.
        """
        staging = destination.with_name(f".{destination.name}.partial-{uuid.uuid4().hex[:8]}")

        try:
            self._copy(source, staging)
            if self._snapshot(source) != self._snapshot(staging):
                msg = f"Copy of {source} does not match the original"
                raise MoveFilesystemError(msg)
            os.rename(staging, destination)
        except (OSError, MoveFilesystemError) as e:
            try:
                self._remove(staging)
            except OSError:
                logger.warning("Could not remove staging copy %s", staging)
            if isinstance(e, MoveFilesystemError):
                raise
            msg = f"Failed to copy {source} to {destination}: {e}"
            raise MoveFilesystemError(msg) from e

        # The verified copy is in place; only now may the source go
        try:
            self._remove(source)
        except OSError as e:
            logger.warning(
                "Copied %s to %s but could not remove the source: %s", source, destination, e
            )
            return

        logger.debug("Copied %s to %s and removed the source", source, destination)

    @staticmethod
    def _copy(source: Path, target: Path) -> None:
        if source.is_symlink():
            os.symlink(os.readlink(source), target)
        elif source.is_dir():
            shutil.copytree(source, target, symlinks=True)
        else:
            shutil.copy2(source, target, follow_symlinks=False)

    @staticmethod
    def _remove(path: Path) -> None:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        elif os.path.lexists(path):
            path.unlink()

    @staticmethod
    def _snapshot(root: Path) -> dict[str, _Entry]:
        """Describe a tree by relative path, entry type, size and link target."""

        def describe(path: Path) -> _Entry:
            if path.is_symlink():
                return ("link", os.readlink(path))
            if path.is_dir():
                return ("dir", "")
            return ("file", path.stat().st_size)

        snapshot: dict[str, _Entry] = {".": describe(root)}
        if root.is_dir() and not root.is_symlink():
            for dirpath, dirnames, filenames in os.walk(root):
                for name in (*dirnames, *filenames):
                    path = Path(dirpath) / name
                    snapshot[str(path.relative_to(root))] = describe(path)
        return snapshot
