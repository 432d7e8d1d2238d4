"""Reversible mapping between origin paths and storage paths.

An origin path is flattened into a single directory name by
percent-escaping every character outside the unreserved set, so no path
separator survives. The version id becomes a second segment:

    /home/user/a.txt, 3  ->  %2Fhome%2Fuser%2Fa.txt/3
"""

import os
from pathlib import PurePath
from urllib.parse import quote, unquote

from tman.core.errors import EncodingError

STORAGE_SEPARATOR = "/"


def _validate_origin(origin_path: str) -> None:
    if not origin_path:
        msg = "Origin path cannot be empty"
        raise EncodingError(msg)
    if "\x00" in origin_path:
        msg = f"Origin path contains a NUL byte: {origin_path!r}"
        raise EncodingError(msg)
    if not os.path.isabs(origin_path):
        msg = f"Origin path must be absolute: {origin_path}"
        raise EncodingError(msg)


def _validate_version(version_id: int) -> None:
    # bool is an int subclass; True must not pass as version 1
    if isinstance(version_id, bool) or not isinstance(version_id, int) or version_id < 1:
        msg = f"Version id must be a positive integer, got {version_id!r}"
        raise EncodingError(msg)


def encode_group(origin_path: str) -> str:
    """Encode an origin path into its group directory name.

    Args:
        origin_path: Absolute origin path.

    Returns:
        Single path segment with every separator escaped.

    Raises:
        EncodingError: If origin_path is empty, relative, or contains NUL.
    """
    _validate_origin(origin_path)
    try:
        return quote(origin_path, safe="")
    except UnicodeEncodeError as e:
        msg = f"Origin path is not valid UTF-8: {origin_path!r}"
        raise EncodingError(msg) from e


def encode(origin_path: str, version_id: int) -> str:
    """Map an origin path and version id to a storage path.

    The result is relative to the trash data directory and always has
    exactly two segments: the escaped origin and the version id.

    Args:
        origin_path: Absolute origin path.
        version_id: Positive version number.

    Returns:
        Storage path string using "/" as segment separator.

    Raises:
        EncodingError: If either argument is invalid.
    """
    _validate_version(version_id)
    return f"{encode_group(origin_path)}{STORAGE_SEPARATOR}{version_id}"


def decode(storage_path: str | PurePath) -> tuple[str, int]:
    """Recover the origin path and version id from a storage path.

    Only the last two segments are considered, so both relative storage
    paths and absolute locations inside the data directory are accepted.

    Args:
        storage_path: Path produced by encode(), optionally prefixed.

    Returns:
        Tuple of (origin_path, version_id).

    Raises:
        EncodingError: If the path was not produced by encode().
    """
    parts = PurePath(storage_path).parts
    if len(parts) < 2:
        msg = f"Storage path must have a group and a version segment: {storage_path}"
        raise EncodingError(msg)

    group, version = parts[-2], parts[-1]

    if not (version.isascii() and version.isdigit()) or version.startswith("0"):
        msg = f"Invalid version segment in storage path: {storage_path}"
        raise EncodingError(msg)

    try:
        origin_path = unquote(group, errors="strict")
    except UnicodeDecodeError as e:
        msg = f"Undecodable group segment in storage path: {storage_path}"
        raise EncodingError(msg) from e
    # Reject non-canonical escapes so that decode stays the inverse of encode
    if quote(origin_path, safe="") != group:
        msg = f"Non-canonical group segment in storage path: {storage_path}"
        raise EncodingError(msg)

    _validate_origin(origin_path)
    return origin_path, int(version)
