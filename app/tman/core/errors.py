"""Exception hierarchy for trash operations.

Every exception carries an ErrorKind so callers can branch on the
failure category without isinstance chains.
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Category of a trash operation failure.

    Attributes:
        NOT_FOUND: Origin path, trashed version, or source is absent.
        DESTINATION_OCCUPIED: Something already exists at the target path.
        ENCODING: A path cannot be mapped to or from a storage path.
        PATTERN: A search expression does not compile.
        FILESYSTEM: An underlying I/O operation failed.
        LEDGER_CORRUPT: The ledger cannot be read or kept consistent.
        PROTECTED: The path overlaps the trash directory itself.
        AMBIGUOUS: A bare file name matches several trashed origins.
    """

    NOT_FOUND = "not_found"
    DESTINATION_OCCUPIED = "destination_occupied"
    ENCODING = "encoding"
    PATTERN = "pattern"
    FILESYSTEM = "filesystem"
    LEDGER_CORRUPT = "ledger_corrupt"
    PROTECTED = "protected"
    AMBIGUOUS = "ambiguous"


class TrashError(Exception):
    """Base exception for trash-related errors."""

    kind: ErrorKind = ErrorKind.FILESYSTEM


class ItemNotFoundError(TrashError):
    """Raised when an origin path or a trashed version does not exist."""

    kind = ErrorKind.NOT_FOUND


class DestinationOccupiedError(TrashError):
    """Raised when a restore target already holds live data."""

    kind = ErrorKind.DESTINATION_OCCUPIED


class EncodingError(TrashError):
    """Raised when a path cannot be encoded to or decoded from storage."""

    kind = ErrorKind.ENCODING


class PatternError(TrashError):
    """Raised when a list pattern is not a valid regular expression."""

    kind = ErrorKind.PATTERN


class TrashFilesystemError(TrashError):
    """Raised when an underlying filesystem operation fails."""

    kind = ErrorKind.FILESYSTEM


class LedgerCorruptError(TrashError):
    """Raised when the ledger fails to load or diverges from storage."""

    kind = ErrorKind.LEDGER_CORRUPT


class ProtectedPathError(TrashError):
    """Raised when a path overlaps the trash directory."""

    kind = ErrorKind.PROTECTED


class AmbiguousNameError(TrashError):
    """Raised when a bare name matches more than one trashed origin."""

    kind = ErrorKind.AMBIGUOUS


class MoveError(TrashError):
    """Base exception for failed relocations."""


class SourceMissingError(MoveError):
    """Raised when the relocation source does not exist."""

    kind = ErrorKind.NOT_FOUND


class DestinationExistsError(MoveError):
    """Raised when the relocation destination is already taken."""

    kind = ErrorKind.DESTINATION_OCCUPIED


class MoveFilesystemError(MoveError):
    """Raised when the filesystem refuses a relocation."""

    kind = ErrorKind.FILESYSTEM
