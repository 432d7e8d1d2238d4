"""Version selection policy for restore operations."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class SelectorKind(str, Enum):
    """Which revisions of a version group an operation acts on.

    Attributes:
        LATEST: Only the newest revision.
        ALL: Every revision, oldest first.
        EXACT: One revision identified by its version id.
    """

    LATEST = "latest"
    ALL = "all"
    EXACT = "exact"


@dataclass(frozen=True, slots=True)
class VersionSelector:
    """Selector choosing revisions of a version group.

    Attributes:
        kind: Selection policy.
        version: Target version id, only set for EXACT.
    """

    kind: SelectorKind
    version: int | None = None

    def __post_init__(self) -> None:
        """Validate that version is given exactly for EXACT selectors."""
        if self.kind == SelectorKind.EXACT:
            if self.version is None or self.version < 1:
                msg = "Exact selector requires a positive version id"
                raise ValueError(msg)
        elif self.version is not None:
            msg = f"{self.kind.value} selector does not take a version id"
            raise ValueError(msg)

    @classmethod
    def latest(cls) -> VersionSelector:
        return cls(SelectorKind.LATEST)

    @classmethod
    def all(cls) -> VersionSelector:
        return cls(SelectorKind.ALL)

    @classmethod
    def exact(cls, version: int) -> VersionSelector:
        return cls(SelectorKind.EXACT, version)

    @classmethod
    def parse(cls, text: str) -> VersionSelector:
        """Parse the command-line spelling of a selector.

        Accepts "latest", "all" (case-insensitive) or a positive integer.

        Args:
            text: Selector text.

        Returns:
            The matching VersionSelector.

        Raises:
            ValueError: If text is not a recognised selector.
        """
        value = text.strip().lower()
        if value == SelectorKind.LATEST.value:
            return cls.latest()
        if value == SelectorKind.ALL.value:
            return cls.all()
        if value.isascii() and value.isdigit() and int(value) > 0:
            return cls.exact(int(value))
        msg = f"Invalid version selector '{text}': use 'latest', 'all' or a version number"
        raise ValueError(msg)

    def __str__(self) -> str:
        if self.kind == SelectorKind.EXACT:
            return str(self.version)
        return self.kind.value
