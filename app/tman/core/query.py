"""Read-only listing of the trash with pattern filtering."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from tman.core.errors import PatternError
from tman.core.ledger import Ledger
from tman.models.item import TrashedItem, VersionGroup


@dataclass(frozen=True, slots=True)
class ListingEntry:
    """One version group as shown by a listing.

    Attributes:
        origin_path: Absolute origin path of the group.
        items: Revisions shown, oldest first. Only the latest one in
            simple mode.
        simple: Whether the listing was requested in simple mode.
    """

    origin_path: str
    items: tuple[TrashedItem, ...]
    simple: bool = False

    @property
    def name(self) -> str:
        """Basename of the origin path."""
        return self.items[-1].name

    @property
    def latest(self) -> TrashedItem:
        """Newest revision of the group."""
        return self.items[-1]

    @classmethod
    def from_group(cls, group: VersionGroup, simple: bool = False) -> ListingEntry:
        items = group.items[-1:] if simple else group.items
        return cls(origin_path=group.origin_path, items=items, simple=simple)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for JSON output."""
        return {
            "origin_path": self.origin_path,
            "name": self.name,
            "versions": [item.to_dict() for item in self.items],
        }


def compile_pattern(pattern: str | None) -> re.Pattern[str] | None:
    """Compile a listing pattern.

    Args:
        pattern: Case-sensitive regular expression. None or an empty
            string matches everything.

    Returns:
        Compiled expression, or None when every group matches.

    Raises:
        PatternError: If the expression does not compile.
    """
    if not pattern:
        return None
    try:
        return re.compile(pattern)
    except re.error as e:
        msg = f"Invalid pattern '{pattern}': {e}"
        raise PatternError(msg) from e


def list_items(
    ledger: Ledger,
    pattern: str | None = None,
    simple: bool = False,
) -> list[ListingEntry]:
    """List trashed version groups matching pattern.

    The pattern is searched anywhere in the full origin path.

    Args:
        ledger: Ledger to read.
        pattern: Regular expression filter. None matches all groups.
        simple: Show only the latest revision of each group.

    Returns:
        Listing entries sorted by origin path. Empty when nothing matches.

    Raises:
        PatternError: If pattern does not compile.
    """
    compiled = compile_pattern(pattern)
    return [ListingEntry.from_group(group, simple=simple) for group in ledger.query(compiled)]
