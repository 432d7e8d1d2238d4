"""Data models for tman.

This module exports the core data structures used throughout the application.
"""

from tman.models.item import ItemKind, TrashedItem, VersionGroup
from tman.models.result import TrashActionResult
from tman.models.selector import SelectorKind, VersionSelector

__all__ = [
    "ItemKind",
    "SelectorKind",
    "TrashActionResult",
    "TrashedItem",
    "VersionGroup",
    "VersionSelector",
]
