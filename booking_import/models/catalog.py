from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""Catalog models: skip size entries and the result of matching a label.

A CatalogEntry is read-only reference data fetched from the record store,
scoped to the requesting tenant plus shared entries.
"""

__all__ = [
    "CatalogEntry",
    "CatalogMatch",
    "MatchMethod",
]


class MatchMethod(Enum):
    """How a free-text size label was resolved.

    - EXACT: normalized label equals a normalized catalog name
    - CONTAINS: one normalized form is a substring of the other
    - NONE: no catalog entry matched
    """
    EXACT = "exact"
    CONTAINS = "contains"
    NONE = "none"


@dataclass(frozen=True)
class CatalogEntry:
    id: str
    name: str


@dataclass(frozen=True)
class CatalogMatch:
    """Resolved mapping from a size label to a catalog entry.

    entry_id is set if and only if method is not MatchMethod.NONE.
    """
    entry_id: str | None
    matched_name: str
    method: MatchMethod

    def __post_init__(self) -> None:
        if (self.entry_id is None) != (self.method is MatchMethod.NONE):
            raise ValueError(
                f"entry_id must be set iff method != none (entry_id={self.entry_id!r}, method={self.method.value})"
            )

    @property
    def matched(self) -> bool:
        return self.method is not MatchMethod.NONE

    @staticmethod
    def no_match() -> CatalogMatch:
        return CatalogMatch(entry_id=None, matched_name="", method=MatchMethod.NONE)

    def describe(self) -> str:
        """Display form used by the preview, e.g. ``8 Yard Skip (contains)``."""
        if not self.matched:
            return "—"
        return f"{self.matched_name} ({self.method.value})"
