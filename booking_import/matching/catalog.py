from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from ..models.catalog import CatalogEntry, CatalogMatch, MatchMethod

"""Catalog matching: free-text skip size labels -> catalog entries.

Operators type sizes as "8yd skip", "8 Yard", "Builders skip". Matching runs
in tiers and the first success wins:

1. exact    - normalized label == normalized catalog name
2. contains - one normalized form is a substring of the other; the tier also
              compares unit-canonical forms ("8yd" -> "8 yard") word by word
3. none

Contains is a deliberately loose fallback. When more than one entry could
match, the first entry in catalog order wins; callers control priority by
ordering the catalog.
"""

__all__ = [
    "CatalogIndex",
    "canonical_units",
    "match_catalog_entry",
    "normalize_label",
]

_WS_RE = re.compile(r"\s+")
_SKIP_WORD_RE = re.compile(r"\bskip\b")
_UNIT_RE = re.compile(r"(\d+(?:\.\d+)?)\s*(?:yards?|yds?)\b")


def normalize_label(text: str | None) -> str:
    """Lowercase, collapse whitespace, drop the word "skip", re-collapse, trim."""
    s = _WS_RE.sub(" ", (text or "").strip().lower())
    s = _SKIP_WORD_RE.sub("", s)
    return _WS_RE.sub(" ", s).strip()


def canonical_units(normalized: str) -> str:
    """Rewrite "<n>yd", "<n> yds", "<n> yards" as "<n> yard"."""
    return _WS_RE.sub(" ", _UNIT_RE.sub(r"\1 yard", normalized)).strip()


@dataclass(frozen=True)
class _IndexedEntry:
    entry: CatalogEntry
    key: str
    unit_key: str


class CatalogIndex:
    """Normalized view of one catalog snapshot.

    Built per analysis; a new catalog means a new index, so results never
    leak across catalog versions.
    """

    def __init__(self, entries: Sequence[CatalogEntry]) -> None:
        self._entries: list[_IndexedEntry] = []
        for e in entries:
            key = normalize_label(e.name)
            self._entries.append(_IndexedEntry(entry=e, key=key, unit_key=canonical_units(key)))

    def __len__(self) -> int:
        return len(self._entries)

    def match(self, label: str | None) -> CatalogMatch:
        ss = normalize_label(label)
        if not ss:
            return CatalogMatch.no_match()

        for x in self._entries:
            if x.key and x.key == ss:
                return _hit(x.entry, MatchMethod.EXACT)

        ss_units = canonical_units(ss)
        for x in self._entries:
            if not x.key:
                # an entry named just "Skip" normalizes to "" and would match everything
                continue
            if x.key in ss or ss in x.key:
                return _hit(x.entry, MatchMethod.CONTAINS)
            if _contains_words(x.unit_key, ss_units) or _contains_words(ss_units, x.unit_key):
                return _hit(x.entry, MatchMethod.CONTAINS)

        return CatalogMatch.no_match()


def _contains_words(needle: str, haystack: str) -> bool:
    # whole words only, so "2 yard" does not hit "12 yard"
    return f" {needle} " in f" {haystack} "


def _hit(entry: CatalogEntry, method: MatchMethod) -> CatalogMatch:
    return CatalogMatch(entry_id=entry.id, matched_name=entry.name.strip(), method=method)


def match_catalog_entry(label: str | None, catalog: Sequence[CatalogEntry]) -> CatalogMatch:
    """Resolve one label against a catalog. See CatalogIndex.match."""
    return CatalogIndex(catalog).match(label)
