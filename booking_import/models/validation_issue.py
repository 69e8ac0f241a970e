from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

"""ValidationIssue model for per-row dry run findings.

Issues are collected, never raised: a row with issues does not stop the
processing of later rows.
"""

__all__ = [
    "ValidationIssue",
]


@dataclass(frozen=True)
class ValidationIssue:
    """A single problem found on one row.

    Attributes:
        row_index: 1-based row in file (header is row 1)
        field: Canonical field name or rule identifier the issue refers to
        message: Operator-facing description, e.g. "Missing Postcode"
    """
    row_index: int
    field: str
    message: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
