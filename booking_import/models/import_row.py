from __future__ import annotations

from dataclasses import dataclass

"""ImportRow model for the booking import dry run.

ImportRow represents one data row of the export after header resolution,
keyed by the canonical booking fields regardless of source column order or
spelling.
"""

__all__ = [
    "ImportRow",
]


@dataclass(frozen=True)
class ImportRow:
    """Canonical record for a single data row.

    The row_number refers to the 1-based record position in the file, where
    the header is row 1 and the first data row is row 2.
    """
    row_number: int  # 1-based row in file, used in operator-facing messages
    values: dict[str, str]  # Canonical field -> raw cell text ("" when absent)
    raw_values: dict[str, str] | None = None  # Literal header -> cell, kept for audit

    def get(self, field: str) -> str:
        return self.values.get(field, "")

    def stripped(self, field: str) -> str:
        return self.get(field).strip()
