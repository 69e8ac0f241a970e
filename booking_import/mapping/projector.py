from __future__ import annotations

from ..models.import_row import ImportRow
from .headers import CANONICAL_FIELDS, HeaderMap

"""Row projection: grid rows -> ImportRow records.

A pure reshape. No validation, catalog or identity work happens here; every
canonical field comes out as a string, empty when the column is missing or
the row is short.
"""

__all__ = [
    "project_row",
    "project_rows",
]


def _raw_mapping(header_row: list[str], cells: list[str]) -> dict[str, str]:
    raw: dict[str, str] = {}
    for idx, header in enumerate(header_row):
        key = header.strip()
        if key in raw:
            # duplicate header: first column wins, as in header resolution
            continue
        raw[key] = cells[idx] if idx < len(cells) else ""
    return raw


def project_row(
    cells: list[str],
    header_map: HeaderMap,
    row_number: int,
    header_row: list[str] | None = None,
) -> ImportRow:
    """Build the canonical record for one data row.

    Args:
        cells: The row's cells in file column order
        header_map: Resolved headers for the file
        row_number: 1-based row in file (header is row 1)
        header_row: Literal headers, used to keep the raw cell mapping for audit
    """
    values: dict[str, str] = {}
    for field in CANONICAL_FIELDS:
        pos = header_map.position_for(field)
        if pos is None or pos >= len(cells) or cells[pos] is None:
            values[field] = ""
        else:
            values[field] = str(cells[pos])
    raw = _raw_mapping(header_row, cells) if header_row is not None else None
    return ImportRow(row_number=row_number, values=values, raw_values=raw)


def project_rows(grid: list[list[str]], header_map: HeaderMap) -> list[ImportRow]:
    """Project every data row of a grid, skipping fully blank rows.

    Row numbers are grid index + 1, so the first data row is row 2.
    """
    if not grid:
        return []
    header_row = grid[0]
    rows: list[ImportRow] = []
    for idx in range(1, len(grid)):
        cells = grid[idx]
        if not cells or all((c or "").strip() == "" for c in cells):
            continue
        rows.append(project_row(cells, header_map, idx + 1, header_row))
    return rows
