from __future__ import annotations

import zipfile
from datetime import datetime
from pathlib import Path
from typing import Any

import pandas as pd

from .decoder import DecodeError, RawGrid, decode_bytes, decode_csv

"""File readers producing a RawGrid.

Bookings usually arrive as a CSV export, but operators also upload the
workbook itself. Excel files are read with pandas (openpyxl engine) and every
cell is rendered back to text so later stages see the same shape as a CSV.
"""

__all__ = [
    "CSV_SUFFIXES",
    "EXCEL_SUFFIXES",
    "load_grid",
    "read_excel_grid",
]

CSV_SUFFIXES = {".csv", ".txt"}
EXCEL_SUFFIXES = {".xlsx", ".xlsm"}


def _cell_text(val: Any) -> str:
    if pd.isna(val):
        return ""
    if isinstance(val, datetime):
        # Excel date cells come back as datetimes; keep the date only when no time is set
        if val.hour == 0 and val.minute == 0 and val.second == 0:
            return val.strftime("%Y-%m-%d")
        return val.isoformat()
    if isinstance(val, float) and val.is_integer():
        # 100 rather than 100.0 for prices, job numbers, phone numbers
        return str(int(val))
    return str(val)


def read_excel_grid(path: Path, sheet: str | int = 0) -> RawGrid:
    """Read one sheet of a workbook as a grid of strings.

    Parameters
    ----------
    path: workbook path
    sheet: sheet name or index (first sheet by default)

    The header is the first row. pandas' default NA strings are disabled so a
    cell holding "NA" or "null" stays text.
    """
    try:
        df = pd.read_excel(path, sheet_name=sheet, header=None, dtype=object, keep_default_na=False)
    except (ValueError, OSError, zipfile.BadZipFile) as e:
        raise DecodeError(f"unreadable workbook {path.name}: {e}") from e

    rows: RawGrid = [[_cell_text(v) for v in raw] for raw in df.itertuples(index=False, name=None)]
    while rows and all(c.strip() == "" for c in rows[-1]):
        rows.pop()
    if not rows:
        raise DecodeError(f"empty input: {path.name}")
    return rows


def load_grid(path: Path) -> RawGrid:
    """Read a booking export from disk, dispatching on the file suffix."""
    suffix = path.suffix.lower()
    if suffix in EXCEL_SUFFIXES:
        return read_excel_grid(path)
    if suffix in CSV_SUFFIXES:
        try:
            data = path.read_bytes()
        except OSError as e:
            raise DecodeError(f"unreadable input {path.name}: {e}") from e
        return decode_csv(decode_bytes(data))
    raise DecodeError(f"unsupported file type: {path.suffix or '<none>'}")
