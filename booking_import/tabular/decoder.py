from __future__ import annotations

"""Delimited text decoder for booking exports.

Turns raw CSV text (typically a Google Sheets or Excel export) into a grid of
string cells. Quoting follows RFC 4180: a quoted field may hold commas, line
feeds and doubled quotes. Malformed quoting is tolerated rather than
reported; an unterminated quote runs to the end of the input.
"""

__all__ = [
    "DecodeError",
    "RawGrid",
    "decode_bytes",
    "decode_csv",
    "encode_csv",
]

RawGrid = list[list[str]]

DELIMITER = ","
QUOTE = '"'

# Legacy Excel "CSV" exports on UK machines are Windows-1252.
_FALLBACK_ENCODING = "cp1252"


class DecodeError(Exception):
    """Raised when the input cannot be turned into a grid (empty or unreadable)."""


def _is_blank(row: list[str]) -> bool:
    return all(cell.strip() == "" for cell in row)


def decode_bytes(data: bytes) -> str:
    """Decode uploaded file bytes to text.

    UTF-8 (with or without BOM) is tried first, then Windows-1252.
    """
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError:
        pass
    try:
        return data.decode(_FALLBACK_ENCODING)
    except UnicodeDecodeError as e:
        raise DecodeError(f"unreadable input: {e}") from e


def decode_csv(text: str) -> RawGrid:
    """Decode comma-delimited text into rows of cells.

    Steps:
    1. Reject empty / whitespace-only text
    2. Scan characters, tracking whether a quoted field is open
    3. Drop trailing rows whose cells are all blank

    Raises:
        DecodeError: if the text is empty or holds no non-blank row
    """
    if not text or not text.strip():
        raise DecodeError("empty input")

    rows: RawGrid = []
    row: list[str] = []
    cur: list[str] = []
    in_quotes = False
    i = 0
    n = len(text)

    while i < n:
        ch = text[i]
        if ch == "\r":
            i += 1
            continue

        if in_quotes:
            if ch == QUOTE:
                if i + 1 < n and text[i + 1] == QUOTE:
                    cur.append(QUOTE)
                    i += 2
                    continue
                in_quotes = False
            else:
                cur.append(ch)
            i += 1
            continue

        if ch == QUOTE:
            in_quotes = True
        elif ch == DELIMITER:
            row.append("".join(cur))
            cur = []
        elif ch == "\n":
            row.append("".join(cur))
            rows.append(row)
            row = []
            cur = []
        else:
            cur.append(ch)
        i += 1

    row.append("".join(cur))
    rows.append(row)

    while rows and _is_blank(rows[-1]):
        rows.pop()

    if not rows:
        raise DecodeError("empty input: no non-blank rows")
    return rows


def _encode_cell(cell: str) -> str:
    if any(c in cell for c in (DELIMITER, QUOTE, "\n")):
        return QUOTE + cell.replace(QUOTE, QUOTE * 2) + QUOTE
    return cell


def encode_csv(grid: RawGrid) -> str:
    """Serialize a grid with the same quoting convention decode_csv reads."""
    return "\n".join(DELIMITER.join(_encode_cell(c) for c in row) for row in grid)
