"""Normalization and value parsing for booking export cells.

All functions accept the raw cell text (possibly empty) and never raise on
bad data: unparseable input yields "" or None.
"""

from __future__ import annotations

import re
import warnings
from datetime import datetime
from decimal import Decimal, InvalidOperation

import pandas as pd

_WS_RE = re.compile(r"\s+")
_ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_UK_DATE_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_UK_DATETIME_RE = re.compile(
    r"^(\d{1,2})/(\d{1,2})/(\d{4})(?:\s+(\d{1,2}):(\d{2})(?::(\d{2}))?)?$"
)
_ISO_DATETIME_RE = re.compile(r"^\d{4}-\d{2}-\d{2}t", re.IGNORECASE)
_MONEY_STRIP_RE = re.compile(r"[^0-9.\-]")
_URL_RE = re.compile(r"^https?://\S+", re.IGNORECASE)
_YEAR_RE = re.compile(r"\d{4}")


def collapse(value: str | None) -> str:
    """Lowercase, trim and collapse internal whitespace to single spaces."""
    if not value:
        return ""
    return _WS_RE.sub(" ", value.strip().lower())


def _fallback_timestamp(value: str, dayfirst: bool) -> pd.Timestamp | None:
    if not _YEAR_RE.search(value):
        # pandas fills a missing year with year 1 and reads "now" as the current time
        return None
    with warnings.catch_warnings():
        # pandas warns when it has to guess a format per element
        warnings.simplefilter("ignore", UserWarning)
        try:
            ts = pd.to_datetime(value, dayfirst=dayfirst, errors="coerce")
        except (ValueError, OverflowError):
            return None
    if ts is None or pd.isna(ts):
        return None
    return ts


def _format_date(d: datetime) -> str:
    # strftime("%Y") does not zero-pad years before 1000 on glibc
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def parse_iso_date(value: str | None, *, dayfirst: bool = True) -> str:
    """Return ``YYYY-MM-DD`` for a delivery/collection style date, or "".

    Accepts ISO dates, ``DD/MM/YYYY`` and, as a last resort, whatever pandas
    can read (``3 Mar 2024``, ``2024-03-01 09:00``...).
    """
    s = (value or "").strip()
    if not s:
        return ""
    if _ISO_DATE_RE.match(s):
        try:
            return _format_date(datetime.strptime(s, "%Y-%m-%d"))
        except ValueError:
            return ""
    m = _UK_DATE_RE.match(s)
    if m:
        dd, mm, yyyy = (int(g) for g in m.groups())
        try:
            return _format_date(datetime(yyyy, mm, dd))
        except ValueError:
            return ""
    ts = _fallback_timestamp(s, dayfirst)
    if ts is None:
        return ""
    return _format_date(ts)


def parse_datetime_iso(value: str | None, *, dayfirst: bool = True) -> str | None:
    """Parse a booking timestamp, keeping the time of day when present.

    Accepts ISO timestamps, ``DD/MM/YYYY``, ``DD/MM/YYYY HH:MM`` and
    ``DD/MM/YYYY HH:MM:SS``. Returns an ISO8601 string or None.
    """
    s = (value or "").strip()
    if not s:
        return None
    if _ISO_DATETIME_RE.match(s):
        ts = _fallback_timestamp(s, dayfirst=False)
        return ts.isoformat() if ts is not None else None
    m = _UK_DATETIME_RE.match(s)
    if m:
        dd, mm, yyyy = int(m.group(1)), int(m.group(2)), int(m.group(3))
        hh = int(m.group(4)) if m.group(4) is not None else 0
        mi = int(m.group(5)) if m.group(5) is not None else 0
        ss = int(m.group(6)) if m.group(6) is not None else 0
        try:
            return datetime(yyyy, mm, dd, hh, mi, ss).isoformat()
        except ValueError:
            return None
    d = parse_iso_date(s, dayfirst=dayfirst)
    if d:
        return datetime.strptime(d, "%Y-%m-%d").isoformat()
    return None


def parse_money(value: str | None) -> Decimal | None:
    """Parse a price cell such as ``£1,234.50`` into a Decimal, or None.

    Currency symbols, thousands separators and stray text are dropped before
    parsing; what remains must be a plain number.
    """
    s = (value or "").strip()
    if not s:
        return None
    digits = _MONEY_STRIP_RE.sub("", s)
    if not digits:
        return None
    try:
        n = Decimal(digits)
    except InvalidOperation:
        return None
    return n if n.is_finite() else None


def is_likely_url(value: str | None) -> bool:
    return bool(_URL_RE.match((value or "").strip()))
