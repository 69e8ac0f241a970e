from __future__ import annotations

from ..models.import_row import ImportRow
from ..models.job_status import JobStatus
from ..normalize import collapse

"""Status and booking attribute derivation for imported rows.

derive_job_status is a three-tier triage (collected > delivered > booked),
enough for the dry run preview. Placement and payment types are read from
the free-text columns the way the office labels them.
"""

__all__ = [
    "derive_job_status",
    "derive_payment_type",
    "derive_placement_type",
]


def derive_job_status(row: ImportRow) -> JobStatus:
    if collapse(row.get("collection_status")) == "collected":
        return JobStatus.COLLECTED
    if collapse(row.get("delivery_status")) == "delivered":
        return JobStatus.DELIVERED
    return JobStatus.BOOKED


def derive_placement_type(value: str | None) -> str | None:
    """Map e.g. "On road (permit)" to road and "Private drive" to private."""
    s = collapse(value)
    if not s:
        return None
    if "road" in s or "public" in s:
        return "road"
    if "private" in s:
        return "private"
    return None


def derive_payment_type(value: str | None) -> str | None:
    s = collapse(value)
    if not s:
        return None
    if "invoice" in s or "account" in s:
        return "account"
    if "card" in s:
        return "card"
    if "cash" in s or "cod" in s:
        return "cash"
    return None
