from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from .catalog import CatalogMatch
from .import_row import ImportRow
from .job_status import JobStatus
from .validation_issue import ValidationIssue

"""Report models for the booking import dry run.

ImportAnalysis is derived entirely from the projected rows and the catalog
snapshot; it is rebuilt from scratch on every file or catalog change.
"""

__all__ = [
    "ImportAnalysis",
    "PreviewRow",
    "UnknownCatalogLabel",
]


@dataclass(frozen=True)
class UnknownCatalogLabel:
    """A normalized size label with no catalog match, and how often it occurred."""
    label: str
    count: int


@dataclass(frozen=True)
class PreviewRow:
    """Display view of one row for the dry run preview table."""
    row: ImportRow
    job_no: str
    booking_created_at: str | None  # ISO8601, booking timestamp when parseable
    delivery_date: str  # YYYY-MM-DD or "" when unparseable
    on_hire_start: str
    collection_date: str
    on_hire_end: str
    status: JobStatus
    skip_size: str
    catalog_match: CatalogMatch | None  # None when the catalog failed to load
    postcode: str
    address: str
    price: Decimal | None
    total_price: Decimal | None
    customer: str
    notes: str
    placement_type: str | None
    payment_type: str | None
    has_wtn: bool

    @property
    def row_index(self) -> int:
        return self.row.row_number

    def to_dict(self) -> dict[str, Any]:
        return {
            "row_index": self.row_index,
            "job_no": self.job_no,
            "booking_created_at": self.booking_created_at,
            "delivery_date": self.delivery_date,
            "on_hire_start": self.on_hire_start,
            "collection_date": self.collection_date,
            "on_hire_end": self.on_hire_end,
            "status": self.status.value,
            "skip_size": self.skip_size,
            "catalog_match": self.catalog_match.describe() if self.catalog_match else "—",
            "catalog_entry_id": self.catalog_match.entry_id if self.catalog_match else None,
            "postcode": self.postcode,
            "address": self.address,
            "price": str(self.price) if self.price is not None else None,
            "total_price": str(self.total_price) if self.total_price is not None else None,
            "customer": self.customer,
            "notes": self.notes,
            "placement_type": self.placement_type,
            "payment_type": self.payment_type,
            "wtn": self.has_wtn,
        }


@dataclass(frozen=True)
class ImportAnalysis:
    """Aggregated dry run report consumed by the presentation layer.

    ready_to_import is the readiness gate: it only holds when every row is
    clean, every size label resolved and the catalog loaded.
    """
    total_rows: int
    unique_customer_count: int
    job_count: int
    invalid_rows: list[list[ValidationIssue]]  # One inner list per invalid row, file order
    unknown_catalog_labels: list[UnknownCatalogLabel]  # Count desc, then label
    preview_rows: list[PreviewRow]  # First N rows in file order
    ready_to_import: bool
    duplicate_job_numbers: list[str] = field(default_factory=list)  # Informational only
    catalog_error: str | None = None  # Set when matching could not run

    @property
    def issue_count(self) -> int:
        return sum(len(issues) for issues in self.invalid_rows)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total_rows": self.total_rows,
            "unique_customer_count": self.unique_customer_count,
            "job_count": self.job_count,
            "invalid_rows": [[issue.to_dict() for issue in issues] for issues in self.invalid_rows],
            "unknown_catalog_labels": [
                {"label": u.label, "count": u.count} for u in self.unknown_catalog_labels
            ],
            "preview_rows": [p.to_dict() for p in self.preview_rows],
            "ready_to_import": self.ready_to_import,
            "duplicate_job_numbers": list(self.duplicate_job_numbers),
            "catalog_error": self.catalog_error,
        }
