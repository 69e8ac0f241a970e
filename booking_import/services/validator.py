from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence

from ..matching.catalog import CatalogIndex, normalize_label
from ..matching.identity import customer_identity_key
from ..matching.status import derive_job_status, derive_payment_type, derive_placement_type
from ..models.analysis import ImportAnalysis, PreviewRow, UnknownCatalogLabel
from ..models.catalog import CatalogEntry, CatalogMatch
from ..models.config_models import DEFAULT_PREVIEW_ROWS
from ..models.import_row import ImportRow
from ..models.validation_issue import ValidationIssue
from ..normalize import is_likely_url, parse_datetime_iso, parse_iso_date, parse_money

"""Row validation and dry run aggregation.

Each row is checked independently; issues are collected, never raised. The
aggregate decides the readiness gate: the import may only proceed when every
row is clean, every size label resolved and the catalog loaded. There is no
partial-import mode.
"""

__all__ = [
    "REQUIRED_FIELDS",
    "analyze_import",
    "validate_row",
]

logger = logging.getLogger(__name__)

# Canonical field -> message when the field is blank
REQUIRED_FIELDS: dict[str, str] = {
    "job_no": "Missing Job No",
    "skip_size": "Missing Skip Size",
    "postcode": "Missing Postcode",
    "address": "Missing Address",
}


def validate_row(row: ImportRow, *, dayfirst: bool = True) -> list[ValidationIssue]:
    """Return the row's issues in a stable order (empty list when clean)."""
    issues: list[ValidationIssue] = []

    def add(field: str, message: str) -> None:
        issues.append(ValidationIssue(row_index=row.row_number, field=field, message=message))

    if not row.stripped("job_no"):
        add("job_no", REQUIRED_FIELDS["job_no"])
    if not row.stripped("skip_size"):
        add("skip_size", REQUIRED_FIELDS["skip_size"])
    if not parse_iso_date(row.get("delivery_date"), dayfirst=dayfirst):
        add("delivery_date", "Missing/invalid Delivery Date")
    if not row.stripped("postcode"):
        add("postcode", REQUIRED_FIELDS["postcode"])
    if not row.stripped("address"):
        add("address", REQUIRED_FIELDS["address"])

    price_raw = row.stripped("base_skip_price_inc_vat")
    if price_raw and parse_money(price_raw) is None:
        add("base_skip_price_inc_vat", "Price present but not parseable")

    total_raw = row.stripped("total_price_inc_vat")
    if total_raw and parse_money(total_raw) is None:
        add("total_price_inc_vat", "Total price present but not parseable")

    return issues


def _customer_label(row: ImportRow) -> str:
    company = row.stripped("company_name")
    first = row.stripped("customer_first_name")
    last = row.stripped("customer_last_name")
    if not (first or last):
        return company
    person = f"{first} {last}".strip()
    return f"{company} – {person}" if company else person


def _combined_notes(row: ImportRow) -> str:
    parts = [row.stripped("notes"), row.stripped("notes_1")]
    return "\n".join(p for p in parts if p)


def _preview(row: ImportRow, match: CatalogMatch | None, dayfirst: bool) -> PreviewRow:
    return PreviewRow(
        row=row,
        job_no=row.stripped("job_no"),
        booking_created_at=parse_datetime_iso(row.get("booking_date"), dayfirst=dayfirst),
        delivery_date=parse_iso_date(row.get("delivery_date"), dayfirst=dayfirst),
        on_hire_start=parse_iso_date(row.get("on_hire_start"), dayfirst=dayfirst),
        collection_date=parse_iso_date(row.get("staff_collection_date"), dayfirst=dayfirst),
        on_hire_end=parse_iso_date(row.get("on_hire_end"), dayfirst=dayfirst),
        status=derive_job_status(row),
        skip_size=row.stripped("skip_size"),
        catalog_match=match,
        postcode=row.stripped("postcode"),
        address=row.stripped("address"),
        price=parse_money(row.get("base_skip_price_inc_vat")),
        total_price=parse_money(row.get("total_price_inc_vat")),
        customer=_customer_label(row),
        notes=_combined_notes(row),
        placement_type=derive_placement_type(row.get("placement")),
        payment_type=derive_payment_type(row.get("booking_type")),
        has_wtn=is_likely_url(row.get("wtn_pdf_link")),
    )


def analyze_import(
    rows: Sequence[ImportRow],
    catalog: Sequence[CatalogEntry],
    *,
    preview_rows: int = DEFAULT_PREVIEW_ROWS,
    dayfirst: bool = True,
    catalog_error: str | None = None,
) -> ImportAnalysis:
    """Validate every row and aggregate the dry run report.

    Args:
        rows: Projected rows in file order
        catalog: Catalog snapshot, in priority order for contains matches
        preview_rows: Number of leading rows kept for the preview
        dayfirst: Read ambiguous free-form dates as DD/MM
        catalog_error: Set when the catalog failed to load; matching is
            skipped and the import is never ready

    Returns:
        ImportAnalysis rebuilt from scratch for this row set and catalog
    """
    index = CatalogIndex(catalog) if catalog_error is None else None

    invalid_rows: list[list[ValidationIssue]] = []
    unknown: Counter[str] = Counter()
    customer_keys: set[str] = set()
    job_numbers: Counter[str] = Counter()
    preview: list[PreviewRow] = []

    for row in rows:
        issues = validate_row(row, dayfirst=dayfirst)
        if issues:
            invalid_rows.append(issues)

        match: CatalogMatch | None = None
        size = row.stripped("skip_size")
        if index is not None:
            match = index.match(size)
            if size and not match.matched:
                unknown[normalize_label(size) or size] += 1

        customer_keys.add(customer_identity_key(row))

        job_no = row.stripped("job_no")
        if job_no:
            job_numbers[job_no] += 1

        if len(preview) < preview_rows:
            preview.append(_preview(row, match, dayfirst))

    unknown_labels = [
        UnknownCatalogLabel(label=label, count=count)
        for label, count in sorted(unknown.items(), key=lambda kv: (-kv[1], kv[0]))
    ]
    duplicates = sorted(j for j, c in job_numbers.items() if c > 1)

    ready = (
        len(rows) > 0
        and not invalid_rows
        and not unknown_labels
        and catalog_error is None
    )

    logger.debug(
        f"analysis rows={len(rows)} invalid={len(invalid_rows)} "
        f"unknown_sizes={len(unknown_labels)} catalog_entries={len(catalog)}"
    )

    return ImportAnalysis(
        total_rows=len(rows),
        unique_customer_count=len(customer_keys),
        job_count=len(rows),
        invalid_rows=invalid_rows,
        unknown_catalog_labels=unknown_labels,
        preview_rows=preview,
        ready_to_import=ready,
        duplicate_job_numbers=duplicates,
        catalog_error=catalog_error,
    )
