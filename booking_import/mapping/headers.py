from __future__ import annotations

import re
from dataclasses import dataclass

"""Header resolution: literal export headers -> canonical booking fields.

Exports come from whatever spreadsheet the operator kept, so column names vary
("Job No", "Job Number", "job_number"). FIELD_ALIASES is the closed,
ordered alias table; for each field the first alias present in the file wins.
"""

__all__ = [
    "CANONICAL_FIELDS",
    "FIELD_ALIASES",
    "HeaderMap",
    "normalize_header",
    "resolve_headers",
]

FIELD_ALIASES: dict[str, tuple[str, ...]] = {
    "job_no": ("Job No", "Job Number", "job_number"),
    "booking_date": ("Booking Date", "Created At", "created_at"),
    "customer_first_name": ("Customer First Name", "First Name", "customer_first_name"),
    "customer_last_name": ("Customer Last Name", "Last Name", "customer_last_name"),
    "company_name": ("Company Name", "Company", "company_name"),
    "customer_email": ("Customer Email", "Email", "customer_email"),
    "customer_phone": ("Customer Phone", "Phone", "customer_phone"),
    "address": ("Address", "Site Address", "site_address_line1"),
    "postcode": ("Postcode", "Site Postcode", "site_postcode"),
    "skip_size": ("Skip Size", "Skip", "skip_size"),
    "booking_type": ("Booking Type", "Payment Type", "booking_type"),
    "placement": ("Placement", "Placement Type", "placement"),
    "delivery_date": ("Delivery Date", "scheduled_date", "Delivery"),
    "delivery_status": ("Delivery Status", "job_status", "delivery_status"),
    "on_hire_start": ("On-Hire Start", "Delivery Actual Date", "delivery_actual_date"),
    "staff_collection_date": ("Staff Collection Date", "Collection Date", "collection_date"),
    "collection_status": ("Collection Status", "collection_status"),
    "on_hire_end": ("On-Hire End", "Collection Actual Date", "collection_actual_date"),
    "base_skip_price_inc_vat": (
        "Base Skip Price (inc VAT)",
        "Skip Price",
        "price_inc_vat",
        "Price (inc VAT)",
    ),
    "total_price_inc_vat": ("Total Price (inc VAT)", "Total Price", "total_price_inc_vat"),
    "notes": ("Notes", "notes"),
    "notes_1": ("Notes 1", "notes_1"),
    "wtn_pdf_link": ("WTN PDF Link", "wtn_pdf_link"),
}

CANONICAL_FIELDS: tuple[str, ...] = tuple(FIELD_ALIASES)

_WS_RE = re.compile(r"\s+")


def normalize_header(text: str | None) -> str:
    """Trim, lowercase and collapse internal whitespace."""
    return _WS_RE.sub(" ", (text or "").strip().lower())


@dataclass(frozen=True)
class HeaderMap:
    """Canonical field -> the literal header found in the file and its column.

    Fields without a matching header are simply absent.
    """
    headers: dict[str, str]
    positions: dict[str, int]

    def __contains__(self, field: object) -> bool:
        return field in self.headers

    def header_for(self, field: str) -> str | None:
        return self.headers.get(field)

    def position_for(self, field: str) -> int | None:
        return self.positions.get(field)

    @property
    def missing_fields(self) -> list[str]:
        return [f for f in CANONICAL_FIELDS if f not in self.headers]


def resolve_headers(header_row: list[str]) -> HeaderMap:
    """Map the export's header row onto the canonical fields.

    When several headers normalize to the same text, the first one in file
    order is used.
    """
    by_norm: dict[str, int] = {}
    for idx, raw in enumerate(header_row):
        key = normalize_header(raw)
        if key and key not in by_norm:
            by_norm[key] = idx

    headers: dict[str, str] = {}
    positions: dict[str, int] = {}
    for field, aliases in FIELD_ALIASES.items():
        for alias in aliases:
            idx = by_norm.get(normalize_header(alias))
            if idx is not None:
                headers[field] = header_row[idx].strip()
                positions[field] = idx
                break
    return HeaderMap(headers=headers, positions=positions)
