from __future__ import annotations

from ..models.import_row import ImportRow
from ..normalize import collapse

"""Customer identity keys for deduplicating customers across rows.

Exports rarely carry a customer id, only whatever contact fragments the
office typed. The key is built from the strongest fragment present:

1. email                 -> email:<email>
2. phone and company     -> phone_company:<phone>|<company>
3. phone                 -> phone:<phone>
4. company               -> company:<company>
5. nothing identifying   -> name:<first>|<last>|<company>|<phone>|<email>

The last form keeps fragmentless rows apart instead of collapsing them into a
single customer; two genuinely identical fragmentless rows are therefore not
deduplicated.
"""

__all__ = [
    "CONTACT_FIELDS",
    "customer_identity_key",
    "identity_key_from_fields",
]

# Positional order of identity_key_from_fields
CONTACT_FIELDS = (
    "customer_email",
    "customer_phone",
    "company_name",
    "customer_first_name",
    "customer_last_name",
)


def identity_key_from_fields(
    email: str | None,
    phone: str | None,
    company: str | None,
    first: str | None,
    last: str | None,
) -> str:
    e = collapse(email)
    p = collapse(phone)
    c = collapse(company)
    if e:
        return f"email:{e}"
    if p and c:
        return f"phone_company:{p}|{c}"
    if p:
        return f"phone:{p}"
    if c:
        return f"company:{c}"
    return f"name:{collapse(first)}|{collapse(last)}|{c}|{p}|{e}"


def customer_identity_key(row: ImportRow) -> str:
    """Deterministic key from the row's contact fields only."""
    return identity_key_from_fields(*(row.get(f) for f in CONTACT_FIELDS))
