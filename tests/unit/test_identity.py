from __future__ import annotations

from booking_import.mapping.headers import CANONICAL_FIELDS
from booking_import.matching.identity import customer_identity_key, identity_key_from_fields
from booking_import.models.import_row import ImportRow


def _row(**values: str) -> ImportRow:
    full = {f: "" for f in CANONICAL_FIELDS}
    full.update(values)
    return ImportRow(row_number=2, values=full)


def test_email_wins_and_is_normalized():
    a = _row(customer_email="a@x.com", customer_phone="1")
    b = _row(customer_email=" A@X.com ", company_name="Other Ltd")
    assert customer_identity_key(a) == "email:a@x.com"
    assert customer_identity_key(a) == customer_identity_key(b)


def test_phone_and_company():
    assert identity_key_from_fields("", "07700  900001", "Acme Ltd", "", "") == "phone_company:07700 900001|acme ltd"


def test_phone_only():
    assert identity_key_from_fields(None, "07700 900001", None, "Sam", "Jones") == "phone:07700 900001"


def test_company_only():
    assert identity_key_from_fields("", "", " ACME  Ltd ", "Sam", "") == "company:acme ltd"


def test_name_fallback_keeps_every_fragment():
    assert identity_key_from_fields("", "", "", " Sam ", "JONES") == "name:sam|jones|||"


def test_key_depends_only_on_contact_fields():
    a = _row(customer_email="a@x.com", job_no="J1", postcode="CF31 1AA")
    b = _row(customer_email="a@x.com", job_no="J2", postcode="SW1A 1AA")
    assert customer_identity_key(a) == customer_identity_key(b)


def test_different_phones_are_different_customers():
    a = _row(customer_phone="1", company_name="Acme")
    b = _row(customer_phone="2", company_name="Acme")
    assert customer_identity_key(a) != customer_identity_key(b)


def test_row_key_reads_every_contact_field():
    row = _row(customer_first_name="Sam", customer_last_name="Jones")
    assert customer_identity_key(row) == "name:sam|jones|||"
