from __future__ import annotations

import pytest

from booking_import.matching.status import (
    derive_job_status,
    derive_payment_type,
    derive_placement_type,
)
from booking_import.models.import_row import ImportRow
from booking_import.models.job_status import JobStatus


def _row(delivery: str = "", collection: str = "") -> ImportRow:
    return ImportRow(row_number=2, values={"delivery_status": delivery, "collection_status": collection})


def test_collected_beats_delivered():
    assert derive_job_status(_row("Delivered", "Collected")) is JobStatus.COLLECTED


def test_collected_without_delivery():
    assert derive_job_status(_row("", " COLLECTED ")) is JobStatus.COLLECTED


def test_delivered():
    assert derive_job_status(_row("delivered", "")) is JobStatus.DELIVERED


@pytest.mark.parametrize("delivery, collection", [("", ""), ("Pending", "Awaiting"), ("Not delivered", "")])
def test_booked_otherwise(delivery, collection):
    assert derive_job_status(_row(delivery, collection)) is JobStatus.BOOKED


@pytest.mark.parametrize(
    "value, expected",
    [("On road (permit)", "road"), ("Public highway", "road"), ("Private drive", "private"), ("Garden", None), ("", None)],
)
def test_placement_type(value, expected):
    assert derive_placement_type(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [("Invoice", "account"), ("Account", "account"), ("Card", "card"), ("Cash", "cash"), ("COD", "cash"), ("Cheque", None), (None, None)],
)
def test_payment_type(value, expected):
    assert derive_payment_type(value) == expected
