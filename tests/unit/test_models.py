from __future__ import annotations

import dataclasses

import pytest

from booking_import.models import (
    CatalogMatch,
    ImportAnalysis,
    ImportRow,
    MatchMethod,
    UnknownCatalogLabel,
    ValidationIssue,
)


def test_import_row_get_missing_field_is_empty():
    row = ImportRow(row_number=2, values={"job_no": " J1 "})
    assert row.get("postcode") == ""
    assert row.stripped("job_no") == "J1"


def test_import_row_is_frozen():
    row = ImportRow(row_number=2, values={})
    with pytest.raises(dataclasses.FrozenInstanceError):
        row.row_number = 3  # type: ignore[misc]


def test_catalog_match_requires_id_iff_matched():
    with pytest.raises(ValueError):
        CatalogMatch(entry_id=None, matched_name="8 Yard Skip", method=MatchMethod.EXACT)
    with pytest.raises(ValueError):
        CatalogMatch(entry_id="x", matched_name="", method=MatchMethod.NONE)


def test_catalog_match_describe():
    assert CatalogMatch.no_match().describe() == "—"
    assert not CatalogMatch.no_match().matched
    m = CatalogMatch(entry_id="a", matched_name="8 Yard Skip", method=MatchMethod.EXACT)
    assert m.describe() == "8 Yard Skip (exact)"


def test_validation_issue_to_dict():
    issue = ValidationIssue(row_index=3, field="postcode", message="Missing Postcode")
    assert issue.to_dict() == {"row_index": 3, "field": "postcode", "message": "Missing Postcode"}


def test_analysis_issue_count_and_to_dict():
    issues = [
        [ValidationIssue(2, "postcode", "Missing Postcode")],
        [ValidationIssue(4, "job_no", "Missing Job No"), ValidationIssue(4, "address", "Missing Address")],
    ]
    a = ImportAnalysis(
        total_rows=4,
        unique_customer_count=3,
        job_count=4,
        invalid_rows=issues,
        unknown_catalog_labels=[UnknownCatalogLabel(label="8yd", count=2)],
        preview_rows=[],
        ready_to_import=False,
    )
    assert a.issue_count == 3
    d = a.to_dict()
    assert d["unknown_catalog_labels"] == [{"label": "8yd", "count": 2}]
    assert d["invalid_rows"][1][1]["field"] == "address"
    assert d["duplicate_job_numbers"] == []
    assert d["catalog_error"] is None
