from __future__ import annotations

from ..models.analysis import ImportAnalysis

"""Summary line rendering for the dry run.

The SUMMARY line is what operators and log scrapers look at first, so its
shape is fixed:

SUMMARY rows={n} customers={n} jobs={n} invalid_rows={n} unknown_sizes={n} ready={yes|no}

A catalog failure adds ``catalog=error`` before ``ready``.
"""

__all__ = [
    "render_summary_line",
    "summary_fields",
]


def summary_fields(analysis: ImportAnalysis) -> str:
    """Render the key=value part of the SUMMARY line.

    Examples:
        >>> a = ImportAnalysis(
        ...     total_rows=3, unique_customer_count=2, job_count=3, invalid_rows=[],
        ...     unknown_catalog_labels=[], preview_rows=[], ready_to_import=True,
        ... )
        >>> summary_fields(a)
        'rows=3 customers=2 jobs=3 invalid_rows=0 unknown_sizes=0 ready=yes'
    """
    parts = [
        f"rows={analysis.total_rows}",
        f"customers={analysis.unique_customer_count}",
        f"jobs={analysis.job_count}",
        f"invalid_rows={len(analysis.invalid_rows)}",
        f"unknown_sizes={len(analysis.unknown_catalog_labels)}",
    ]
    if analysis.catalog_error is not None:
        parts.append("catalog=error")
    parts.append(f"ready={'yes' if analysis.ready_to_import else 'no'}")
    return " ".join(parts)


def render_summary_line(analysis: ImportAnalysis) -> str:
    """The full line as it appears in the log, label included."""
    return "SUMMARY " + summary_fields(analysis)
