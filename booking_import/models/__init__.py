"""Domain models for the booking import dry run.

This package contains the value objects passed between pipeline stages:
projected rows, catalog entries and matches, validation issues and the final
analysis report.
"""

from .analysis import ImportAnalysis, PreviewRow, UnknownCatalogLabel
from .catalog import CatalogEntry, CatalogMatch, MatchMethod
from .config_models import CatalogConfig, DatabaseConfig, ImportConfig
from .import_row import ImportRow
from .job_status import JobStatus
from .validation_issue import ValidationIssue

__all__ = [
    # Configuration models
    "CatalogConfig",
    "DatabaseConfig",
    "ImportConfig",
    # Pipeline models
    "CatalogEntry",
    "CatalogMatch",
    "ImportRow",
    "JobStatus",
    "MatchMethod",
    "ValidationIssue",
    # Report models
    "ImportAnalysis",
    "PreviewRow",
    "UnknownCatalogLabel",
]
