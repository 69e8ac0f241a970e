from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from ..catalog.store import CatalogLoadError, CatalogSource
from ..logging.init import log_summary, setup_logging
from ..mapping.headers import resolve_headers
from ..mapping.projector import project_rows
from ..models.analysis import ImportAnalysis
from ..models.catalog import CatalogEntry
from ..models.config_models import ImportConfig, clamp_preview_rows
from ..tabular.decoder import RawGrid, decode_bytes, decode_csv
from ..tabular.reader import load_grid
from .summary import summary_fields
from .validator import REQUIRED_FIELDS, analyze_import

"""Dry run orchestration: file -> grid -> rows -> analysis.

This is the single entry point the console calls. It composes the pure
stages in order:
1. Decode the upload into a grid (DecodeError is fatal)
2. Fetch the tenant's catalog (CatalogLoadError is fatal; analysis is never
   run against a missing catalog)
3. Resolve headers, project rows, validate and aggregate
4. Log the SUMMARY line

Nothing is written to the record store. Each call is independent: a new file
or a changed catalog simply means calling again.
"""

__all__ = [
    "analyze_grid",
    "dry_run_file",
    "run_dry_run",
]

logger = logging.getLogger(__name__)


def analyze_grid(
    grid: RawGrid,
    catalog: Sequence[CatalogEntry],
    config: ImportConfig | None = None,
    *,
    catalog_error: str | None = None,
) -> ImportAnalysis:
    """Run header resolution, projection and validation on a decoded grid."""
    cfg = config or ImportConfig()
    header_map = resolve_headers(grid[0])
    absent = [f for f in (*REQUIRED_FIELDS, "delivery_date") if f not in header_map]
    if absent:
        logger.warning(f"required columns not found in header: {absent}")
    logger.debug(f"headers resolved={sorted(header_map.headers)}")

    rows = project_rows(grid, header_map)
    return analyze_import(
        rows,
        catalog,
        preview_rows=clamp_preview_rows(cfg.preview_rows),
        dayfirst=cfg.dayfirst,
        catalog_error=catalog_error,
    )


def _fetch_catalog(catalog_source: CatalogSource, tenant_id: str) -> list[CatalogEntry]:
    try:
        return catalog_source.fetch_catalog(tenant_id)
    except CatalogLoadError as e:
        logger.error(f"catalog: {e}")
        raise


def _finish(analysis: ImportAnalysis, label: str) -> ImportAnalysis:
    logger.info(
        f"dry run {label}: rows={analysis.total_rows} issues={analysis.issue_count} "
        f"duplicate_job_numbers={len(analysis.duplicate_job_numbers)}"
    )
    log_summary(summary_fields(analysis))
    return analysis


def run_dry_run(
    data: str | bytes,
    tenant_id: str,
    catalog_source: CatalogSource,
    config: ImportConfig | None = None,
    *,
    file_name: str | None = None,
) -> ImportAnalysis:
    """Analyse an uploaded CSV export for one tenant.

    Args:
        data: Raw upload, as text or bytes
        tenant_id: Tenant whose catalog the sizes are matched against
        catalog_source: Read-only catalog capability
        config: Dry run settings (defaults when None)
        file_name: Used in log lines only

    Raises:
        DecodeError: when the upload is empty or unreadable
        CatalogLoadError: when the catalog could not be fetched
    """
    setup_logging()
    text = decode_bytes(data) if isinstance(data, bytes) else data
    grid = decode_csv(text)
    catalog = _fetch_catalog(catalog_source, tenant_id)
    analysis = analyze_grid(grid, catalog, config)
    return _finish(analysis, file_name or "<upload>")


def dry_run_file(
    path: Path,
    tenant_id: str,
    catalog_source: CatalogSource,
    config: ImportConfig | None = None,
) -> ImportAnalysis:
    """Analyse a CSV or Excel export on disk. Same errors as run_dry_run."""
    setup_logging()
    grid = load_grid(path)
    catalog = _fetch_catalog(catalog_source, tenant_id)
    analysis = analyze_grid(grid, catalog, config)
    return _finish(analysis, path.name)
