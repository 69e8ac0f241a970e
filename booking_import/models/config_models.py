from __future__ import annotations

from dataclasses import dataclass, field

"""Config dataclasses for the booking import dry run.

The loader in booking_import/config/loader.py builds these from YAML; callers
that do not use a config file get the same defaults from default_config().
"""

DEFAULT_PREVIEW_ROWS = 20
MIN_PREVIEW_ROWS = 5
MAX_PREVIEW_ROWS = 200
DEFAULT_CATALOG_TABLE = "skip_types"


@dataclass(frozen=True)
class DatabaseConfig:
    """Record store connection configuration.

    Used as fallback when environment variables are not set.
    Environment variables take precedence over these values.
    """
    host: str | None = None
    port: int | None = None
    user: str | None = None
    password: str | None = None
    database: str | None = None
    dsn: str | None = None


@dataclass(frozen=True)
class CatalogConfig:
    """Where the skip size catalog lives in the record store."""
    table: str = DEFAULT_CATALOG_TABLE


@dataclass(frozen=True)
class ImportConfig:
    """Root configuration object for a dry run."""
    preview_rows: int = DEFAULT_PREVIEW_ROWS  # Preview cap (first N rows in file order)
    dayfirst: bool = True  # Free-form dates read as DD/MM (UK exports)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)


def clamp_preview_rows(value: int) -> int:
    """Keep the preview cap inside the range the console offers."""
    return max(MIN_PREVIEW_ROWS, min(MAX_PREVIEW_ROWS, int(value)))
