from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Protocol

import psycopg2
from dotenv import load_dotenv

from ..models.catalog import CatalogEntry
from ..models.config_models import DEFAULT_CATALOG_TABLE, DatabaseConfig, ImportConfig

"""Catalog sources: where skip size reference data comes from.

The pipeline only needs fetch_catalog(tenant_id). PostgresCatalogStore reads
the tenant's entries plus shared (tenant-less) ones from the record store;
StaticCatalogSource serves an in-memory snapshot. Both are read-only.

Connection resolution order (.env first):
    1. Variables loaded from `.env` (override=True)
    2. DATABASE_URL / PGDSN, used as a whole DSN
    3. Individual PGHOST / PGPORT / PGUSER / PGPASSWORD / PGDATABASE
    4. The `database` section of the config file for anything still missing
"""

__all__ = [
    "CatalogLoadError",
    "CatalogSource",
    "PostgresCatalogStore",
    "StaticCatalogSource",
    "load_env_file",
    "resolve_dsn",
    "rows_to_entries",
]

logger = logging.getLogger(__name__)

_TABLE_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class CatalogLoadError(Exception):
    """Raised when the catalog cannot be fetched; matching must not run."""


class CatalogSource(Protocol):
    def fetch_catalog(self, tenant_id: str) -> list[CatalogEntry]: ...


class StaticCatalogSource:
    """Catalog held in memory, already scoped and ordered by the caller."""

    def __init__(self, entries: Iterable[CatalogEntry]) -> None:
        self._entries = list(entries)

    def fetch_catalog(self, tenant_id: str) -> list[CatalogEntry]:
        return list(self._entries)


def load_env_file(path: Path = Path(".env"), override: bool = True) -> None:
    """Load .env so its connection settings win over the process environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def resolve_dsn(db_cfg: DatabaseConfig) -> str:
    dsn = os.getenv("DATABASE_URL") or os.getenv("PGDSN") or db_cfg.dsn
    if dsn:
        return dsn
    host = os.getenv("PGHOST", db_cfg.host or "localhost")
    port = os.getenv("PGPORT", str(db_cfg.port) if db_cfg.port else "5432")
    user = os.getenv("PGUSER", db_cfg.user or "postgres")
    password = os.getenv("PGPASSWORD", db_cfg.password or "")
    database = os.getenv("PGDATABASE", db_cfg.database or "postgres")
    dsn = f"host={host} port={port} user={user} dbname={database}"
    if password:
        dsn += f" password={password}"
    return dsn


def rows_to_entries(rows: Iterable[tuple[Any, ...]]) -> list[CatalogEntry]:
    """Convert ``(id, name)`` result rows, trimming names and skipping null ids."""
    entries: list[CatalogEntry] = []
    for r in rows:
        entry_id, name = r[0], r[1]
        if entry_id is None:
            continue
        entries.append(CatalogEntry(id=str(entry_id), name=str(name or "").strip()))
    return entries


class PostgresCatalogStore:
    """Reads the skip size catalog from the record store with psycopg2.

    Either pass an open connection (the caller owns it) or let the store
    resolve a DSN from the environment / config and open one per fetch.
    """

    def __init__(
        self,
        db_cfg: DatabaseConfig | None = None,
        *,
        table: str = DEFAULT_CATALOG_TABLE,
        connection: Any = None,
    ) -> None:
        if not _TABLE_NAME_RE.match(table):
            raise ValueError(f"invalid catalog table name: {table!r}")
        self.db_cfg = db_cfg or DatabaseConfig()
        self.table = table
        self._connection = connection

    @classmethod
    def from_config(cls, cfg: ImportConfig) -> PostgresCatalogStore:
        """Store reading `cfg.catalog.table` over the `database` section of the config."""
        return cls(cfg.database, table=cfg.catalog.table)

    @contextmanager
    def _cursor(self) -> Iterator[Any]:
        if self._connection is not None:
            cur = self._connection.cursor()
            try:
                yield cur
            finally:
                cur.close()
            return

        load_env_file()
        conn = psycopg2.connect(resolve_dsn(self.db_cfg))
        try:
            conn.set_session(readonly=True)
            cur = conn.cursor()
            try:
                yield cur
            finally:
                cur.close()
        finally:
            conn.close()

    def fetch_catalog(self, tenant_id: str) -> list[CatalogEntry]:
        """Return the tenant's entries plus shared ones, ordered by name.

        Raises:
            CatalogLoadError: on any connection or query failure
        """
        query = (
            f"SELECT id, name FROM {self.table} "
            "WHERE subscriber_id = %s OR subscriber_id IS NULL "
            "ORDER BY name ASC"
        )
        try:
            with self._cursor() as cur:
                cur.execute(query, (tenant_id,))
                rows = cur.fetchall()
        except psycopg2.Error as e:
            raise CatalogLoadError(f"Could not load skip types: {e}") from e
        entries = rows_to_entries(rows)
        logger.debug(f"catalog loaded tenant={tenant_id} entries={len(entries)}")
        return entries
