from __future__ import annotations

from unittest.mock import MagicMock, patch

import psycopg2
import pytest

from booking_import.catalog.store import (
    CatalogLoadError,
    PostgresCatalogStore,
    StaticCatalogSource,
    resolve_dsn,
    rows_to_entries,
)
from booking_import.config.loader import load_config
from booking_import.models.catalog import CatalogEntry
from booking_import.models.config_models import DatabaseConfig

_PG_VARS = ("DATABASE_URL", "PGDSN", "PGHOST", "PGPORT", "PGUSER", "PGPASSWORD", "PGDATABASE")


@pytest.fixture()
def clean_pg_env(monkeypatch):
    for var in _PG_VARS:
        monkeypatch.delenv(var, raising=False)


def _connection(rows=None, error=None) -> tuple[MagicMock, MagicMock]:
    conn = MagicMock()
    cur = MagicMock()
    conn.cursor.return_value = cur
    if error is not None:
        cur.execute.side_effect = error
    cur.fetchall.return_value = rows or []
    return conn, cur


def test_static_source_returns_copy(catalog):
    source = StaticCatalogSource(catalog)
    fetched = source.fetch_catalog("tenant-1")
    fetched.clear()
    assert source.fetch_catalog("tenant-1") == catalog


def test_fetch_catalog_scopes_by_tenant_and_orders_by_name():
    conn, cur = _connection(rows=[(12, "12 Yard Skip "), ("a8", "8 Yard Skip")])
    store = PostgresCatalogStore(connection=conn)
    entries = store.fetch_catalog("tenant-1")
    assert entries == [CatalogEntry(id="12", name="12 Yard Skip"), CatalogEntry(id="a8", name="8 Yard Skip")]
    sql, params = cur.execute.call_args.args
    assert "FROM skip_types" in sql
    assert "subscriber_id = %s OR subscriber_id IS NULL" in sql
    assert "ORDER BY name ASC" in sql
    assert params == ("tenant-1",)
    cur.close.assert_called_once()
    conn.close.assert_not_called()


def test_fetch_catalog_wraps_driver_errors():
    conn, _ = _connection(error=psycopg2.OperationalError("server closed the connection"))
    store = PostgresCatalogStore(connection=conn)
    with pytest.raises(CatalogLoadError) as e:
        store.fetch_catalog("tenant-1")
    assert "Could not load skip types" in str(e.value)
    assert isinstance(e.value.__cause__, psycopg2.OperationalError)


def test_fetch_catalog_opens_read_only_connection(clean_pg_env, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    conn, _ = _connection(rows=[("1", "Mini Skip")])
    with patch("booking_import.catalog.store.psycopg2.connect", return_value=conn) as connect:
        store = PostgresCatalogStore(DatabaseConfig(host="db", database="bookings"), table="sizes")
        assert store.fetch_catalog("t") == [CatalogEntry(id="1", name="Mini Skip")]
    connect.assert_called_once_with("host=db port=5432 user=postgres dbname=bookings")
    conn.set_session.assert_called_once_with(readonly=True)
    conn.close.assert_called_once()


def test_connect_failure_is_a_catalog_error(clean_pg_env, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    with patch(
        "booking_import.catalog.store.psycopg2.connect",
        side_effect=psycopg2.OperationalError("could not connect"),
    ):
        with pytest.raises(CatalogLoadError):
            PostgresCatalogStore().fetch_catalog("t")


def test_invalid_table_name_rejected():
    with pytest.raises(ValueError):
        PostgresCatalogStore(table="skip_types; DROP TABLE jobs")


def test_rows_to_entries_skips_null_ids():
    assert rows_to_entries([(None, "x"), (1, None)]) == [CatalogEntry(id="1", name="")]


def test_resolve_dsn_prefers_database_url(clean_pg_env, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u@h/db")
    assert resolve_dsn(DatabaseConfig(dsn="ignored")) == "postgresql://u@h/db"


def test_resolve_dsn_env_overrides_config(clean_pg_env, monkeypatch):
    monkeypatch.setenv("PGHOST", "envhost")
    monkeypatch.setenv("PGPASSWORD", "pw")
    cfg = DatabaseConfig(host="cfghost", port=6543, user="app", database="appdb")
    assert resolve_dsn(cfg) == "host=envhost port=6543 user=app dbname=appdb password=pw"


def test_resolve_dsn_config_dsn(clean_pg_env):
    assert resolve_dsn(DatabaseConfig(dsn="host=x dbname=y")) == "host=x dbname=y"


def test_from_config_uses_database_and_catalog_sections(clean_pg_env, write_config, sample_config_yaml):
    write_config.write_text(sample_config_yaml.replace("table: skip_types", "table: tenant_skip_types"), encoding="utf-8")
    cfg = load_config(write_config)
    conn, cur = _connection(rows=[("1", "Mini Skip")])
    with patch("booking_import.catalog.store.psycopg2.connect", return_value=conn) as connect:
        store = PostgresCatalogStore.from_config(cfg)
        assert store.fetch_catalog("t") == [CatalogEntry(id="1", name="Mini Skip")]
    connect.assert_called_once_with(
        "host=localhost port=5432 user=appuser dbname=appdb password=secret"
    )
    sql, _ = cur.execute.call_args.args
    assert "FROM tenant_skip_types" in sql
