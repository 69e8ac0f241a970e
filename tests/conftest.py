# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
import pytest

from booking_import.catalog.store import StaticCatalogSource
from booking_import.logging.init import reset_logging
from booking_import.models.catalog import CatalogEntry


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """preview_rows: 10
dayfirst: true
catalog:
  table: skip_types
database:
  host: localhost
  port: 5432
  user: appuser
  password: secret
  database: appdb
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def catalog() -> list[CatalogEntry]:
    # Ordered by name, as the record store returns it
    return [
        CatalogEntry(id="st-4", name="4 Yard Skip"),
        CatalogEntry(id="st-6", name="6 Yard Skip"),
        CatalogEntry(id="st-8", name="8 Yard Skip"),
        CatalogEntry(id="st-12", name="12 Yard Skip"),
        CatalogEntry(id="st-mini", name="Mini Skip"),
    ]


@pytest.fixture()
def catalog_source(catalog: list[CatalogEntry]) -> StaticCatalogSource:
    return StaticCatalogSource(catalog)


@pytest.fixture()
def bookings_csv() -> str:
    return (
        "Job No,Booking Date,First Name,Last Name,Company,Email,Phone,Site Address,"
        "Site Postcode,Skip Size,Payment Type,Placement,Delivery Date,Delivery Status,"
        "Collection Status,Skip Price,Notes,WTN PDF Link\n"
        "J100,01/02/2024 09:30,Sam,Jones,,sam@example.com,07700 900001,12 High St,"
        "CF31 1AA,8yd,Card,Private drive,01/03/2024,Delivered,Collected,£240.00,Gate code 1234,"
        "https://files.example.com/wtn/J100.pdf\n"
        "J101,02/02/2024,Alex,Price,\"Price, \"\"Big\"\" Builders\",,07700 900002,"
        "\"Unit 4\nIndustrial Estate\",CF32 2BB,12 yard,Account,On road,2024-03-04,Delivered,,300,,\n"
        "J102,03/02/2024,Sam,Jones,,SAM@Example.com ,,5 Low Rd,CF33 3CC,Mini Skip,Cash,Road,"
        "05/03/2024,,,,Call ahead,\n"
    )


@pytest.fixture(autouse=True)
def _clean_logging():
    reset_logging()
    yield
    reset_logging()
