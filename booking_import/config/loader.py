from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

from ..models.config_models import (
    DEFAULT_CATALOG_TABLE,
    DEFAULT_PREVIEW_ROWS,
    CatalogConfig,
    DatabaseConfig,
    ImportConfig,
)

"""Config loader for the booking import dry run.

Responsibilities:
- Load YAML config (config/import.yml by convention)
- Validate against config_schema.json shipped next to this module
- Apply defaults (preview_rows=20, dayfirst=true, catalog.table=skip_types)
"""

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/import.yml")


class ConfigError(Exception):
    pass


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against JSON schema.

    Args:
        data: Configuration data to validate

    Raises:
        ConfigError: If the schema file is missing or not valid JSON, or the
            config data fails schema validation (wrong types, unknown keys,
            out-of-range values).
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def default_config() -> ImportConfig:
    return ImportConfig()


def config_from_dict(data: dict[str, Any]) -> ImportConfig:
    """Validate a plain mapping and build the ImportConfig."""
    if not isinstance(data, dict):
        raise ConfigError(f"config must be a mapping, got {type(data).__name__}")
    _validate_config_schema(data)

    db_raw = data.get("database", {})
    db = DatabaseConfig(
        host=db_raw.get("host"),
        port=db_raw.get("port"),
        user=db_raw.get("user"),
        password=db_raw.get("password"),
        database=db_raw.get("database"),
        dsn=db_raw.get("dsn"),
    )
    catalog_raw = data.get("catalog", {})
    return ImportConfig(
        preview_rows=data.get("preview_rows", DEFAULT_PREVIEW_ROWS),
        dayfirst=data.get("dayfirst", True),
        catalog=CatalogConfig(table=catalog_raw.get("table", DEFAULT_CATALOG_TABLE)),
        database=db,
    )


def load_config(path: Path = DEFAULT_CONFIG_PATH) -> ImportConfig:
    if not path.exists():
        raise ConfigError(f"config file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    return config_from_dict(data)
