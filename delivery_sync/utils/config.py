"""
Configuration loader for the delivery sync job.

Reads an optional YAML file (``config/sync.yaml`` or ``$SYNC_CONFIG``),
normalises environment variables, and exposes a frozen ``SyncSettings`` object
that is passed explicitly to the reader, transformer and synchronizer.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Union

import os

import yaml
from dotenv import load_dotenv

from delivery_sync.errors import ConfigError
from delivery_sync.utils.env_utils import get_env_stripped

ROOT_DIR = Path(__file__).resolve().parents[2]
DEFAULT_CONFIG_PATH = ROOT_DIR / "config" / "sync.yaml"
DEFAULT_EXCEL_FILE = "delivery_tickets.xlsx"
DEFAULT_TIMEZONE = "Asia/Kuala_Lumpur"
DEFAULT_UPDATED_BY = "GitHub_Automation"


def _expand_env(value: Any) -> Any:
    """Recursively expand environment variables inside config values."""
    if isinstance(value, str):
        return os.path.expandvars(value)
    if isinstance(value, list):
        return [_expand_env(item) for item in value]
    if isinstance(value, dict):
        return {key: _expand_env(val) for key, val in value.items()}
    return value


@dataclass(frozen=True)
class TableNames:
    analytics: str = "delivery_analytics"
    aging: str = "delivery_data"
    metadata: str = "delivery_metadata"


@dataclass(frozen=True)
class TransformOptions:
    updated_by: str = DEFAULT_UPDATED_BY
    extra_columns: Mapping[str, List[str]] = field(default_factory=dict)
    departments: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class SyncSettings:
    base_url: str
    api_key: str
    excel_file: str = DEFAULT_EXCEL_FILE
    tables: TableNames = field(default_factory=TableNames)
    metadata_id: int = 1
    timezone: str = DEFAULT_TIMEZONE
    transform: TransformOptions = field(default_factory=TransformOptions)

    @property
    def rest_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/rest/v1"


def read_config_file(path: Optional[Union[str, Path]] = None) -> Dict[str, Any]:
    """
    Load the YAML config file with ``$VAR`` expansion.

    An explicit path must exist; the default location is optional.
    """
    cfg_path = Path(path) if path else DEFAULT_CONFIG_PATH
    if not cfg_path.exists():
        if path:
            raise ConfigError(f"Configuration file not found: {cfg_path}")
        return {}

    with cfg_path.open("r", encoding="utf-8") as fh:
        try:
            raw_data = yaml.safe_load(fh) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in {cfg_path}: {exc}") from exc

    if not isinstance(raw_data, dict):
        raise ConfigError(f"Configuration file must contain a mapping: {cfg_path}")
    return _expand_env(raw_data)


def _as_int(name: str, value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"{name} must be an integer, got {value!r}") from None


def _build_transform_options(raw: Mapping[str, Any], env: Mapping[str, str]) -> TransformOptions:
    columns = raw.get("columns") or {}
    departments = raw.get("departments") or {}
    if not isinstance(columns, dict) or not isinstance(departments, dict):
        raise ConfigError("'columns' and 'departments' must be mappings")

    extra_columns = {
        str(key): [str(v) for v in (vals if isinstance(vals, list) else [vals])]
        for key, vals in columns.items()
    }
    return TransformOptions(
        updated_by=get_env_stripped("SYNC_UPDATED_BY", str(raw.get("updated_by") or DEFAULT_UPDATED_BY), env),
        extra_columns=extra_columns,
        departments={str(k): str(v) for k, v in departments.items()},
    )


def load_settings(
    env: Optional[Mapping[str, str]] = None,
    config_path: Optional[Union[str, Path]] = None,
    require_remote: bool = True,
) -> SyncSettings:
    """
    Build ``SyncSettings`` from the config file and environment.

    Parameters
    ----------
    env: Mapping used instead of ``os.environ`` (dotenv files are only loaded
        when reading the process environment).
    config_path: Optional YAML override; defaults to ``$SYNC_CONFIG`` or
        ``config/sync.yaml``.
    require_remote: When False (dry runs) missing credentials are tolerated.
    """
    if env is None:
        load_dotenv(".env.local", override=False)
        load_dotenv(override=False)
        env = os.environ

    raw = read_config_file(config_path or get_env_stripped("SYNC_CONFIG", "", env) or None)

    base_url = get_env_stripped("SUPABASE_URL", "", env)
    api_key = get_env_stripped("SUPABASE_KEY", "", env)
    if require_remote:
        missing = [name for name, val in (("SUPABASE_URL", base_url), ("SUPABASE_KEY", api_key)) if not val]
        if missing:
            raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

    tables_raw = raw.get("tables") or {}
    defaults = TableNames()
    tables = TableNames(
        analytics=get_env_stripped("ANALYTICS_TABLE", str(tables_raw.get("analytics", defaults.analytics)), env),
        aging=get_env_stripped("AGING_TABLE", str(tables_raw.get("aging", defaults.aging)), env),
        metadata=get_env_stripped("METADATA_TABLE", str(tables_raw.get("metadata", defaults.metadata)), env),
    )

    return SyncSettings(
        base_url=base_url,
        api_key=api_key,
        excel_file=get_env_stripped("EXCEL_FILE", str(raw.get("excel_file") or DEFAULT_EXCEL_FILE), env),
        tables=tables,
        metadata_id=_as_int("METADATA_ID", get_env_stripped("METADATA_ID", str(raw.get("metadata_id", 1)), env)),
        timezone=get_env_stripped("SYNC_TIMEZONE", str(raw.get("timezone") or DEFAULT_TIMEZONE), env),
        transform=_build_transform_options(raw, env),
    )


__all__ = [
    "DEFAULT_EXCEL_FILE",
    "SyncSettings",
    "TableNames",
    "TransformOptions",
    "load_settings",
    "read_config_file",
]
