"""Helpers for loading the user configuration file (~/.tizenbridge/config.json)."""

from __future__ import annotations

import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Final

CONFIG_DIR = Path.home() / ".tizenbridge"
CONFIG_FILE = CONFIG_DIR / "config.json"

SDB_ENV_VAR: Final[str] = "TIZENBRIDGE_SDB"
DEFAULT_SDB: Final[str] = "sdb"
DEFAULT_CONFIG_XML: Final[str] = "config.xml"
DEFAULT_APP_SCRIPT_PATH: Final[str] = "/tmp/tizen-app.sh"


@lru_cache(maxsize=1)
def load_config() -> dict[str, Any]:
    """Load configuration data from disk (cached)."""

    if not CONFIG_FILE.exists():
        return {}

    try:
        raw = CONFIG_FILE.read_text()
    except OSError:
        return {}

    try:
        data = json.loads(raw)
    except ValueError:
        return {}

    if isinstance(data, dict):
        return data

    return {}


def get_config_value(key: str, default: Any | None = None) -> Any | None:
    """Fetch a configuration value by key."""

    return load_config().get(key, default)


def get_sdb_command() -> str:
    """Resolve the sdb command via env/config, falling back to PATH lookup."""

    from_env = os.environ.get(SDB_ENV_VAR)
    if from_env:
        return from_env

    cfg_value = get_config_value("sdb_path")
    if isinstance(cfg_value, str) and cfg_value:
        return cfg_value

    return DEFAULT_SDB
