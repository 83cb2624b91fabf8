# src/projects_app/utils/config.py
import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .logging_setup import get_logger
from .paths import config_dir, default_db_path

DB_ENV = "PROJECTS_DB"
LOG_LEVEL_ENV = "PROJECTS_LOG_LEVEL"

_DEFAULTS: Dict[str, Any] = {
    "database": {
        "path": None,  # resolved to default_db_path() at load time
    },
    "logging": {
        "level": "INFO",
    },
}

log = get_logger("config")


def settings_file() -> Path:
    return config_dir() / "settings.json"


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """Defaults <- settings.json <- environment."""
    path = path or settings_file()
    data = copy.deepcopy(_DEFAULTS)
    if path.exists():
        try:
            data = _merge(data, json.loads(path.read_text(encoding="utf-8")))
        except (OSError, ValueError) as exc:
            log.warning("Ignoring unreadable settings file %s: %s", path, exc)
            data = copy.deepcopy(_DEFAULTS)

    if os.environ.get(DB_ENV):
        data["database"]["path"] = os.environ[DB_ENV]
    if os.environ.get(LOG_LEVEL_ENV):
        data["logging"]["level"] = os.environ[LOG_LEVEL_ENV]

    if not data["database"].get("path"):
        data["database"]["path"] = str(default_db_path())
    data["logging"]["level"] = str(data["logging"]["level"]).upper()
    return data


def save_settings(data: Dict[str, Any], path: Optional[Path] = None) -> None:
    path = path or settings_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")
