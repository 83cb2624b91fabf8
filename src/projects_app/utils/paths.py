# Rev 0.2.0

"""Paths and XDG helpers (Rev 0.2.0)
- Uses XDG Base Directory spec
- Logs under $XDG_STATE_HOME, settings under $XDG_CONFIG_HOME
- Default DB lives under $XDG_DATA_HOME/projects_app/projects.db
"""
from __future__ import annotations
import os
from pathlib import Path


APP_NAME = "projects_app"


def _xdg(var: str, fallback: Path) -> Path:
    return Path(os.environ.get(var, fallback)).expanduser()


def data_dir() -> Path:
    return _xdg("XDG_DATA_HOME", Path.home() / ".local" / "share") / APP_NAME


def state_dir() -> Path:
    return _xdg("XDG_STATE_HOME", Path.home() / ".local" / "state") / APP_NAME


def logs_dir() -> Path:
    return state_dir() / "logs"


def config_dir() -> Path:
    return _xdg("XDG_CONFIG_HOME", Path.home() / ".config") / APP_NAME


def default_db_path() -> Path:
    return data_dir() / "projects.db"


# Shipped with the package, applied in lexical order
MIGRATIONS_DIR = Path(__file__).resolve().parents[1] / "repositories" / "migrations"
