from __future__ import annotations

import logging
import sys
from decimal import Decimal
from pathlib import Path

import pytest

from projects_app.app_context import AppContext
from projects_app.dev_seed import run_seed
from projects_app.utils import config
from projects_app.utils.logging_setup import get_logger, setup_logging


def test_seed_populates_children(repo):
    seeded = run_seed(repo)
    assert [p.name for p in seeded] == ["Hang a door", "Build a bookshelf"]

    door = seeded[0]
    assert len(door.materials) == 3
    assert door.materials[1].cost == Decimal("3.25")
    assert [s.order for s in door.steps] == [1, 2]
    assert sorted(c.name for c in door.categories) == ["Doors and Windows", "Repairs"]


def test_app_context_wires_service(tmp_path: Path):
    ctx = AppContext.create(tmp_path / "ctx.db")
    assert ctx.db.pending() == []
    assert ctx.project_service.fetch_all_projects() == []


# --- settings --------------------------------------------------------------

@pytest.fixture()
def xdg(tmp_path: Path, monkeypatch):
    for var in ("XDG_CONFIG_HOME", "XDG_DATA_HOME", "XDG_STATE_HOME"):
        monkeypatch.setenv(var, str(tmp_path / var.lower()))
    monkeypatch.delenv(config.DB_ENV, raising=False)
    monkeypatch.delenv(config.LOG_LEVEL_ENV, raising=False)
    return tmp_path


def test_defaults_use_xdg_data_dir(xdg):
    settings = config.load_settings()
    assert settings["database"]["path"] == str(xdg / "xdg_data_home" / "projects_app" / "projects.db")
    assert settings["logging"]["level"] == "INFO"


def test_settings_file_and_env_override(xdg, monkeypatch):
    config.save_settings({"database": {"path": "/tmp/from-file.db"}, "logging": {"level": "debug"}})
    settings = config.load_settings()
    assert settings["database"]["path"] == "/tmp/from-file.db"
    assert settings["logging"]["level"] == "DEBUG"

    monkeypatch.setenv(config.DB_ENV, "/tmp/from-env.db")
    assert config.load_settings()["database"]["path"] == "/tmp/from-env.db"


def test_unreadable_settings_fall_back_to_defaults(xdg):
    path = config.settings_file()
    path.parent.mkdir(parents=True)
    path.write_text("{not json", encoding="utf-8")
    assert config.load_settings()["logging"]["level"] == "INFO"


def test_setup_logging_writes_file(tmp_path: Path):
    root = logging.getLogger()
    before, level, hook = list(root.handlers), root.level, sys.excepthook
    try:
        logfile = setup_logging("DEBUG", log_dir=tmp_path)
        get_logger("test").info("hello from test")
        for h in root.handlers:
            h.flush()
        assert "hello from test" in logfile.read_text(encoding="utf-8")
    finally:
        for h in list(root.handlers):
            if h not in before:
                root.removeHandler(h)
                h.close()
        root.setLevel(level)
        sys.excepthook = hook
