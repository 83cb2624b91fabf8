# Rev 0.2.0

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from projects_app.models.errors import DbError
from projects_app.repositories.db import Database
from projects_app.tools import migrate


def _tables(db: Database) -> set[str]:
    with db.connect() as conn:
        rows = conn.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()
    return {r[0] for r in rows}


def test_schema_tables_created(db):
    assert {"project", "category", "material", "step", "project_category", "schema_migrations"} <= _tables(db)


def test_migrations_are_applied_once(db):
    assert db.run_migrations() == []
    assert db.pending() == []
    assert list(db.applied()) == ["0001_projects_schema.sql"]


def test_foreign_keys_enabled_per_connection(db):
    with db.connect() as conn:
        assert conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1


def test_failed_transaction_rolls_back(db):
    with pytest.raises(DbError, match="boom"):
        with db.transaction() as conn:
            conn.execute("INSERT INTO category(category_name) VALUES (?)", ("Garden",))
            raise RuntimeError("boom")
    with db.connect() as conn:
        assert conn.execute("SELECT COUNT(*) FROM category").fetchone()[0] == 0


def test_broken_migration_is_not_recorded(tmp_path: Path):
    mig = tmp_path / "migrations"
    mig.mkdir()
    (mig / "0001_ok.sql").write_text("CREATE TABLE a (id INTEGER PRIMARY KEY);", encoding="utf-8")
    (mig / "0002_bad.sql").write_text("CREATE TABLE b (id INTEGER PRIMARY KEY); NOT SQL;", encoding="utf-8")
    db = Database(tmp_path / "m.db", migrations_dir=mig)

    with pytest.raises(DbError, match="Migration failed"):
        db.run_migrations()
    assert list(db.applied()) == ["0001_ok.sql"]
    assert "b" not in _tables(db)


# --- CLI -------------------------------------------------------------------

def test_cli_up_then_status(tmp_path: Path, capsys):
    db_path = tmp_path / "cli.db"
    assert migrate.main(["up", "--db", str(db_path)]) == 0
    assert "Applied migration: 0001_projects_schema.sql" in capsys.readouterr().out

    assert migrate.main(["status", "--db", str(db_path)]) == 0
    out = capsys.readouterr().out
    assert "Applied count: 1" in out
    assert "Pending count: 0" in out


def test_cli_rebuild_with_seed(tmp_path: Path, capsys):
    db_path = tmp_path / "cli.db"
    migrate.main(["up", "--seed", "--db", str(db_path)])
    assert migrate.main(["rebuild", "--seed", "--db", str(db_path)]) == 0
    assert "Rebuild complete" in capsys.readouterr().out

    with Database(db_path).connect() as conn:
        assert conn.execute("SELECT COUNT(*) FROM project").fetchone()[0] == 2


def test_unreadable_database_raises_db_error(tmp_path: Path):
    path = tmp_path / "corrupt.db"
    path.write_bytes(b"this is not an sqlite database " * 64)
    with pytest.raises(DbError, match="Unable to open database"):
        with Database(path).connect():
            pass


def test_rollback_is_logged_below_warning(db, caplog):
    caplog.set_level(logging.DEBUG, logger="projects_app.db")
    with pytest.raises(DbError):
        with db.transaction() as conn:
            conn.execute("INSERT INTO project(project_name) VALUES (NULL)")
    rollbacks = [r for r in caplog.records if "rolled back" in r.getMessage()]
    assert rollbacks
    assert all(r.levelno < logging.WARNING for r in rollbacks)


def test_cli_status_lists_pending(tmp_path: Path, capsys):
    assert migrate.main(["status", "--db", str(tmp_path / "fresh.db")]) == 0
    out = capsys.readouterr().out
    assert "Pending count: 1" in out
    assert "⧗ 0001_projects_schema.sql" in out
