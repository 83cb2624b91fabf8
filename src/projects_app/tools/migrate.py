# File: src/projects_app/tools/migrate.py
# Usage examples:
#   python -m projects_app.tools.migrate up
#   python -m projects_app.tools.migrate status
#   python -m projects_app.tools.migrate rebuild --seed
#   python -m projects_app.tools.migrate up --db /path/to/projects.db
#
# Notes:
# - DB path defaults to env PROJECTS_DB, then settings.json, then the XDG data dir
# - Applies repositories/migrations/*.sql in lexicographic order
# - Records applied migrations (name + sha256) in schema_migrations

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from ..dev_seed import run_seed
from ..models.errors import DbError
from ..repositories.db import Database, sha256_text
from ..repositories.sqlite_project_repository import SQLiteProjectRepository
from ..utils.config import load_settings
from ..utils.paths import MIGRATIONS_DIR


def _seed(db: Database) -> None:
    seeded = run_seed(SQLiteProjectRepository(db))
    print(f"→ Seeded {len(seeded)} projects")


def cmd_status(db: Database) -> int:
    applied = db.applied()
    files = db.migration_files()
    print(f"DB: {db.path}")
    print(f"Migrations dir: {db.migrations_dir}")
    print(f"Applied count: {len(applied)}")
    for name, (digest, when) in applied.items():
        print(f"  ✔ {name}  ({when})")

    changed = [p.name for p in files if p.name in applied and applied[p.name][0] != sha256_text(p.read_text(encoding="utf-8"))]
    for name in changed:
        print(f"  ⚠️  {name} changed after it was applied")

    pending = db.pending()
    print(f"Pending count: {len(pending)}")
    for name in pending:
        print(f"  ⧗ {name}")
    return 0


def cmd_up(db: Database, seed: bool) -> int:
    applied_now = db.run_migrations()
    for name in applied_now:
        print(f"→ Applied migration: {name}")
    if applied_now:
        print("✓ Database is up to date.")
    else:
        print("✓ No changes. Database already up to date.")
    if seed:
        _seed(db)
    return 0


def cmd_rebuild(db: Database, seed: bool) -> int:
    # Drop DB file (and WAL side files) and rebuild from migrations
    for suffix in ("", "-wal", "-shm"):
        p = db.path.with_name(db.path.name + suffix)
        if p.exists():
            print(f"⟲ Rebuilding: removing {p}")
            p.unlink()
    db.run_migrations()
    if seed:
        _seed(db)
    print("✓ Rebuild complete.")
    return 0


def parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="projects-migrate", description="SQLite migration runner for projects_app")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_common(sp: argparse.ArgumentParser):
        sp.add_argument("--db", type=Path, default=None, help="Path to SQLite DB (default: PROJECTS_DB / settings.json)")
        sp.add_argument("--migrations-dir", type=Path, default=MIGRATIONS_DIR, help=f"Migrations directory (default: {MIGRATIONS_DIR})")

    s_up = sub.add_parser("up", help="Run pending migrations")
    add_common(s_up)
    s_up.add_argument("--seed", action="store_true", help="Seed demo projects after applying")

    s_rebuild = sub.add_parser("rebuild", help="Drop and recreate DB from migrations")
    add_common(s_rebuild)
    s_rebuild.add_argument("--seed", action="store_true", help="Seed demo projects after rebuild")

    s_status = sub.add_parser("status", help="Show applied and pending migrations")
    add_common(s_status)

    return p.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    ns = parse_args(sys.argv[1:] if argv is None else argv)
    db = Database(ns.db or load_settings()["database"]["path"], migrations_dir=ns.migrations_dir)
    try:
        if ns.cmd == "status":
            return cmd_status(db)
        if ns.cmd == "up":
            return cmd_up(db, ns.seed)
        if ns.cmd == "rebuild":
            return cmd_rebuild(db, ns.seed)
    except DbError as exc:
        print(f"❌ {exc}", file=sys.stderr)
        return 2
    raise SystemExit(1)


if __name__ == "__main__":
    raise SystemExit(main())
