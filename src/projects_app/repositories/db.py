# Rev 0.2.0

"""SQLite connection factory & migration runner (Rev 0.2.0)
- One connection per operation, closed when the scope exits
- WAL mode, foreign_keys=ON (material/step/project_category cascade)
- Explicit BEGIN / COMMIT / ROLLBACK via Database.transaction()
- Applies SQL files in repositories/migrations in lexical order
- Tracks applied files in schema_migrations(filename, sha256, applied_at_utc)
"""
from __future__ import annotations
import hashlib
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from decimal import Decimal
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from ..models.entities import TWO_PLACES
from ..models.errors import DbError
from ..utils.logging_setup import get_logger
from ..utils.paths import MIGRATIONS_DIR, default_db_path

# DECIMAL(7,2) columns: bind as text, read back at two-digit scale
sqlite3.register_adapter(Decimal, str)
sqlite3.register_converter("DECIMAL", lambda raw: Decimal(raw.decode("utf-8")).quantize(TWO_PLACES))

log = get_logger("db")


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


def sha256_text(sql: str) -> str:
    return hashlib.sha256(sql.encode("utf-8")).hexdigest()


def _describe(exc: BaseException) -> str:
    return f"{type(exc).__name__}: {exc}"


class Database:
    def __init__(self, path: Path | str | None = None, migrations_dir: Path = MIGRATIONS_DIR) -> None:
        self.path = Path(path) if path else default_db_path()
        self.migrations_dir = Path(migrations_dir)

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        """Open a fresh connection; always closed on exit."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(
                self.path,
                isolation_level=None,  # we manage transactions
                detect_types=sqlite3.PARSE_DECLTYPES,
            )
        except (sqlite3.Error, OSError) as exc:
            raise DbError(f"Unable to open database {self.path}: {exc}") from exc
        try:
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA journal_mode=WAL;")
            conn.execute("PRAGMA foreign_keys=ON;")
            conn.execute("PRAGMA busy_timeout=5000;")
        except sqlite3.Error as exc:
            conn.close()
            raise DbError(f"Unable to open database {self.path}: {exc}") from exc
        try:
            yield conn
        finally:
            conn.close()

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Connection scoped to one transaction: commit on success, roll back on any error."""
        with self.connect() as conn:
            try:
                conn.execute("BEGIN;")
                yield conn
                conn.execute("COMMIT;")
            except Exception as exc:
                if conn.in_transaction:
                    conn.execute("ROLLBACK;")
                log.info("Transaction rolled back: %s", _describe(exc))
                if isinstance(exc, DbError):
                    raise
                raise DbError(_describe(exc)) from exc

    # ---------- migrations ----------

    def _ensure_migrations_table(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS schema_migrations (
                filename TEXT PRIMARY KEY,
                sha256 TEXT NOT NULL,
                applied_at_utc TEXT NOT NULL
            )
            """
        )

    def _apply_script(self, sql: str) -> None:
        # executescript() commits any open transaction first, so the script
        # carries its own BEGIN/COMMIT.
        with self.connect() as conn:
            try:
                conn.executescript(f"BEGIN;\n{sql}\nCOMMIT;")
            except sqlite3.Error as exc:
                if conn.in_transaction:
                    conn.execute("ROLLBACK;")
                raise DbError(f"Migration failed: {_describe(exc)}") from exc

    def migration_files(self) -> List[Path]:
        return sorted(self.migrations_dir.glob("*.sql"))

    def applied(self) -> Dict[str, Tuple[str, str]]:
        """filename -> (sha256, applied_at_utc)"""
        with self.transaction() as conn:
            self._ensure_migrations_table(conn)
            rows = conn.execute(
                "SELECT filename, sha256, applied_at_utc FROM schema_migrations ORDER BY filename"
            ).fetchall()
        return {r["filename"]: (r["sha256"], r["applied_at_utc"]) for r in rows}

    def pending(self) -> List[str]:
        applied = self.applied()
        return [p.name for p in self.migration_files() if p.name not in applied]

    def run_migrations(self, migrations_dir: Optional[Path] = None) -> List[str]:
        if migrations_dir is not None:
            self.migrations_dir = Path(migrations_dir)
        applied = self.applied()
        applied_now: List[str] = []
        for p in self.migration_files():
            sql = p.read_text(encoding="utf-8")
            digest = sha256_text(sql)
            if p.name in applied:
                if applied[p.name][0] != digest:
                    log.warning("Hash changed for already applied migration %s", p.name)
                continue
            self._apply_script(sql)
            with self.transaction() as conn:
                conn.execute(
                    "INSERT INTO schema_migrations(filename, sha256, applied_at_utc) VALUES(?, ?, ?)",
                    (p.name, digest, utc_now_iso()),
                )
            log.info("Applied migration %s to %s", p.name, self.path)
            applied_now.append(p.name)
        return applied_now
