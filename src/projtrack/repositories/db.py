# Rev 0.3.0

"""SQLite connection & migration runner (Rev 0.3.0)
- WAL mode, foreign_keys=ON, autocommit connection with explicit transactions
- Applies SQL files in projtrack/data/migrations in lexical order
- Tracks applied files in schema_migrations(filename, sha256, applied_at_utc)
"""
from __future__ import annotations
import hashlib
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from datetime import datetime, timezone
from typing import Iterator


from projtrack.utils.logging_setup import get_logger
from projtrack.utils.paths import MIGRATIONS_DIR, db_path


log = get_logger("db")


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def sha256_text(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()


def _sql_literal(text: str) -> str:
    return "'" + text.replace("'", "''") + "'"


@contextmanager
def transaction(conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """
    BEGIN … COMMIT, or ROLLBACK and re-raise.
    Inside an already open transaction this is a no-op so repository calls
    compose into one unit of work.
    """
    if conn.in_transaction:
        yield conn
        return
    conn.execute("BEGIN;")
    try:
        yield conn
    except BaseException:
        conn.execute("ROLLBACK;")
        raise
    else:
        conn.execute("COMMIT;")


class Database:
    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else db_path()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(self.path, isolation_level=None, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA journal_mode=WAL;")
        self.conn.execute("PRAGMA foreign_keys=ON;")
        self.conn.execute("PRAGMA busy_timeout=5000;")
        self.conn.execute(
            "CREATE TABLE IF NOT EXISTS schema_migrations ("
            " filename TEXT PRIMARY KEY,"
            " sha256 TEXT NOT NULL,"
            " applied_at_utc TEXT NOT NULL)"
        )
        log.info("SQLite open %s", self.path)


    def close(self) -> None:
        self.conn.close()
        log.info("SQLite closed %s", self.path)


    def transaction(self):
        return transaction(self.conn)


    def applied(self) -> dict[str, str]:
        rows = self.conn.execute("SELECT filename, sha256 FROM schema_migrations").fetchall()
        return {r[0]: r[1] for r in rows}


    def pending(self, migrations_dir: Path = MIGRATIONS_DIR) -> list[Path]:
        applied = self.applied()
        return [p for p in sorted(migrations_dir.glob("*.sql")) if p.name not in applied]


    def run_migrations(self, migrations_dir: Path = MIGRATIONS_DIR) -> list[str]:
        applied = self.applied()
        done: list[str] = []
        for p in sorted(migrations_dir.glob("*.sql")):
            sql = p.read_text(encoding="utf-8")
            digest = sha256_text(sql)
            if p.name in applied:
                if applied[p.name] != digest:
                    log.warning("Migration %s changed after it was applied", p.name)
                continue
            # executescript commits any open transaction and takes no parameters,
            # so the bookkeeping row is written as literals inside the same BEGIN … COMMIT
            record = (
                "INSERT INTO schema_migrations(filename, sha256, applied_at_utc) "
                f"VALUES({_sql_literal(p.name)}, {_sql_literal(digest)}, {_sql_literal(utc_now_iso())});"
            )
            try:
                self.conn.executescript(f"BEGIN;\n{sql}\n{record}\nCOMMIT;")
            except sqlite3.Error:
                if self.conn.in_transaction:
                    self.conn.execute("ROLLBACK;")
                log.error("Migration %s failed", p.name)
                raise
            log.info("Applied migration %s", p.name)
            done.append(p.name)
        return done
