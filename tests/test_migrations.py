# Rev 0.3.0

from __future__ import annotations
import sqlite3

import pytest

from projtrack.repositories.db import Database
from projtrack.utils.paths import MIGRATIONS_DIR


def test_users_are_seeded(db):
    rows = db.conn.execute("SELECT id, name FROM users ORDER BY id").fetchall()
    assert [tuple(r) for r in rows] == [
        (1, "Jean Dupont"), (2, "Marie Martin"), (3, "Pierre Leroy"), (4, "Sophie Bernard")
    ]


def test_migrations_are_recorded_and_idempotent(db):
    names = sorted(p.name for p in MIGRATIONS_DIR.glob("*.sql"))
    assert sorted(db.applied()) == names
    assert db.pending() == []
    assert db.run_migrations() == []


def test_reopen_keeps_data(tmp_path):
    path = tmp_path / "reopen.db"
    first = Database(path)
    first.run_migrations()
    first.conn.execute("INSERT INTO projects(name, estimation_days) VALUES ('Keep', 2)")
    first.close()

    second = Database(path)
    try:
        assert second.run_migrations() == []
        assert second.conn.execute("SELECT name FROM projects").fetchone()[0] == "Keep"
    finally:
        second.close()


def test_pragmas(db):
    assert db.conn.execute("PRAGMA foreign_keys").fetchone()[0] == 1
    assert str(db.conn.execute("PRAGMA journal_mode").fetchone()[0]).lower() == "wal"


def test_check_constraints_back_the_vocabularies(db):
    db.conn.execute("INSERT INTO projects(name, estimation_days) VALUES ('P', 1)")
    with pytest.raises(sqlite3.IntegrityError):
        db.conn.execute(
            "INSERT INTO tasks(project_id, date, description, priority, hours_estimated, state) "
            "VALUES (1, '2024-01-01', 'T', 'urgent', 1, 'done')"
        )


def test_user_lookup(ctx):
    assert ctx.users.get_user(3).name == "Pierre Leroy"
    assert ctx.users.get_user(99) is None
    assert sorted(ctx.users.users_by_id()) == [1, 2, 3, 4]


def _tables(database) -> set[str]:
    rows = database.conn.execute("SELECT name FROM sqlite_master WHERE type='table'").fetchall()
    return {r[0] for r in rows}


def test_failed_migration_leaves_no_trace(tmp_path):
    mig = tmp_path / "migrations"
    mig.mkdir()
    (mig / "0001_ok.sql").write_text("CREATE TABLE kept (x INTEGER);\n", encoding="utf-8")
    (mig / "0002_broken.sql").write_text(
        "CREATE TABLE half (x INTEGER);\nINSERT INTO missing VALUES (1);\n", encoding="utf-8"
    )
    database = Database(tmp_path / "m.db")
    try:
        with pytest.raises(sqlite3.OperationalError):
            database.run_migrations(mig)
        assert list(database.applied()) == ["0001_ok.sql"]
        assert "kept" in _tables(database)
        assert "half" not in _tables(database)
        assert not database.conn.in_transaction
    finally:
        database.close()


def test_bookkeeping_row_commits_with_the_migration(tmp_path):
    # the file records itself first, so writing the bookkeeping row fails;
    # the table created by the same file must be rolled back with it
    mig = tmp_path / "migrations"
    mig.mkdir()
    (mig / "0001_self.sql").write_text(
        "CREATE TABLE orphan (x INTEGER);\n"
        "INSERT INTO schema_migrations(filename, sha256, applied_at_utc) VALUES ('0001_self.sql', 'x', 'y');\n",
        encoding="utf-8",
    )
    database = Database(tmp_path / "m.db")
    try:
        with pytest.raises(sqlite3.IntegrityError):
            database.run_migrations(mig)
        assert "orphan" not in _tables(database)
        assert database.applied() == {}
    finally:
        database.close()


def test_migration_names_are_recorded_verbatim(tmp_path):
    mig = tmp_path / "migrations"
    mig.mkdir()
    (mig / "0001_o'brien.sql").write_text("CREATE TABLE quoted (x INTEGER);\n", encoding="utf-8")
    database = Database(tmp_path / "m.db")
    try:
        assert database.run_migrations(mig) == ["0001_o'brien.sql"]
        row = database.conn.execute("SELECT filename, applied_at_utc FROM schema_migrations").fetchone()
        assert row["filename"] == "0001_o'brien.sql"
        assert row["applied_at_utc"].endswith("Z")
        assert database.pending(mig) == []
    finally:
        database.close()
