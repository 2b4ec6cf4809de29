# File: src/projtrack/tools/migrate.py
# Usage examples:
#   python -m projtrack.tools.migrate up
#   python -m projtrack.tools.migrate status
#   python -m projtrack.tools.migrate rebuild --seed
#   python -m projtrack.tools.migrate up --db /path/to/projtrack.db
#
# Notes:
# - DB path defaults to env PROJTRACK_DB or the XDG data dir
# - Applies projtrack/data/migrations/*.sql in lexicographic order
# - Records applied migrations (name + sha256) in schema_migrations
# - --seed inserts the demo projects from projtrack.dev_seed

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from projtrack.repositories.db import Database
from projtrack.utils.paths import MIGRATIONS_DIR, db_path


def _seed(db_file: Path) -> None:
    from projtrack.app_context import AppContext
    from projtrack.dev_seed import seed

    ctx = AppContext.create(db_file)
    try:
        created = seed(ctx)
    finally:
        ctx.close()
    print(f"→ Seeded {len(created)} project(s)")


def cmd_status(db_file: Path, migrations_dir: Path) -> int:
    db = Database(db_file)
    try:
        applied = db.applied()
        pending = [p.name for p in db.pending(migrations_dir)]
        rows = db.conn.execute(
            "SELECT filename, applied_at_utc FROM schema_migrations ORDER BY filename"
        ).fetchall()

        print(f"DB: {db.path}")
        print(f"Migrations dir: {migrations_dir}")
        print(f"Applied count: {len(applied)}")
        for r in rows:
            print(f"  ✔ {r['filename']}  ({r['applied_at_utc']})")
        print(f"Pending count: {len(pending)}")
        for name in pending:
            print(f"  ⧗ {name}")
        return 0
    finally:
        db.close()


def cmd_up(db_file: Path, migrations_dir: Path, seed: bool) -> int:
    db = Database(db_file)
    try:
        done = db.run_migrations(migrations_dir)
        for name in done:
            print(f"→ Applied migration: {name}")
        print("✓ Database is up to date." if done else "✓ No changes. Database already up to date.")
    finally:
        db.close()
    if seed:
        _seed(db_file)
    return 0


def cmd_rebuild(db_file: Path, migrations_dir: Path, seed: bool) -> int:
    # Drop DB file (and WAL sidecars) and rebuild from migrations
    for path in (db_file, db_file.with_name(db_file.name + "-wal"), db_file.with_name(db_file.name + "-shm")):
        if path.exists():
            print(f"⟲ Rebuilding: removing {path}")
            path.unlink()
    rc = cmd_up(db_file, migrations_dir, seed)
    print("✓ Rebuild complete.")
    return rc


def parse_args(argv: list[str]) -> argparse.Namespace:
    default_db = db_path()
    p = argparse.ArgumentParser(prog="projtrack-migrate", description="SQLite migration runner for projtrack")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_common(sp: argparse.ArgumentParser):
        sp.add_argument("--db", type=Path, default=default_db, help=f"Path to SQLite DB (default: {default_db})")
        sp.add_argument("--migrations-dir", type=Path, default=MIGRATIONS_DIR, help="Migrations directory")

    s_up = sub.add_parser("up", help="Run pending migrations")
    add_common(s_up)
    s_up.add_argument("--seed", action="store_true", help="Insert demo projects after applying")

    s_rebuild = sub.add_parser("rebuild", help="Delete and recreate the DB from migrations")
    add_common(s_rebuild)
    s_rebuild.add_argument("--seed", action="store_true", help="Insert demo projects after rebuild")

    s_status = sub.add_parser("status", help="Show applied and pending migrations")
    add_common(s_status)

    return p.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    ns = parse_args(sys.argv[1:] if argv is None else argv)
    if ns.cmd == "status":
        return cmd_status(ns.db, ns.migrations_dir)
    if ns.cmd == "up":
        return cmd_up(ns.db, ns.migrations_dir, ns.seed)
    if ns.cmd == "rebuild":
        return cmd_rebuild(ns.db, ns.migrations_dir, ns.seed)
    raise SystemExit(1)


if __name__ == "__main__":
    raise SystemExit(main())
