# File: src/projtrack/tools/export_csv.py
# Usage examples:
#   python -m projtrack.tools.export_csv 1 tasks
#   python -m projtrack.tools.export_csv 1 bugs --out exports/
#   python -m projtrack.tools.export_csv 1 tasks --out -        (stdout)

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

from projtrack.app_context import AppContext
from projtrack.models.errors import TrackerError
from projtrack.models.types import ExportView
from projtrack.utils.paths import db_path


def parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="projtrack-export", description="Export a project's tasks or bugs/notes as CSV")
    p.add_argument("project_id", type=int)
    p.add_argument("view", choices=[v.value for v in ExportView])
    p.add_argument("--db", type=Path, default=None, help=f"Path to SQLite DB (default: {db_path()})")
    p.add_argument("--out", default=".", help="Target directory, or '-' for stdout (default: .)")
    return p.parse_args(argv)


def main(argv: Optional[list[str]] = None) -> int:
    ns = parse_args(sys.argv[1:] if argv is None else argv)
    ctx = AppContext.create(ns.db)
    try:
        export = ctx.reporting.export_csv(ns.project_id, ns.view)
    except TrackerError as exc:
        print(f"❌ {exc}", file=sys.stderr)
        return 2
    finally:
        ctx.close()

    if ns.out == "-":
        sys.stdout.write(export.content)
        return 0
    target = Path(ns.out) / export.filename
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(export.content, encoding="utf-8")
    except OSError as exc:
        print(f"❌ Could not write {target}: {exc}", file=sys.stderr)
        return 2
    print(f"✓ Wrote {export.rows} row(s) to {target}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
