# Rev 0.3.0
"""
Developer seed: two demo projects with tasks and bugs/notes.

Usage:
    python -m projtrack.dev_seed [--db PATH]
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from projtrack.app_context import AppContext
from projtrack.models.entities import Project

DEMO = [
    {
        "project": {"name": "Website redesign", "estimation_days": 20, "users": [1, 2, 3]},
        "tasks": [
            {"date": "2023-05-10", "description": "UI/UX mockups", "user_id": 3, "priority": "high",
             "hours_estimated": 16, "hours_done": 18, "state": "done"},
            {"date": "2023-05-15", "description": "Front-end development", "user_id": 2, "priority": "medium",
             "hours_estimated": 40, "hours_done": 20, "state": "not-done"},
        ],
        # task_ref indexes into "tasks" above
        "bugnotes": [
            {"date": "2023-05-12", "kind": "bug", "content": "Layout issue on Safari", "task_ref": 0},
            {"date": "2023-05-16", "kind": "note", "content": "Review the animations with the client", "task_ref": None},
        ],
    },
    {
        "project": {"name": "Mobile app", "estimation_days": 30, "users": [1, 2, 4]},
        "tasks": [
            {"date": "2023-06-01", "description": "Technical architecture", "user_id": 2, "priority": "high",
             "hours_estimated": 24, "hours_done": 22, "state": "done"},
        ],
        "bugnotes": [],
    },
]


def seed(ctx: AppContext) -> List[Project]:
    created: List[Project] = []
    for block in DEMO:
        project = ctx.projects.create_project(block["project"])
        task_ids = [ctx.tasks.create_task(project.id, t).id for t in block["tasks"]]
        for note in block["bugnotes"]:
            data = {k: v for k, v in note.items() if k != "task_ref"}
            ref = note["task_ref"]
            data["task_id"] = task_ids[ref] if ref is not None else None
            ctx.bugnotes.create_bugnote(project.id, data)
        created.append(project)
    return created


def main(argv: Optional[list[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="projtrack-seed", description="Insert demo projects")
    p.add_argument("--db", type=Path, default=None)
    ns = p.parse_args(sys.argv[1:] if argv is None else argv)

    ctx = AppContext.create(ns.db)
    try:
        for project in seed(ctx):
            s = ctx.reporting.project_summary(project.id)
            print(f"#{project.id} {project.name}: {s.progress}% · {s.status.value} · {s.tasks_done}/{s.tasks_total} tasks")
    finally:
        ctx.close()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
