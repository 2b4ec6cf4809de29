# Rev 0.3.0
# projtrack – CSV export of a project's tasks or bugs/notes
from __future__ import annotations

import csv
import io
import re
from datetime import date
from typing import Iterable, Mapping, Sequence, Union

from projtrack.models.entities import BugNote, Project, Task, User
from projtrack.models.types import ExportView

TASK_HEADER = ["Date", "Task", "Responsible", "Priority", "Estimated hours", "Actual hours", "Status"]
BUGNOTE_HEADER = ["Date", "Type", "Content", "Linked task"]

# Display form (day/month/year); storage keeps ISO dates
DISPLAY_DATE_FORMAT = "%d/%m/%Y"

_UNSAFE_FILENAME = re.compile(r'[\\/:*?"<>|\s]+')

UsersArg = Union[Mapping[int, User], Iterable[User]]


def format_display_date(value: date) -> str:
    return value.strftime(DISPLAY_DATE_FORMAT)


def format_hours(value: float | None) -> str:
    hours = float(value or 0)
    return str(int(hours)) if hours.is_integer() else str(hours)


def _to_text(header: Sequence[str], rows: Iterable[Sequence[str]]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(header)
    writer.writerows(rows)
    return buf.getvalue()


def _user_names(users: UsersArg) -> dict[int, str]:
    if isinstance(users, Mapping):
        return {int(k): u.name for k, u in users.items()}
    return {u.id: u.name for u in users}


def export_tasks_csv(tasks: Sequence[Task], users: UsersArg) -> str:
    names = _user_names(users)
    rows = (
        [
            format_display_date(t.date),
            t.description,
            names.get(t.user_id, "") if t.user_id is not None else "",
            t.priority,
            format_hours(t.hours_estimated),
            format_hours(t.hours_done),
            t.state,
        ]
        for t in tasks
    )
    return _to_text(TASK_HEADER, rows)


def export_bugnotes_csv(bugnotes: Sequence[BugNote], tasks: Sequence[Task]) -> str:
    # only tasks of the same project resolve
    descriptions = {t.id: t.description for t in tasks}
    rows = (
        [
            format_display_date(b.date),
            b.kind,
            b.content,
            descriptions.get(b.task_id, "") if b.task_id is not None else "",
        ]
        for b in bugnotes
    )
    return _to_text(BUGNOTE_HEADER, rows)


def export_project_csv(
    project: Project,
    view: ExportView | str,
    *,
    tasks: Sequence[Task],
    bugnotes: Sequence[BugNote],
    users: UsersArg,
) -> str:
    view = ExportView(view)
    own_tasks = [t for t in tasks if t.project_id == project.id]
    if view is ExportView.TASKS:
        return export_tasks_csv(own_tasks, users)
    return export_bugnotes_csv([b for b in bugnotes if b.project_id == project.id], own_tasks)


def export_filename(project: Project, view: ExportView | str, today: date) -> str:
    """`<project>_<tasks|bugs_notes>_<YYYY-MM-DD>.csv`"""
    suffix = "tasks" if ExportView(view) is ExportView.TASKS else "bugs_notes"
    stem = _UNSAFE_FILENAME.sub("_", project.name.strip()) or f"project_{project.id}"
    return f"{stem}_{suffix}_{today.isoformat()}.csv"
