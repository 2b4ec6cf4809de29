# Rev 0.3.0 — tasks + bugs/notes of one project, reload after every successful mutation
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from PySide6.QtCore import QObject, Signal

from projtrack.models.entities import BugNote, Task, User
from projtrack.models.errors import TrackerError
from projtrack.models.types import ExportView
from projtrack.services.reporting_service import CsvExport
from projtrack.utils.logging_setup import get_logger

from ._errors import error_kind


class ProjectDetailViewModel(QObject):
    """
    Emits:
      summaryLoaded(ProjectSummary | None)
      tasksReloaded(project_id: int, rows: list[Task])
      bugnotesReloaded(project_id: int, rows: list[BugNote])
      projectChanged(project_id: int)   after any mutation, for sidebar/dashboard refresh
      errorRaised(kind: str, message: str)
    """

    summaryLoaded = Signal(object)
    tasksReloaded = Signal(int, list)
    bugnotesReloaded = Signal(int, list)
    projectChanged = Signal(int)
    errorRaised = Signal(str, str)

    def __init__(self, ctx):
        super().__init__()
        self._ctx = ctx
        self._project_id: Optional[int] = None
        self._users: Dict[int, User] = {}
        self._tasks: List[Task] = []
        self._log = get_logger("viewmodels.project_detail")

    @property
    def project_id(self) -> Optional[int]:
        return self._project_id

    # ---- filters ----
    def set_project(self, project_id: Optional[int]) -> None:
        self._project_id = project_id

    # ---- queries ----
    def reload(self) -> None:
        pid = self._project_id
        if pid is None:
            self.summaryLoaded.emit(None)
            self.tasksReloaded.emit(0, [])
            self.bugnotesReloaded.emit(0, [])
            return
        try:
            self._users = self._ctx.users.users_by_id()
            summary = self._ctx.reporting.project_summary(pid)
            self._tasks = self._ctx.tasks.list_tasks(pid)
            notes = self._ctx.bugnotes.list_bugnotes(pid)
        except TrackerError as exc:
            self._fail(exc)
            return
        self.summaryLoaded.emit(summary)
        self.tasksReloaded.emit(pid, list(self._tasks))
        self.bugnotesReloaded.emit(pid, notes)

    def users(self) -> List[User]:
        return list(self._users.values())

    def tasks(self) -> List[Task]:
        return list(self._tasks)

    def user_name(self, user_id: Optional[int]) -> str:
        user = self._users.get(user_id) if user_id is not None else None
        return user.name if user else ""

    def task_description(self, task_id: Optional[int]) -> str:
        for t in self._tasks:
            if t.id == task_id:
                return t.description
        return ""

    # ---- task commands ----
    def create_task(self, data: Mapping[str, Any]) -> Optional[Task]:
        return self._mutate(lambda pid: self._ctx.tasks.create_task(pid, data))

    def update_task(self, task_id: int, changes: Mapping[str, Any]) -> Optional[Task]:
        return self._mutate(lambda pid: self._ctx.tasks.update_task(pid, task_id, changes))

    def delete_task(self, task_id: int) -> bool:
        return bool(self._mutate(lambda pid: self._ctx.tasks.delete_task(pid, task_id)))

    # ---- bug/note commands ----
    def create_bugnote(self, data: Mapping[str, Any]) -> Optional[BugNote]:
        return self._mutate(lambda pid: self._ctx.bugnotes.create_bugnote(pid, data))

    def update_bugnote(self, bugnote_id: int, changes: Mapping[str, Any]) -> Optional[BugNote]:
        return self._mutate(lambda pid: self._ctx.bugnotes.update_bugnote(pid, bugnote_id, changes))

    def delete_bugnote(self, bugnote_id: int) -> bool:
        return bool(self._mutate(lambda pid: self._ctx.bugnotes.delete_bugnote(pid, bugnote_id)))

    # ---- export ----
    def export_csv(self, view: ExportView | str) -> Optional[CsvExport]:
        if self._project_id is None:
            return None
        try:
            return self._ctx.reporting.export_csv(self._project_id, view)
        except TrackerError as exc:
            self._fail(exc)
            return None

    def save_export(self, view: ExportView | str, directory: Path) -> Optional[Path]:
        export = self.export_csv(view)
        if export is None:
            return None
        target = Path(directory) / export.filename
        target.write_text(export.content, encoding="utf-8")
        self._log.info("Wrote %s (%s rows)", target, export.rows)
        return target

    # ---- internals ----
    def _mutate(self, op):
        if self._project_id is None:
            return None
        pid = self._project_id
        try:
            result = op(pid)
        except TrackerError as exc:
            self._fail(exc)
            return None
        self.reload()
        self.projectChanged.emit(pid)
        return result

    def _fail(self, exc: TrackerError) -> None:
        self._log.warning("%s: %s", type(exc).__name__, exc)
        self.errorRaised.emit(error_kind(exc), str(exc))
