# Rev 0.3.0
"""Dashboard summaries and CSV export over already-loaded project data."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional

from projtrack.models.types import ExportView, StatusLabel

from . import csv_export, metrics
from .base import Clock, ServiceBase
from .bugnote_service import BugNoteService
from .project_service import ProjectService
from .task_service import TaskService
from .user_service import UserService


@dataclass(frozen=True)
class CsvExport:
    filename: str
    content: str
    rows: int


class ReportingService(ServiceBase):
    def __init__(
        self,
        db: Any,
        *,
        projects: Optional[ProjectService] = None,
        tasks: Optional[TaskService] = None,
        bugnotes: Optional[BugNoteService] = None,
        users: Optional[UserService] = None,
        clock: Clock = datetime.now,
    ):
        super().__init__(db)
        self._projects = projects or ProjectService(db)
        self._tasks = tasks or TaskService(db)
        self._bugnotes = bugnotes or BugNoteService(db)
        self._users = users or UserService(db)
        self._clock = clock

    # ---- per project ----
    def progress(self, project_id: int) -> int:
        project = self._projects.require_project(project_id)
        return metrics.compute_progress(project, self._tasks.list_tasks(project_id))

    def status(self, project_id: int) -> StatusLabel:
        project = self._projects.require_project(project_id)
        return metrics.compute_status(project, self._tasks.list_tasks(project_id), self._clock())

    def project_summary(self, project_id: int) -> metrics.ProjectSummary:
        project = self._projects.require_project(project_id)
        return metrics.summarize_project(project, self._tasks.list_tasks(project_id), self._clock())

    # ---- dashboard ----
    def list_summaries(self) -> List[metrics.ProjectSummary]:
        now = self._clock()
        by_project: Dict[int, list] = {}
        for task in self._tasks.list_all_tasks():
            by_project.setdefault(task.project_id, []).append(task)
        return [
            metrics.summarize_project(p, by_project.get(p.id, []), now)
            for p in self._projects.list_projects()
        ]

    def dashboard(self) -> metrics.DashboardStats:
        return metrics.dashboard_stats(self.list_summaries())

    # ---- export ----
    def export_csv(self, project_id: int, view: ExportView | str) -> CsvExport:
        view = ExportView(view)
        project = self._projects.require_project(project_id)
        tasks = self._tasks.list_tasks(project_id)
        if view is ExportView.TASKS:
            notes, users = [], self._users.users_by_id()
            rows = len(tasks)
        else:
            notes, users = self._bugnotes.list_bugnotes(project_id), {}
            rows = len(notes)
        content = csv_export.export_project_csv(project, view, tasks=tasks, bugnotes=notes, users=users)
        filename = csv_export.export_filename(project, view, self._clock().date())
        self._log.info("Exported %s rows of %s for project #%s", rows, view.value, project_id)
        return CsvExport(filename=filename, content=content, rows=rows)
