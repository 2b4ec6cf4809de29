# Rev 0.3.0
# src/projtrack/viewmodels/projects_viewmodel.py
from __future__ import annotations

from typing import Any, List, Mapping, Optional

from PySide6.QtCore import QObject, Signal

from projtrack.models.entities import Project, User
from projtrack.models.errors import TrackerError
from projtrack.services.metrics import dashboard_stats
from projtrack.utils.logging_setup import get_logger

from ._errors import error_kind


class ProjectsViewModel(QObject):
    """
    Sidebar + dashboard state.
    Emits:
      projectsReloaded(list[ProjectSummary])
      dashboardLoaded(DashboardStats)
      errorRaised(kind: str, message: str)
    """

    projectsReloaded = Signal(list)
    dashboardLoaded = Signal(object)
    errorRaised = Signal(str, str)

    def __init__(self, ctx):
        super().__init__()
        self._ctx = ctx
        self._log = get_logger("viewmodels.projects")

    # ---- queries ----
    def reload(self) -> None:
        try:
            summaries = self._ctx.reporting.list_summaries()
        except TrackerError as exc:
            self._fail(exc)
            return
        self.projectsReloaded.emit(summaries)
        self.dashboardLoaded.emit(dashboard_stats(summaries))

    def users(self) -> List[User]:
        try:
            return self._ctx.users.list_users()
        except TrackerError as exc:
            self._fail(exc)
            return []

    # ---- commands ----
    def create_project(self, data: Mapping[str, Any]) -> Optional[Project]:
        try:
            project = self._ctx.projects.create_project(data)
        except TrackerError as exc:
            self._fail(exc)
            return None
        self.reload()
        return project

    def update_project(self, project_id: int, changes: Mapping[str, Any]) -> Optional[Project]:
        try:
            project = self._ctx.projects.update_project(project_id, changes)
        except TrackerError as exc:
            self._fail(exc)
            return None
        self.reload()
        return project

    def delete_project(self, project_id: int) -> bool:
        try:
            ok = self._ctx.projects.delete_project(project_id)
        except TrackerError as exc:
            self._fail(exc)
            return False
        self.reload()
        return ok

    # ---- internals ----
    def _fail(self, exc: TrackerError) -> None:
        self._log.warning("%s: %s", type(exc).__name__, exc)
        self.errorRaised.emit(error_kind(exc), str(exc))
