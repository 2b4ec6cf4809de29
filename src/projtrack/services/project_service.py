# Rev 0.3.0
"""Project lifecycle: create/read/update/delete with cascading removal."""
from __future__ import annotations

from typing import Any, Iterable, List, Mapping, Optional

from projtrack.models.entities import Project
from projtrack.models.errors import NotFoundError, ValidationError
from projtrack.models.validation import PROJECT_RULES, clean_payload
from projtrack.repositories.sqlite_project_repository import SQLiteProjectRepository
from projtrack.repositories.sqlite_user_repository import SQLiteUserRepository

from .base import ServiceBase


class ProjectService(ServiceBase):
    def __init__(self, db: Any):
        super().__init__(db)
        self._projects = SQLiteProjectRepository(db)
        self._users = SQLiteUserRepository(db)

    # ---- queries ----
    def list_projects(self) -> List[Project]:
        with self._store("list projects"):
            rows = self._projects.list_projects()
        return [Project.from_row(r, r["users"]) for r in rows]

    def get_project(self, project_id: int) -> Optional[Project]:
        with self._store(f"get project #{project_id}"):
            row = self._projects.get_project(project_id)
        return Project.from_row(row, row["users"]) if row else None

    def require_project(self, project_id: int) -> Project:
        project = self.get_project(project_id)
        if project is None:
            raise NotFoundError("Project", project_id)
        return project

    # ---- commands ----
    def create_project(self, data: Mapping[str, Any]) -> Project:
        values = clean_payload(data, PROJECT_RULES)
        with self._unit_of_work("create project"):
            self._check_users(values["users"])
            project_id = self._projects.insert_project(
                name=values["name"],
                estimation_days=values["estimation_days"],
                users=values["users"],
            )
        self._log.info("Created project #%s %r", project_id, values["name"])
        return self.require_project(project_id)

    def update_project(self, project_id: int, changes: Mapping[str, Any]) -> Project:
        values = clean_payload(changes, PROJECT_RULES, partial=True)
        with self._unit_of_work(f"update project #{project_id}"):
            if not self._projects.exists(project_id):
                raise NotFoundError("Project", project_id)
            if "users" in values:
                self._check_users(values["users"])
            if values:
                self._projects.update_project(project_id, values)
        self._log.info("Updated project #%s fields=%s", project_id, sorted(values))
        return self.require_project(project_id)

    def delete_project(self, project_id: int) -> bool:
        with self._store(f"delete project #{project_id}"):
            removed = self._projects.delete_project(project_id)
        if removed:
            self._log.info("Deleted project #%s with its tasks and bug notes", project_id)
        else:
            self._log.debug("Delete project #%s: nothing to delete", project_id)
        return removed

    # ---- internals ----
    def _check_users(self, user_ids: Iterable[int]) -> None:
        wanted = set(user_ids)
        missing = wanted - self._users.existing_ids(wanted)
        if missing:
            raise ValidationError.single("users", f"unknown user ids: {sorted(missing)}")
