# Rev 0.3.0
"""Tasks, always addressed through their owning project."""
from __future__ import annotations

from typing import Any, List, Mapping, Optional

from projtrack.models.entities import Task
from projtrack.models.errors import NotFoundError, ValidationError
from projtrack.models.validation import TASK_RULES, clean_payload
from projtrack.repositories.sqlite_project_repository import SQLiteProjectRepository
from projtrack.repositories.sqlite_task_repository import SQLiteTaskRepository
from projtrack.repositories.sqlite_user_repository import SQLiteUserRepository

from .base import ServiceBase


class TaskService(ServiceBase):
    def __init__(self, db: Any):
        super().__init__(db)
        self._tasks = SQLiteTaskRepository(db)
        self._projects = SQLiteProjectRepository(db)
        self._users = SQLiteUserRepository(db)

    # ---- queries ----
    def list_tasks(self, project_id: int) -> List[Task]:
        with self._store(f"list tasks of project #{project_id}"):
            rows = self._tasks.list_tasks(project_id=project_id)
        return [Task.from_row(r) for r in rows]

    def list_all_tasks(self) -> List[Task]:
        with self._store("list all tasks"):
            rows = self._tasks.list_all_tasks()
        return [Task.from_row(r) for r in rows]

    def get_task(self, project_id: int, task_id: int) -> Optional[Task]:
        with self._store(f"get task #{task_id}"):
            row = self._tasks.get_task(project_id, task_id)
        return Task.from_row(row) if row else None

    def require_task(self, project_id: int, task_id: int) -> Task:
        task = self.get_task(project_id, task_id)
        if task is None:
            raise NotFoundError("Task", task_id, project_id=project_id)
        return task

    # ---- commands ----
    def create_task(self, project_id: int, data: Mapping[str, Any]) -> Task:
        values = clean_payload(data, TASK_RULES)
        with self._unit_of_work(f"create task in project #{project_id}"):
            if not self._projects.exists(project_id):
                raise NotFoundError("Project", project_id)
            self._check_user(values.get("user_id"))
            task_id = self._tasks.create_task(project_id=project_id, fields=values)
        self._log.info("Created task #%s in project #%s", task_id, project_id)
        return self.require_task(project_id, task_id)

    def update_task(self, project_id: int, task_id: int, changes: Mapping[str, Any]) -> Task:
        values = clean_payload(changes, TASK_RULES, partial=True)
        with self._unit_of_work(f"update task #{task_id}"):
            if self._tasks.get_task(project_id, task_id) is None:
                raise NotFoundError("Task", task_id, project_id=project_id)
            if "user_id" in values:
                self._check_user(values["user_id"])
            self._tasks.update_task_fields(project_id, task_id, values)
        self._log.info("Updated task #%s fields=%s", task_id, sorted(values))
        return self.require_task(project_id, task_id)

    def delete_task(self, project_id: int, task_id: int) -> bool:
        with self._store(f"delete task #{task_id}"):
            removed = self._tasks.delete_task(project_id, task_id)
        if removed:
            self._log.info("Deleted task #%s from project #%s; linked bug notes unlinked", task_id, project_id)
        return removed

    # ---- internals ----
    def _check_user(self, user_id: Optional[int]) -> None:
        if user_id is None:
            return
        if not self._users.existing_ids([user_id]):
            raise ValidationError.single("user_id", f"unknown user id: {user_id}")
