# Rev 0.3.0
from __future__ import annotations

from typing import Any, List, Mapping, Optional

from projtrack.models.entities import BugNote
from projtrack.models.errors import NotFoundError, ValidationError
from projtrack.models.validation import BUGNOTE_RULES, clean_payload
from projtrack.repositories.sqlite_bugnote_repository import SQLiteBugNoteRepository
from projtrack.repositories.sqlite_project_repository import SQLiteProjectRepository
from projtrack.repositories.sqlite_task_repository import SQLiteTaskRepository

from .base import ServiceBase


class BugNoteService(ServiceBase):
    """Bugs and notes of a project; the task link must stay inside that project."""

    def __init__(self, db: Any):
        super().__init__(db)
        self._bugnotes = SQLiteBugNoteRepository(db)
        self._projects = SQLiteProjectRepository(db)
        self._tasks = SQLiteTaskRepository(db)

    def list_bugnotes(self, project_id: int) -> List[BugNote]:
        with self._store(f"list bug notes of project #{project_id}"):
            rows = self._bugnotes.list_bugnotes(project_id=project_id)
        return [BugNote.from_row(r) for r in rows]

    def get_bugnote(self, project_id: int, bugnote_id: int) -> Optional[BugNote]:
        with self._store(f"get bug note #{bugnote_id}"):
            row = self._bugnotes.get_bugnote(project_id, bugnote_id)
        return BugNote.from_row(row) if row else None

    def require_bugnote(self, project_id: int, bugnote_id: int) -> BugNote:
        note = self.get_bugnote(project_id, bugnote_id)
        if note is None:
            raise NotFoundError("BugNote", bugnote_id, project_id=project_id)
        return note

    def create_bugnote(self, project_id: int, data: Mapping[str, Any]) -> BugNote:
        values = clean_payload(data, BUGNOTE_RULES)
        with self._unit_of_work(f"create bug note in project #{project_id}"):
            if not self._projects.exists(project_id):
                raise NotFoundError("Project", project_id)
            self._check_task(project_id, values.get("task_id"))
            bugnote_id = self._bugnotes.create_bugnote(project_id=project_id, fields=values)
        self._log.info("Created %s #%s in project #%s", values["kind"], bugnote_id, project_id)
        return self.require_bugnote(project_id, bugnote_id)

    def update_bugnote(self, project_id: int, bugnote_id: int, changes: Mapping[str, Any]) -> BugNote:
        values = clean_payload(changes, BUGNOTE_RULES, partial=True)
        with self._unit_of_work(f"update bug note #{bugnote_id}"):
            if self._bugnotes.get_bugnote(project_id, bugnote_id) is None:
                raise NotFoundError("BugNote", bugnote_id, project_id=project_id)
            if "task_id" in values:
                self._check_task(project_id, values["task_id"])
            self._bugnotes.update_bugnote_fields(project_id, bugnote_id, values)
        self._log.info("Updated bug note #%s fields=%s", bugnote_id, sorted(values))
        return self.require_bugnote(project_id, bugnote_id)

    def delete_bugnote(self, project_id: int, bugnote_id: int) -> bool:
        with self._store(f"delete bug note #{bugnote_id}"):
            removed = self._bugnotes.delete_bugnote(project_id, bugnote_id)
        if removed:
            self._log.info("Deleted bug note #%s from project #%s", bugnote_id, project_id)
        return removed

    def _check_task(self, project_id: int, task_id: Optional[int]) -> None:
        if task_id is None:
            return
        if self._tasks.get_task(project_id, task_id) is None:
            raise ValidationError.single("task_id", f"task #{task_id} is not part of project #{project_id}")
