# Rev 0.3.0
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from .base import SQLiteRepository


class SQLiteTaskRepository(SQLiteRepository):
    """
    Task CRUD, always scoped by project_id.
    Deleting a task unlinks the bug notes that referenced it.
    """

    _COLUMNS = (
        "id, project_id, date, description, user_id, priority, "
        "hours_estimated, hours_done, state, created_at_utc, updated_at_utc"
    )

    # -------------------------
    # Listings
    # -------------------------
    def list_tasks(self, *, project_id: int) -> List[Dict[str, Any]]:
        return self._fetch_all(
            f"SELECT {self._COLUMNS} FROM tasks WHERE project_id = ? ORDER BY id ASC",
            (project_id,),
        )

    def list_all_tasks(self) -> List[Dict[str, Any]]:
        return self._fetch_all(f"SELECT {self._COLUMNS} FROM tasks ORDER BY project_id ASC, id ASC")

    # -------------------------
    # CRUD
    # -------------------------
    def get_task(self, project_id: int, task_id: int) -> Optional[Dict[str, Any]]:
        return self._fetch_one(
            f"SELECT {self._COLUMNS} FROM tasks WHERE project_id = ? AND id = ?",
            (project_id, task_id),
        )

    def create_task(self, *, project_id: int, fields: Mapping[str, Any]) -> int:
        values = self._to_db(fields)
        cols = ", ".join(["project_id", *values.keys()])
        marks = ", ".join("?" for _ in range(len(values) + 1))
        with self._tx() as con:
            cur = con.execute(
                f"INSERT INTO tasks({cols}) VALUES ({marks})",
                (project_id, *values.values()),
            )
            task_id = int(cur.lastrowid)
        return task_id

    def update_task_fields(self, project_id: int, task_id: int, fields: Mapping[str, Any]) -> bool:
        values = self._to_db(fields)
        if not values:
            return self.get_task(project_id, task_id) is not None
        with self._tx() as con:
            cur = con.execute(
                f"UPDATE tasks SET {self._set_clause(values)}, "
                "updated_at_utc = strftime('%Y-%m-%dT%H:%M:%SZ', 'now') "
                "WHERE project_id = ? AND id = ?",
                (*values.values(), project_id, task_id),
            )
            changed = cur.rowcount > 0
        return changed

    def delete_task(self, project_id: int, task_id: int) -> bool:
        with self._tx() as con:
            # unlink, never delete, the bug notes pointing at this task
            con.execute(
                "UPDATE bug_notes SET task_id = NULL, "
                "updated_at_utc = strftime('%Y-%m-%dT%H:%M:%SZ', 'now') "
                "WHERE project_id = ? AND task_id = ?",
                (project_id, task_id),
            )
            cur = con.execute("DELETE FROM tasks WHERE project_id = ? AND id = ?", (project_id, task_id))
            removed = cur.rowcount > 0
        return removed
