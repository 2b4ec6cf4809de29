# Rev 0.3.0
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from .base import SQLiteRepository


class SQLiteBugNoteRepository(SQLiteRepository):
    """Bug/note CRUD, scoped by project_id."""

    _COLUMNS = "id, project_id, date, kind, content, task_id, created_at_utc, updated_at_utc"

    def list_bugnotes(self, *, project_id: int) -> List[Dict[str, Any]]:
        return self._fetch_all(
            f"SELECT {self._COLUMNS} FROM bug_notes WHERE project_id = ? ORDER BY id ASC",
            (project_id,),
        )

    def get_bugnote(self, project_id: int, bugnote_id: int) -> Optional[Dict[str, Any]]:
        return self._fetch_one(
            f"SELECT {self._COLUMNS} FROM bug_notes WHERE project_id = ? AND id = ?",
            (project_id, bugnote_id),
        )

    def create_bugnote(self, *, project_id: int, fields: Mapping[str, Any]) -> int:
        values = self._to_db(fields)
        cols = ", ".join(["project_id", *values.keys()])
        marks = ", ".join("?" for _ in range(len(values) + 1))
        with self._tx() as con:
            cur = con.execute(
                f"INSERT INTO bug_notes({cols}) VALUES ({marks})",
                (project_id, *values.values()),
            )
            bugnote_id = int(cur.lastrowid)
        return bugnote_id

    def update_bugnote_fields(self, project_id: int, bugnote_id: int, fields: Mapping[str, Any]) -> bool:
        values = self._to_db(fields)
        if not values:
            return self.get_bugnote(project_id, bugnote_id) is not None
        with self._tx() as con:
            cur = con.execute(
                f"UPDATE bug_notes SET {self._set_clause(values)}, "
                "updated_at_utc = strftime('%Y-%m-%dT%H:%M:%SZ', 'now') "
                "WHERE project_id = ? AND id = ?",
                (*values.values(), project_id, bugnote_id),
            )
            changed = cur.rowcount > 0
        return changed

    def delete_bugnote(self, project_id: int, bugnote_id: int) -> bool:
        with self._tx() as con:
            cur = con.execute("DELETE FROM bug_notes WHERE project_id = ? AND id = ?", (project_id, bugnote_id))
            removed = cur.rowcount > 0
        return removed
