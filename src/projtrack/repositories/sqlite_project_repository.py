# Rev 0.3.0
# projtrack – SQLiteProjectRepository (schema Rev 0.3.0)
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional

from .base import SQLiteRepository


class SQLiteProjectRepository(SQLiteRepository):
    """
    Project rows plus their assigned users (project_users).
    Returned dicts carry a sorted `users` list of user ids.
    """

    _COLUMNS = "id, name, estimation_days, created_at_utc, updated_at_utc"

    # ---------- queries ----------

    def list_projects(self) -> List[Dict[str, Any]]:
        rows = self._fetch_all(f"SELECT {self._COLUMNS} FROM projects ORDER BY id ASC")
        members = self._members_by_project()
        for rec in rows:
            rec["users"] = members.get(int(rec["id"]), [])
        return rows

    def get_project(self, project_id: int) -> Optional[Dict[str, Any]]:
        rec = self._fetch_one(f"SELECT {self._COLUMNS} FROM projects WHERE id = ?", (project_id,))
        if rec is None:
            return None
        rec["users"] = self.list_project_user_ids(project_id)
        return rec

    def exists(self, project_id: int) -> bool:
        return self._fetch_one("SELECT 1 AS hit FROM projects WHERE id = ?", (project_id,)) is not None

    def list_project_user_ids(self, project_id: int) -> List[int]:
        rows = self._fetch_all(
            "SELECT user_id FROM project_users WHERE project_id = ? ORDER BY user_id ASC",
            (project_id,),
        )
        return [int(r["user_id"]) for r in rows]

    # ---------- mutations ----------

    def insert_project(self, *, name: str, estimation_days: float, users: Iterable[int] = ()) -> int:
        with self._tx() as con:
            cur = con.execute(
                "INSERT INTO projects(name, estimation_days) VALUES (?, ?)",
                (name, estimation_days),
            )
            project_id = int(cur.lastrowid)
            self._replace_users(project_id, users)
        return project_id

    def update_project(self, project_id: int, fields: Mapping[str, Any]) -> bool:
        """
        Applies `name` / `estimation_days` / `users` from `fields`.
        Returns False if the project does not exist.
        """
        values = dict(fields)
        users = values.pop("users", None)
        with self._tx() as con:
            if not self.exists(project_id):
                return False
            if values:
                con.execute(
                    f"UPDATE projects SET {self._set_clause(values)}, "
                    "updated_at_utc = strftime('%Y-%m-%dT%H:%M:%SZ', 'now') WHERE id = ?",
                    (*values.values(), project_id),
                )
            if users is not None:
                self._replace_users(project_id, users)
        return True

    def delete_project(self, project_id: int) -> bool:
        # children first; FK cascades would do the same, this keeps it explicit
        with self._tx() as con:
            con.execute("DELETE FROM bug_notes WHERE project_id = ?", (project_id,))
            con.execute("DELETE FROM tasks WHERE project_id = ?", (project_id,))
            con.execute("DELETE FROM project_users WHERE project_id = ?", (project_id,))
            cur = con.execute("DELETE FROM projects WHERE id = ?", (project_id,))
            removed = cur.rowcount > 0
        return removed

    # ---------- internals ----------

    def _replace_users(self, project_id: int, users: Iterable[int]) -> None:
        con = self._conn()
        con.execute("DELETE FROM project_users WHERE project_id = ?", (project_id,))
        con.executemany(
            "INSERT INTO project_users(project_id, user_id) VALUES (?, ?)",
            [(project_id, int(u)) for u in sorted(set(users))],
        )

    def _members_by_project(self) -> Dict[int, List[int]]:
        out: Dict[int, List[int]] = {}
        for r in self._fetch_all("SELECT project_id, user_id FROM project_users ORDER BY project_id, user_id"):
            out.setdefault(int(r["project_id"]), []).append(int(r["user_id"]))
        return out
