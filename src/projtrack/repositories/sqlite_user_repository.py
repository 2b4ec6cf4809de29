# Rev 0.3.0
from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from .base import SQLiteRepository


class SQLiteUserRepository(SQLiteRepository):
    """Read-only access to seeded users."""

    def list_users(self) -> List[Dict[str, Any]]:
        return self._fetch_all("SELECT id, name, role FROM users ORDER BY id ASC")

    def get_user(self, user_id: int) -> Optional[Dict[str, Any]]:
        return self._fetch_one("SELECT id, name, role FROM users WHERE id = ?", (user_id,))

    def existing_ids(self, user_ids: Iterable[int]) -> set[int]:
        ids = list(user_ids)
        if not ids:
            return set()
        marks = ", ".join("?" for _ in ids)
        rows = self._fetch_all(f"SELECT id FROM users WHERE id IN ({marks})", ids)
        return {int(r["id"]) for r in rows}
