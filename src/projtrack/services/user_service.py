# Rev 0.3.0
from __future__ import annotations

from typing import Any, Dict, List, Optional

from projtrack.models.entities import User
from projtrack.repositories.sqlite_user_repository import SQLiteUserRepository

from .base import ServiceBase


class UserService(ServiceBase):
    """Lookup of the seeded users; identity/session lives elsewhere."""

    def __init__(self, db: Any):
        super().__init__(db)
        self._users = SQLiteUserRepository(db)

    def list_users(self) -> List[User]:
        with self._store("list users"):
            rows = self._users.list_users()
        return [User.from_row(r) for r in rows]

    def get_user(self, user_id: int) -> Optional[User]:
        with self._store(f"get user #{user_id}"):
            row = self._users.get_user(user_id)
        return User.from_row(row) if row else None

    def users_by_id(self) -> Dict[int, User]:
        return {u.id: u for u in self.list_users()}
