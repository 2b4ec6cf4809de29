# Rev 0.3.0
# projtrack – service plumbing shared by the entity services
from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Callable, Iterator

from projtrack.models.errors import PersistenceError
from projtrack.repositories.db import transaction
from projtrack.utils.logging_setup import get_logger

Clock = Callable[[], datetime]


class ServiceBase:
    """
    Holds the DB handle (Database wrapper or raw sqlite3.Connection) and
    turns driver failures into PersistenceError. Nothing is retried here.
    """

    def __init__(self, db: Any):
        self._db = db
        self._log: logging.Logger = get_logger(f"services.{type(self).__name__}")

    @contextmanager
    def _store(self, action: str) -> Iterator[None]:
        try:
            yield
        except sqlite3.Error as exc:
            self._log.error("%s failed: %s", action, exc)
            raise PersistenceError(f"{action} failed: {exc}") from exc

    def _conn(self) -> sqlite3.Connection:
        if isinstance(self._db, sqlite3.Connection):
            return self._db
        return self._db.conn

    @contextmanager
    def _unit_of_work(self, action: str) -> Iterator[None]:
        """One transaction around several repository calls."""
        with self._store(action), transaction(self._conn()):
            yield
