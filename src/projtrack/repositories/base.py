# Rev 0.3.0
# projtrack – shared SQLite repository plumbing
from __future__ import annotations

import sqlite3
from contextlib import AbstractContextManager
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from .db import transaction


class SQLiteRepository:
    """
    Accepts a raw sqlite3.Connection or a wrapper exposing `.conn`
    (see repositories.db.Database). Rows come back as plain dicts.
    """

    def __init__(self, db_or_conn: Union[sqlite3.Connection, Any]):
        self._db_or_conn = db_or_conn

    # -------------------------
    # Connection handling
    # -------------------------
    def _conn(self) -> sqlite3.Connection:
        if isinstance(self._db_or_conn, sqlite3.Connection):
            return self._db_or_conn
        c = getattr(self._db_or_conn, "conn", None)
        if isinstance(c, sqlite3.Connection):
            return c
        raise RuntimeError(
            f"{type(self).__name__}: could not obtain sqlite3.Connection "
            "(expected a raw Connection or a wrapper with .conn)."
        )

    def _tx(self) -> AbstractContextManager[sqlite3.Connection]:
        return transaction(self._conn())

    # -------------------------
    # Query helpers
    # -------------------------
    def _fetch_all(self, sql: str, params: Iterable[Any] = ()) -> List[Dict[str, Any]]:
        cur = self._conn().execute(sql, tuple(params))
        cols = [d[0] for d in cur.description]
        return [{cols[i]: row[i] for i in range(len(cols))} for row in cur.fetchall()]

    def _fetch_one(self, sql: str, params: Iterable[Any] = ()) -> Optional[Dict[str, Any]]:
        rows = self._fetch_all(sql, params)
        return rows[0] if rows else None

    @staticmethod
    def _to_db(values: Mapping[str, Any]) -> Dict[str, Any]:
        """Dates are stored as ISO text."""
        return {k: (v.isoformat() if isinstance(v, date) else v) for k, v in values.items()}

    @staticmethod
    def _set_clause(columns: Iterable[str]) -> str:
        return ", ".join(f"{c} = ?" for c in columns)
