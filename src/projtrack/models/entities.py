# Rev 0.3.0
"""Lightweight entities aligned with schema Rev 0.3.0 (0001_init.sql)"""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping, Optional

from .types import HOURS_PER_DAY


@dataclass(frozen=True)
class User:
    id: int
    name: str
    role: str

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "User":
        return cls(id=int(row["id"]), name=row["name"], role=row["role"])


@dataclass
class Project:
    id: int
    name: str
    estimation_days: float
    users: list[int] = field(default_factory=list)
    created_at_utc: Optional[str] = None

    @property
    def expected_hours(self) -> float:
        return self.estimation_days * HOURS_PER_DAY

    @classmethod
    def from_row(cls, row: Mapping[str, Any], users: list[int]) -> "Project":
        return cls(
            id=int(row["id"]),
            name=row["name"],
            estimation_days=float(row["estimation_days"]),
            users=sorted(users),
            created_at_utc=row.get("created_at_utc"),
        )


@dataclass
class Task:
    id: int
    project_id: int
    date: date
    description: str
    user_id: Optional[int]
    priority: str
    hours_estimated: float
    hours_done: float = 0.0
    state: str = "not-done"
    created_at_utc: Optional[str] = None
    updated_at_utc: Optional[str] = None

    @property
    def is_done(self) -> bool:
        return self.state == "done"

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "Task":
        return cls(
            id=int(row["id"]),
            project_id=int(row["project_id"]),
            date=date.fromisoformat(row["date"]),
            description=row["description"],
            user_id=row["user_id"],
            priority=row["priority"],
            hours_estimated=float(row["hours_estimated"]),
            hours_done=float(row["hours_done"] or 0),
            state=row["state"],
            created_at_utc=row.get("created_at_utc"),
            updated_at_utc=row.get("updated_at_utc"),
        )


@dataclass
class BugNote:
    id: int
    project_id: int
    date: date
    kind: str
    content: str
    task_id: Optional[int] = None
    created_at_utc: Optional[str] = None
    updated_at_utc: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "BugNote":
        return cls(
            id=int(row["id"]),
            project_id=int(row["project_id"]),
            date=date.fromisoformat(row["date"]),
            kind=row["kind"],
            content=row["content"],
            task_id=row["task_id"],
            created_at_utc=row.get("created_at_utc"),
            updated_at_utc=row.get("updated_at_utc"),
        )
