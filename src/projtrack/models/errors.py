# projtrack error taxonomy
# Rev 0.3.0

from __future__ import annotations
from typing import Dict, Mapping, Optional


class TrackerError(Exception):
    """Base class for every failure surfaced by the domain services."""


class ValidationError(TrackerError, ValueError):
    """
    One or more fields of a create/update payload are missing, mistyped or
    out of range. `fields` maps each offending field to a message.
    """

    def __init__(self, fields: Mapping[str, str], message: Optional[str] = None):
        self.fields: Dict[str, str] = dict(fields)
        if message is None:
            message = "; ".join(f"{k}: {v}" for k, v in self.fields.items())
        super().__init__(message)

    @classmethod
    def single(cls, field: str, problem: str) -> "ValidationError":
        return cls({field: problem})


class NotFoundError(TrackerError, LookupError):
    """An id did not resolve, or resolved outside the stated parent project."""

    def __init__(self, entity: str, entity_id: int, *, project_id: Optional[int] = None):
        self.entity = entity
        self.entity_id = entity_id
        self.project_id = project_id
        where = f" in project #{project_id}" if project_id is not None else ""
        super().__init__(f"{entity} #{entity_id} not found{where}")


class PersistenceError(TrackerError):
    """The SQLite store was unreachable or rejected the operation."""
