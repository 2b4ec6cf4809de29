# Rev 0.3.0
from __future__ import annotations

from projtrack.models.errors import NotFoundError, PersistenceError, TrackerError, ValidationError


def error_kind(exc: TrackerError) -> str:
    """Short tag the views use to pick a message box title."""
    if isinstance(exc, ValidationError):
        return "validation"
    if isinstance(exc, NotFoundError):
        return "not_found"
    if isinstance(exc, PersistenceError):
        return "persistence"
    return "error"
