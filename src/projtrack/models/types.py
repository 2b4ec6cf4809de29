# projtrack type definitions
# Rev 0.3.0

from __future__ import annotations
from enum import Enum
from typing import Literal

# Stored vocabularies (TEXT columns guarded by CHECK constraints)
Priority = Literal["low", "medium", "high"]
TaskState = Literal["done", "not-done"]
BugNoteKind = Literal["bug", "note"]

PRIORITIES: tuple[str, ...] = ("low", "medium", "high")
TASK_STATES: tuple[str, ...] = ("done", "not-done")
BUGNOTE_KINDS: tuple[str, ...] = ("bug", "note")

PRIORITY_LABELS = {"low": "Low", "medium": "Medium", "high": "High"}
TASK_STATE_LABELS = {"done": "Done", "not-done": "Not done"}
BUGNOTE_KIND_LABELS = {"bug": "Bug", "note": "Note"}

HOURS_PER_DAY = 8


class StatusLabel(str, Enum):
    COMPLETED = "Completed"
    LATE = "Late"
    IN_PROGRESS = "In progress"


class ExportView(str, Enum):
    TASKS = "tasks"
    BUGS = "bugs"
