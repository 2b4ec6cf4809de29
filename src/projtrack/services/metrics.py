# Rev 0.3.0
"""
Derived dashboard metrics (pure, no I/O).

progress = round_half_up(100 * Σ hours_done / (estimation_days * 8)),
clamped to 0..100; a project without tasks is at 0.

status precedence:
  1. progress >= 100                          -> Completed
  2. any not-done task dated before `now`     -> Late
  3. otherwise                                -> In progress
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, time
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, Sequence

from projtrack.models.entities import Project, Task
from projtrack.models.types import StatusLabel


def round_half_up(value: float) -> int:
    """Round half away from zero (12.5 -> 13), unlike the built-in round()."""
    return int(Decimal(repr(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def hours_done(tasks: Iterable[Task]) -> float:
    return sum(t.hours_done or 0.0 for t in tasks)


def compute_progress(project: Project, tasks: Sequence[Task]) -> int:
    if not tasks:
        return 0
    expected = project.expected_hours
    if expected <= 0:
        return 0
    pct = round_half_up(100 * hours_done(tasks) / expected)
    return max(0, min(100, pct))


def _naive_local(now: datetime) -> datetime:
    return now.astimezone().replace(tzinfo=None) if now.tzinfo is not None else now


def is_late(task: Task, now: datetime) -> bool:
    """A not-done task whose day started strictly before `now`."""
    if task.is_done:
        return False
    return datetime.combine(task.date, time.min) < _naive_local(now)


def compute_status(project: Project, tasks: Sequence[Task], now: datetime) -> StatusLabel:
    if compute_progress(project, tasks) >= 100:
        return StatusLabel.COMPLETED
    if any(is_late(t, now) for t in tasks):
        return StatusLabel.LATE
    return StatusLabel.IN_PROGRESS


@dataclass(frozen=True)
class ProjectSummary:
    project: Project
    progress: int
    status: StatusLabel
    tasks_total: int
    tasks_done: int
    hours_done: float
    hours_expected: float


def summarize_project(project: Project, tasks: Sequence[Task], now: datetime) -> ProjectSummary:
    return ProjectSummary(
        project=project,
        progress=compute_progress(project, tasks),
        status=compute_status(project, tasks, now),
        tasks_total=len(tasks),
        tasks_done=sum(1 for t in tasks if t.is_done),
        hours_done=hours_done(tasks),
        hours_expected=project.expected_hours,
    )


@dataclass(frozen=True)
class HoursPoint:
    name: str
    estimated: float
    actual: float


@dataclass(frozen=True)
class DashboardStats:
    active_projects: int = 0
    total_tasks: int = 0
    completed_tasks: int = 0
    hours_chart: List[HoursPoint] = field(default_factory=list)


def dashboard_stats(summaries: Sequence[ProjectSummary]) -> DashboardStats:
    return DashboardStats(
        active_projects=len(summaries),
        total_tasks=sum(s.tasks_total for s in summaries),
        completed_tasks=sum(s.tasks_done for s in summaries),
        hours_chart=[HoursPoint(s.project.name, s.hours_expected, s.hours_done) for s in summaries],
    )
