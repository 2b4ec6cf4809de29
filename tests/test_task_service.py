# Rev 0.3.0

from __future__ import annotations
from datetime import date

import pytest

from projtrack.models.errors import NotFoundError, ValidationError

from conftest import bugnote_payload, task_payload


def test_create_task_applies_defaults(ctx, project):
    t = ctx.tasks.create_task(project.id, task_payload())
    assert t.project_id == project.id
    assert t.date == date(2024, 6, 20)
    assert t.hours_done == 0.0
    assert t.user_id == 2
    assert t.is_done is False
    assert ctx.tasks.get_task(project.id, t.id) == t


def test_create_task_accepts_date_objects_and_unassigned(ctx, project):
    t = ctx.tasks.create_task(project.id, task_payload(date=date(2024, 1, 2), user_id=None, hours_done="1,5"))
    assert t.date == date(2024, 1, 2)
    assert t.user_id is None
    assert t.hours_done == 1.5


def test_create_task_in_unknown_project(ctx):
    with pytest.raises(NotFoundError) as ei:
        ctx.tasks.create_task(999, task_payload())
    assert ei.value.entity == "Project"


def test_create_task_reports_invalid_fields(ctx, project):
    with pytest.raises(ValidationError) as ei:
        ctx.tasks.create_task(project.id, task_payload(
            date="15/06/2024", priority="urgent", hours_estimated=0, hours_done=-1, state="maybe",
        ))
    assert set(ei.value.fields) == {"date", "priority", "hours_estimated", "hours_done", "state"}


def test_create_task_with_unknown_user(ctx, project):
    with pytest.raises(ValidationError) as ei:
        ctx.tasks.create_task(project.id, task_payload(user_id=42))
    assert "user_id" in ei.value.fields


def test_list_tasks_is_scoped_and_ordered(ctx, project):
    other = ctx.projects.create_project({"name": "Other", "estimation_days": 1})
    a = ctx.tasks.create_task(project.id, task_payload(description="A"))
    ctx.tasks.create_task(other.id, task_payload(description="X"))
    b = ctx.tasks.create_task(project.id, task_payload(description="B"))

    assert [t.id for t in ctx.tasks.list_tasks(project.id)] == [a.id, b.id]
    assert ctx.tasks.list_tasks(999) == []


def test_task_is_invisible_through_another_project(ctx, project):
    other = ctx.projects.create_project({"name": "Other", "estimation_days": 1})
    t = ctx.tasks.create_task(project.id, task_payload())

    assert ctx.tasks.get_task(other.id, t.id) is None
    with pytest.raises(NotFoundError):
        ctx.tasks.update_task(other.id, t.id, {"state": "done"})
    assert ctx.tasks.delete_task(other.id, t.id) is False
    assert ctx.tasks.get_task(project.id, t.id) == t


def test_update_task_merges_fields(ctx, project):
    t = ctx.tasks.create_task(project.id, task_payload())
    updated = ctx.tasks.update_task(project.id, t.id, {"hours_done": 6, "state": "done"})
    assert updated.hours_done == 6.0
    assert updated.is_done
    assert updated.description == t.description
    assert updated.updated_at_utc is not None


def test_update_task_cannot_move_project(ctx, project):
    t = ctx.tasks.create_task(project.id, task_payload())
    with pytest.raises(ValidationError) as ei:
        ctx.tasks.update_task(project.id, t.id, {"project_id": 2})
    assert "project_id" in ei.value.fields


def test_update_unknown_task(ctx, project):
    with pytest.raises(NotFoundError) as ei:
        ctx.tasks.update_task(project.id, 999, {"state": "done"})
    assert ei.value.entity == "Task"
    assert ei.value.project_id == project.id


def test_delete_task_unlinks_bugnotes(ctx, project):
    t = ctx.tasks.create_task(project.id, task_payload())
    note = ctx.bugnotes.create_bugnote(project.id, bugnote_payload(task_id=t.id))

    assert ctx.tasks.delete_task(project.id, t.id) is True

    kept = ctx.bugnotes.get_bugnote(project.id, note.id)
    assert kept is not None
    assert kept.task_id is None
    assert kept.content == note.content
    assert ctx.tasks.delete_task(project.id, t.id) is False


def test_get_returns_created_fields_unchanged(ctx, project):
    data = task_payload(description="  Fix login  ", date=date(2024, 6, 20), hours_estimated=7.5)
    created = ctx.tasks.create_task(project.id, data)
    stored = ctx.tasks.get_task(project.id, created.id)

    for field, value in data.items():
        assert getattr(stored, field) == value, field
    # defaulted on create
    assert stored.hours_done == 0.0
    assert stored.project_id == project.id
