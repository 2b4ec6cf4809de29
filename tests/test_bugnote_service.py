# Rev 0.3.0

from __future__ import annotations
from datetime import date

import pytest

from projtrack.models.errors import NotFoundError, ValidationError

from conftest import bugnote_payload, task_payload


def test_create_note_without_task(ctx, project):
    n = ctx.bugnotes.create_bugnote(project.id, bugnote_payload(kind="note", content="Review with client"))
    assert n.kind == "note"
    assert n.task_id is None
    assert ctx.bugnotes.list_bugnotes(project.id) == [n]


def test_create_bug_linked_to_task(ctx, project):
    t = ctx.tasks.create_task(project.id, task_payload())
    n = ctx.bugnotes.create_bugnote(project.id, bugnote_payload(task_id=t.id))
    assert n.task_id == t.id


def test_link_to_task_of_other_project_is_rejected(ctx, project):
    other = ctx.projects.create_project({"name": "Other", "estimation_days": 1})
    foreign = ctx.tasks.create_task(other.id, task_payload())
    with pytest.raises(ValidationError) as ei:
        ctx.bugnotes.create_bugnote(project.id, bugnote_payload(task_id=foreign.id))
    assert "task_id" in ei.value.fields


def test_create_bugnote_validation(ctx, project):
    with pytest.raises(ValidationError) as ei:
        ctx.bugnotes.create_bugnote(project.id, {"date": "2024-02-30", "kind": "idea", "content": "  "})
    assert set(ei.value.fields) == {"date", "kind", "content"}


def test_create_bugnote_in_unknown_project(ctx):
    with pytest.raises(NotFoundError):
        ctx.bugnotes.create_bugnote(999, bugnote_payload())


def test_update_and_unlink(ctx, project):
    t = ctx.tasks.create_task(project.id, task_payload())
    n = ctx.bugnotes.create_bugnote(project.id, bugnote_payload(task_id=t.id))

    changed = ctx.bugnotes.update_bugnote(project.id, n.id, {"kind": "note"})
    assert changed.kind == "note"
    assert changed.task_id == t.id

    unlinked = ctx.bugnotes.update_bugnote(project.id, n.id, {"task_id": None})
    assert unlinked.task_id is None


def test_update_unknown_bugnote(ctx, project):
    with pytest.raises(NotFoundError):
        ctx.bugnotes.update_bugnote(project.id, 999, {"content": "x"})


def test_delete_bugnote(ctx, project):
    n = ctx.bugnotes.create_bugnote(project.id, bugnote_payload())
    assert ctx.bugnotes.delete_bugnote(project.id, n.id) is True
    assert ctx.bugnotes.delete_bugnote(project.id, n.id) is False
    assert ctx.bugnotes.get_bugnote(project.id, n.id) is None


def test_get_returns_created_fields_unchanged(ctx, project):
    t = ctx.tasks.create_task(project.id, task_payload())
    data = {"date": date(2024, 6, 12), "kind": "note", "content": "\tCall the client back \n", "task_id": t.id}
    created = ctx.bugnotes.create_bugnote(project.id, data)
    stored = ctx.bugnotes.get_bugnote(project.id, created.id)

    for field, value in data.items():
        assert getattr(stored, field) == value, field
