# Rev 0.3.0

from __future__ import annotations

import pytest

from projtrack.models.errors import NotFoundError, ValidationError

from conftest import bugnote_payload, task_payload


def test_create_and_get_project(ctx):
    p = ctx.projects.create_project({"name": "Alpha", "estimation_days": "2,5", "users": [3, 1, 1]})
    assert p.id > 0
    assert p.name == "Alpha"
    assert p.estimation_days == 2.5
    assert p.users == [1, 3]
    assert p.expected_hours == 20.0

    again = ctx.projects.get_project(p.id)
    assert again == p


def test_get_returns_created_fields_unchanged(ctx):
    data = {"name": "  Website redesign ", "estimation_days": 12.5, "users": [2, 4]}
    created = ctx.projects.create_project(data)
    stored = ctx.projects.get_project(created.id)

    for field, value in data.items():
        assert getattr(stored, field) == value, field
    assert stored.id == created.id


def test_users_default_to_empty(ctx):
    p = ctx.projects.create_project({"name": "Solo", "estimation_days": 1})
    assert p.users == []


def test_get_unknown_project_returns_none(ctx):
    assert ctx.projects.get_project(999) is None


def test_list_projects_in_insertion_order(ctx):
    names = ["One", "Two", "Three"]
    for n in names:
        ctx.projects.create_project({"name": n, "estimation_days": 1})
    assert [p.name for p in ctx.projects.list_projects()] == names


def test_create_reports_every_invalid_field(ctx):
    with pytest.raises(ValidationError) as ei:
        ctx.projects.create_project({"name": "   ", "estimation_days": 0})
    assert set(ei.value.fields) == {"name", "estimation_days"}


def test_create_requires_name_and_estimation(ctx):
    with pytest.raises(ValidationError) as ei:
        ctx.projects.create_project({})
    assert set(ei.value.fields) == {"name", "estimation_days"}


@pytest.mark.parametrize("bad", [-1, "abc", True, None, float("inf")])
def test_estimation_days_must_be_a_positive_number(ctx, bad):
    with pytest.raises(ValidationError) as ei:
        ctx.projects.create_project({"name": "X", "estimation_days": bad})
    assert "estimation_days" in ei.value.fields


def test_unknown_users_are_rejected(ctx):
    with pytest.raises(ValidationError) as ei:
        ctx.projects.create_project({"name": "X", "estimation_days": 1, "users": [1, 42]})
    assert "users" in ei.value.fields
    assert ctx.projects.list_projects() == []


def test_update_is_partial(ctx, project):
    updated = ctx.projects.update_project(project.id, {"name": "Renamed"})
    assert updated.name == "Renamed"
    assert updated.estimation_days == project.estimation_days
    assert updated.users == project.users


def test_update_replaces_users(ctx, project):
    updated = ctx.projects.update_project(project.id, {"users": [4]})
    assert updated.users == [4]
    assert ctx.projects.get_project(project.id).users == [4]


def test_empty_update_returns_record_unchanged(ctx, project):
    assert ctx.projects.update_project(project.id, {}) == project


def test_update_unknown_project_raises_not_found(ctx):
    with pytest.raises(NotFoundError) as ei:
        ctx.projects.update_project(999, {"name": "X"})
    assert ei.value.entity == "Project"
    assert ei.value.entity_id == 999


def test_update_validates_before_lookup(ctx):
    with pytest.raises(ValidationError):
        ctx.projects.update_project(999, {"estimation_days": -3})


@pytest.mark.parametrize("field", ["id", "created_at_utc", "colour"])
def test_update_rejects_read_only_and_unknown_fields(ctx, project, field):
    with pytest.raises(ValidationError) as ei:
        ctx.projects.update_project(project.id, {field: 7})
    assert field in ei.value.fields


def test_delete_project_removes_tasks_and_bugnotes(ctx, project):
    t = ctx.tasks.create_task(project.id, task_payload())
    ctx.bugnotes.create_bugnote(project.id, bugnote_payload(task_id=t.id))

    assert ctx.projects.delete_project(project.id) is True

    assert ctx.projects.get_project(project.id) is None
    assert ctx.tasks.list_tasks(project.id) == []
    assert ctx.bugnotes.list_bugnotes(project.id) == []
    conn = ctx.db.conn
    assert conn.execute("SELECT COUNT(*) FROM tasks").fetchone()[0] == 0
    assert conn.execute("SELECT COUNT(*) FROM bug_notes").fetchone()[0] == 0
    assert conn.execute("SELECT COUNT(*) FROM project_users").fetchone()[0] == 0


def test_delete_unknown_project_returns_false(ctx):
    assert ctx.projects.delete_project(999) is False


def test_delete_leaves_other_projects_alone(ctx, project):
    other = ctx.projects.create_project({"name": "Mobile app", "estimation_days": 30})
    ctx.tasks.create_task(other.id, task_payload())

    ctx.projects.delete_project(project.id)
    assert [p.id for p in ctx.projects.list_projects()] == [other.id]
    assert len(ctx.tasks.list_tasks(other.id)) == 1


def test_ids_are_not_reused_after_delete(ctx, project):
    ctx.projects.delete_project(project.id)
    fresh = ctx.projects.create_project({"name": "Next", "estimation_days": 1})
    assert fresh.id > project.id
