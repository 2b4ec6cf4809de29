# Rev 0.3.0

from __future__ import annotations

import pytest

pytest.importorskip("PySide6.QtCore")

from projtrack.models.errors import NotFoundError, PersistenceError, ValidationError  # noqa: E402
from projtrack.viewmodels._errors import error_kind  # noqa: E402
from projtrack.viewmodels.project_detail_viewmodel import ProjectDetailViewModel  # noqa: E402
from projtrack.viewmodels.projects_viewmodel import ProjectsViewModel  # noqa: E402

from conftest import bugnote_payload, task_payload  # noqa: E402


@pytest.fixture(autouse=True)
def _qt(qapp):
    yield qapp


class Recorder:
    def __init__(self, signal):
        self.calls = []
        signal.connect(lambda *args: self.calls.append(args))


def test_error_kinds():
    assert error_kind(ValidationError.single("name", "x")) == "validation"
    assert error_kind(NotFoundError("Task", 1)) == "not_found"
    assert error_kind(PersistenceError("gone")) == "persistence"


def test_task_mutation_reloads_and_notifies(ctx, project):
    vm = ProjectDetailViewModel(ctx)
    tasks = Recorder(vm.tasksReloaded)
    changed = Recorder(vm.projectChanged)
    summaries = Recorder(vm.summaryLoaded)
    vm.set_project(project.id)

    created = vm.create_task(task_payload(hours_done=8))

    assert created is not None
    assert changed.calls == [(project.id,)]
    pid, rows = tasks.calls[-1]
    assert pid == project.id
    assert [t.id for t in rows] == [created.id]
    assert summaries.calls[-1][0].progress == 10
    assert vm.user_name(created.user_id) == "Marie Martin"
    assert vm.task_description(created.id) == created.description


def test_validation_failure_is_reported_without_reload(ctx, project):
    vm = ProjectDetailViewModel(ctx)
    errors = Recorder(vm.errorRaised)
    changed = Recorder(vm.projectChanged)
    vm.set_project(project.id)

    assert vm.create_task(task_payload(priority="urgent")) is None
    assert changed.calls == []
    kind, message = errors.calls[0]
    assert kind == "validation"
    assert "priority" in message


def test_delete_task_refreshes_bugnotes(ctx, project):
    vm = ProjectDetailViewModel(ctx)
    notes = Recorder(vm.bugnotesReloaded)
    vm.set_project(project.id)
    t = vm.create_task(task_payload())
    n = vm.create_bugnote(bugnote_payload(task_id=t.id))

    assert vm.delete_task(t.id) is True
    _, rows = notes.calls[-1]
    assert [(b.id, b.task_id) for b in rows] == [(n.id, None)]


def test_without_project_nothing_happens(ctx):
    vm = ProjectDetailViewModel(ctx)
    summaries = Recorder(vm.summaryLoaded)
    vm.reload()
    assert summaries.calls == [(None,)]
    assert vm.create_task(task_payload()) is None
    assert vm.export_csv("tasks") is None


def test_save_export_writes_file(ctx, project, tmp_path):
    vm = ProjectDetailViewModel(ctx)
    vm.set_project(project.id)
    vm.create_task(task_payload())

    target = vm.save_export("tasks", tmp_path)
    assert target == tmp_path / "Website_redesign_tasks_2024-06-15.csv"
    assert target.read_text(encoding="utf-8").count("\n") == 2


def test_projects_viewmodel_reloads_after_commands(ctx):
    vm = ProjectsViewModel(ctx)
    lists = Recorder(vm.projectsReloaded)
    stats = Recorder(vm.dashboardLoaded)
    errors = Recorder(vm.errorRaised)

    p = vm.create_project({"name": "Alpha", "estimation_days": 2})
    assert [s.project.id for s in lists.calls[-1][0]] == [p.id]
    assert stats.calls[-1][0].active_projects == 1

    assert vm.update_project(999, {"name": "X"}) is None
    assert errors.calls[-1][0] == "not_found"

    assert vm.delete_project(p.id) is True
    assert lists.calls[-1][0] == []
    assert [u.name for u in vm.users()][:1] == ["Jean Dupont"]
