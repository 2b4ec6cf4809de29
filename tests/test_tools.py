# Rev 0.3.0

from __future__ import annotations

from projtrack.app_context import AppContext
from projtrack.dev_seed import seed
from projtrack.models.types import StatusLabel
from projtrack.tools import export_csv, migrate

from conftest import FIXED_NOW


def test_migrate_up_and_status(tmp_path, capsys):
    db_file = tmp_path / "cli.db"
    assert migrate.main(["up", "--db", str(db_file)]) == 0
    assert "Applied migration: 0001_init.sql" in capsys.readouterr().out

    assert migrate.main(["status", "--db", str(db_file)]) == 0
    out = capsys.readouterr().out
    assert "Applied count: 2" in out
    assert "Pending count: 0" in out


def test_migrate_rebuild_with_seed(tmp_path, capsys):
    db_file = tmp_path / "cli.db"
    migrate.main(["up", "--db", str(db_file), "--seed"])
    assert migrate.main(["rebuild", "--db", str(db_file), "--seed"]) == 0
    ctx = AppContext.create(db_file)
    try:
        # rebuild starts from scratch, so only one seed is present
        assert [p.name for p in ctx.projects.list_projects()] == ["Website redesign", "Mobile app"]
    finally:
        ctx.close()


def test_dev_seed_projects(ctx):
    projects = seed(ctx)
    first, second = (ctx.reporting.project_summary(p.id) for p in projects)

    # 38 of 160 hours; an open task from 2023 is overdue
    assert first.progress == 24
    assert first.status is StatusLabel.LATE
    assert len(ctx.bugnotes.list_bugnotes(projects[0].id)) == 2
    # 22 of 240 hours; its only task is done
    assert second.progress == 9
    assert second.status is StatusLabel.IN_PROGRESS


def test_export_cli_writes_csv(tmp_path, capsys):
    db_file = tmp_path / "cli.db"
    ctx = AppContext.create(db_file, clock=lambda: FIXED_NOW)
    try:
        project = seed(ctx)[0]
    finally:
        ctx.close()

    out_dir = tmp_path / "out"
    assert export_csv.main([str(project.id), "bugs", "--db", str(db_file), "--out", str(out_dir)]) == 0
    files = list(out_dir.glob("Website_redesign_bugs_notes_*.csv"))
    assert len(files) == 1
    assert files[0].read_text(encoding="utf-8").splitlines()[1].endswith('"UI/UX mockups"')

    assert export_csv.main(["999", "tasks", "--db", str(db_file), "--out", "-"]) == 2
    assert "not found" in capsys.readouterr().err


def test_export_cli_reports_unwritable_target(tmp_path, capsys):
    db_file = tmp_path / "cli.db"
    ctx = AppContext.create(db_file)
    try:
        project = seed(ctx)[0]
    finally:
        ctx.close()

    blocker = tmp_path / "not_a_dir"
    blocker.write_text("", encoding="utf-8")

    assert export_csv.main([str(project.id), "tasks", "--db", str(db_file), "--out", str(blocker)]) == 2
    assert "Could not write" in capsys.readouterr().err
