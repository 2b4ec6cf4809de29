# Rev 0.3.0

"""Pytest fixtures for projtrack (Rev 0.3.0)"""
from __future__ import annotations
import os
from datetime import datetime
from pathlib import Path

import pytest

from projtrack.app_context import AppContext
from projtrack.repositories.db import Database


# Saturday noon; tasks dated before 2024-06-15 and not done are late
FIXED_NOW = datetime(2024, 6, 15, 12, 0, 0)


@pytest.fixture()
def db(tmp_path: Path):
    database = Database(path=tmp_path / "test.db")
    try:
        database.run_migrations()
        yield database
    finally:
        database.close()


@pytest.fixture()
def ctx(tmp_path: Path):
    context = AppContext.create(tmp_path / "app.db", clock=lambda: FIXED_NOW)
    try:
        yield context
    finally:
        context.close()


@pytest.fixture(scope="session")
def qapp():
    """One QApplication for viewmodel and widget tests; no display needed."""
    QtWidgets = pytest.importorskip("PySide6.QtWidgets")
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


@pytest.fixture()
def project(ctx):
    return ctx.projects.create_project({"name": "Website redesign", "estimation_days": 10, "users": [1, 2]})


def task_payload(**overrides):
    data = {
        "date": "2024-06-20",
        "description": "Front-end development",
        "user_id": 2,
        "priority": "medium",
        "hours_estimated": 8,
        "state": "not-done",
    }
    data.update(overrides)
    return data


def bugnote_payload(**overrides):
    data = {"date": "2024-06-12", "kind": "bug", "content": "Layout issue on Safari"}
    data.update(overrides)
    return data
