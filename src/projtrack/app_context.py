# projtrack application context
# Rev 0.3.0

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from .utils.logging_setup import get_logger
from .repositories.db import Database
from .services.base import Clock
from .services.bugnote_service import BugNoteService
from .services.project_service import ProjectService
from .services.reporting_service import ReportingService
from .services.task_service import TaskService
from .services.user_service import UserService

@dataclass
class AppContext:
    """Central container for shared app resources."""
    db_path: Path
    db: Database
    users: UserService
    projects: ProjectService
    tasks: TaskService
    bugnotes: BugNoteService
    reporting: ReportingService

    @classmethod
    def create(cls, db_path: Path | str | None = None, *, clock: Clock = datetime.now) -> "AppContext":
        """Open the DB, apply pending migrations, wire services."""
        log = get_logger("AppContext")
        db = Database(db_path)
        applied = db.run_migrations()
        if applied:
            log.info("Applied migrations: %s", ", ".join(applied))
        users = UserService(db)
        projects = ProjectService(db)
        tasks = TaskService(db)
        bugnotes = BugNoteService(db)
        reporting = ReportingService(db, projects=projects, tasks=tasks, bugnotes=bugnotes, users=users, clock=clock)
        log.info("AppContext initialized with DB=%s", db.path)
        return cls(
            db_path=db.path, db=db, users=users, projects=projects,
            tasks=tasks, bugnotes=bugnotes, reporting=reporting,
        )

    def close(self) -> None:
        self.db.close()
