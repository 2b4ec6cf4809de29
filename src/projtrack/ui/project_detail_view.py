# src/projtrack/ui/project_detail_view.py
# Rev 0.3.0
from __future__ import annotations

from pathlib import Path

from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QProgressBar,
    QTabWidget, QFileDialog, QDialog, QMessageBox
)

from projtrack.models.types import ExportView, StatusLabel
from projtrack.ui.bugnotes_table import BugNotesTable
from projtrack.ui.dialogs.project_dialog import ProjectDialog
from projtrack.ui.messages import confirm
from projtrack.ui.tasks_table import TasksTable
from projtrack.utils.config import load_settings, save_settings
from projtrack.viewmodels.project_detail_viewmodel import ProjectDetailViewModel
from projtrack.viewmodels.projects_viewmodel import ProjectsViewModel

_STATUS_STYLE = {
    StatusLabel.COMPLETED: "background:#dcfce7; color:#166534;",
    StatusLabel.LATE: "background:#fee2e2; color:#991b1b;",
    StatusLabel.IN_PROGRESS: "background:#dbeafe; color:#1e40af;",
}


class ProjectDetailView(QWidget):
    projectDeleted = Signal(int)

    def __init__(self, detail_vm: ProjectDetailViewModel, projects_vm: ProjectsViewModel, parent=None):
        super().__init__(parent)
        self._vm = detail_vm
        self._projects_vm = projects_vm
        self._summary = None

        # ---------- header ----------
        self._title = QLabel("")
        self._title.setStyleSheet("font-size: 16pt; font-weight: 600;")
        self._status = QLabel("")
        self._status.setStyleSheet("padding: 2px 8px; border-radius: 8px;")
        self._info = QLabel("")
        self._progress = QProgressBar()
        self._progress.setRange(0, 100)

        self._btn_edit = QPushButton("Edit Project")
        self._btn_delete = QPushButton("Delete Project")
        self._btn_export = QPushButton("Export CSV")

        head = QHBoxLayout()
        head.addWidget(self._title)
        head.addWidget(self._status)
        head.addStretch(1)
        head.addWidget(self._btn_export)
        head.addWidget(self._btn_edit)
        head.addWidget(self._btn_delete)

        # ---------- tabs ----------
        self._tabs = QTabWidget(self)
        self._tabs.addTab(TasksTable(self._vm, self), "Tasks")
        self._tabs.addTab(BugNotesTable(self._vm, self), "Bugs && Notes")

        root = QVBoxLayout(self)
        root.addLayout(head)
        root.addWidget(self._info)
        root.addWidget(self._progress)
        root.addWidget(self._tabs, 1)

        self._btn_edit.clicked.connect(self._on_edit_clicked)
        self._btn_delete.clicked.connect(self._on_delete_clicked)
        self._btn_export.clicked.connect(self._on_export_clicked)
        self._vm.summaryLoaded.connect(self._on_summary_loaded)

    # ---------- Public API ----------
    def load_project(self, project_id: int) -> None:
        self._vm.set_project(project_id)
        self._vm.reload()

    # ---------- Internals ----------
    def _on_summary_loaded(self, summary):
        self._summary = summary
        if summary is None:
            self._title.setText("")
            self._status.setText("")
            self._info.setText("")
            self._progress.setValue(0)
            return
        p = summary.project
        self._title.setText(p.name)
        self._status.setText(summary.status.value)
        self._status.setStyleSheet("padding: 2px 8px; border-radius: 8px; " + _STATUS_STYLE[summary.status])
        self._info.setText(
            f"Estimation: {p.estimation_days:g} days ({summary.hours_expected:g} h) · "
            f"Done: {summary.hours_done:g} h · Tasks: {summary.tasks_done}/{summary.tasks_total}"
        )
        self._progress.setValue(summary.progress)

    def _on_edit_clicked(self):
        if self._summary is None:
            return
        project = self._summary.project
        dlg = ProjectDialog(self._projects_vm.users(), self, project=project)
        if dlg.exec() != int(QDialog.DialogCode.Accepted):
            return
        if self._projects_vm.update_project(project.id, dlg.values()) is not None:
            self._vm.reload()

    def _on_delete_clicked(self):
        if self._summary is None:
            return
        project = self._summary.project
        if not confirm(self, "Delete Project", f"Delete “{project.name}” with all its tasks and bugs/notes?"):
            return
        if self._projects_vm.delete_project(project.id):
            self._vm.set_project(None)
            self._vm.reload()
            self.projectDeleted.emit(project.id)

    def _on_export_clicked(self):
        view = ExportView.TASKS if self._tabs.currentIndex() == 0 else ExportView.BUGS
        settings = load_settings()
        start = settings.get("export", {}).get("last_dir") or str(Path.home())
        directory = QFileDialog.getExistingDirectory(self, "Export CSV to…", start)
        if not directory:
            return
        try:
            target = self._vm.save_export(view, Path(directory))
        except OSError as exc:
            QMessageBox.critical(self, "Export failed", str(exc))
            return
        if target is not None:
            settings.setdefault("export", {})["last_dir"] = directory
            save_settings(settings)
            QMessageBox.information(self, "Export", f"Saved {target.name}")
