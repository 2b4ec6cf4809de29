# src/projtrack/ui/tasks_table.py
# Rev 0.3.0 — Date | Task | Responsible | Priority | Estimated | Done | Status
from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QTableWidget,
    QTableWidgetItem, QHeaderView, QDialog
)

from projtrack.models.entities import Task
from projtrack.models.types import PRIORITY_LABELS, TASK_STATE_LABELS
from projtrack.services.csv_export import format_display_date, format_hours
from projtrack.ui.dialogs.task_dialog import TaskDialog
from projtrack.ui.messages import confirm
from projtrack.viewmodels.project_detail_viewmodel import ProjectDetailViewModel


class TasksTable(QWidget):
    _HEADERS = ["Date", "Task", "Responsible", "Priority", "Estimated (h)", "Done (h)", "Status"]

    def __init__(self, vm: ProjectDetailViewModel, parent=None):
        super().__init__(parent)
        self._vm = vm
        self._rows: list[Task] = []

        self._btn_new = QPushButton("New Task")
        self._btn_edit = QPushButton("Edit")
        self._btn_delete = QPushButton("Delete")
        self._btn_edit.setEnabled(False)
        self._btn_delete.setEnabled(False)

        self._table = QTableWidget(0, len(self._HEADERS))
        self._table.setHorizontalHeaderLabels(self._HEADERS)
        self._table.setEditTriggers(QTableWidget.NoEditTriggers)
        self._table.setSelectionBehavior(QTableWidget.SelectRows)
        self._table.setSelectionMode(QTableWidget.SingleSelection)
        self._table.setAlternatingRowColors(True)
        self._table.verticalHeader().setVisible(False)
        hdr = self._table.horizontalHeader()
        for col in range(len(self._HEADERS)):
            hdr.setSectionResizeMode(col, QHeaderView.ResizeToContents)
        hdr.setSectionResizeMode(1, QHeaderView.Stretch)  # Task

        top_bar = QHBoxLayout()
        top_bar.addWidget(self._btn_new)
        top_bar.addWidget(self._btn_edit)
        top_bar.addWidget(self._btn_delete)
        top_bar.addStretch(1)

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.addLayout(top_bar)
        root.addWidget(self._table, 1)

        self._btn_new.clicked.connect(self._on_new_clicked)
        self._btn_edit.clicked.connect(self._on_edit_clicked)
        self._btn_delete.clicked.connect(self._on_delete_clicked)
        self._table.itemDoubleClicked.connect(lambda _item: self._on_edit_clicked())
        self._table.itemSelectionChanged.connect(self._on_selection_changed)

        self._vm.tasksReloaded.connect(self._on_tasks_reloaded)

    # ---------- rendering ----------
    def _on_tasks_reloaded(self, project_id: int, rows: list):
        self._rows = list(rows)
        self._table.setRowCount(len(self._rows))
        for r, task in enumerate(self._rows):
            cells = [
                format_display_date(task.date),
                task.description,
                self._vm.user_name(task.user_id),
                PRIORITY_LABELS.get(task.priority, task.priority),
                format_hours(task.hours_estimated),
                format_hours(task.hours_done),
                TASK_STATE_LABELS.get(task.state, task.state),
            ]
            for c, text in enumerate(cells):
                item = QTableWidgetItem(text)
                item.setData(Qt.UserRole, task.id)
                if c in (4, 5):
                    item.setTextAlignment(Qt.AlignRight | Qt.AlignVCenter)
                self._table.setItem(r, c, item)
        self._on_selection_changed()

    def _selected(self) -> Task | None:
        items = self._table.selectedItems()
        if not items:
            return None
        row = items[0].row()
        return self._rows[row] if 0 <= row < len(self._rows) else None

    def _on_selection_changed(self):
        has_sel = self._selected() is not None
        self._btn_edit.setEnabled(has_sel)
        self._btn_delete.setEnabled(has_sel)

    # ----- Buttons -----
    def _on_new_clicked(self):
        if self._vm.project_id is None:
            return
        dlg = TaskDialog(self._vm.users(), self)
        if dlg.exec() != int(QDialog.DialogCode.Accepted):
            return
        self._vm.create_task(dlg.values())

    def _on_edit_clicked(self):
        task = self._selected()
        if task is None:
            return
        dlg = TaskDialog(self._vm.users(), self, task=task)
        if dlg.exec() != int(QDialog.DialogCode.Accepted):
            return
        # send only what changed
        current = {
            "date": task.date, "description": task.description, "user_id": task.user_id,
            "priority": task.priority, "hours_estimated": task.hours_estimated,
            "hours_done": task.hours_done, "state": task.state,
        }
        changes = {k: v for k, v in dlg.values().items() if current.get(k) != v}
        if changes:
            self._vm.update_task(task.id, changes)

    def _on_delete_clicked(self):
        task = self._selected()
        if task is None:
            return
        if confirm(self, "Delete Task", f"Delete task “{task.description}”?\nLinked bugs/notes are kept and unlinked."):
            self._vm.delete_task(task.id)
