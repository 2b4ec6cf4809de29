# src/projtrack/ui/bugnotes_table.py
# Rev 0.3.0 — Date | Type | Content | Linked task
from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QTableWidget,
    QTableWidgetItem, QHeaderView, QDialog
)

from projtrack.models.entities import BugNote
from projtrack.models.types import BUGNOTE_KIND_LABELS
from projtrack.services.csv_export import format_display_date
from projtrack.ui.dialogs.bugnote_dialog import BugNoteDialog
from projtrack.ui.messages import confirm
from projtrack.viewmodels.project_detail_viewmodel import ProjectDetailViewModel


class BugNotesTable(QWidget):
    _HEADERS = ["Date", "Type", "Content", "Linked task"]

    def __init__(self, vm: ProjectDetailViewModel, parent=None):
        super().__init__(parent)
        self._vm = vm
        self._rows: list[BugNote] = []

        self._btn_new = QPushButton("New Bug/Note")
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
        self._table.setWordWrap(True)
        self._table.verticalHeader().setVisible(False)
        hdr = self._table.horizontalHeader()
        hdr.setSectionResizeMode(0, QHeaderView.ResizeToContents)
        hdr.setSectionResizeMode(1, QHeaderView.ResizeToContents)
        hdr.setSectionResizeMode(2, QHeaderView.Stretch)
        hdr.setSectionResizeMode(3, QHeaderView.ResizeToContents)

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

        self._vm.bugnotesReloaded.connect(self._on_bugnotes_reloaded)

    def _on_bugnotes_reloaded(self, project_id: int, rows: list):
        self._rows = list(rows)
        self._table.setRowCount(len(self._rows))
        for r, note in enumerate(self._rows):
            cells = [
                format_display_date(note.date),
                BUGNOTE_KIND_LABELS.get(note.kind, note.kind),
                note.content,
                self._vm.task_description(note.task_id),
            ]
            for c, text in enumerate(cells):
                item = QTableWidgetItem(text)
                item.setData(Qt.UserRole, note.id)
                self._table.setItem(r, c, item)
        self._table.resizeRowsToContents()
        self._on_selection_changed()

    def _selected(self) -> BugNote | None:
        items = self._table.selectedItems()
        if not items:
            return None
        row = items[0].row()
        return self._rows[row] if 0 <= row < len(self._rows) else None

    def _on_selection_changed(self):
        has_sel = self._selected() is not None
        self._btn_edit.setEnabled(has_sel)
        self._btn_delete.setEnabled(has_sel)

    def _on_new_clicked(self):
        if self._vm.project_id is None:
            return
        dlg = BugNoteDialog(self._vm.tasks(), self)
        if dlg.exec() != int(QDialog.DialogCode.Accepted):
            return
        self._vm.create_bugnote(dlg.values())

    def _on_edit_clicked(self):
        note = self._selected()
        if note is None:
            return
        dlg = BugNoteDialog(self._vm.tasks(), self, bugnote=note)
        if dlg.exec() != int(QDialog.DialogCode.Accepted):
            return
        current = {"date": note.date, "kind": note.kind, "content": note.content, "task_id": note.task_id}
        changes = {k: v for k, v in dlg.values().items() if current.get(k) != v}
        if changes:
            self._vm.update_bugnote(note.id, changes)

    def _on_delete_clicked(self):
        note = self._selected()
        if note is None:
            return
        if confirm(self, "Delete Bug/Note", f"Delete this {note.kind}?"):
            self._vm.delete_bugnote(note.id)
