# src/projtrack/ui/dialogs/bugnote_dialog.py
# Rev 0.3.0
from __future__ import annotations
from datetime import date
from typing import Any, Dict, Iterable, Optional

from PySide6.QtCore import QDate, Qt
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QTextEdit, QDateEdit, QComboBox,
    QDialogButtonBox, QWidget
)

from projtrack.models.entities import BugNote, Task
from projtrack.models.types import BUGNOTE_KINDS, BUGNOTE_KIND_LABELS


class BugNoteDialog(QDialog):
    def __init__(self, tasks: Iterable[Task], parent: QWidget | None = None, *, bugnote: Optional[BugNote] = None):
        super().__init__(parent)
        self.setWindowTitle("Edit Bug/Note" if bugnote else "New Bug/Note")
        self.setMinimumWidth(460)

        when = bugnote.date if bugnote else date.today()
        self._date = QDateEdit(QDate(when.year, when.month, when.day))
        self._date.setCalendarPopup(True)
        self._date.setDisplayFormat("dd/MM/yyyy")

        self._kind = QComboBox()
        for k in BUGNOTE_KINDS:
            self._kind.addItem(BUGNOTE_KIND_LABELS[k], k)
        self._kind.setCurrentIndex(self._kind.findData(bugnote.kind if bugnote else "bug"))

        self._content = QTextEdit()
        self._content.setAcceptRichText(False)
        self._content.setPlainText(bugnote.content if bugnote else "")

        self._task = QComboBox()
        self._task.addItem("— No linked task —", None)
        for t in tasks:
            self._task.addItem(t.description, t.id)
        if bugnote and bugnote.task_id is not None:
            ix = self._task.findData(bugnote.task_id)
            if ix >= 0:
                self._task.setCurrentIndex(ix)

        form = QFormLayout()
        form.addRow("Date:", self._date)
        form.addRow("Type:", self._kind)
        form.addRow("Content:", self._content)
        form.addRow("Linked task:", self._task)

        btns = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        btns.accepted.connect(self.accept)
        btns.rejected.connect(self.reject)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addWidget(btns)
        self._content.setFocus(Qt.OtherFocusReason)

    def values(self) -> Dict[str, Any]:
        return {
            "date": self._date.date().toPython(),
            "kind": self._kind.currentData(),
            "content": self._content.toPlainText(),
            "task_id": self._task.currentData(),
        }
