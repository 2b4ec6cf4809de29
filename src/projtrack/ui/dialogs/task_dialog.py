# src/projtrack/ui/dialogs/task_dialog.py
# Rev 0.3.0
from __future__ import annotations
from datetime import date
from typing import Any, Dict, Iterable, Optional

from PySide6.QtCore import QDate, Qt
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QLineEdit, QDateEdit, QComboBox,
    QDoubleSpinBox, QDialogButtonBox, QLabel, QWidget
)

from projtrack.models.entities import Task, User
from projtrack.models.types import PRIORITIES, PRIORITY_LABELS, TASK_STATES, TASK_STATE_LABELS


def _hours_box(value: float) -> QDoubleSpinBox:
    box = QDoubleSpinBox()
    box.setRange(0, 100_000)
    box.setDecimals(1)
    box.setSingleStep(0.5)
    box.setSuffix(" h")
    box.setValue(value)
    return box


class TaskDialog(QDialog):
    """
    values() returns a payload for TaskService.create_task / update_task:
      date, description, user_id, priority, hours_estimated, hours_done, state
    """

    def __init__(self, users: Iterable[User], parent: QWidget | None = None, *, task: Optional[Task] = None):
        super().__init__(parent)
        self.setWindowTitle("Edit Task" if task else "New Task")
        self.setMinimumWidth(460)

        when = task.date if task else date.today()
        self._date = QDateEdit(QDate(when.year, when.month, when.day))
        self._date.setCalendarPopup(True)
        self._date.setDisplayFormat("dd/MM/yyyy")

        self._desc = QLineEdit(task.description if task else "")
        self._desc.setPlaceholderText("What needs to be done")

        self._user = QComboBox()
        self._user.addItem("— Unassigned —", None)
        for u in users:
            self._user.addItem(u.name, u.id)
        if task and task.user_id is not None:
            ix = self._user.findData(task.user_id)
            if ix >= 0:
                self._user.setCurrentIndex(ix)

        self._priority = QComboBox()
        for p in PRIORITIES:
            self._priority.addItem(PRIORITY_LABELS[p], p)
        self._priority.setCurrentIndex(self._priority.findData(task.priority if task else "medium"))

        self._estimated = _hours_box(task.hours_estimated if task else 0)
        self._done = _hours_box(task.hours_done if task else 0)

        self._state = QComboBox()
        for s in TASK_STATES:
            self._state.addItem(TASK_STATE_LABELS[s], s)
        self._state.setCurrentIndex(self._state.findData(task.state if task else "not-done"))

        form = QFormLayout()
        form.addRow("Date:", self._date)
        form.addRow("Task:", self._desc)
        form.addRow("Responsible:", self._user)
        form.addRow("Priority:", self._priority)
        form.addRow(QLabel("<hr/>"))
        form.addRow("Estimated:", self._estimated)
        form.addRow("Done:", self._done)
        form.addRow("Status:", self._state)

        btns = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        btns.accepted.connect(self.accept)
        btns.rejected.connect(self.reject)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addWidget(btns)
        self._desc.setFocus(Qt.OtherFocusReason)

    def values(self) -> Dict[str, Any]:
        return {
            "date": self._date.date().toPython(),
            "description": self._desc.text(),
            "user_id": self._user.currentData(),
            "priority": self._priority.currentData(),
            "hours_estimated": self._estimated.value(),
            "hours_done": self._done.value(),
            "state": self._state.currentData(),
        }
