# Rev 0.3.0
# src/projtrack/ui/dialogs/project_dialog.py
from __future__ import annotations
from typing import Any, Dict, Iterable, Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QLineEdit, QDoubleSpinBox,
    QListWidget, QListWidgetItem, QDialogButtonBox, QWidget
)

from projtrack.models.entities import Project, User


class ProjectDialog(QDialog):
    """New/edit project: name, estimation in days, assigned users."""

    def __init__(self, users: Iterable[User], parent: QWidget | None = None, *, project: Optional[Project] = None):
        super().__init__(parent)
        self.setWindowTitle("Edit Project" if project else "New Project")
        self.setMinimumWidth(420)

        self._name = QLineEdit(project.name if project else "")
        self._name.setPlaceholderText("Project name")

        self._days = QDoubleSpinBox()
        self._days.setRange(0, 10_000)
        self._days.setDecimals(1)
        self._days.setSuffix(" days")
        self._days.setValue(project.estimation_days if project else 0)

        assigned = set(project.users) if project else set()
        self._users = QListWidget()
        for u in users:
            item = QListWidgetItem(f"{u.name} ({u.role})")
            item.setData(Qt.UserRole, u.id)
            item.setFlags(item.flags() | Qt.ItemIsUserCheckable)
            item.setCheckState(Qt.Checked if u.id in assigned else Qt.Unchecked)
            self._users.addItem(item)

        form = QFormLayout()
        form.addRow("Name:", self._name)
        form.addRow("Estimation:", self._days)
        form.addRow("Users:", self._users)

        btns = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        btns.accepted.connect(self.accept)
        btns.rejected.connect(self.reject)

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addWidget(btns)
        self._name.setFocus(Qt.OtherFocusReason)

    def values(self) -> Dict[str, Any]:
        users = [
            int(self._users.item(i).data(Qt.UserRole))
            for i in range(self._users.count())
            if self._users.item(i).checkState() == Qt.Checked
        ]
        return {
            "name": self._name.text(),
            "estimation_days": self._days.value(),
            "users": users,
        }
