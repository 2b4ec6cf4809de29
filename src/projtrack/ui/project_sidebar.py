# src/projtrack/ui/project_sidebar.py
# Rev 0.3.0 — Dashboard button + project list (name · progress) + New Project
from __future__ import annotations

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QWidget, QVBoxLayout, QPushButton, QListWidget, QListWidgetItem, QLabel


class ProjectSidebar(QWidget):
    dashboardRequested = Signal()
    projectSelected = Signal(int)
    newProjectRequested = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setObjectName("ProjectSidebar")
        self.setMinimumWidth(220)

        self._btn_dashboard = QPushButton("Dashboard")
        self._btn_new = QPushButton("New Project")
        self._list = QListWidget(self)

        root = QVBoxLayout(self)
        root.addWidget(self._btn_dashboard)
        root.addWidget(QLabel("Projects"))
        root.addWidget(self._list, 1)
        root.addWidget(self._btn_new)

        self._btn_dashboard.clicked.connect(self.dashboardRequested.emit)
        self._btn_new.clicked.connect(self.newProjectRequested.emit)
        self._list.itemClicked.connect(self._on_item_clicked)

    def set_summaries(self, summaries: list, current_id: int | None = None) -> None:
        self._list.blockSignals(True)
        self._list.clear()
        for s in summaries:
            item = QListWidgetItem(f"{s.project.name}  ·  {s.progress}%")
            item.setData(Qt.UserRole, s.project.id)
            item.setToolTip(s.status.value)
            self._list.addItem(item)
            if s.project.id == current_id:
                self._list.setCurrentItem(item)
        self._list.blockSignals(False)

    def clear_selection(self) -> None:
        self._list.clearSelection()

    def _on_item_clicked(self, item: QListWidgetItem):
        pid = item.data(Qt.UserRole)
        if pid is not None:
            self.projectSelected.emit(int(pid))
