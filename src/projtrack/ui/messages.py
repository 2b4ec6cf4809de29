# Rev 0.3.0
from __future__ import annotations

from PySide6.QtWidgets import QMessageBox, QWidget

_TITLES = {
    "validation": "Invalid input",
    "not_found": "Not found",
    "persistence": "Database error",
}


def show_error(parent: QWidget, kind: str, message: str) -> None:
    title = _TITLES.get(kind, "Error")
    if kind == "persistence":
        QMessageBox.critical(parent, title, message)
    else:
        QMessageBox.warning(parent, title, message)


def confirm(parent: QWidget, title: str, text: str) -> bool:
    return QMessageBox.question(parent, title, text, QMessageBox.Yes | QMessageBox.No) == QMessageBox.Yes
