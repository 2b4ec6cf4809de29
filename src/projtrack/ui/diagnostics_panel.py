# projtrack diagnostics panel
# Rev 0.3.0

from __future__ import annotations
from pathlib import Path

from PySide6.QtCore import QTimer
from PySide6.QtGui import QTextCursor
from PySide6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QPlainTextEdit, QPushButton, QLabel

from projtrack.utils.logging_setup import current_logfile


def _tail(path: Path, max_lines: int = 500) -> str:
    try:
        with path.open("r", encoding="utf-8", errors="replace") as f:
            lines = f.readlines()
        return "".join(lines[-max_lines:])
    except FileNotFoundError:
        return "(log file not found)"
    except OSError as e:
        return f"(error reading log: {e})"


class DiagnosticsPanel(QWidget):
    """Tail of the application log, refreshed on demand or every few seconds."""

    def __init__(self, parent=None, *, logfile: Path | None = None):
        super().__init__(parent)
        self.setObjectName("DiagnosticsPanel")
        self._logfile = logfile or current_logfile()

        self.lbl = QLabel(f"Log: {self._logfile or '(no log file)'}")
        self.btn_refresh = QPushButton("Refresh")
        self.btn_auto = QPushButton("Auto: Off")
        self.btn_auto.setCheckable(True)

        top = QHBoxLayout()
        top.addWidget(self.lbl, 1)
        top.addWidget(self.btn_refresh)
        top.addWidget(self.btn_auto)

        self.view = QPlainTextEdit(self)
        self.view.setReadOnly(True)
        self.view.setLineWrapMode(QPlainTextEdit.NoWrap)

        lay = QVBoxLayout(self)
        lay.addLayout(top)
        lay.addWidget(self.view, 1)

        self.timer = QTimer(self)
        self.timer.setInterval(2000)
        self.timer.timeout.connect(self.refresh)

        self.btn_refresh.clicked.connect(self.refresh)
        self.btn_auto.toggled.connect(self._toggle_auto)

        self.refresh()

    def _toggle_auto(self, on: bool):
        self.btn_auto.setText("Auto: On" if on else "Auto: Off")
        if on:
            self.timer.start()
        else:
            self.timer.stop()

    def refresh(self):
        if self._logfile is None:
            self.view.setPlainText("(logging to file is not configured)")
            return
        self.view.setPlainText(_tail(Path(self._logfile)))
        self.view.moveCursor(QTextCursor.End)
