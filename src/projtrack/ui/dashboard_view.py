# src/projtrack/ui/dashboard_view.py
# Rev 0.3.1 — summary cards + hours chart + Project | Estimation | Done (h) | Tasks | Progress | Status
from __future__ import annotations

from PySide6.QtCharts import QBarCategoryAxis, QBarSeries, QBarSet, QChart, QChartView, QValueAxis
from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QPainter
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QFrame, QTableWidget,
    QTableWidgetItem, QHeaderView
)

from projtrack.services.csv_export import format_hours


def _card(title: str) -> tuple[QFrame, QLabel]:
    frame = QFrame()
    frame.setFrameShape(QFrame.StyledPanel)
    value = QLabel("0")
    value.setStyleSheet("font-size: 20pt; font-weight: 600;")
    lay = QVBoxLayout(frame)
    lay.addWidget(QLabel(title))
    lay.addWidget(value)
    return frame, value


def _unique_labels(names) -> list[str]:
    # a category axis drops repeated labels, so same-named projects get a suffix
    seen: dict[str, int] = {}
    labels = []
    for name in names:
        seen[name] = seen.get(name, 0) + 1
        labels.append(name if seen[name] == 1 else f"{name} ({seen[name]})")
    return labels


class DashboardView(QWidget):
    projectChosen = Signal(int)

    _HEADERS = ["Project", "Estimation (days)", "Done (h)", "Tasks", "Progress", "Status"]

    def __init__(self, parent=None):
        super().__init__(parent)
        cards = QHBoxLayout()
        f1, self._active = _card("Active projects")
        f2, self._total = _card("Tasks")
        f3, self._completed = _card("Completed tasks")
        for f in (f1, f2, f3):
            cards.addWidget(f)

        # estimated vs actual hours per project
        self._chart = QChart()
        self._chart.setTitle("Hours: estimated vs actual")
        self._chart.legend().setAlignment(Qt.AlignBottom)
        self._chart_view = QChartView(self._chart, self)
        self._chart_view.setRenderHint(QPainter.Antialiasing)
        self._chart_view.setMinimumHeight(240)

        self._table = QTableWidget(0, len(self._HEADERS))
        self._table.setHorizontalHeaderLabels(self._HEADERS)
        self._table.setEditTriggers(QTableWidget.NoEditTriggers)
        self._table.setSelectionBehavior(QTableWidget.SelectRows)
        self._table.setSelectionMode(QTableWidget.SingleSelection)
        self._table.verticalHeader().setVisible(False)
        hdr = self._table.horizontalHeader()
        hdr.setSectionResizeMode(QHeaderView.ResizeToContents)
        hdr.setSectionResizeMode(0, QHeaderView.Stretch)
        self._table.itemDoubleClicked.connect(self._on_item_double_clicked)

        self._empty = QLabel("No projects yet. Create your first project!")
        self._empty.setAlignment(Qt.AlignCenter)

        root = QVBoxLayout(self)
        root.addLayout(cards)
        root.addWidget(self._chart_view)
        root.addWidget(self._table, 1)
        root.addWidget(self._empty)

    def set_stats(self, stats) -> None:
        self._active.setText(str(stats.active_projects))
        self._total.setText(str(stats.total_tasks))
        self._completed.setText(str(stats.completed_tasks))
        self._render_hours(stats.hours_chart)

    def hours_chart_values(self) -> list[tuple[str, float, float]]:
        """(project, estimated, actual) as currently drawn."""
        series = self._chart.series()
        if not series:
            return []
        estimated, actual = series[0].barSets()
        categories = self._chart.axes(Qt.Horizontal)[0].categories()
        return [(name, estimated.at(i), actual.at(i)) for i, name in enumerate(categories)]

    def _render_hours(self, points) -> None:
        self._chart.removeAllSeries()
        for axis in self._chart.axes():
            self._chart.removeAxis(axis)
        if not points:
            return

        estimated = QBarSet("Estimated (h)")
        actual = QBarSet("Actual (h)")
        for p in points:
            estimated.append(p.estimated)
            actual.append(p.actual)
        series = QBarSeries()
        series.append(estimated)
        series.append(actual)
        self._chart.addSeries(series)

        axis_x = QBarCategoryAxis()
        axis_x.append(_unique_labels(p.name for p in points))
        self._chart.addAxis(axis_x, Qt.AlignBottom)
        series.attachAxis(axis_x)

        top = max(max(p.estimated, p.actual) for p in points)
        axis_y = QValueAxis()
        axis_y.setRange(0, top or 1)
        axis_y.setLabelFormat("%d")
        self._chart.addAxis(axis_y, Qt.AlignLeft)
        series.attachAxis(axis_y)

    def set_summaries(self, summaries: list) -> None:
        self._empty.setVisible(not summaries)
        self._table.setRowCount(len(summaries))
        for r, s in enumerate(summaries):
            cells = [
                s.project.name,
                f"{s.project.estimation_days:g}",
                format_hours(s.hours_done),
                f"{s.tasks_done}/{s.tasks_total}",
                f"{s.progress}%",
                s.status.value,
            ]
            for c, text in enumerate(cells):
                item = QTableWidgetItem(text)
                item.setData(Qt.UserRole, s.project.id)
                self._table.setItem(r, c, item)

    def _on_item_double_clicked(self, item: QTableWidgetItem):
        pid = item.data(Qt.UserRole) if item else None
        if pid is not None:
            self.projectChosen.emit(int(pid))
