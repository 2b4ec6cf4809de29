# Rev 0.3.0
# projtrack — Main Window: sidebar | stacked (Dashboard, Project detail) + Diagnostics dock

from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QMainWindow, QSplitter, QStackedWidget, QDockWidget, QDialog

from projtrack.ui.dashboard_view import DashboardView
from projtrack.ui.diagnostics_panel import DiagnosticsPanel
from projtrack.ui.dialogs.project_dialog import ProjectDialog
from projtrack.ui.messages import show_error
from projtrack.ui.project_detail_view import ProjectDetailView
from projtrack.ui.project_sidebar import ProjectSidebar
from projtrack.utils.config import load_settings, save_settings
from projtrack.viewmodels.project_detail_viewmodel import ProjectDetailViewModel
from projtrack.viewmodels.projects_viewmodel import ProjectsViewModel


class MainWindow(QMainWindow):
    def __init__(self, ctx, *, logfile=None, parent=None):
        super().__init__(parent)
        self._ctx = ctx
        self._settings = load_settings()

        self._projects_vm = ProjectsViewModel(ctx)
        self._detail_vm = ProjectDetailViewModel(ctx)

        self.setWindowTitle("projtrack — Projects")
        win = self._settings.get("main_window", {})
        self.resize(int(win.get("width", 1200)), int(win.get("height", 760)))

        # ---- central ----
        self._sidebar = ProjectSidebar(self)
        self._dashboard = DashboardView(self)
        self._detail = ProjectDetailView(self._detail_vm, self._projects_vm, self)

        self._stack = QStackedWidget(self)
        self._stack.addWidget(self._dashboard)
        self._stack.addWidget(self._detail)

        splitter = QSplitter(Qt.Horizontal, self)
        splitter.addWidget(self._sidebar)
        splitter.addWidget(self._stack)
        splitter.setStretchFactor(1, 1)
        self.setCentralWidget(splitter)

        # ---- diagnostics dock ----
        dock = QDockWidget("Diagnostics", self)
        dock.setObjectName("DiagnosticsDock")
        dock.setAllowedAreas(Qt.BottomDockWidgetArea | Qt.TopDockWidgetArea)
        dock.setWidget(DiagnosticsPanel(self, logfile=logfile))
        self.addDockWidget(Qt.BottomDockWidgetArea, dock)
        dock.hide()
        self.menuBar().addMenu("&View").addAction(dock.toggleViewAction())

        # ---- wiring ----
        self._sidebar.dashboardRequested.connect(self._show_dashboard)
        self._sidebar.projectSelected.connect(self._show_project)
        self._sidebar.newProjectRequested.connect(self._new_project)
        self._dashboard.projectChosen.connect(self._show_project)
        self._detail.projectDeleted.connect(lambda _pid: self._show_dashboard())

        self._projects_vm.projectsReloaded.connect(self._on_projects_reloaded)
        self._projects_vm.dashboardLoaded.connect(self._dashboard.set_stats)
        self._projects_vm.errorRaised.connect(lambda kind, msg: show_error(self, kind, msg))
        self._detail_vm.errorRaised.connect(lambda kind, msg: show_error(self, kind, msg))
        # tasks/bugs changed inside a project -> sidebar progress + dashboard
        self._detail_vm.projectChanged.connect(lambda _pid: self._projects_vm.reload())

        # initial load
        self._projects_vm.reload()

    # -------------------- navigation --------------------

    def _show_dashboard(self):
        self._detail_vm.set_project(None)
        self._sidebar.clear_selection()
        self._stack.setCurrentWidget(self._dashboard)
        self._projects_vm.reload()

    def _show_project(self, project_id: int):
        self._detail.load_project(project_id)
        self._stack.setCurrentWidget(self._detail)

    def _on_projects_reloaded(self, summaries: list):
        self._sidebar.set_summaries(summaries, current_id=self._detail_vm.project_id)
        self._dashboard.set_summaries(summaries)

    # -------------------- commands --------------------

    def _new_project(self):
        dlg = ProjectDialog(self._projects_vm.users(), self)
        if dlg.exec() != int(QDialog.DialogCode.Accepted):
            return
        project = self._projects_vm.create_project(dlg.values())
        if project is not None:
            self._show_project(project.id)
            self._projects_vm.reload()

    # -------------------- window state --------------------

    def closeEvent(self, event):
        self._settings.setdefault("main_window", {}).update(
            {"width": self.width(), "height": self.height()}
        )
        save_settings(self._settings)
        super().closeEvent(event)
