# Rev 0.3.0

# src/projtrack/main.py
import sys

from PySide6.QtCore import QCoreApplication
from PySide6.QtGui import QFont
from PySide6.QtWidgets import QApplication

from projtrack.app_context import AppContext
from projtrack.ui.main_window import MainWindow
from projtrack.utils.logging_setup import get_logger, setup_logging
from projtrack.utils.paths import ensure_dirs


def main():
    ensure_dirs()
    logfile = setup_logging()
    log = get_logger("main")

    app = QApplication(sys.argv)
    QCoreApplication.setOrganizationName("projtrack")
    QCoreApplication.setApplicationName("projtrack")
    app.setFont(QFont("Sans Serif", 10))

    # --- DI wiring ---
    ctx = AppContext.create()

    # --- UI ---
    win = MainWindow(ctx, logfile=logfile)
    win.show()
    app.setProperty("mainWindow", win)

    try:
        return app.exec()
    finally:
        ctx.close()
        log.info("Shutdown")


if __name__ == "__main__":
    sys.exit(main())
