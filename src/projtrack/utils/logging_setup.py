# projtrack – logging setup (Rev 0.3.0)
from __future__ import annotations
import logging, os, sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from .paths import APP_NAME, LOGS_DIR

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_MAX_BYTES = 5_000_000
LOG_BACKUPS = 7

# handlers installed by setup_logging(); replaced on a second call
_installed: list[logging.Handler] = []


def get_logger(name: str) -> logging.Logger:
    """Logger namespaced under the application root logger."""
    if name == APP_NAME or name.startswith(APP_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{APP_NAME}.{name}")


def _install_qt_handler() -> bool:
    """Route Qt's qDebug/qWarning output into the `qt` logger when PySide6 is present."""
    try:
        from PySide6.QtCore import QtMsgType, qInstallMessageHandler
    except ImportError:
        return False

    levels = {
        QtMsgType.QtDebugMsg: logging.DEBUG,
        QtMsgType.QtInfoMsg: logging.INFO,
        QtMsgType.QtWarningMsg: logging.WARNING,
        QtMsgType.QtCriticalMsg: logging.ERROR,
        QtMsgType.QtFatalMsg: logging.CRITICAL,
    }

    def _qt_handler(msg_type, context, message):
        get_logger("qt").log(levels.get(msg_type, logging.INFO), message)

    qInstallMessageHandler(_qt_handler)
    return True


def _excepthook(exctype, value, tb):
    get_logger("unhandled").error("Uncaught exception", exc_info=(exctype, value, tb))
    sys.__excepthook__(exctype, value, tb)


def setup_logging(log_dir: Path | None = None) -> Path:
    """
    Rotating file (5 MB × 7) + stdout on the root logger.
    Level comes from PROJTRACK_LOG_LEVEL (DEBUG/INFO/WARNING/ERROR), default INFO.
    Returns the log file path.
    """
    level_name = os.environ.get("PROJTRACK_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    log_dir = Path(log_dir or LOGS_DIR)
    log_dir.mkdir(parents=True, exist_ok=True)
    logfile = log_dir / f"{APP_NAME}.log"

    root = logging.getLogger()
    for h in _installed:
        root.removeHandler(h)
        h.close()
    _installed.clear()

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    fh = RotatingFileHandler(logfile, maxBytes=LOG_MAX_BYTES, backupCount=LOG_BACKUPS, encoding="utf-8")
    ch = logging.StreamHandler(sys.stdout)
    for h in (fh, ch):
        h.setFormatter(formatter)
        h.setLevel(level)
        root.addHandler(h)
        _installed.append(h)
    root.setLevel(level)

    sys.excepthook = _excepthook
    qt = _install_qt_handler()

    get_logger("logging").info(
        "Logging initialized at %s; file: %s; qt messages: %s", level_name, logfile, "on" if qt else "off"
    )
    return logfile


def current_logfile() -> Path | None:
    """Path of the rotating log file attached to the root logger, if any."""
    for h in logging.getLogger().handlers:
        if isinstance(h, RotatingFileHandler):
            return Path(h.baseFilename)
    return None
