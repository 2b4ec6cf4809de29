# Rev 0.3.0

from __future__ import annotations
import logging
import sys
from logging.handlers import RotatingFileHandler

from projtrack.utils import paths
from projtrack.utils.config import load_settings, save_settings
from projtrack.utils.logging_setup import current_logfile, get_logger, setup_logging


def test_settings_fall_back_to_defaults(tmp_path):
    missing = tmp_path / "none.json"
    assert load_settings(missing)["main_window"] == {"width": 1200, "height": 760}

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    assert load_settings(broken)["export"] == {"last_dir": None}


def test_settings_round_trip(tmp_path):
    path = tmp_path / "settings.json"
    data = load_settings(path)
    data["export"]["last_dir"] = "/tmp/out"
    save_settings(data, path)
    assert load_settings(path)["export"]["last_dir"] == "/tmp/out"
    # defaults are not mutated through the returned dict
    assert load_settings(tmp_path / "other.json")["export"]["last_dir"] is None


def test_db_path_env_override(monkeypatch, tmp_path):
    monkeypatch.setenv("PROJTRACK_DB", str(tmp_path / "x.db"))
    assert paths.db_path() == tmp_path / "x.db"
    monkeypatch.delenv("PROJTRACK_DB")
    assert paths.db_path() == paths.DB_PATH


def test_loggers_are_namespaced():
    assert get_logger("services.Foo").name == "projtrack.services.Foo"
    assert get_logger("projtrack.db").name == "projtrack.db"


def test_setup_logging_writes_rotating_file(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    monkeypatch.setenv("PROJTRACK_LOG_LEVEL", "DEBUG")
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    try:
        logfile = setup_logging(tmp_path)
        get_logger("test").info("hello log")
        for h in root.handlers:
            h.flush()
        assert logfile == tmp_path / "projtrack.log"
        assert current_logfile() == logfile
        assert "| INFO | projtrack.test | hello log" in logfile.read_text(encoding="utf-8")
    finally:
        for h in list(root.handlers):
            if h not in before:
                root.removeHandler(h)
                h.close()
        root.setLevel(level)
    assert not any(isinstance(h, RotatingFileHandler) and h.baseFilename == str(logfile) for h in root.handlers)
