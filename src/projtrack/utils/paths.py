# Rev 0.3.0

"""Paths and XDG helpers (Rev 0.3.0)
- Follows the XDG base directory layout
- DB lives under the XDG data dir unless PROJTRACK_DB points elsewhere
- Migrations ship inside the package (projtrack/data/migrations)
"""
from __future__ import annotations
import os
from pathlib import Path


APP_NAME = "projtrack"


XDG_DATA_HOME = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))
XDG_STATE_HOME = Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))
XDG_CONFIG_HOME = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


DATA_DIR = XDG_DATA_HOME / APP_NAME
STATE_DIR = XDG_STATE_HOME / APP_NAME
LOGS_DIR = STATE_DIR / "logs"
CONFIG_DIR = XDG_CONFIG_HOME / APP_NAME


# Package-relative locations
PACKAGE_ROOT = Path(__file__).resolve().parents[1]
MIGRATIONS_DIR = (PACKAGE_ROOT / "data" / "migrations").resolve()


DB_PATH = DATA_DIR / "projtrack.db"


def db_path() -> Path:
    """Database location, honouring the PROJTRACK_DB override."""
    override = os.environ.get("PROJTRACK_DB")
    return Path(override).expanduser() if override else DB_PATH


def config_dir() -> Path:
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    return CONFIG_DIR


def ensure_dirs() -> None:
    for p in (DATA_DIR, STATE_DIR, LOGS_DIR, CONFIG_DIR):
        p.mkdir(parents=True, exist_ok=True)
