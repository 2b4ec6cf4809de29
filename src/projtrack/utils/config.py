# src/projtrack/utils/config.py
import copy
import json
from pathlib import Path
from typing import Any, Dict, Optional
from .paths import config_dir

SETTINGS_NAME = "settings.json"

_DEFAULTS: Dict[str, Any] = {
    "main_window": {
        "width": 1200,
        "height": 760,
    },
    "export": {
        "last_dir": None,
    },
}


def settings_file() -> Path:
    return config_dir() / SETTINGS_NAME


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    path = path or settings_file()
    if path.exists():
        try:
            return {**copy.deepcopy(_DEFAULTS), **json.loads(path.read_text(encoding="utf-8"))}
        except (OSError, ValueError):
            return copy.deepcopy(_DEFAULTS)
    return copy.deepcopy(_DEFAULTS)


def save_settings(data: Dict[str, Any], path: Optional[Path] = None) -> None:
    path = path or settings_file()
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")

# Rev 0.3.0
