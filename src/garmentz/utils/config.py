# src/garmentz/utils/config.py
# Rev 0.3.1: nested defaults + notification policies
from __future__ import annotations

import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

from .paths import CONFIG_DIR, DB_PATH

log = logging.getLogger(__name__)

SETTINGS_FILE = CONFIG_DIR / "settings.json"

_DEFAULTS: Dict[str, Any] = {
    "main_window": {
        "width": 1280,
        "height": 800,
        "is_maximized": False,
    },
    "ui": {
        "diagnostics_dock_visible": False,
        "notifications_dock_visible": True,
    },
    "database": {
        "path": None,  # None -> DB_PATH (or $GARMENTZ_DB)
    },
    "session": {
        "remember_last_user": True,
        "last_user_email": None,
    },
    "notifications": {
        "preview_limit": 5,
        "policies": {
            # orders announce themselves; tasks and clients stay quiet
            "orders": {"on_add": True, "on_status_change": True, "on_delete": False},
            "tasks": {"on_add": False, "on_status_change": False, "on_delete": False},
            "clients": {"on_add": False, "on_status_change": False, "on_delete": False},
        },
    },
    "orders": {
        "recent_limit": 5,
    },
}


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


def defaults() -> Dict[str, Any]:
    return copy.deepcopy(_DEFAULTS)


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    path = Path(path) if path is not None else SETTINGS_FILE
    if path.exists():
        try:
            return _merge(_DEFAULTS, json.loads(path.read_text(encoding="utf-8")))
        except (OSError, ValueError):
            log.warning("Unreadable settings file %s; using defaults", path, exc_info=True)
            return defaults()
    return defaults()


def save_settings(data: Dict[str, Any], path: Optional[Path] = None) -> None:
    path = Path(path) if path is not None else SETTINGS_FILE
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def database_path(settings: Dict[str, Any]) -> Path:
    """$GARMENTZ_DB wins over settings, settings over the XDG default."""
    env = os.environ.get("GARMENTZ_DB")
    if env:
        return Path(env)
    configured = (settings.get("database") or {}).get("path")
    return Path(configured) if configured else DB_PATH
