# Rev 0.3.0

"""Paths and XDG helpers (Rev 0.3.0)
- Uses XDG Base Directory spec for data, state (logs) and config
- DB lives under the XDG data dir unless GARMENTZ_DB points elsewhere
- Order photos are copied next to the DB, one folder per user
"""
from __future__ import annotations
import os
from pathlib import Path


APP_NAME = "garmentZ"


XDG_DATA_HOME = Path(os.environ.get("XDG_DATA_HOME", Path.home() / ".local" / "share"))
XDG_STATE_HOME = Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))
XDG_CONFIG_HOME = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


DATA_DIR = XDG_DATA_HOME / APP_NAME
STATE_DIR = XDG_STATE_HOME / APP_NAME
LOGS_DIR = STATE_DIR / "logs"
CONFIG_DIR = XDG_CONFIG_HOME / APP_NAME
PHOTOS_DIR = DATA_DIR / "photos"


# Shipped with the package (see pyproject package-data)
PACKAGE_DIR = Path(__file__).resolve().parents[1]
MIGRATIONS_DIR = (PACKAGE_DIR / "data" / "migrations").resolve()


DB_PATH = Path(os.environ.get("GARMENTZ_DB", DATA_DIR / "garmentz.db"))


def ensure_dirs() -> None:
    for p in (DATA_DIR, STATE_DIR, LOGS_DIR, CONFIG_DIR):
        p.mkdir(parents=True, exist_ok=True)
