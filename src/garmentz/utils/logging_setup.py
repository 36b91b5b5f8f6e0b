# Rev 0.3.2
"""Root logging: rotating file under LOGS_DIR, stdout echo, Qt messages and uncaught exceptions."""
from __future__ import annotations
import logging, os, sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

from PySide6.QtCore import QtMsgType, qInstallMessageHandler

from .paths import APP_NAME, LOGS_DIR

FMT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATEFMT = "%Y-%m-%d %H:%M:%S"
LEVEL_ENV = "GARMENTZ_LOG_LEVEL"
MAX_BYTES = 5_000_000
BACKUPS = 7

_QT_LEVELS = {
    QtMsgType.QtDebugMsg: logging.DEBUG,
    QtMsgType.QtInfoMsg: logging.INFO,
    QtMsgType.QtWarningMsg: logging.WARNING,
    QtMsgType.QtCriticalMsg: logging.ERROR,
    QtMsgType.QtFatalMsg: logging.CRITICAL,
}


def _forward_qt(msg_type, context, message):
    logging.getLogger("qt").log(_QT_LEVELS.get(msg_type, logging.INFO), message)


def _log_uncaught(exctype, value, tb):
    logging.getLogger("unhandled").error("Uncaught exception", exc_info=(exctype, value, tb))
    sys.__excepthook__(exctype, value, tb)


def log_file(log_dir: Optional[Path] = None) -> Path:
    d = Path(log_dir) if log_dir is not None else LOGS_DIR
    d.mkdir(parents=True, exist_ok=True)
    return d / "garmentZ.log"


def current_log_file() -> Optional[Path]:
    """Path of the rotating file handler installed by setup_logging(), if any."""
    for h in logging.getLogger().handlers:
        if isinstance(h, RotatingFileHandler):
            return Path(h.baseFilename)
    return None


def setup_logging(app_name: str = APP_NAME, log_dir: Optional[Path] = None) -> Path:
    level_name = os.environ.get(LEVEL_ENV, "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    logfile = log_file(log_dir)
    formatter = logging.Formatter(FMT, DATEFMT)

    root = logging.getLogger()
    root.setLevel(level)
    for handler in (
        RotatingFileHandler(logfile, maxBytes=MAX_BYTES, backupCount=BACKUPS, encoding="utf-8"),
        logging.StreamHandler(sys.stdout),
    ):
        handler.setFormatter(formatter)
        handler.setLevel(level)
        root.addHandler(handler)

    sys.excepthook = _log_uncaught
    qInstallMessageHandler(_forward_qt)

    logging.getLogger(__name__).info("%s logging initialized at %s; file: %s", app_name, level_name, logfile)
    return logfile
