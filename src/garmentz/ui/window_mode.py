# Rev 0.3.0

# ui/window_mode.py
from PySide6.QtCore import Qt, QRect
from PySide6.QtGui import QGuiApplication


def _screen_rect(win) -> QRect:
    screen = QGuiApplication.screenAt(win.frameGeometry().center()) or QGuiApplication.primaryScreen()
    return screen.availableGeometry()


def apply_main_window_settings(win, settings: dict):
    """
    Size the main window from settings["main_window"]; maximized wins over
    width/height. Sizes never exceed the available screen area.
    """
    cfg = settings.get("main_window") or {}
    if cfg.get("is_maximized"):
        win.showMaximized()
        return
    rect = _screen_rect(win)
    w = min(int(cfg.get("width", 1280)), rect.width())
    h = min(int(cfg.get("height", 800)), rect.height())
    win.resize(w, h)
    win.show()


def lock_dialog_fixed(win, *, width_ratio=0.6, height_ratio=0.7):
    """
    For modal dialogs: keep them *not* maximized, but non-resizable and sized
    as a fraction of the current screen.
    """
    rect = _screen_rect(win)
    w = int(rect.width() * width_ratio)
    h = int(rect.height() * height_ratio)
    win.setFixedSize(w, h)
    win.setWindowFlag(Qt.WindowMaximizeButtonHint, False)
