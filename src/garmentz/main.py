# Rev 0.3.2

# src/garmentz/main.py
import logging
import sys
from PySide6.QtGui import QGuiApplication, QFont
from PySide6.QtCore import Qt, QCoreApplication
from PySide6.QtWidgets import QApplication, QDialog

from garmentz.app_context import AppContext
from garmentz.ui.dialogs.auth_dialog import AuthDialog
from garmentz.ui.main_window import MainWindow
from garmentz.ui.window_mode import apply_main_window_settings
from garmentz.utils.config import load_settings
from garmentz.utils.logging_setup import setup_logging
from garmentz.utils.paths import ensure_dirs


def main():
    QGuiApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )
    app = QApplication(sys.argv)
    QCoreApplication.setOrganizationName("atoz")
    QCoreApplication.setApplicationName("garmentZ")

    ensure_dirs()
    logfile = setup_logging("garmentZ")
    print(f"[logging] Writing to: {logfile}")
    settings = load_settings()

    # --- DI wiring ---
    ctx = AppContext.create(settings=settings)
    ctx.session.restore()

    sess = settings.get("session") or {}
    last_email = sess.get("last_user_email") if sess.get("remember_last_user", True) else None
    if AuthDialog(ctx.session, email=last_email).exec() != int(QDialog.DialogCode.Accepted):
        logging.getLogger(__name__).info("Sign-in cancelled; exiting")
        ctx.close()
        return 0

    # --- UI ---
    win = MainWindow(ctx)
    apply_main_window_settings(win, settings)

    app.setProperty("mainWindow", win)
    app.setFont(QFont("Sans Serif", 10))

    try:
        return app.exec()
    finally:
        ctx.close()


if __name__ == "__main__":
    sys.exit(main())
