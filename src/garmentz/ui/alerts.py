# Rev 0.2.0
# src/garmentz/ui/alerts.py
from __future__ import annotations

from PySide6.QtWidgets import QMainWindow, QMessageBox


class AlertPresenter:
    """
    Renders view-model alerts: errors as a modal warning, everything else as
    a transient status-bar toast.
    """

    TOAST_MS = 4000

    def __init__(self, window: QMainWindow):
        self._win = window

    def attach(self, *viewmodels) -> None:
        for vm in viewmodels:
            vm.alertRaised.connect(self.show_alert)

    def show_alert(self, kind: str, title: str, message: str) -> None:
        if kind == "error":
            QMessageBox.warning(self._win, title, message)
            return
        self._win.statusBar().showMessage(f"{title} — {message}", self.TOAST_MS)
