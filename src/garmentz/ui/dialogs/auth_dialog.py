# Rev 0.2.1

# src/garmentz/ui/dialogs/auth_dialog.py
from __future__ import annotations

import logging

from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QLineEdit, QDialogButtonBox,
    QTabWidget, QWidget, QLabel, QMessageBox
)

from garmentz.errors import AuthError, RemoteError

log = logging.getLogger(__name__)


class AuthDialog(QDialog):
    """Sign in / sign up against the session provider. Accepts once a user is signed in."""

    def __init__(self, session, parent=None, *, email: str | None = None):
        super().__init__(parent)
        self._session = session
        self.setWindowTitle("A to Z Garments Track — Sign in")

        self._tabs = QTabWidget(self)

        # --- sign in
        self._in_email = QLineEdit(); self._in_email.setPlaceholderText("you@example.com")
        if email:
            self._in_email.setText(email)
        self._in_password = QLineEdit(); self._in_password.setEchoMode(QLineEdit.Password)
        w_in = QWidget()
        f_in = QFormLayout(w_in)
        f_in.addRow("Email:", self._in_email)
        f_in.addRow("Password:", self._in_password)
        self._tabs.addTab(w_in, "Sign In")

        # --- sign up
        self._up_name = QLineEdit(); self._up_name.setPlaceholderText("Full name")
        self._up_email = QLineEdit(); self._up_email.setPlaceholderText("you@example.com")
        self._up_password = QLineEdit(); self._up_password.setEchoMode(QLineEdit.Password)
        w_up = QWidget()
        f_up = QFormLayout(w_up)
        f_up.addRow("Full name:", self._up_name)
        f_up.addRow("Email:", self._up_email)
        f_up.addRow("Password:", self._up_password)
        self._tabs.addTab(w_up, "Sign Up")

        btns = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel, self)
        btns.accepted.connect(self._submit)
        btns.rejected.connect(self.reject)

        lay = QVBoxLayout(self)
        lay.addWidget(QLabel("<b>Manage your garment orders and tasks efficiently</b>"))
        lay.addWidget(self._tabs)
        lay.addWidget(btns)

    def _submit(self):
        signing_up = self._tabs.currentIndex() == 1
        try:
            if signing_up:
                self._session.sign_up(self._up_email.text(), self._up_password.text(), self._up_name.text())
            else:
                self._session.sign_in(self._in_email.text(), self._in_password.text())
        except AuthError as e:
            log.info("Authentication failed: %s", e)
            QMessageBox.warning(self, "Sign up failed" if signing_up else "Sign in failed", str(e))
            return
        except RemoteError:
            log.exception("Authentication backend error")
            QMessageBox.warning(self, "Error", "Something went wrong. Please try again.")
            return
        self.accept()
