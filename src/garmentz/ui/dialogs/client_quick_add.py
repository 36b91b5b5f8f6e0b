# Rev 0.2.0

# src/garmentz/ui/dialogs/client_quick_add.py
from PySide6.QtWidgets import QDialog, QFormLayout, QVBoxLayout, QLineEdit, QTextEdit, QDialogButtonBox

from garmentz.models.entities import Client


class ClientQuickAdd(QDialog):
    def __init__(self, parent=None, *, client: Client | None = None):
        super().__init__(parent)
        self.setWindowTitle("Edit Client" if client else "New Client")
        self.name = QLineEdit(client.name if client else "", self);  self.name.setPlaceholderText("Client name")
        self.email = QLineEdit((client.email if client else "") or "", self);  self.email.setPlaceholderText("Email (optional)")
        self.phone = QLineEdit((client.phone if client else "") or "", self);  self.phone.setPlaceholderText("Phone (optional)")
        self.address = QTextEdit(self);  self.address.setPlaceholderText("Address (optional)")
        self.address.setAcceptRichText(False)
        self.address.setPlainText((client.address if client else "") or "")
        btns = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel, self)
        btns.accepted.connect(self.accept); btns.rejected.connect(self.reject)

        form = QFormLayout()
        form.addRow("Name:", self.name)
        form.addRow("Email:", self.email)
        form.addRow("Phone:", self.phone)
        form.addRow("Address:", self.address)
        lay = QVBoxLayout(self)
        lay.addLayout(form); lay.addWidget(btns)

    def values(self) -> dict:
        return {
            "name": self.name.text().strip(),
            "email": self.email.text().strip() or None,
            "phone": self.phone.text().strip() or None,
            "address": self.address.toPlainText().strip() or None,
        }
