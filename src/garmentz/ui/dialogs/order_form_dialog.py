# Rev 0.3.1
# src/garmentz/ui/dialogs/order_form_dialog.py
from __future__ import annotations

from typing import Iterable, List

from PySide6.QtCore import QDate
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QLineEdit, QTextEdit, QDialogButtonBox,
    QComboBox, QGroupBox, QSpinBox, QDoubleSpinBox, QLabel, QDateEdit, QCheckBox,
    QHBoxLayout, QPushButton, QListWidget, QFileDialog
)

from garmentz.models.entities import Client
from garmentz.models.types import PRIORITIES
from garmentz.services.order_intake import IntakeRequest, build_order_draft
from garmentz.services.pricing import calculate_tax, format_inr
from garmentz.ui.window_mode import lock_dialog_fixed
from garmentz.utils.formatting import humanize


class OrderFormDialog(QDialog):
    """
    New order intake: client details (or an existing client) + order details.
    request() builds the IntakeRequest; photo_paths() lists picked image files
    which the caller uploads before placing the order.
    """

    def __init__(self, parent=None, *, clients: Iterable[Client] = ()):
        super().__init__(parent)
        self.setWindowTitle("Create New Order")

        # ---------- Client ----------
        self._cmb_client = QComboBox()
        self._cmb_client.addItem("New client…", None)
        for c in clients:
            self._cmb_client.addItem(c.name, c.id)
        self._cmb_client.currentIndexChanged.connect(self._sync_client_fields)

        self._client_name = QLineEdit(); self._client_name.setPlaceholderText("Enter client name")
        self._client_email = QLineEdit(); self._client_email.setPlaceholderText("client@company.com")
        self._client_phone = QLineEdit(); self._client_phone.setPlaceholderText("+91 98765 43210")
        self._client_address = QTextEdit(); self._client_address.setAcceptRichText(False)
        self._client_address.setFixedHeight(56)

        f_client = QFormLayout()
        f_client.addRow("Client:", self._cmb_client)
        f_client.addRow("Name *:", self._client_name)
        f_client.addRow("Email:", self._client_email)
        f_client.addRow("Phone:", self._client_phone)
        f_client.addRow("Address:", self._client_address)
        box_client = QGroupBox("Client Information")
        box_client.setLayout(f_client)

        # ---------- Order ----------
        self._desc = QTextEdit(); self._desc.setAcceptRichText(False)
        self._desc.setPlaceholderText("e.g. 200 cotton shirts, navy, size mix")
        self._qty = QSpinBox(); self._qty.setRange(1, 1_000_000)
        self._cmb_priority = QComboBox()
        for p in PRIORITIES:
            self._cmb_priority.addItem(humanize(p), p)
        self._cmb_priority.setCurrentIndex(self._cmb_priority.findData("medium"))

        self._has_due = QCheckBox("Due")
        self._due = QDateEdit(QDate.currentDate().addDays(14))
        self._due.setCalendarPopup(True)
        self._due.setDisplayFormat("yyyy-MM-dd")
        self._due.setEnabled(False)
        self._has_due.toggled.connect(self._due.setEnabled)
        due_row = QHBoxLayout(); due_row.addWidget(self._has_due); due_row.addWidget(self._due, 1)

        self._subtotal = QDoubleSpinBox()
        self._subtotal.setRange(0, 1e9)
        self._subtotal.setDecimals(2)
        self._subtotal.setPrefix("₹ ")
        self._subtotal.valueChanged.connect(self._sync_totals)
        self._lbl_tax = QLabel()
        self._lbl_total = QLabel()

        self._creator_name = QLineEdit(); self._creator_name.setPlaceholderText("Taken by (optional)")
        self._creator_phone = QLineEdit(); self._creator_phone.setPlaceholderText("Phone (optional)")

        self._photos = QListWidget(); self._photos.setFixedHeight(72)
        btn_photos = QPushButton("Add Photos…")
        btn_photos.clicked.connect(self._pick_photos)
        btn_clear = QPushButton("Clear")
        btn_clear.clicked.connect(self._photos.clear)
        photo_btns = QHBoxLayout(); photo_btns.addWidget(btn_photos); photo_btns.addWidget(btn_clear); photo_btns.addStretch(1)

        f_order = QFormLayout()
        f_order.addRow("Description:", self._desc)
        f_order.addRow("Quantity:", self._qty)
        f_order.addRow("Priority:", self._cmb_priority)
        f_order.addRow("Due date:", due_row)
        f_order.addRow("Subtotal:", self._subtotal)
        f_order.addRow("GST (5%):", self._lbl_tax)
        f_order.addRow("Total:", self._lbl_total)
        f_order.addRow("Created by:", self._creator_name)
        f_order.addRow("Creator phone:", self._creator_phone)
        f_order.addRow("Photos:", self._photos)
        f_order.addRow("", photo_btns)
        box_order = QGroupBox("Order Details")
        box_order.setLayout(f_order)

        self._btns = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        self._btns.button(QDialogButtonBox.Ok).setText("Create Order")
        self._btns.accepted.connect(self.accept)
        self._btns.rejected.connect(self.reject)
        self._client_name.textChanged.connect(self._sync_ok)

        root = QVBoxLayout(self)
        root.addWidget(box_client)
        root.addWidget(box_order)
        root.addWidget(self._btns)

        lock_dialog_fixed(self, width_ratio=0.45, height_ratio=0.85)
        self._sync_totals()
        self._sync_ok()

    # ---------- Internals ----------
    def _existing_client_id(self):
        return self._cmb_client.currentData()

    def _sync_client_fields(self):
        new_client = self._existing_client_id() is None
        for w in (self._client_name, self._client_email, self._client_phone, self._client_address):
            w.setEnabled(new_client)
        self._sync_ok()

    def _sync_ok(self):
        ok = self._existing_client_id() is not None or bool(self._client_name.text().strip())
        self._btns.button(QDialogButtonBox.Ok).setEnabled(ok)

    def _sync_totals(self):
        price = calculate_tax(self._subtotal.value())
        self._lbl_tax.setText(format_inr(price.tax))
        self._lbl_total.setText(f"<b>{format_inr(price.total)}</b>")

    def _pick_photos(self):
        files, _ = QFileDialog.getOpenFileNames(self, "Order photos", "", "Images (*.png *.jpg *.jpeg *.webp)")
        for f in files:
            self._photos.addItem(f)

    # ---------- Public API ----------
    def photo_paths(self) -> List[str]:
        return [self._photos.item(i).text() for i in range(self._photos.count())]

    def request(self, photo_urls: List[str] | None = None) -> IntakeRequest:
        client = {
            "name": self._client_name.text().strip(),
            "email": self._client_email.text().strip() or None,
            "phone": self._client_phone.text().strip() or None,
            "address": self._client_address.toPlainText().strip() or None,
        }
        order = build_order_draft(
            self._subtotal.value(),
            description=self._desc.toPlainText().strip() or None,
            quantity=self._qty.value(),
            priority=self._cmb_priority.currentData(),
            due_date=self._due.date().toString("yyyy-MM-dd") if self._has_due.isChecked() else None,
            creator_name=self._creator_name.text().strip() or None,
            creator_phone=self._creator_phone.text().strip() or None,
            photo_urls=photo_urls,
        )
        return IntakeRequest(client=client, order=order, existing_client_id=self._existing_client_id())
