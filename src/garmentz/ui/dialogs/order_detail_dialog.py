# Rev 0.3.2: edit while pending; status buttons from ORDER_RULES
from __future__ import annotations

from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QLabel, QLineEdit, QTextEdit, QSpinBox,
    QDoubleSpinBox, QHBoxLayout, QPushButton, QGroupBox, QListWidget, QMessageBox
)

from garmentz.models.entities import Order
from garmentz.services.pricing import format_inr, same_amount
from garmentz.services.status_rules import ORDER_RULES, can_change_order_status, can_delete_order, can_edit_order
from garmentz.ui.window_mode import lock_dialog_fixed
from garmentz.utils.formatting import humanize, localized_date

_STATUS_BUTTONS = {
    "in_progress": "Mark as Processing",
    "completed": "Mark as Completed",
    "cancelled": "Cancel Order",
}


class OrderDetailDialog(QDialog):
    """
    Read view of one order. While the order is pending, Edit unlocks
    number/description/quantity/total (the total is saved as typed, tax and
    subtotal are left as they were).
    """

    def __init__(self, orders_vm, order: Order, *, client_name: str | None = None, parent=None):
        super().__init__(parent)
        self._vm = orders_vm
        self._order = order
        self._client_name = client_name
        self.setWindowTitle(f"Order {order.order_number}")

        self._number = QLineEdit()
        self._desc = QTextEdit(); self._desc.setAcceptRichText(False)
        self._qty = QSpinBox(); self._qty.setRange(1, 1_000_000)
        self._total = QDoubleSpinBox(); self._total.setRange(0, 1e9); self._total.setDecimals(2); self._total.setPrefix("₹ ")

        self._lbl_status = QLabel()
        self._lbl_priority = QLabel()
        self._lbl_client = QLabel()
        self._lbl_due = QLabel()
        self._lbl_amounts = QLabel()
        self._lbl_creator = QLabel()
        self._lbl_created = QLabel()

        form = QFormLayout()
        form.addRow("Order #:", self._number)
        form.addRow("Description:", self._desc)
        form.addRow("Quantity:", self._qty)
        form.addRow("Total:", self._total)
        form.addRow("Status:", self._lbl_status)
        form.addRow("Priority:", self._lbl_priority)
        form.addRow("Client:", self._lbl_client)
        form.addRow("Due:", self._lbl_due)
        form.addRow("Amounts:", self._lbl_amounts)
        form.addRow("Created by:", self._lbl_creator)
        form.addRow("Created:", self._lbl_created)
        box = QGroupBox("Order Details")
        box.setLayout(form)

        self._photos = QListWidget()
        box_photos = QGroupBox("Order Photos")
        lay_photos = QVBoxLayout(box_photos)
        lay_photos.addWidget(self._photos)

        # ---------- Buttons ----------
        self._status_row = QHBoxLayout()
        self._status_btns: dict[str, QPushButton] = {}
        for status, label in _STATUS_BUTTONS.items():
            b = QPushButton(label)
            b.clicked.connect(lambda _=False, s=status: self._change_status(s))
            self._status_btns[status] = b
            self._status_row.addWidget(b)
        self._status_row.addStretch(1)

        self._btn_edit = QPushButton("Edit")
        self._btn_save = QPushButton("Save Changes")
        self._btn_cancel_edit = QPushButton("Cancel")
        self._btn_delete = QPushButton("Delete")
        self._btn_close = QPushButton("Close")
        self._btn_edit.clicked.connect(lambda: self._set_editing(True))
        self._btn_cancel_edit.clicked.connect(self._cancel_edit)
        self._btn_save.clicked.connect(self._save)
        self._btn_delete.clicked.connect(self._delete)
        self._btn_close.clicked.connect(self.accept)

        bottom = QHBoxLayout()
        bottom.addWidget(self._btn_delete)
        bottom.addStretch(1)
        for b in (self._btn_edit, self._btn_cancel_edit, self._btn_save, self._btn_close):
            bottom.addWidget(b)

        root = QVBoxLayout(self)
        root.addWidget(box)
        root.addWidget(box_photos)
        root.addLayout(self._status_row)
        root.addLayout(bottom)

        lock_dialog_fixed(self, width_ratio=0.45, height_ratio=0.8)
        self._render()
        self._set_editing(False)

    # ---------- Internals ----------
    def _render(self):
        o = self._order
        self._number.setText(o.order_number)
        self._desc.setPlainText(o.description or "")
        self._qty.setValue(int(o.quantity or 1))
        self._total.setValue(float(o.total_amount or 0))
        final = "" if can_change_order_status(o.status) else " (final)"
        self._lbl_status.setText(humanize(o.status) + final)
        self._lbl_priority.setText(humanize(o.priority))
        self._lbl_client.setText(self._client_name or "—")
        self._lbl_due.setText(o.due_date or "—")
        self._lbl_amounts.setText(
            f"Subtotal {format_inr(o.subtotal_amount)} · GST {format_inr(o.tax_amount)} · Total {format_inr(o.total_amount)}"
        )
        self._lbl_creator.setText(" / ".join(x for x in (o.creator_name, o.creator_phone) if x) or "—")
        self._lbl_created.setText(localized_date(o.created_at))
        self._photos.clear()
        for url in o.photo_urls:
            self._photos.addItem(url)

        allowed = ORDER_RULES.allowed_transitions(o.status)
        for status, b in self._status_btns.items():
            b.setVisible(status in allowed)
        self._btn_delete.setVisible(can_delete_order(o.status))

    def _set_editing(self, on: bool):
        editable = on and can_edit_order(self._order.status)
        for w in (self._number, self._qty, self._total):
            w.setReadOnly(not editable)
        self._desc.setReadOnly(not editable)
        self._btn_edit.setVisible(not editable and can_edit_order(self._order.status))
        self._btn_save.setVisible(editable)
        self._btn_cancel_edit.setVisible(editable)
        for b in self._status_btns.values():
            b.setEnabled(not editable)

    def _cancel_edit(self):
        self._render()
        self._set_editing(False)

    def _refresh_from_vm(self):
        fresh = self._vm.find(self._order.id)
        if fresh is not None:
            self._order = fresh
        self._render()

    def _save(self):
        partial = {}
        number = self._number.text().strip()
        if number and number != self._order.order_number:
            partial["order_number"] = number
        desc = self._desc.toPlainText().strip() or None
        if desc != self._order.description:
            partial["description"] = desc
        if self._qty.value() != self._order.quantity:
            partial["quantity"] = self._qty.value()
        if not same_amount(self._total.value(), self._order.total_amount):
            partial["total_amount"] = self._total.value()
        if partial and self._vm.update(self._order.id, partial).ok:
            self._refresh_from_vm()
        self._set_editing(False)

    def _change_status(self, status: str):
        if self._vm.update(self._order.id, {"status": status}).ok:
            self._refresh_from_vm()
            self._set_editing(False)

    def _delete(self):
        if QMessageBox.question(
            self, "Delete Order", f"Delete order {self._order.order_number}?",
            QMessageBox.Yes | QMessageBox.No
        ) != QMessageBox.Yes:
            return
        if self._vm.delete(self._order.id).ok:
            self.accept()
