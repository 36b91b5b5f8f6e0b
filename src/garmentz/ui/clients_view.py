# Rev 0.2.0
from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QTableWidget, QTableWidgetItem,
    QHeaderView, QPushButton, QDialog, QMessageBox
)

from garmentz.ui.dialogs.client_quick_add import ClientQuickAdd
from garmentz.utils.formatting import localized_date


class ClientsView(QWidget):
    def __init__(self, clients_vm, parent=None):
        super().__init__(parent)
        self._vm = clients_vm

        self._btn_new = QPushButton("New Client")
        self._btn_edit = QPushButton("Edit")
        self._btn_delete = QPushButton("Delete")

        self._table = QTableWidget(0, 5)
        self._table.setHorizontalHeaderLabels(["Name", "Email", "Phone", "Address", "Added"])
        self._table.setEditTriggers(QTableWidget.NoEditTriggers)
        self._table.setSelectionBehavior(QTableWidget.SelectRows)
        self._table.setSelectionMode(QTableWidget.SingleSelection)
        self._table.verticalHeader().setVisible(False)
        self._table.setAlternatingRowColors(True)
        self._table.horizontalHeader().setSectionResizeMode(3, QHeaderView.Stretch)
        self._table.itemSelectionChanged.connect(self._sync_buttons)

        bar = QHBoxLayout()
        for b in (self._btn_new, self._btn_edit, self._btn_delete):
            bar.addWidget(b)
        bar.addStretch(1)

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.addLayout(bar)
        root.addWidget(self._table, 1)

        self._btn_new.clicked.connect(self._on_new)
        self._btn_edit.clicked.connect(self._on_edit)
        self._btn_delete.clicked.connect(self._on_delete)
        self._vm.cacheChanged.connect(self._render)
        self._render(self._vm.cache)

    def _render(self, clients):
        self._table.setRowCount(len(clients))
        for r, c in enumerate(clients):
            for col, text in enumerate((c.name, c.email or "", c.phone or "", c.address or "", localized_date(c.created_at))):
                it = QTableWidgetItem(text)
                it.setData(Qt.UserRole, c.id)
                self._table.setItem(r, col, it)
        self._sync_buttons()

    def _selected_id(self) -> str | None:
        items = self._table.selectedItems()
        return items[0].data(Qt.UserRole) if items else None

    def _sync_buttons(self):
        has_sel = self._selected_id() is not None
        self._btn_edit.setEnabled(has_sel)
        self._btn_delete.setEnabled(has_sel)

    def _on_new(self):
        dlg = ClientQuickAdd(self)
        if dlg.exec() == int(QDialog.DialogCode.Accepted):
            self._vm.add(dlg.values())

    def _on_edit(self):
        cid = self._selected_id()
        client = self._vm.find(cid) if cid else None
        if client is None:
            return
        dlg = ClientQuickAdd(self, client=client)
        if dlg.exec() != int(QDialog.DialogCode.Accepted):
            return
        changed = {k: v for k, v in dlg.values().items() if getattr(client, k) != v}
        if changed.get("name") == "":
            return
        if changed:
            self._vm.update(cid, changed)

    def _on_delete(self):
        cid = self._selected_id()
        client = self._vm.find(cid) if cid else None
        if client is None:
            return
        if QMessageBox.question(
            self, "Delete Client", f"Delete client \"{client.name}\"? Their orders are kept.",
            QMessageBox.Yes | QMessageBox.No
        ) == QMessageBox.Yes:
            self._vm.delete(cid)
