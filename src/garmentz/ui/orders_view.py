# src/garmentz/ui/orders_view.py
# Rev 0.3.2: search box drives OrdersViewModel.search_query
from __future__ import annotations

import logging

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QTableWidget, QTableWidgetItem, QHeaderView,
    QPushButton, QLineEdit, QLabel, QDialog, QMessageBox
)

from garmentz.errors import RemoteError
from garmentz.models.entities import Order
from garmentz.services.pricing import format_inr
from garmentz.ui.dialogs.order_detail_dialog import OrderDetailDialog
from garmentz.ui.dialogs.order_form_dialog import OrderFormDialog
from garmentz.utils.formatting import humanize, localized_date

log = logging.getLogger(__name__)


class OrdersView(QWidget):
    def __init__(self, ctx, parent=None):
        super().__init__(parent)
        self._ctx = ctx
        self._vm = ctx.orders

        self._search = QLineEdit()
        self._search.setPlaceholderText("Search orders by number, description, status or date…")
        self._search.setClearButtonEnabled(True)
        self._search.textChanged.connect(self._vm.set_search_query)

        self._btn_new = QPushButton("New Order")
        self._btn_open = QPushButton("Open")
        self._btn_open.setEnabled(False)
        self._lbl_count = QLabel()

        # Order # | Description | Qty | Status | Priority | Total | Created
        self._table = QTableWidget(0, 7)
        self._table.setHorizontalHeaderLabels(["Order #", "Description", "Qty", "Status", "Priority", "Total", "Created"])
        self._table.setEditTriggers(QTableWidget.NoEditTriggers)
        self._table.setSelectionBehavior(QTableWidget.SelectRows)
        self._table.setSelectionMode(QTableWidget.SingleSelection)
        self._table.verticalHeader().setVisible(False)
        self._table.setAlternatingRowColors(True)
        h = self._table.horizontalHeader()
        h.setSectionResizeMode(0, QHeaderView.ResizeToContents)
        h.setSectionResizeMode(1, QHeaderView.Stretch)
        for col in range(2, 7):
            h.setSectionResizeMode(col, QHeaderView.ResizeToContents)
        self._table.itemDoubleClicked.connect(lambda _it: self._open_selected())
        self._table.itemSelectionChanged.connect(
            lambda: self._btn_open.setEnabled(self._selected_order_id() is not None)
        )

        top = QHBoxLayout()
        top.addWidget(self._search, 1)
        top.addWidget(self._btn_new)
        top.addWidget(self._btn_open)

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.addLayout(top)
        root.addWidget(self._table, 1)
        root.addWidget(self._lbl_count)

        self._btn_new.clicked.connect(self.new_order)
        self._btn_open.clicked.connect(self._open_selected)
        self._vm.cacheChanged.connect(lambda _rows: self._render())
        self._vm.searchQueryChanged.connect(lambda _q: self._render())
        self._render()

    # ---------- Public API ----------
    def new_order(self):
        dlg = OrderFormDialog(self, clients=self._ctx.clients.cache)
        if dlg.exec() != int(QDialog.DialogCode.Accepted):
            return
        ident = self._ctx.session.identity
        urls: list[str] = []
        paths = dlg.photo_paths()
        if paths and ident is not None:
            try:
                urls = self._ctx.photos.upload(ident.id, paths)
            except RemoteError:
                log.exception("Photo upload failed")
                QMessageBox.warning(self, "Error", "Failed to upload photos. Please try again.")
                return
        result = self._ctx.intake.place(dlg.request(photo_urls=urls))
        if result.orphan_client:
            QMessageBox.information(
                self, "Order not created",
                f"Client \"{result.client.name}\" was saved, but the order could not be created. "
                "You can pick this client when you try again.",
            )

    # ---------- Internals ----------
    def _render(self):
        rows: list[Order] = self._vm.filtered()
        self._table.setRowCount(len(rows))
        for r, o in enumerate(rows):
            cells = (
                o.order_number,
                o.description or "",
                str(o.quantity),
                humanize(o.status),
                humanize(o.priority),
                format_inr(o.total_amount),
                localized_date(o.created_at),
            )
            for c, text in enumerate(cells):
                it = QTableWidgetItem(text)
                it.setData(Qt.UserRole, o.id)
                self._table.setItem(r, c, it)
        total = len(self._vm.cache)
        self._lbl_count.setText(f"{len(rows)} of {total} orders" if self._vm.search_query else f"{total} orders")

    def _selected_order_id(self) -> str | None:
        items = self._table.selectedItems()
        return items[0].data(Qt.UserRole) if items else None

    def _open_selected(self):
        oid = self._selected_order_id()
        order = self._vm.find(oid) if oid else None
        if order is None:
            return
        client = self._ctx.clients.find(order.client_id) if order.client_id else None
        OrderDetailDialog(self._vm, order, client_name=client.name if client else None, parent=self).exec()
