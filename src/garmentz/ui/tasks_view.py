# src/garmentz/ui/tasks_view.py
# Rev 0.3.1: status toggle button, linked order column
from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QTableWidget, QTableWidgetItem, QHeaderView,
    QHBoxLayout, QPushButton, QMessageBox, QDialog, QLabel
)

from garmentz.models.entities import Task
from garmentz.ui.dialogs.task_editor_dialog import TaskEditorDialog
from garmentz.utils.formatting import humanize


class TasksView(QWidget):
    def __init__(self, tasks_vm, orders_vm, parent=None):
        super().__init__(parent)
        self._vm = tasks_vm
        self._orders = orders_vm

        # ---------- Controls ----------
        self._btn_new = QPushButton("New Task")
        self._btn_edit = QPushButton("Edit")
        self._btn_toggle = QPushButton("Advance Status")
        self._btn_delete = QPushButton("Delete")
        self._btn_refresh = QPushButton("Refresh")
        self._lbl_loading = QLabel("Loading tasks…")

        for b in (self._btn_edit, self._btn_toggle, self._btn_delete):
            b.setEnabled(False)

        # ---------- Table: Title | Status | Priority | Due | Order ----------
        self._table = QTableWidget(0, 5)
        self._table.setHorizontalHeaderLabels(["Title", "Status", "Priority", "Due", "Order"])
        self._table.setEditTriggers(QTableWidget.NoEditTriggers)
        self._table.setSelectionBehavior(QTableWidget.SelectRows)
        self._table.setSelectionMode(QTableWidget.SingleSelection)
        self._table.itemDoubleClicked.connect(lambda _item: self._on_edit_clicked())
        self._table.itemSelectionChanged.connect(self._on_selection_changed)

        hdr = self._table.horizontalHeader()
        hdr.setSectionResizeMode(0, QHeaderView.Stretch)            # Title
        for col in (1, 2, 3, 4):
            hdr.setSectionResizeMode(col, QHeaderView.ResizeToContents)

        vh = self._table.verticalHeader()
        vh.setVisible(False)
        vh.setDefaultSectionSize(22)
        self._table.setWordWrap(False)
        self._table.setAlternatingRowColors(True)

        top_bar = QHBoxLayout()
        for b in (self._btn_new, self._btn_edit, self._btn_toggle, self._btn_delete):
            top_bar.addWidget(b)
        top_bar.addStretch(1)
        top_bar.addWidget(self._lbl_loading)
        top_bar.addWidget(self._btn_refresh)

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.addLayout(top_bar)
        root.addWidget(self._table, 1)

        # ---------- Wire ----------
        self._btn_new.clicked.connect(self._on_new_clicked)
        self._btn_edit.clicked.connect(self._on_edit_clicked)
        self._btn_toggle.clicked.connect(self._on_toggle_clicked)
        self._btn_delete.clicked.connect(self._on_delete_clicked)
        self._btn_refresh.clicked.connect(self._vm.refetch)

        self._vm.cacheChanged.connect(self._render)
        self._vm.loadingChanged.connect(self._lbl_loading.setVisible)
        self._orders.cacheChanged.connect(lambda _rows: self._render(self._vm.cache))

        self._lbl_loading.setVisible(self._vm.loading)
        self._render(self._vm.cache)

    # ---------- Internals ----------
    def _order_number(self, order_id: str | None) -> str:
        if not order_id:
            return "—"
        o = self._orders.find(order_id)
        return o.order_number if o else "—"

    def _render(self, tasks: list[Task]):
        selected = self._selected_task_id()
        self._table.setRowCount(len(tasks))
        for r, t in enumerate(tasks):
            title_item = QTableWidgetItem(t.title)
            if t.status == "completed":
                f = title_item.font(); f.setStrikeOut(True); title_item.setFont(f)
            items = (
                title_item,
                QTableWidgetItem(humanize(t.status)),
                QTableWidgetItem(humanize(t.priority)),
                QTableWidgetItem(t.due_date or "—"),
                QTableWidgetItem(self._order_number(t.order_id)),
            )
            for c, it in enumerate(items):
                it.setData(Qt.UserRole, t.id)
                self._table.setItem(r, c, it)
            if t.id == selected:
                self._table.selectRow(r)
        self._on_selection_changed()

    def _selected_task_id(self) -> str | None:
        items = self._table.selectedItems()
        if not items:
            return None
        return items[0].data(Qt.UserRole)

    def _on_selection_changed(self):
        has_sel = self._selected_task_id() is not None
        for b in (self._btn_edit, self._btn_toggle, self._btn_delete):
            b.setEnabled(has_sel)

    # ----- Buttons -----
    def _on_new_clicked(self):
        dlg = TaskEditorDialog(self, title="New Task", orders=self._orders.cache)
        if dlg.exec() != int(QDialog.DialogCode.Accepted):
            return
        self._vm.add(dlg.values())

    def _on_edit_clicked(self):
        tid = self._selected_task_id()
        task = self._vm.find(tid) if tid else None
        if task is None:
            return
        dlg = TaskEditorDialog(self, title="Edit Task", task=task, orders=self._orders.cache)
        if dlg.exec() != int(QDialog.DialogCode.Accepted):
            return
        # Apply only what actually changed
        changed = {k: v for k, v in dlg.values().items() if getattr(task, k) != v}
        if changed:
            self._vm.update(tid, changed)

    def _on_toggle_clicked(self):
        tid = self._selected_task_id()
        if tid is not None:
            self._vm.toggle_status(tid)

    def _on_delete_clicked(self):
        tid = self._selected_task_id()
        task = self._vm.find(tid) if tid else None
        if task is None:
            return
        if QMessageBox.question(
            self, "Delete Task", f"Are you sure you want to delete \"{task.title}\"?",
            QMessageBox.Yes | QMessageBox.No
        ) == QMessageBox.Yes:
            self._vm.delete(tid)
