# src/garmentz/ui/dialogs/task_editor_dialog.py
# Rev 0.3.0: status/priority combos, optional due date and linked order
from __future__ import annotations
from typing import Any, Dict, Iterable, Optional

from PySide6.QtCore import Qt, QDate
from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QFormLayout, QLineEdit, QTextEdit,
    QDialogButtonBox, QComboBox, QLabel, QWidget, QDateEdit, QCheckBox, QHBoxLayout
)

from garmentz.models.entities import Order, Task
from garmentz.models.types import PRIORITIES, TASK_STATUSES
from garmentz.ui.window_mode import lock_dialog_fixed
from garmentz.utils.formatting import humanize


class TaskEditorDialog(QDialog):
    """
    values() returns a partial task dict:
      title, description, status, priority, due_date (YYYY-MM-DD | None),
      order_id (str | None), assignee_id (str | None)
    """

    def __init__(
        self,
        parent: QWidget | None = None,
        *,
        title: str = "New Task",
        task: Optional[Task] = None,
        orders: Iterable[Order] = (),
    ):
        super().__init__(parent)
        self.setWindowTitle(title)

        # --- fields
        self._title = QLineEdit((task.title if task else "").strip())
        self._title.setPlaceholderText("Task title")

        self._desc = QTextEdit()
        self._desc.setAcceptRichText(False)
        self._desc.setPlainText((task.description if task else "") or "")

        self._cmb_status = QComboBox()
        for s in TASK_STATUSES:
            self._cmb_status.addItem(humanize(s), s)
        self._select(self._cmb_status, task.status if task else "todo")

        self._cmb_priority = QComboBox()
        for p in PRIORITIES:
            self._cmb_priority.addItem(humanize(p), p)
        self._select(self._cmb_priority, task.priority if task else "medium")

        self._assignee = QLineEdit((task.assignee_id if task else "") or "")
        self._assignee.setPlaceholderText("Assignee (optional)")

        self._cmb_order = QComboBox()
        self._cmb_order.addItem("— none —", None)
        for o in orders:
            self._cmb_order.addItem(o.order_number, o.id)
        self._select(self._cmb_order, task.order_id if task else None)

        self._has_due = QCheckBox("Due")
        self._due = QDateEdit()
        self._due.setCalendarPopup(True)
        self._due.setDisplayFormat("yyyy-MM-dd")
        due = QDate.fromString((task.due_date or "")[:10], "yyyy-MM-dd") if task else QDate()
        self._has_due.setChecked(due.isValid())
        self._due.setDate(due if due.isValid() else QDate.currentDate())
        self._due.setEnabled(due.isValid())
        self._has_due.toggled.connect(self._due.setEnabled)

        due_row = QHBoxLayout()
        due_row.addWidget(self._has_due)
        due_row.addWidget(self._due, 1)

        form = QFormLayout()
        form.addRow("Title:", self._title)
        form.addRow("Description:", self._desc)
        form.addRow(QLabel("<hr/>"))
        form.addRow("Status:", self._cmb_status)
        form.addRow("Priority:", self._cmb_priority)
        form.addRow("Assignee:", self._assignee)
        form.addRow("Order:", self._cmb_order)
        form.addRow("Due date:", due_row)

        self._btns = QDialogButtonBox(QDialogButtonBox.Ok | QDialogButtonBox.Cancel)
        self._btns.accepted.connect(self.accept)
        self._btns.rejected.connect(self.reject)
        self._title.textChanged.connect(self._sync_ok)
        self._sync_ok()

        root = QVBoxLayout(self)
        root.addLayout(form)
        root.addWidget(self._btns)

        lock_dialog_fixed(self, width_ratio=0.4, height_ratio=0.6)
        self._title.setFocus(Qt.OtherFocusReason)

    @staticmethod
    def _select(combo: QComboBox, data) -> None:
        ix = combo.findData(data)
        if ix >= 0:
            combo.setCurrentIndex(ix)

    def _sync_ok(self):
        self._btns.button(QDialogButtonBox.Ok).setEnabled(bool(self._title.text().strip()))

    def values(self) -> Dict[str, Any]:
        return {
            "title": self._title.text().strip(),
            "description": self._desc.toPlainText().strip() or None,
            "status": self._cmb_status.currentData(),
            "priority": self._cmb_priority.currentData(),
            "assignee_id": self._assignee.text().strip() or None,
            "order_id": self._cmb_order.currentData(),
            "due_date": self._due.date().toString("yyyy-MM-dd") if self._has_due.isChecked() else None,
        }
