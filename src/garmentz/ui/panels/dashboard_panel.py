# Rev 0.3.0
from __future__ import annotations
from typing import Any, Dict

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QFrame, QGroupBox,
    QTableWidget, QTableWidgetItem, QHeaderView
)

from garmentz.services.pricing import format_inr
from garmentz.utils.formatting import humanize, localized_date


class DashboardPanel(QWidget):
    """Stat cards, recent orders and the latest notifications."""

    def __init__(self, analytics_vm, notifications, *, preview_limit: int = 5, parent=None):
        super().__init__(parent)
        self._vm = analytics_vm
        self._notifications = notifications
        self._preview_limit = preview_limit

        self._stat_sales = QLabel()
        self._stat_pending = QLabel()
        self._stat_done = QLabel()
        self._stat_overdue = QLabel()

        cards = QHBoxLayout()
        for caption, lbl in (
            ("Total Sales", self._stat_sales),
            ("Pending Orders", self._stat_pending),
            ("Completed Tasks", self._stat_done),
            ("Overdue Items", self._stat_overdue),
        ):
            cards.addWidget(self._card(caption, lbl))

        self._recent = QTableWidget(0, 4)
        self._recent.setHorizontalHeaderLabels(["Order #", "Status", "Total", "Created"])
        self._recent.setEditTriggers(QTableWidget.NoEditTriggers)
        self._recent.verticalHeader().setVisible(False)
        self._recent.horizontalHeader().setSectionResizeMode(QHeaderView.Stretch)
        box_recent = QGroupBox("Recent Orders")
        QVBoxLayout(box_recent).addWidget(self._recent)

        self._latest = QLabel()
        self._latest.setWordWrap(True)
        self._latest.setAlignment(Qt.AlignTop | Qt.AlignLeft)
        box_latest = QGroupBox("Latest Notifications")
        QVBoxLayout(box_latest).addWidget(self._latest)

        lower = QHBoxLayout()
        lower.addWidget(box_recent, 2)
        lower.addWidget(box_latest, 1)

        root = QVBoxLayout(self)
        root.addLayout(cards)
        root.addLayout(lower, 1)

        self._vm.changed.connect(self.set_snapshot)
        self._notifications.changed.connect(self._render_notifications)
        self.set_snapshot(self._vm.snapshot())
        self._render_notifications()

    @staticmethod
    def _card(caption: str, value: QLabel) -> QFrame:
        box = QFrame()
        box.setFrameShape(QFrame.StyledPanel)
        lay = QVBoxLayout(box)
        cap = QLabel(caption); cap.setProperty("dim", True)
        value.setStyleSheet("font-size: 20px; font-weight: bold;")
        lay.addWidget(cap)
        lay.addWidget(value)
        return box

    def set_snapshot(self, snap: Dict[str, Any]) -> None:
        stats = snap.get("stats")
        if stats is not None:
            self._stat_sales.setText(format_inr(stats.total_sales))
            self._stat_pending.setText(str(stats.pending_orders))
            self._stat_done.setText(str(stats.completed_tasks))
            self._stat_overdue.setText(str(stats.overdue_items))

        recent = snap.get("recent_orders") or []
        self._recent.setRowCount(len(recent))
        for r, o in enumerate(recent):
            for c, text in enumerate((o.order_number, humanize(o.status), format_inr(o.total_amount), localized_date(o.created_at))):
                self._recent.setItem(r, c, QTableWidgetItem(text))

    def _render_notifications(self) -> None:
        items = self._notifications.recent(self._preview_limit)
        if not items:
            self._latest.setText("No notifications yet.")
            return
        self._latest.setText("<br>".join(
            f"<b>{n.title}</b> · {n.timestamp()}<br>{n.message}" for n in items
        ))
