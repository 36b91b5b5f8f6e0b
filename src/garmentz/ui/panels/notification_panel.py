# Rev 0.3.0: notification cards with read state
from __future__ import annotations

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QScrollArea, QFrame, QSizePolicy, QPushButton
)

from garmentz.viewmodels.notification_center import Notification

_BADGES = {"success": "✔", "info": "ℹ", "warning": "⚠", "error": "✖"}


class NotificationPanel(QWidget):
    def __init__(self, center, parent=None):
        super().__init__(parent)
        self._center = center

        self._title = QLabel()
        self._title.setObjectName("NotificationPanelTitle")
        self._title.setSizePolicy(QSizePolicy.Preferred, QSizePolicy.Fixed)
        self._btn_all_read = QPushButton("Mark all read")
        self._btn_clear = QPushButton("Clear")
        self._btn_all_read.clicked.connect(self._center.mark_all_read)
        self._btn_clear.clicked.connect(self._center.clear)

        header = QHBoxLayout()
        header.addWidget(self._title, 1)
        header.addWidget(self._btn_all_read)
        header.addWidget(self._btn_clear)

        self._list_layout = QVBoxLayout()
        self._list_layout.setContentsMargins(12, 8, 12, 12)
        self._list_layout.setSpacing(8)

        body = QWidget()
        body.setObjectName("NotificationPanelBody")
        body.setLayout(self._list_layout)

        self._scroll = QScrollArea()
        self._scroll.setWidgetResizable(True)
        self._scroll.setWidget(body)

        root = QVBoxLayout(self)
        root.setContentsMargins(0, 0, 0, 0)
        root.addLayout(header)
        root.addWidget(self._scroll, 1)

        self._center.changed.connect(self.refresh)
        self.refresh()

    # ---- Public API
    def refresh(self) -> None:
        self._clear()
        items = self._center.notifications
        unread = self._center.unread_count
        self._title.setText(f"Notifications ({unread} unread)" if unread else "Notifications")
        self._btn_all_read.setEnabled(unread > 0)
        self._btn_clear.setEnabled(bool(items))
        if not items:
            self._list_layout.addWidget(self._empty_state())
        for n in items:
            self._list_layout.addWidget(self._make_card(n))
        self._list_layout.addStretch(1)

    # ---- Internals
    def _clear(self) -> None:
        while (item := self._list_layout.takeAt(0)):
            w = item.widget()
            if w: w.deleteLater()

    def _empty_state(self) -> QWidget:
        box = QFrame()
        box.setFrameShape(QFrame.StyledPanel)
        lay = QVBoxLayout(box)
        lbl = QLabel("No notifications yet.")
        lbl.setAlignment(Qt.AlignCenter)
        lay.addWidget(lbl)
        return box

    def _make_card(self, n: Notification) -> QWidget:
        card = QFrame()
        card.setObjectName("NotificationCard")
        card.setFrameShape(QFrame.StyledPanel)
        card.setProperty("notificationKind", n.type)
        card.setProperty("unread", not n.read)

        outer = QVBoxLayout(card)
        outer.setContentsMargins(12, 8, 12, 8)
        outer.setSpacing(4)

        # row 1: badge + title + timestamp
        row1 = QHBoxLayout()
        badge = QLabel(_BADGES.get(n.type, "•"))
        title = QLabel(f"<b>{n.title}</b>" if not n.read else n.title)
        ts = QLabel(n.timestamp()); ts.setProperty("dim", True)
        row1.addWidget(badge); row1.addWidget(title, 1); row1.addWidget(ts, 0, Qt.AlignRight)
        outer.addLayout(row1)

        msg = QLabel(n.message); msg.setWordWrap(True)
        outer.addWidget(msg)

        row3 = QHBoxLayout()
        row3.addStretch(1)
        if not n.read:
            b_read = QPushButton("Mark read"); b_read.setFlat(True)
            b_read.clicked.connect(lambda _=False, i=n.id: self._center.mark_read(i))
            row3.addWidget(b_read)
        b_remove = QPushButton("Remove"); b_remove.setFlat(True)
        b_remove.clicked.connect(lambda _=False, i=n.id: self._center.remove(i))
        row3.addWidget(b_remove)
        outer.addLayout(row3)
        return card
