# Rev 0.3.0
from __future__ import annotations

import itertools
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional

from PySide6.QtCore import QObject, Signal

from garmentz.models.types import NotificationKind
from garmentz.utils.formatting import relative_time


@dataclass
class Notification:
    id: int
    type: NotificationKind
    title: str
    message: str
    created_at: datetime
    read: bool = False

    def timestamp(self, now: Optional[datetime] = None) -> str:
        return relative_time(self.created_at, now)


class NotificationCenter(QObject):
    """
    In-memory notifications for one application session, newest first.
    Nothing is persisted; a new AppContext starts with an empty list.
    Emits:
      - notificationAdded(Notification)
      - changed()   after any mutation (append, read flags, removal)
    """

    notificationAdded = Signal(object)
    changed = Signal()

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        super().__init__()
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._ids = itertools.count(1)
        self._items: List[Notification] = []

    # ---- queries
    @property
    def notifications(self) -> List[Notification]:
        return list(self._items)

    def recent(self, limit: int = 5) -> List[Notification]:
        return self._items[:limit]

    @property
    def unread_count(self) -> int:
        return sum(1 for n in self._items if not n.read)

    # ---- commands
    def append(self, type: str, title: str, message: str) -> Notification:
        n = Notification(id=next(self._ids), type=type, title=title, message=message, created_at=self._clock())
        self._items.insert(0, n)
        self.notificationAdded.emit(n)
        self.changed.emit()
        return n

    def mark_read(self, notification_id: int) -> bool:
        for n in self._items:
            if n.id == notification_id:
                if not n.read:
                    n.read = True
                    self.changed.emit()
                return True
        return False

    def mark_all_read(self) -> None:
        touched = False
        for n in self._items:
            if not n.read:
                n.read = True
                touched = True
        if touched:
            self.changed.emit()

    def remove(self, notification_id: int) -> bool:
        before = len(self._items)
        self._items = [n for n in self._items if n.id != notification_id]
        if len(self._items) != before:
            self.changed.emit()
            return True
        return False

    def clear(self) -> None:
        if self._items:
            self._items = []
            self.changed.emit()
