# garmentZ type definitions
# Rev 0.3.0

from __future__ import annotations
from typing import Literal

TaskStatus = Literal["todo", "in_progress", "completed"]
OrderStatus = Literal["pending", "in_progress", "completed", "cancelled"]
Priority = Literal["low", "medium", "high", "urgent"]
NotificationKind = Literal["info", "success", "warning", "error"]

TASK_STATUSES: tuple[str, ...] = ("todo", "in_progress", "completed")
PRIORITIES: tuple[str, ...] = ("low", "medium", "high", "urgent")
