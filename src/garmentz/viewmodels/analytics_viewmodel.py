# Rev 0.3.0
from __future__ import annotations

from datetime import date, tzinfo
from typing import Any, Callable, Dict, Optional

from PySide6.QtCore import QObject, Signal

from garmentz.services import analytics


class AnalyticsViewModel(QObject):
    """
    Recomputes chart data from the full orders/tasks caches (never the
    search-filtered view) whenever either cache changes.
    Emits:
      changed({
        "monthly_sales": list[MonthlySales],   # 6 entries, oldest first
        "order_status": dict[str, int],
        "order_priority": dict[str, int],
        "task_status": dict[str, int],
        "stats": DashboardStats,
        "recent_orders": list[Order],
      })
    """

    changed = Signal(dict)

    def __init__(self, orders_vm, tasks_vm, *, recent_limit: int = 5,
                 today: Optional[Callable[[], date]] = None, tz: Optional[tzinfo] = None):
        super().__init__()
        self._orders = orders_vm
        self._tasks = tasks_vm
        self._recent_limit = recent_limit
        self._today = today or date.today
        self._tz = tz
        self._last: Dict[str, Any] = {}

        orders_vm.cacheChanged.connect(self._recompute)
        tasks_vm.cacheChanged.connect(self._recompute)
        self._recompute()

    def snapshot(self) -> Dict[str, Any]:
        return dict(self._last)

    def _recompute(self, *_args) -> None:
        orders = self._orders.cache
        tasks = self._tasks.cache
        today = self._today()
        self._last = {
            "monthly_sales": analytics.monthly_sales(orders, today=today, tz=self._tz),
            "order_status": analytics.status_histogram(orders),
            "order_priority": analytics.priority_histogram(orders),
            "task_status": analytics.status_histogram(tasks),
            "stats": analytics.dashboard_stats(orders, tasks, today=today),
            "recent_orders": analytics.recent_orders(orders, self._recent_limit),
        }
        self.changed.emit(self.snapshot())
