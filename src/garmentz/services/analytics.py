# Rev 0.3.1
"""
Chart data derived from cached orders and tasks.

Everything here is a pure function of the snapshot it is given; the analytics
view-model re-runs them whenever a cache changes.
"""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from typing import Dict, Iterable, List, Optional, Sequence

from garmentz.models.entities import Order, Task
from garmentz.utils.formatting import parse_ts

TARGET_STRETCH = 1.2
_MONTH_ABBR = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
_CLOSED = {"completed", "cancelled"}


@dataclass(frozen=True)
class MonthlySales:
    year: int
    month: int
    sales: float
    target: float
    orders: int

    @property
    def label(self) -> str:
        return _MONTH_ABBR[self.month - 1]


@dataclass(frozen=True)
class DashboardStats:
    total_sales: float
    pending_orders: int
    completed_tasks: int
    overdue_items: int


def _trailing_months(today: date, count: int) -> List[tuple[int, int]]:
    out = []
    y, m = today.year, today.month
    for _ in range(count):
        out.append((y, m))
        y, m = (y - 1, 12) if m == 1 else (y, m - 1)
    return list(reversed(out))


def _local(ts: str | None, tz: Optional[tzinfo]) -> Optional[datetime]:
    dt = parse_ts(ts)
    if dt is None:
        return None
    return dt.astimezone(tz) if tz is not None else dt.astimezone()


def monthly_sales(
    orders: Iterable[Order],
    *,
    today: Optional[date] = None,
    tz: Optional[tzinfo] = None,
    months: int = 6,
) -> List[MonthlySales]:
    """Oldest month first, ending with the month of `today`. Empty months stay in."""
    today = today or (datetime.now(tz) if tz is not None else datetime.now()).date()
    buckets = {ym: [0.0, 0] for ym in _trailing_months(today, months)}
    for o in orders:
        dt = _local(o.created_at, tz)
        if dt is None:
            continue
        b = buckets.get((dt.year, dt.month))
        if b is None:
            continue
        b[0] += o.total_amount or 0
        b[1] += 1
    return [
        MonthlySales(year=y, month=m, sales=s, target=s * TARGET_STRETCH, orders=n)
        for (y, m), (s, n) in buckets.items()
    ]


def status_histogram(items: Iterable[Order | Task]) -> Dict[str, int]:
    # Counter keeps first-seen order
    return dict(Counter(i.status for i in items))


def priority_histogram(items: Iterable[Order | Task]) -> Dict[str, int]:
    return dict(Counter(i.priority for i in items))


def _due(d: str | None) -> Optional[date]:
    if not d:
        return None
    try:
        return date.fromisoformat(d[:10])
    except ValueError:
        return None


def is_overdue(item: Order | Task, today: date) -> bool:
    due = _due(item.due_date)
    return due is not None and due < today and item.status not in _CLOSED


def dashboard_stats(
    orders: Sequence[Order],
    tasks: Sequence[Task],
    *,
    today: Optional[date] = None,
) -> DashboardStats:
    today = today or date.today()
    return DashboardStats(
        total_sales=sum((o.total_amount or 0) for o in orders if o.status != "cancelled"),
        pending_orders=sum(1 for o in orders if o.status == "pending"),
        completed_tasks=sum(1 for t in tasks if t.status == "completed"),
        overdue_items=sum(1 for x in (*orders, *tasks) if is_overdue(x, today)),
    )


def recent_orders(orders: Sequence[Order], limit: int = 5) -> List[Order]:
    return list(orders[:limit])
