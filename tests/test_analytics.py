# tests/test_analytics.py
from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from garmentz.models.entities import Order, Task
from garmentz.services.analytics import (
    TARGET_STRETCH, dashboard_stats, is_overdue, monthly_sales, priority_histogram,
    recent_orders, status_histogram,
)
from garmentz.viewmodels.analytics_viewmodel import AnalyticsViewModel


def _order(oid: str, created: str, total: float, status="pending", priority="medium", due=None) -> Order:
    return Order(id=oid, order_number=f"ORD-{oid}", created_at=created, updated_at=created,
                 total_amount=total, status=status, priority=priority, due_date=due)


def _task(tid: str, status="todo", due=None) -> Task:
    return Task(id=tid, title=f"T{tid}", created_at="2025-06-01T00:00:00+00:00",
                updated_at="2025-06-01T00:00:00+00:00", status=status, due_date=due)


ORDERS = [
    _order("1", "2025-06-10T09:00:00+00:00", 1050),
    _order("2", "2025-06-02T09:00:00+00:00", 525, status="completed", priority="high"),
    _order("3", "2025-04-20T09:00:00+00:00", 2100, status="cancelled"),
    _order("4", "2025-01-05T09:00:00+00:00", 300, status="in_progress", priority="urgent"),
    _order("5", "2024-12-31T23:00:00+00:00", 9999),      # outside the window
]


def test_six_months_oldest_first_with_empty_months():
    series = monthly_sales(ORDERS, today=date(2025, 6, 15), tz=timezone.utc)
    assert [m.label for m in series] == ["Jan", "Feb", "Mar", "Apr", "May", "Jun"]
    assert [m.sales for m in series] == [300, 0, 0, 2100, 0, 1575]
    assert [m.orders for m in series] == [1, 0, 0, 1, 0, 2]
    assert sum(1 for m in series if m.sales == 0) == 3
    for m in series:
        assert m.target == pytest.approx(m.sales * TARGET_STRETCH)


def test_window_crosses_year_boundary():
    series = monthly_sales(ORDERS, today=date(2025, 2, 1), tz=timezone.utc)
    assert [(m.year, m.month) for m in series] == [
        (2024, 9), (2024, 10), (2024, 11), (2024, 12), (2025, 1), (2025, 2)
    ]
    assert series[3].sales == 9999
    assert series[4].sales == 300


def test_orders_without_timestamp_are_ignored():
    odd = [_order("x", "", 100), _order("y", "not a date", 100)]
    assert all(m.sales == 0 for m in monthly_sales(odd, today=date(2025, 6, 1), tz=timezone.utc))


def test_histograms_keep_first_seen_order():
    assert status_histogram(ORDERS) == {"pending": 2, "completed": 1, "cancelled": 1, "in_progress": 1}
    assert priority_histogram(ORDERS) == {"medium": 3, "high": 1, "urgent": 1}
    assert status_histogram([]) == {}


def test_overdue():
    today = date(2025, 6, 15)
    assert is_overdue(_order("a", "2025-06-01T00:00:00+00:00", 0, due="2025-06-14"), today)
    assert not is_overdue(_order("b", "2025-06-01T00:00:00+00:00", 0, due="2025-06-15"), today)
    assert not is_overdue(_order("c", "2025-06-01T00:00:00+00:00", 0, status="completed", due="2025-01-01"), today)
    assert not is_overdue(_task("d", due=None), today)
    assert not is_overdue(_task("e", due="garbage"), today)


def test_dashboard_stats():
    tasks = [_task("1", "completed"), _task("2", "completed"), _task("3", due="2025-06-01")]
    stats = dashboard_stats(ORDERS, tasks, today=date(2025, 6, 15))
    assert stats.total_sales == pytest.approx(1050 + 525 + 300 + 9999)
    assert stats.pending_orders == 2
    assert stats.completed_tasks == 2
    assert stats.overdue_items == 1


def test_recent_orders_takes_head():
    assert [o.id for o in recent_orders(ORDERS, 2)] == ["1", "2"]
    assert recent_orders([], 5) == []


def test_viewmodel_recomputes_on_cache_change(ctx):
    avm = AnalyticsViewModel(ctx.orders, ctx.tasks, recent_limit=2,
                             today=lambda: datetime.now(timezone.utc).date(), tz=timezone.utc)
    snaps = []
    avm.changed.connect(snaps.append)
    ctx.orders.add({"description": "Shirts", "subtotal_amount": 1000})
    ctx.tasks.add({"title": "Cut"})
    snap = snaps[-1]
    assert snap["order_status"] == {"pending": 1}
    assert snap["task_status"] == {"todo": 1}
    assert snap["monthly_sales"][-1].sales == pytest.approx(1050)
    assert len(snap["monthly_sales"]) == 6
    assert snap["stats"].pending_orders == 1


def test_viewmodel_ignores_search_filter(ctx):
    ctx.orders.add({"description": "Shirts"})
    ctx.orders.add({"description": "Pants"})
    ctx.orders.set_search_query("shirts")
    snap = ctx.analytics.snapshot()
    assert sum(snap["order_status"].values()) == 2
    assert len(snap["recent_orders"]) == 2
