# Rev 0.3.1: monthly sales vs target, order status / priority pies
from __future__ import annotations
from typing import Any, Dict, List

from PySide6.QtCharts import (
    QBarCategoryAxis, QBarSeries, QBarSet, QChart, QChartView, QPieSeries, QValueAxis
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QPainter
from PySide6.QtWidgets import QWidget, QGridLayout

from garmentz.services.analytics import MonthlySales
from garmentz.utils.formatting import humanize


class AnalyticsPanel(QWidget):
    def __init__(self, analytics_vm, parent=None):
        super().__init__(parent)
        self._vm = analytics_vm

        self._sales_view = self._chart_view()
        self._status_view = self._chart_view()
        self._priority_view = self._chart_view()
        self._task_view = self._chart_view()

        grid = QGridLayout(self)
        grid.setContentsMargins(0, 0, 0, 0)
        grid.addWidget(self._sales_view, 0, 0, 1, 2)
        grid.addWidget(self._status_view, 1, 0)
        grid.addWidget(self._priority_view, 1, 1)
        grid.addWidget(self._task_view, 2, 0, 1, 2)
        grid.setRowStretch(0, 2)

        self._vm.changed.connect(self.set_snapshot)
        self.set_snapshot(self._vm.snapshot())

    @staticmethod
    def _chart_view() -> QChartView:
        v = QChartView()
        v.setRenderHint(QPainter.RenderHint.Antialiasing)
        return v

    # ---- Public API
    def set_snapshot(self, snap: Dict[str, Any]) -> None:
        self._sales_view.setChart(self._sales_chart(snap.get("monthly_sales") or []))
        self._status_view.setChart(self._pie_chart("Orders by Status", snap.get("order_status") or {}))
        self._priority_view.setChart(self._pie_chart("Orders by Priority", snap.get("order_priority") or {}))
        self._task_view.setChart(self._pie_chart("Tasks by Status", snap.get("task_status") or {}))

    # ---- Internals
    @staticmethod
    def _sales_chart(months: List[MonthlySales]) -> QChart:
        chart = QChart()
        chart.setTitle("Monthly Sales (last 6 months)")

        sales = QBarSet("Sales")
        target = QBarSet("Target")
        categories: List[str] = []
        for m in months:
            categories.append(m.label)
            sales.append(float(m.sales))
            target.append(float(m.target))

        series = QBarSeries()
        series.append(sales)
        series.append(target)
        chart.addSeries(series)

        axis_x = QBarCategoryAxis()
        axis_x.append(categories)
        chart.addAxis(axis_x, Qt.AlignmentFlag.AlignBottom)
        series.attachAxis(axis_x)

        axis_y = QValueAxis()
        axis_y.setLabelFormat("₹%.0f")
        peak = max([0.0] + [max(m.sales, m.target) for m in months])
        axis_y.setRange(0, peak or 1.0)
        chart.addAxis(axis_y, Qt.AlignmentFlag.AlignLeft)
        series.attachAxis(axis_y)

        chart.legend().setAlignment(Qt.AlignmentFlag.AlignBottom)
        return chart

    @staticmethod
    def _pie_chart(title: str, counts: Dict[str, int]) -> QChart:
        chart = QChart()
        chart.setTitle(title)
        series = QPieSeries()
        for key, n in counts.items():
            s = series.append(f"{humanize(key)} ({n})", n)
            s.setLabelVisible(True)
        chart.addSeries(series)
        chart.legend().setAlignment(Qt.AlignmentFlag.AlignRight)
        if not counts:
            chart.setTitle(f"{title} — no data")
        return chart
