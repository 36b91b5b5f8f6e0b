# Rev 0.3.2
# garmentZ: Main Window
# Tabs: Dashboard | Tasks | Orders | Analytics | Clients ; docks: Notifications, Diagnostics

from __future__ import annotations
import logging

from PySide6.QtCore import Qt
from PySide6.QtGui import QAction
from PySide6.QtWidgets import QMainWindow, QTabWidget, QDockWidget, QDialog, QLabel

from garmentz.ui.alerts import AlertPresenter
from garmentz.ui.clients_view import ClientsView
from garmentz.ui.diagnostics_panel import DiagnosticsPanel
from garmentz.ui.dialogs.auth_dialog import AuthDialog
from garmentz.ui.orders_view import OrdersView
from garmentz.ui.panels.analytics_panel import AnalyticsPanel
from garmentz.ui.panels.dashboard_panel import DashboardPanel
from garmentz.ui.panels.notification_panel import NotificationPanel
from garmentz.ui.tasks_view import TasksView
from garmentz.utils.config import save_settings

log = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    def __init__(self, ctx, parent=None):
        super().__init__(parent)
        self._ctx = ctx
        self.setWindowTitle("A to Z Garments Track")

        # ---- central tabs ----
        preview = int((ctx.settings.get("notifications") or {}).get("preview_limit", 5))
        self._tabs = QTabWidget(self)
        self._orders_view = OrdersView(ctx, self)
        self._tabs.addTab(DashboardPanel(ctx.analytics, ctx.notifications, preview_limit=preview, parent=self), "Dashboard")
        self._tabs.addTab(TasksView(ctx.tasks, ctx.orders, self), "Tasks")
        self._tabs.addTab(self._orders_view, "Orders")
        self._tabs.addTab(AnalyticsPanel(ctx.analytics, self), "Analytics")
        self._tabs.addTab(ClientsView(ctx.clients, self), "Clients")
        self.setCentralWidget(self._tabs)

        # ---- docks ----
        ui_cfg = ctx.settings.get("ui") or {}
        self._notif_dock = QDockWidget("Notifications", self)
        self._notif_dock.setObjectName("NotificationsDock")
        self._notif_dock.setWidget(NotificationPanel(ctx.notifications, self))
        self.addDockWidget(Qt.RightDockWidgetArea, self._notif_dock)
        self._notif_dock.setVisible(bool(ui_cfg.get("notifications_dock_visible", True)))

        self._diag_dock = QDockWidget("Diagnostics", self)
        self._diag_dock.setObjectName("DiagnosticsDock")
        self._diag_dock.setAllowedAreas(Qt.BottomDockWidgetArea | Qt.TopDockWidgetArea)
        self._diag_dock.setWidget(DiagnosticsPanel(self))
        self.addDockWidget(Qt.BottomDockWidgetArea, self._diag_dock)
        self._diag_dock.setVisible(bool(ui_cfg.get("diagnostics_dock_visible", False)))

        # ---- menus ----
        m_file = self.menuBar().addMenu("&File")
        act_new = QAction("New Order…", self)
        act_new.triggered.connect(self._new_order)
        act_refresh = QAction("Refresh", self)
        act_refresh.setShortcut("F5")
        act_refresh.triggered.connect(self._refresh_all)
        act_sign_out = QAction("Sign Out", self)
        act_sign_out.triggered.connect(self._sign_out)
        act_quit = QAction("Quit", self)
        act_quit.triggered.connect(self.close)
        for a in (act_new, act_refresh, act_sign_out, act_quit):
            m_file.addAction(a)

        m_view = self.menuBar().addMenu("&View")
        m_view.addAction(self._notif_dock.toggleViewAction())
        m_view.addAction(self._diag_dock.toggleViewAction())

        # ---- alerts + status bar ----
        self._alerts = AlertPresenter(self)
        self._alerts.attach(ctx.tasks, ctx.orders, ctx.clients)
        self._user_label = QLabel()
        self.statusBar().addPermanentWidget(self._user_label)
        ctx.session.identityChanged.connect(self._show_identity)
        ctx.notifications.changed.connect(self._update_notif_title)
        self._show_identity(ctx.session.identity)
        self._update_notif_title()

    # -------------------- actions --------------------

    def _new_order(self):
        self._tabs.setCurrentWidget(self._orders_view)
        self._orders_view.new_order()

    def _refresh_all(self):
        for vm in (self._ctx.tasks, self._ctx.orders, self._ctx.clients):
            vm.refetch()

    def _sign_out(self):
        ident = self._ctx.session.identity
        self._ctx.session.sign_out()
        dlg = AuthDialog(self._ctx.session, self, email=ident.email if ident else None)
        if dlg.exec() != int(QDialog.DialogCode.Accepted):
            self.close()

    # -------------------- status --------------------

    def _show_identity(self, ident):
        if ident is None:
            self._user_label.setText("Not signed in")
        else:
            self._user_label.setText(ident.full_name or ident.email)

    def _update_notif_title(self):
        n = self._ctx.notifications.unread_count
        self._notif_dock.setWindowTitle(f"Notifications ({n})" if n else "Notifications")

    # -------------------- persistence --------------------

    def closeEvent(self, event):
        s = self._ctx.settings
        mw = s.setdefault("main_window", {})
        mw["is_maximized"] = self.isMaximized()
        if not self.isMaximized():
            mw["width"], mw["height"] = self.width(), self.height()
        ui = s.setdefault("ui", {})
        ui["notifications_dock_visible"] = self._notif_dock.isVisible()
        ui["diagnostics_dock_visible"] = self._diag_dock.isVisible()
        ident = self._ctx.session.identity
        sess = s.setdefault("session", {})
        if sess.get("remember_last_user", True) and ident is not None:
            sess["last_user_email"] = ident.email
        try:
            save_settings(s)
        except OSError:
            log.exception("Could not save settings")
        super().closeEvent(event)
