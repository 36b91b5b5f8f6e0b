# garmentZ application context
# Rev 0.3.0

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .repositories.db import Database
from .repositories.local_photo_store import LocalPhotoStore
from .repositories.sqlite_auth_repository import SQLiteAuthRepository
from .repositories.sqlite_store_client import SQLiteEntityStore
from .services.order_intake import OrderIntakeService
from .services.session import SessionProvider
from .utils.config import database_path, defaults
from .utils.paths import PHOTOS_DIR
from .viewmodels.analytics_viewmodel import AnalyticsViewModel
from .viewmodels.clients_viewmodel import ClientsViewModel
from .viewmodels.entity_viewmodel import NotificationPolicy
from .viewmodels.notification_center import NotificationCenter
from .viewmodels.orders_viewmodel import OrdersViewModel
from .viewmodels.tasks_viewmodel import TasksViewModel


@dataclass
class AppContext:
    """Central container for shared app resources; one per signed-in app session."""
    db: Database
    session: SessionProvider
    store: SQLiteEntityStore
    notifications: NotificationCenter
    tasks: TasksViewModel
    orders: OrdersViewModel
    clients: ClientsViewModel
    analytics: AnalyticsViewModel
    intake: OrderIntakeService
    photos: LocalPhotoStore
    settings: Dict[str, Any] = field(default_factory=defaults)

    @classmethod
    def create(
        cls,
        db_path: Optional[Path] = None,
        settings: Optional[Dict[str, Any]] = None,
        photos_dir: Optional[Path] = None,
    ) -> "AppContext":
        """Open the DB, run migrations, and wire store → session → view-models."""
        log = logging.getLogger(__name__)
        settings = settings if settings is not None else defaults()
        db = Database(db_path or database_path(settings))
        db.run_migrations()

        session = SessionProvider(SQLiteAuthRepository(db))
        store = SQLiteEntityStore(db, session)
        notifications = NotificationCenter()

        def policy(name: str) -> NotificationPolicy:
            return NotificationPolicy.from_settings(settings, name)

        tasks = TasksViewModel(store, session, notifications, policy=policy("tasks"))
        orders = OrdersViewModel(store, session, notifications, policy=policy("orders"))
        clients = ClientsViewModel(store, session, notifications, policy=policy("clients"))
        analytics = AnalyticsViewModel(
            orders, tasks, recent_limit=int((settings.get("orders") or {}).get("recent_limit", 5))
        )
        intake = OrderIntakeService(clients, orders)
        photos = LocalPhotoStore(photos_dir or PHOTOS_DIR)

        log.info("AppContext initialized with DB=%s", db.path)
        return cls(
            db=db, session=session, store=store, notifications=notifications,
            tasks=tasks, orders=orders, clients=clients, analytics=analytics,
            intake=intake, photos=photos, settings=settings,
        )

    def close(self) -> None:
        self.session.sign_out()
        self.db.close()
