# Rev 0.3.0

"""Pytest fixtures for garmentZ (Rev 0.3.0)"""
from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, List, Set

import pytest
from PySide6.QtCore import QCoreApplication

from garmentz.app_context import AppContext
from garmentz.errors import RemoteError
from garmentz.repositories.db import Database
from garmentz.repositories.sqlite_auth_repository import SQLiteAuthRepository
from garmentz.repositories.sqlite_store_client import SQLiteEntityStore
from garmentz.services.session import SessionProvider
from garmentz.viewmodels.notification_center import NotificationCenter


@pytest.fixture(scope="session", autouse=True)
def qapp():
    app = QCoreApplication.instance() or QCoreApplication([])
    yield app


@pytest.fixture()
def db(tmp_path: Path):
    d = Database(path=tmp_path / "test.db")
    try:
        d.run_migrations()
        yield d
    finally:
        d.close()


@pytest.fixture()
def auth(db) -> SQLiteAuthRepository:
    return SQLiteAuthRepository(db)


@pytest.fixture()
def session(auth) -> SessionProvider:
    """Ready and signed in as owner@example.com."""
    s = SessionProvider(auth)
    s.sign_up("owner@example.com", "secret", "Owner")
    s.restore()
    return s


@pytest.fixture()
def store(db, session) -> SQLiteEntityStore:
    return SQLiteEntityStore(db, session)


@pytest.fixture()
def notifications() -> NotificationCenter:
    return NotificationCenter()


@pytest.fixture()
def ctx(tmp_path: Path):
    c = AppContext.create(db_path=tmp_path / "app.db", photos_dir=tmp_path / "photos")
    c.session.sign_up("owner@example.com", "secret", "Owner")
    c.session.restore()
    try:
        yield c
    finally:
        c.close()


# --- Helpers ---------------------------------------------------------------

class FlakyStore:
    """Wraps a real store; entries in `fail` ("insert" or "insert orders") raise RemoteError instead."""

    def __init__(self, inner, fail: Set[str] | None = None):
        self._inner = inner
        self.fail: Set[str] = set(fail or ())
        self.calls: List[tuple] = []

    def _call(self, op: str, *args):
        self.calls.append((op, *args))
        if op in self.fail or f"{op} {args[0]}" in self.fail:
            raise RemoteError(f"{op} {args[0]}", "simulated outage")
        return getattr(self._inner, op)(*args)

    def list(self, collection: str) -> List[Dict[str, Any]]:
        return self._call("list", collection)

    def insert(self, collection: str, row: Dict[str, Any]) -> Dict[str, Any]:
        return self._call("insert", collection, row)

    def update(self, collection: str, row_id: str, partial: Dict[str, Any]) -> Dict[str, Any]:
        return self._call("update", collection, row_id, partial)

    def delete(self, collection: str, row_id: str) -> bool:
        return self._call("delete", collection, row_id)


class AlertRecorder:
    def __init__(self, vm):
        self.alerts: List[tuple] = []
        vm.alertRaised.connect(lambda kind, title, msg: self.alerts.append((kind, title, msg)))

    @property
    def errors(self) -> List[tuple]:
        return [a for a in self.alerts if a[0] == "error"]


@pytest.fixture()
def flaky(store) -> FlakyStore:
    return FlakyStore(store)


@pytest.fixture()
def wrap_flaky():
    return FlakyStore


@pytest.fixture()
def record_alerts():
    return AlertRecorder
