# tests/test_store_client.py
from __future__ import annotations

import pytest

from garmentz.errors import AuthRequired, RemoteError
from garmentz.repositories.sqlite_store_client import SQLiteEntityStore
from garmentz.services.session import SessionProvider


def _order(number: str, **kw):
    return {"order_number": number, "description": "Shirts", "quantity": 10, **kw}


def test_insert_stamps_id_and_timestamps(store):
    row = store.insert("clients", {"name": "Acme Textiles", "phone": "+91 98765 43210"})
    assert row["id"]
    assert row["name"] == "Acme Textiles"
    assert row["created_at"] == row["updated_at"]
    assert "user_id" not in row


def test_list_is_newest_first(store):
    store.insert("orders", _order("ORD-1"))
    store.insert("orders", _order("ORD-2"))
    store.insert("orders", _order("ORD-3"))
    numbers = [r["order_number"] for r in store.list("orders")]
    assert numbers == ["ORD-3", "ORD-2", "ORD-1"]


def test_photo_urls_round_trip_as_list(store):
    row = store.insert("orders", _order("ORD-9", photo_urls=["file:///a.jpg", "file:///b.jpg"]))
    assert row["photo_urls"] == ["file:///a.jpg", "file:///b.jpg"]
    assert store.list("orders")[0]["photo_urls"] == ["file:///a.jpg", "file:///b.jpg"]


def test_update_returns_fresh_row(store):
    row = store.insert("tasks", {"title": "Cut fabric"})
    updated = store.update("tasks", row["id"], {"status": "in_progress"})
    assert updated["status"] == "in_progress"
    assert updated["title"] == "Cut fabric"
    assert updated["updated_at"] >= row["updated_at"]


def test_update_missing_row_raises(store):
    with pytest.raises(RemoteError) as ei:
        store.update("tasks", "nope", {"status": "completed"})
    assert "no row" in ei.value.message


def test_delete_then_delete_again(store):
    row = store.insert("clients", {"name": "Zed"})
    assert store.delete("clients", row["id"]) is True
    assert store.list("clients") == []
    with pytest.raises(RemoteError):
        store.delete("clients", row["id"])


def test_unknown_column_is_rejected(store):
    with pytest.raises(RemoteError):
        store.insert("clients", {"name": "X", "credit_limit": 5})


def test_unknown_collection_is_a_programming_error(store):
    with pytest.raises(ValueError):
        store.list("invoices")


def test_check_constraint_surfaces_as_remote_error(store):
    with pytest.raises(RemoteError):
        store.insert("orders", _order("ORD-X", status="shipped"))
    with pytest.raises(RemoteError):
        store.insert("tasks", {"title": "   "})


def test_duplicate_order_number_is_remote_error(store):
    store.insert("orders", _order("ORD-1"))
    with pytest.raises(RemoteError):
        store.insert("orders", _order("ORD-1"))


def test_no_identity_raises_auth_required(db, auth):
    anon = SQLiteEntityStore(db, SessionProvider(auth))
    with pytest.raises(AuthRequired):
        anon.list("tasks")
    with pytest.raises(AuthRequired):
        anon.insert("tasks", {"title": "T"})


def test_rows_are_scoped_to_the_signed_in_user(db, auth, session, store):
    store.insert("tasks", {"title": "Mine"})
    other = SessionProvider(auth)
    other.sign_up("other@example.com", "pw")
    other_store = SQLiteEntityStore(db, other)

    assert other_store.list("tasks") == []
    mine = store.list("tasks")[0]
    with pytest.raises(RemoteError):
        other_store.update("tasks", mine["id"], {"title": "Stolen"})
    with pytest.raises(RemoteError):
        other_store.delete("tasks", mine["id"])
    assert store.list("tasks")[0]["title"] == "Mine"
