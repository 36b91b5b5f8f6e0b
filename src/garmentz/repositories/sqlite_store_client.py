# Rev 0.3.2
from __future__ import annotations

import json
import logging
import sqlite3
import uuid
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Dict, Iterator, List, Optional, Protocol, Union

from garmentz.errors import AuthRequired, RemoteError
from garmentz.utils.formatting import utc_now_iso

if TYPE_CHECKING:
    from garmentz.models.entities import Identity

log = logging.getLogger(__name__)


class IdentitySource(Protocol):
    @property
    def identity(self) -> Optional["Identity"]: ...


class EntityStoreClient(Protocol):
    """What the entity view-models need from a store. One attempt per call."""

    def list(self, collection: str) -> List[Dict[str, Any]]: ...
    def insert(self, collection: str, row: Dict[str, Any]) -> Dict[str, Any]: ...
    def update(self, collection: str, row_id: str, partial: Dict[str, Any]) -> Dict[str, Any]: ...
    def delete(self, collection: str, row_id: str) -> bool: ...


class SQLiteEntityStore:
    """
    Identity-scoped CRUD over the tasks / orders / clients tables.
    Reads filter on user_id, writes stamp it. Every sqlite3 failure surfaces
    as RemoteError; a call with no identity raises AuthRequired before any SQL runs.
    """

    # writable columns per collection (id, user_id and timestamps are ours)
    _COLUMNS: Dict[str, tuple[str, ...]] = {
        "tasks": (
            "title", "description", "status", "priority",
            "assignee_id", "order_id", "due_date",
        ),
        "orders": (
            "order_number", "description", "quantity", "status", "priority",
            "client_id", "due_date", "subtotal_amount", "tax_amount", "total_amount",
            "creator_name", "creator_phone", "photo_urls",
        ),
        "clients": ("name", "email", "phone", "address"),
    }
    _JSON_COLUMNS = {"photo_urls"}

    def __init__(self, db_or_conn: Union[sqlite3.Connection, Any], session: IdentitySource):
        self._db_or_conn = db_or_conn
        self._session = session

    # -------------------------
    # Connection handling
    # -------------------------
    def _conn(self) -> sqlite3.Connection:
        if isinstance(self._db_or_conn, sqlite3.Connection):
            return self._db_or_conn
        c = getattr(self._db_or_conn, "conn", None)
        if isinstance(c, sqlite3.Connection):
            return c
        raise RuntimeError(
            "SQLiteEntityStore: could not obtain sqlite3.Connection "
            "(expected .conn on wrapper, or a raw Connection)."
        )

    def _owner_id(self) -> str:
        ident = self._session.identity
        if ident is None:
            raise AuthRequired("No signed-in user")
        return ident.id

    @classmethod
    def _columns(cls, collection: str) -> tuple[str, ...]:
        try:
            return cls._COLUMNS[collection]
        except KeyError:
            raise ValueError(f"unknown collection {collection!r}") from None

    @contextmanager
    def _remote(self, operation: str) -> Iterator[None]:
        try:
            yield
        except sqlite3.Error as e:
            log.error("%s failed: %s", operation, e)
            raise RemoteError(operation, str(e)) from e

    def _encode(self, values: Dict[str, Any]) -> Dict[str, Any]:
        out = dict(values)
        for k in self._JSON_COLUMNS & out.keys():
            out[k] = json.dumps(list(out[k] or []))
        return out

    def _decode(self, row: sqlite3.Row) -> Dict[str, Any]:
        d = dict(row)
        d.pop("user_id", None)
        for k in self._JSON_COLUMNS & d.keys():
            d[k] = json.loads(d[k] or "[]")
        return d

    def _check_keys(self, operation: str, collection: str, payload: Dict[str, Any]) -> None:
        unknown = set(payload) - set(self._columns(collection))
        if unknown:
            raise RemoteError(operation, f"unknown column(s) for {collection}: {', '.join(sorted(unknown))}")

    def _fetch_one(self, collection: str, row_id: str, owner: str) -> Optional[Dict[str, Any]]:
        row = self._conn().execute(
            f"SELECT * FROM {collection} WHERE id = ? AND user_id = ?", (row_id, owner)
        ).fetchone()
        return self._decode(row) if row else None

    # -------------------------
    # CRUD
    # -------------------------
    def list(self, collection: str) -> List[Dict[str, Any]]:
        self._columns(collection)
        owner = self._owner_id()
        with self._remote(f"list {collection}"):
            rows = self._conn().execute(
                f"SELECT * FROM {collection} WHERE user_id = ? ORDER BY created_at DESC, rowid DESC",
                (owner,),
            ).fetchall()
        return [self._decode(r) for r in rows]

    def insert(self, collection: str, row: Dict[str, Any]) -> Dict[str, Any]:
        op = f"insert {collection}"
        payload = {k: v for k, v in row.items() if k not in ("id", "user_id", "created_at", "updated_at")}
        self._check_keys(op, collection, payload)
        owner = self._owner_id()

        now = utc_now_iso()
        values = {"id": uuid.uuid4().hex, "user_id": owner, **self._encode(payload),
                  "created_at": now, "updated_at": now}
        cols = ", ".join(values)
        marks = ", ".join("?" for _ in values)
        with self._remote(op):
            self._conn().execute(f"INSERT INTO {collection}({cols}) VALUES ({marks})", tuple(values.values()))
            created = self._fetch_one(collection, values["id"], owner)
        if created is None:
            raise RemoteError(op, "row vanished after insert")
        log.debug("%s -> %s", op, values["id"])
        return created

    def update(self, collection: str, row_id: str, partial: Dict[str, Any]) -> Dict[str, Any]:
        op = f"update {collection}"
        self._check_keys(op, collection, partial)
        owner = self._owner_id()

        values = self._encode(partial)
        sets = [f"{k} = ?" for k in values] + ["updated_at = ?"]
        params = [*values.values(), utc_now_iso(), row_id, owner]
        with self._remote(op):
            cur = self._conn().execute(
                f"UPDATE {collection} SET {', '.join(sets)} WHERE id = ? AND user_id = ?", params
            )
            if cur.rowcount == 0:
                raise RemoteError(op, f"no row with id {row_id}")
            updated = self._fetch_one(collection, row_id, owner)
        if updated is None:
            raise RemoteError(op, f"no row with id {row_id}")
        return updated

    def delete(self, collection: str, row_id: str) -> bool:
        op = f"delete {collection}"
        self._columns(collection)
        owner = self._owner_id()
        with self._remote(op):
            cur = self._conn().execute(
                f"DELETE FROM {collection} WHERE id = ? AND user_id = ?", (row_id, owner)
            )
        if cur.rowcount == 0:
            raise RemoteError(op, f"no row with id {row_id}")
        return True
