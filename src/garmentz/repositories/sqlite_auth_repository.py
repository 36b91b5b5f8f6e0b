# Rev 0.2.1
from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
import sqlite3
import uuid
from typing import Any, Optional, Union

from garmentz.errors import AuthError, RemoteError
from garmentz.models.entities import Identity
from garmentz.utils.formatting import utc_now_iso

log = logging.getLogger(__name__)

_ITERATIONS = 200_000


def _hash_password(password: str, salt: str) -> str:
    return hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), bytes.fromhex(salt), _ITERATIONS).hex()


class SQLiteAuthRepository:
    """Email + password accounts. Stands in for the hosted auth provider."""

    def __init__(self, db_or_conn: Union[sqlite3.Connection, Any]):
        self._db_or_conn = db_or_conn

    def _conn(self) -> sqlite3.Connection:
        if isinstance(self._db_or_conn, sqlite3.Connection):
            return self._db_or_conn
        return self._db_or_conn.conn

    @staticmethod
    def _identity(row) -> Identity:
        return Identity(id=row["id"], email=row["email"], full_name=row["full_name"])

    def sign_up(self, email: str, password: str, full_name: Optional[str] = None) -> Identity:
        email = (email or "").strip()
        if not email or not password:
            raise AuthError("Email and password are required.")
        salt = secrets.token_hex(16)
        uid = uuid.uuid4().hex
        try:
            self._conn().execute(
                """
                INSERT INTO users(id, email, full_name, password_hash, salt, created_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (uid, email, (full_name or "").strip() or None, _hash_password(password, salt), salt, utc_now_iso()),
            )
        except sqlite3.IntegrityError as e:
            raise AuthError("An account with this email already exists.") from e
        except sqlite3.Error as e:
            raise RemoteError("sign up", str(e)) from e
        log.info("Account created for %s", email)
        return Identity(id=uid, email=email, full_name=(full_name or "").strip() or None)

    def sign_in(self, email: str, password: str) -> Identity:
        try:
            row = self._conn().execute(
                "SELECT id, email, full_name, password_hash, salt FROM users WHERE email = ?",
                ((email or "").strip(),),
            ).fetchone()
        except sqlite3.Error as e:
            raise RemoteError("sign in", str(e)) from e
        if row is None or not hmac.compare_digest(row["password_hash"], _hash_password(password or "", row["salt"])):
            raise AuthError("Invalid email or password.")
        return self._identity(row)

    def get_by_email(self, email: str) -> Optional[Identity]:
        try:
            row = self._conn().execute(
                "SELECT id, email, full_name FROM users WHERE email = ?", ((email or "").strip(),)
            ).fetchone()
        except sqlite3.Error as e:
            raise RemoteError("get user", str(e)) from e
        return self._identity(row) if row else None
