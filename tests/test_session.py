# tests/test_session.py
from __future__ import annotations

import pytest

from garmentz.errors import AuthError
from garmentz.models.entities import Identity
from garmentz.services.session import SessionProvider


@pytest.fixture()
def fresh(auth) -> SessionProvider:
    return SessionProvider(auth)


def test_starts_not_ready_and_anonymous(fresh):
    assert fresh.ready is False
    assert fresh.identity is None
    assert fresh.is_authenticated is False


def test_restore_marks_ready_once(fresh):
    seen = []
    fresh.readyChanged.connect(seen.append)
    fresh.restore()
    fresh.restore()
    assert fresh.ready is True
    assert seen == [True]


def test_sign_up_then_sign_in(fresh, auth):
    ident = fresh.sign_up("maker@example.com", "pw123", "Maker")
    assert ident.full_name == "Maker"
    fresh.sign_out()
    again = fresh.sign_in("MAKER@example.com", "pw123")
    assert again.id == ident.id
    assert fresh.identity == again


def test_bad_password(fresh):
    fresh.sign_up("a@example.com", "right")
    fresh.sign_out()
    with pytest.raises(AuthError):
        fresh.sign_in("a@example.com", "wrong")
    with pytest.raises(AuthError):
        fresh.sign_in("nobody@example.com", "right")
    assert fresh.identity is None


def test_duplicate_and_empty_sign_up(fresh):
    fresh.sign_up("a@example.com", "pw")
    with pytest.raises(AuthError):
        fresh.sign_up("A@example.com", "pw")
    with pytest.raises(AuthError):
        fresh.sign_up("", "pw")
    with pytest.raises(AuthError):
        fresh.sign_up("b@example.com", "")


def test_identity_changed_fires_only_on_user_change(fresh):
    seen = []
    fresh.identityChanged.connect(seen.append)
    ident = Identity(id="u1", email="u1@example.com")
    fresh.restore(ident)
    fresh.restore(Identity(id="u1", email="u1@example.com", full_name="Renamed"))
    fresh.sign_out()
    fresh.sign_out()
    assert [i.id if i else None for i in seen] == ["u1", None]


def test_lookup_by_email(fresh, auth):
    ident = fresh.sign_up("Lookup@Example.com", "pw", "Look Up")
    assert auth.get_by_email("lookup@example.com") == ident
    assert auth.get_by_email("missing@example.com") is None
