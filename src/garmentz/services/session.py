# Rev 0.2.2
from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, Signal

from garmentz.models.entities import Identity

log = logging.getLogger(__name__)


class SessionProvider(QObject):
    """
    Current signed-in identity plus a `ready` flag for the initial check.
    Emits:
      - identityChanged(Identity | None)   only when the user actually changes
      - readyChanged(bool)
    Auth failures raise AuthError / RemoteError to the caller (the sign-in dialog).
    """

    identityChanged = Signal(object)
    readyChanged = Signal(bool)

    def __init__(self, auth_repo):
        super().__init__()
        self._auth = auth_repo
        self._identity: Optional[Identity] = None
        self._ready = False

    @property
    def identity(self) -> Optional[Identity]:
        return self._identity

    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def is_authenticated(self) -> bool:
        return self._identity is not None

    def restore(self, identity: Optional[Identity] = None) -> None:
        """Finish the initial identity check, optionally resuming a known identity."""
        if identity is not None:
            self._set_identity(identity)
        if not self._ready:
            self._ready = True
            self.readyChanged.emit(True)

    def sign_in(self, email: str, password: str) -> Identity:
        ident = self._auth.sign_in(email, password)
        log.info("Signed in as %s", ident.email)
        self._set_identity(ident)
        return ident

    def sign_up(self, email: str, password: str, full_name: Optional[str] = None) -> Identity:
        ident = self._auth.sign_up(email, password, full_name)
        self._set_identity(ident)
        return ident

    def sign_out(self) -> None:
        if self._identity is not None:
            log.info("Signed out %s", self._identity.email)
        self._set_identity(None)

    def _set_identity(self, identity: Optional[Identity]) -> None:
        old_id = self._identity.id if self._identity is not None else None
        new_id = identity.id if identity is not None else None
        self._identity = identity
        if old_id != new_id:
            self.identityChanged.emit(identity)
