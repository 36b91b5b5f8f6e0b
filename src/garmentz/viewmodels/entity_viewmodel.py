# Rev 0.3.2: notification policies and result codes
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Type

from PySide6.QtCore import QObject, Signal

from garmentz.errors import AuthRequired, RemoteError
from garmentz.services.status_rules import StatusRules

log = logging.getLogger(__name__)


_UNSET = object()


@dataclass(frozen=True)
class NotificationPolicy:
    """Which successful mutations of one collection land in the notification list."""

    on_add: bool = False
    on_status_change: bool = False
    on_delete: bool = False

    @classmethod
    def from_settings(cls, settings: Mapping[str, Any], collection: str) -> "NotificationPolicy":
        raw = ((settings.get("notifications") or {}).get("policies") or {}).get(collection) or {}
        return cls(
            on_add=bool(raw.get("on_add", False)),
            on_status_change=bool(raw.get("on_status_change", False)),
            on_delete=bool(raw.get("on_delete", False)),
        )


@dataclass(frozen=True)
class MutationResult:
    """
    code:
      ok | not_ready | auth_required | remote_error | not_found | skipped | invalid | invalid_transition | locked
    """

    ok: bool
    code: str = "ok"
    entity: Any = None

    def __bool__(self) -> bool:
        return self.ok


class EntityViewModel(QObject):
    """
    Cached, identity-scoped view of one collection.

    The cache is newest-first and only ever changes after the store call for a
    mutation has returned; failures leave it alone and raise an alert instead.
    Emits:
      - cacheChanged(list[entity])
      - loadingChanged(bool)
      - alertRaised(kind, title, message)   kind: info | success | error
    """

    cacheChanged = Signal(list)
    loadingChanged = Signal(bool)
    alertRaised = Signal(str, str, str)

    collection: ClassVar[str] = ""
    entity_cls: ClassVar[Type[Any]]
    noun: ClassVar[str] = "item"
    required_field: ClassVar[Optional[str]] = None
    rules: ClassVar[Optional[StatusRules]] = None
    completed_status: ClassVar[str] = "completed"
    status_messages: ClassVar[Dict[str, str]] = {}

    def __init__(self, store, session, notifications, *, policy: Optional[NotificationPolicy] = None):
        super().__init__()
        self._store = store
        self._session = session
        self._notifications = notifications
        self._policy = policy or NotificationPolicy()
        self._cache: List[Any] = []
        self._loading = True
        self._identity_id: Any = _UNSET

        session.identityChanged.connect(self._on_identity_changed)
        session.readyChanged.connect(self._on_ready_changed)
        if session.ready:
            self._on_identity_changed(session.identity)

    # ---- state
    @property
    def cache(self) -> List[Any]:
        return list(self._cache)

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def policy(self) -> NotificationPolicy:
        return self._policy

    def set_policy(self, policy: NotificationPolicy) -> None:
        self._policy = policy

    def find(self, entity_id: str) -> Optional[Any]:
        for e in self._cache:
            if e.id == entity_id:
                return e
        return None

    # ---- session wiring
    def _on_ready_changed(self, ready: bool) -> None:
        if ready:
            self._on_identity_changed(self._session.identity)

    def _on_identity_changed(self, identity) -> None:
        if not self._session.ready:
            return
        new_id = identity.id if identity is not None else None
        if new_id == self._identity_id:
            return
        self._identity_id = new_id
        if new_id is None:
            # never show the previous user's rows
            self._replace_cache([])
            self._set_loading(False)
            return
        self.load()

    # ---- queries
    def load(self) -> bool:
        if not self._session.ready or self._session.identity is None:
            return False
        self._set_loading(True)
        try:
            rows = self._store.list(self.collection)
        except (RemoteError, AuthRequired):
            log.exception("Error fetching %s", self.collection)
            self._alert_error(f"Failed to load {self._plural}. Please try again.")
            return False
        finally:
            self._set_loading(False)
        self._replace_cache([self.entity_cls.from_row(r) for r in rows])
        log.info("Loaded %d %s", len(self._cache), self.collection)
        return True

    refetch = load

    # ---- commands
    def add(self, draft: Mapping[str, Any]) -> MutationResult:
        refused = self._check_session("add")
        if refused is not None:
            return refused
        if self.required_field and not str(draft.get(self.required_field) or "").strip():
            return MutationResult(False, "skipped")

        try:
            payload = self._prepare_draft(dict(draft))
        except (TypeError, ValueError) as e:
            log.info("Refused %s draft: %s", self.noun, e)
            self._alert_error(f"Please check the {self.noun} details and try again.", title="Invalid {self.noun}")
            return MutationResult(False, "invalid")
        try:
            row = self._store.insert(self.collection, payload)
        except AuthRequired:
            return self._auth_required("add")
        except RemoteError:
            log.exception("Error adding %s", self.noun)
            self._alert_error(f"Failed to create {self.noun}. Please try again.")
            return MutationResult(False, "remote_error")

        entity = self.entity_cls.from_row(row)
        self._cache.insert(0, entity)
        self.cacheChanged.emit(self.cache)
        if self._policy.on_add:
            self._notifications.append(
                "success",
                f"New {self._title_noun} Created",
                f"{self._title_noun} {self._label(entity)} has been created successfully.",
            )
        self.alertRaised.emit("success", f"{self._title_noun} created", f"Your {self.noun} has been created successfully.")
        return MutationResult(True, entity=entity)

    def update(self, entity_id: str, partial: Mapping[str, Any]) -> MutationResult:
        refused = self._check_session("update")
        if refused is not None:
            return refused
        old = self.find(entity_id)
        if old is None:
            log.warning("update: %s %s is not cached", self.noun, entity_id)
            self._alert_error(f"That {self.noun} no longer exists.")
            return MutationResult(False, "not_found")
        refused = self._check_update(old, partial)
        if refused is not None:
            return refused

        try:
            row = self._store.update(self.collection, entity_id, dict(partial))
        except AuthRequired:
            return self._auth_required("update")
        except RemoteError:
            log.exception("Error updating %s %s", self.noun, entity_id)
            self._alert_error(f"Failed to update {self.noun}. Please try again.")
            return MutationResult(False, "remote_error")

        entity = self.entity_cls.from_row(row)
        self._cache = [entity if e.id == entity_id else e for e in self._cache]
        self.cacheChanged.emit(self.cache)

        new_status = partial.get("status")
        if self._policy.on_status_change and new_status is not None and new_status != getattr(old, "status", None):
            self._notifications.append(
                "success" if new_status == self.completed_status else "info",
                f"{self._title_noun} Status Updated",
                f"{self._title_noun} {self._label(entity)}: {self.status_messages.get(new_status, new_status)}",
            )
        self.alertRaised.emit("success", f"{self._title_noun} updated", f"{self._title_noun} has been updated successfully.")
        return MutationResult(True, entity=entity)

    def delete(self, entity_id: str) -> MutationResult:
        refused = self._check_session("delete")
        if refused is not None:
            return refused
        old = self.find(entity_id)
        if old is None:
            log.warning("delete: %s %s is not cached", self.noun, entity_id)
            self._alert_error(f"That {self.noun} no longer exists.")
            return MutationResult(False, "not_found")
        refused = self._check_delete(old)
        if refused is not None:
            return refused

        try:
            self._store.delete(self.collection, entity_id)
        except AuthRequired:
            return self._auth_required("delete")
        except RemoteError:
            log.exception("Error deleting %s %s", self.noun, entity_id)
            self._alert_error(f"Failed to delete {self.noun}. Please try again.")
            return MutationResult(False, "remote_error")

        self._cache = [e for e in self._cache if e.id != entity_id]
        self.cacheChanged.emit(self.cache)
        if self._policy.on_delete:
            self._notifications.append(
                "info", f"{self._title_noun} Deleted", f"{self._title_noun} {self._label(old)} has been deleted."
            )
        self.alertRaised.emit("success", f"{self._title_noun} deleted", f"{self._title_noun} has been deleted successfully.")
        return MutationResult(True, entity=old)

    # ---- hooks for subclasses
    def _prepare_draft(self, draft: Dict[str, Any]) -> Dict[str, Any]:
        return draft

    def _check_update(self, old: Any, partial: Mapping[str, Any]) -> Optional[MutationResult]:
        new_status = partial.get("status")
        if self.rules is None or new_status is None or new_status == getattr(old, "status", None):
            return None
        if not self.rules.is_allowed(old.status, new_status):
            log.info("Refused %s status change %s -> %s", self.noun, old.status, new_status)
            self._alert_error(f"A {self.noun} cannot move from {old.status} to {new_status}.", title="Not allowed")
            return MutationResult(False, "invalid_transition")
        return None

    def _check_delete(self, old: Any) -> Optional[MutationResult]:
        return None

    def _label(self, entity: Any) -> str:
        return str(entity.id)

    # ---- internals
    @property
    def _plural(self) -> str:
        return f"{self.noun}s"

    @property
    def _title_noun(self) -> str:
        return self.noun.capitalize()

    def _replace_cache(self, items: List[Any]) -> None:
        self._cache = list(items)
        self.cacheChanged.emit(self.cache)

    def _set_loading(self, value: bool) -> None:
        if self._loading != value:
            self._loading = value
            self.loadingChanged.emit(value)

    def _alert_error(self, message: str, *, title: str = "Error") -> None:
        self.alertRaised.emit("error", title, message)

    def _check_session(self, verb: str) -> Optional[MutationResult]:
        if not self._session.ready:
            log.info("%s %s refused: session not ready", verb, self.noun)
            return MutationResult(False, "not_ready")
        if self._session.identity is None:
            return self._auth_required(verb)
        return None

    def _auth_required(self, verb: str) -> MutationResult:
        log.info("%s %s refused: not authenticated", verb, self.noun)
        self.alertRaised.emit("error", "Authentication required", f"Please sign in to {verb} {self._plural}.")
        return MutationResult(False, "auth_required")
