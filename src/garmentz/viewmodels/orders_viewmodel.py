# Rev 0.3.2: pending-only edits/deletes, search on every read
from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional

from PySide6.QtCore import Signal

from garmentz.models.entities import Order
from garmentz.services.order_intake import OrderNumberGenerator
from garmentz.services.pricing import calculate_tax
from garmentz.services.status_rules import ORDER_RULES, ORDER_STATUS_FIELDS, can_delete_order, can_edit_order
from garmentz.utils.formatting import localized_date
from garmentz.viewmodels.entity_viewmodel import EntityViewModel, MutationResult

log = logging.getLogger(__name__)


class OrdersViewModel(EntityViewModel):
    """
    Orders cache plus a free-text search over it.
    Emits (in addition to EntityViewModel's):
      - searchQueryChanged(str)
    """

    searchQueryChanged = Signal(str)

    collection = "orders"
    entity_cls = Order
    noun = "order"
    rules = ORDER_RULES
    status_messages = {
        "pending": "Order is now pending",
        "in_progress": "Order is now being processed",
        "completed": "Order has been completed",
        "cancelled": "Order has been cancelled",
    }

    def __init__(self, store, session, notifications, *, policy=None,
                 order_numbers: Optional[Callable[[], str]] = None):
        super().__init__(store, session, notifications, policy=policy)
        self._search_query = ""
        self._order_numbers = order_numbers or OrderNumberGenerator()

    # ---- search
    @property
    def search_query(self) -> str:
        return self._search_query

    def set_search_query(self, query: str) -> None:
        query = query or ""
        if query != self._search_query:
            self._search_query = query
            self.searchQueryChanged.emit(query)

    @staticmethod
    def matches(order: Order, query: str) -> bool:
        if not query:
            return True
        q = query.lower()
        return (
            q in order.order_number.lower()
            or q in (order.description or "").lower()
            or q in order.status.lower()
            or q in localized_date(order.created_at)
        )

    def filtered(self) -> List[Order]:
        return [o for o in self._cache if self.matches(o, self._search_query)]

    @property
    def orders(self) -> List[Order]:
        return self.filtered()

    def recent(self, limit: int = 5) -> List[Order]:
        return self.filtered()[:limit]

    # ---- hooks
    def _prepare_draft(self, draft: Dict[str, Any]) -> Dict[str, Any]:
        draft.setdefault("status", "pending")
        if not draft.get("order_number"):
            draft["order_number"] = self._order_numbers()
        if draft.get("subtotal_amount") is not None:
            price = calculate_tax(float(draft["subtotal_amount"]))
            draft["subtotal_amount"] = price.subtotal
            draft["tax_amount"] = price.tax
            draft["total_amount"] = price.total
        return draft

    def _check_update(self, old: Order, partial: Mapping[str, Any]) -> Optional[MutationResult]:
        descriptive = set(partial) - ORDER_STATUS_FIELDS
        if descriptive and not can_edit_order(old.status):
            log.info("Refused edit of %s order %s: %s", old.status, old.order_number, sorted(descriptive))
            self._alert_error("Only pending orders can be edited.", title="Order locked")
            return MutationResult(False, "locked")
        return super()._check_update(old, partial)

    def _check_delete(self, old: Order) -> Optional[MutationResult]:
        if not can_delete_order(old.status):
            self._alert_error("Only pending orders can be deleted.", title="Order locked")
            return MutationResult(False, "locked")
        return None

    def _label(self, entity: Order) -> str:
        return entity.order_number
