# Rev 0.3.0

"""Order intake (Rev 0.3.0)
A new order from the intake form is two independent writes: the client row
first, then the order pointing at it. There is no rollback; when the second
write fails the client stays and the result says so.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional

from garmentz.models.entities import Client, Order
from garmentz.services.pricing import calculate_tax

log = logging.getLogger(__name__)


class OrderNumberGenerator:
    """ORD-<epoch ms>, strictly increasing within one process."""

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._last = 0

    def __call__(self) -> str:
        ms = int(self._clock().timestamp() * 1000)
        if ms <= self._last:
            ms = self._last + 1
        self._last = ms
        return f"ORD-{ms}"


def build_order_draft(
    subtotal: float,
    *,
    description: Optional[str] = None,
    quantity: int = 1,
    priority: str = "medium",
    due_date: Optional[str] = None,
    creator_name: Optional[str] = None,
    creator_phone: Optional[str] = None,
    photo_urls: Optional[List[str]] = None,
) -> Dict[str, Any]:
    price = calculate_tax(subtotal)
    return {
        "description": description,
        "quantity": quantity,
        "priority": priority,
        "due_date": due_date,
        "subtotal_amount": price.subtotal,
        "tax_amount": price.tax,
        "total_amount": price.total,
        "creator_name": creator_name,
        "creator_phone": creator_phone,
        "photo_urls": list(photo_urls or []),
    }


@dataclass(frozen=True)
class IntakeRequest:
    client: Mapping[str, Any]
    order: Mapping[str, Any]
    existing_client_id: Optional[str] = None


_REFUSED = ("skipped", "auth_required", "not_ready")


@dataclass(frozen=True)
class IntakeResult:
    """
    code:
      placed        both writes succeeded (or an existing client was reused)
      client_failed first write failed; nothing was stored
      order_failed  client stored, order not; the client is left in place
      skipped / auth_required / not_ready   refused before any write
    """

    ok: bool
    code: str
    client: Optional[Client] = None
    order: Optional[Order] = None

    @property
    def orphan_client(self) -> bool:
        return self.code == "order_failed" and self.client is not None


class OrderIntakeService:
    def __init__(self, clients_vm, orders_vm):
        self._clients = clients_vm
        self._orders = orders_vm

    def place(self, req: IntakeRequest) -> IntakeResult:
        client: Optional[Client] = None
        if req.existing_client_id:
            client = self._clients.find(req.existing_client_id)
            client_id = req.existing_client_id
        else:
            res = self._clients.add(req.client)
            if not res.ok:
                code = res.code if res.code in _REFUSED else "client_failed"
                return IntakeResult(False, code)
            client = res.entity
            client_id = client.id

        res = self._orders.add({**req.order, "client_id": client_id})
        if not res.ok:
            if client is not None and not req.existing_client_id:
                log.warning("Order write failed; client %s (%s) kept without an order", client.id, client.name)
                return IntakeResult(False, "order_failed", client=client)
            return IntakeResult(False, res.code if res.code in _REFUSED else "order_failed")

        log.info("Placed order %s for client %s", res.entity.order_number, client_id)
        return IntakeResult(True, "placed", client=client, order=res.entity)
