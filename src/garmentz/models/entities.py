# Rev 0.3.2
"""Cached entity shapes (tasks, orders, clients) plus session identity.

Rows come back from the store as plain dicts; from_row() keeps only the
columns the entity knows about so store-side extras (user_id) never leak
into the cache.
"""
from __future__ import annotations
from dataclasses import dataclass, field, fields, asdict
from typing import Any, Dict, List, Optional

from .types import OrderStatus, Priority, TaskStatus


class _RowMixin:
    @classmethod
    def from_row(cls, row: Dict[str, Any]):
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in row.items() if k in names})

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Identity:
    id: str
    email: str
    full_name: Optional[str] = None


@dataclass
class Task(_RowMixin):
    id: str
    title: str
    created_at: str
    updated_at: str
    description: Optional[str] = None
    status: TaskStatus = "todo"
    priority: Priority = "medium"
    assignee_id: Optional[str] = None
    order_id: Optional[str] = None
    due_date: Optional[str] = None


@dataclass
class Order(_RowMixin):
    id: str
    order_number: str
    created_at: str
    updated_at: str
    description: Optional[str] = None
    quantity: int = 1
    status: OrderStatus = "pending"
    priority: Priority = "medium"
    client_id: Optional[str] = None
    due_date: Optional[str] = None
    subtotal_amount: Optional[float] = None
    tax_amount: Optional[float] = None
    total_amount: Optional[float] = None
    creator_name: Optional[str] = None
    creator_phone: Optional[str] = None
    photo_urls: List[str] = field(default_factory=list)


@dataclass
class Client(_RowMixin):
    id: str
    name: str
    created_at: str
    updated_at: str
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
