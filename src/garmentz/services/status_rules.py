# Rev 0.3.0

"""Status rules service (Rev 0.3.0)
Allow/deny checks for status changes, one transition table per entity type.
"""
from __future__ import annotations
from typing import Dict, FrozenSet, Mapping, Optional, Set


class StatusRules:
    def __init__(self, transitions: Mapping[str, Set[str]], cycle: Optional[Mapping[str, str]] = None):
        self._transitions: Dict[str, FrozenSet[str]] = {k: frozenset(v) for k, v in transitions.items()}
        self._cycle = dict(cycle or {})

    @property
    def statuses(self) -> tuple[str, ...]:
        return tuple(self._transitions)

    def is_known(self, status: str) -> bool:
        return status in self._transitions

    def is_allowed(self, from_status: str, to_status: str) -> bool:
        return to_status in self._transitions.get(from_status, frozenset())

    def allowed_transitions(self, from_status: str) -> Set[str]:
        return set(self._transitions.get(from_status, frozenset()))

    def is_terminal(self, status: str) -> bool:
        return self.is_known(status) and not self._transitions[status]

    def next_in_cycle(self, status: str) -> str:
        try:
            return self._cycle[status]
        except KeyError:
            raise ValueError(f"{status!r} has no successor in the cycle") from None


# Tasks: any explicit move is fine; the checkbox toggle walks the cycle.
TASK_RULES = StatusRules(
    transitions={
        "todo": {"in_progress", "completed"},
        "in_progress": {"todo", "completed"},
        "completed": {"todo", "in_progress"},
    },
    cycle={"todo": "in_progress", "in_progress": "completed", "completed": "todo"},
)

# Orders: forward only; completed and cancelled are terminal.
ORDER_RULES = StatusRules(
    transitions={
        "pending": {"in_progress", "completed", "cancelled"},
        "in_progress": {"completed"},
        "completed": set(),
        "cancelled": set(),
    },
)

# Only these order fields may change once an order has left "pending".
ORDER_STATUS_FIELDS = frozenset({"status"})


def can_edit_order(status: str) -> bool:
    return status == "pending"


def can_delete_order(status: str) -> bool:
    return status == "pending"


def can_change_order_status(status: str) -> bool:
    return not ORDER_RULES.is_terminal(status)
