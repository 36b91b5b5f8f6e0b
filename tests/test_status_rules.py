# tests/test_status_rules.py
from __future__ import annotations

import pytest

from garmentz.services.status_rules import (
    ORDER_RULES, TASK_RULES, can_change_order_status, can_delete_order, can_edit_order,
)


@pytest.mark.parametrize(
    "current,target,ok",
    [
        ("pending", "in_progress", True),
        ("pending", "completed", True),
        ("pending", "cancelled", True),
        ("in_progress", "completed", True),
        ("in_progress", "pending", False),
        ("in_progress", "cancelled", False),
        ("completed", "pending", False),
        ("completed", "cancelled", False),
        ("cancelled", "pending", False),
        ("cancelled", "in_progress", False),
    ],
)
def test_order_transitions(current, target, ok):
    assert ORDER_RULES.is_allowed(current, target) is ok


@pytest.mark.parametrize(
    "current,target",
    [
        ("todo", "in_progress"), ("todo", "completed"),
        ("in_progress", "todo"), ("in_progress", "completed"),
        ("completed", "todo"), ("completed", "in_progress"),
    ],
)
def test_task_moves_are_all_allowed(current, target):
    assert TASK_RULES.is_allowed(current, target)


def test_task_cycle():
    assert TASK_RULES.next_in_cycle("todo") == "in_progress"
    assert TASK_RULES.next_in_cycle("in_progress") == "completed"
    assert TASK_RULES.next_in_cycle("completed") == "todo"
    with pytest.raises(ValueError):
        TASK_RULES.next_in_cycle("archived")


def test_order_has_no_cycle():
    with pytest.raises(ValueError):
        ORDER_RULES.next_in_cycle("pending")


def test_terminal_statuses():
    assert ORDER_RULES.is_terminal("completed")
    assert ORDER_RULES.is_terminal("cancelled")
    assert not ORDER_RULES.is_terminal("pending")
    assert not ORDER_RULES.is_terminal("shipped")  # unknown is not terminal
    assert ORDER_RULES.allowed_transitions("completed") == set()
    assert ORDER_RULES.allowed_transitions("in_progress") == {"completed"}


def test_status_lists():
    assert ORDER_RULES.statuses == ("pending", "in_progress", "completed", "cancelled")
    assert TASK_RULES.statuses == ("todo", "in_progress", "completed")


def test_unknown_status_has_no_moves():
    assert not ORDER_RULES.is_known("shipped")
    assert not ORDER_RULES.is_allowed("shipped", "completed")


@pytest.mark.parametrize(
    "status,edit,delete,change",
    [
        ("pending", True, True, True),
        ("in_progress", False, False, True),
        ("completed", False, False, False),
        ("cancelled", False, False, False),
    ],
)
def test_order_locks(status, edit, delete, change):
    assert can_edit_order(status) is edit
    assert can_delete_order(status) is delete
    assert can_change_order_status(status) is change
