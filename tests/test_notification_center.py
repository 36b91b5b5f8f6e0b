# tests/test_notification_center.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from garmentz.viewmodels.notification_center import NotificationCenter

T0 = datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def center() -> NotificationCenter:
    return NotificationCenter(clock=lambda: T0)


def test_append_is_newest_first_and_unread(center):
    a = center.append("info", "A", "first")
    b = center.append("success", "B", "second")
    assert [n.id for n in center.notifications] == [b.id, a.id]
    assert a.id != b.id
    assert center.unread_count == 2
    assert a.created_at == T0


def test_recent_limits(center):
    for i in range(7):
        center.append("info", f"N{i}", "m")
    assert [n.title for n in center.recent(5)] == ["N6", "N5", "N4", "N3", "N2"]


def test_mark_read_and_mark_all(center):
    a = center.append("info", "A", "m")
    center.append("info", "B", "m")
    assert center.mark_read(a.id) is True
    assert center.unread_count == 1
    assert center.mark_read(999) is False
    center.mark_all_read()
    assert center.unread_count == 0


def test_remove_and_clear(center):
    a = center.append("info", "A", "m")
    b = center.append("info", "B", "m")
    assert center.remove(a.id) is True
    assert center.remove(a.id) is False
    assert [n.id for n in center.notifications] == [b.id]
    center.clear()
    assert center.notifications == []
    assert center.unread_count == 0


def test_signals(center):
    added, changed = [], []
    center.notificationAdded.connect(added.append)
    center.changed.connect(lambda: changed.append(1))
    n = center.append("info", "A", "m")
    assert added == [n]
    center.mark_read(n.id)
    center.mark_read(n.id)        # already read: no second change
    center.mark_all_read()        # nothing unread: no change
    assert len(changed) == 2


def test_notifications_returns_a_copy(center):
    center.append("info", "A", "m")
    center.notifications.clear()
    assert len(center.notifications) == 1


@pytest.mark.parametrize(
    "delta,expected",
    [
        (timedelta(seconds=30), "Just now"),
        (timedelta(minutes=1), "1 minute ago"),
        (timedelta(minutes=5), "5 minutes ago"),
        (timedelta(hours=1), "1 hour ago"),
        (timedelta(hours=3), "3 hours ago"),
        (timedelta(days=1), "1 day ago"),
        (timedelta(days=4), "4 days ago"),
    ],
)
def test_relative_timestamp(center, delta, expected):
    n = center.append("info", "A", "m")
    assert n.timestamp(T0 + delta) == expected
