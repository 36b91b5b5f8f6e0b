# tests/test_tasks_viewmodel.py
from __future__ import annotations

import pytest

from garmentz.repositories.sqlite_store_client import SQLiteEntityStore
from garmentz.services.session import SessionProvider
from garmentz.viewmodels.entity_viewmodel import NotificationPolicy
from garmentz.viewmodels.tasks_viewmodel import TasksViewModel


@pytest.fixture()
def vm(flaky, session, notifications) -> TasksViewModel:
    return TasksViewModel(flaky, session, notifications)


def _store_writes(flaky):
    return [c for c in flaky.calls if c[0] != "list"]


def test_loads_when_session_is_ready(vm, flaky):
    assert vm.loading is False
    assert vm.tasks == []
    assert flaky.calls == [("list", "tasks")]


def test_waits_for_ready_before_loading(db, auth, notifications):
    s = SessionProvider(auth)
    s.sign_up("late@example.com", "pw")
    store_for_late = SQLiteEntityStore(db, s)
    store_for_late.insert("tasks", {"title": "Existing"})
    vm = TasksViewModel(store_for_late, s, notifications)
    assert vm.loading is True
    assert vm.tasks == []
    s.restore()
    assert vm.loading is False
    assert [t.title for t in vm.tasks] == ["Existing"]


def test_writes_wait_for_ready(db, auth, notifications, wrap_flaky, record_alerts):
    s = SessionProvider(auth)
    s.sign_up("early@example.com", "pw")
    store = wrap_flaky(SQLiteEntityStore(db, s))
    vm = TasksViewModel(store, s, notifications)
    rec = record_alerts(vm)
    assert s.ready is False
    assert vm.add({"title": "Too soon"}).code == "not_ready"
    assert vm.update("t1", {"status": "done"}).code == "not_ready"
    assert vm.delete("t1").code == "not_ready"
    assert store.calls == []
    assert rec.alerts == []
    s.restore()
    assert vm.add({"title": "Now"}).ok
    assert [c[0] for c in store.calls] == ["list", "insert"]


def test_add_prepends_and_alerts(vm, notifications, record_alerts):
    rec = record_alerts(vm)
    vm.add({"title": "Cut fabric"})
    res = vm.add({"title": "Stitch collars", "priority": "high"})
    assert res.ok and res.code == "ok"
    assert [t.title for t in vm.tasks] == ["Stitch collars", "Cut fabric"]
    assert vm.tasks[0].status == "todo"
    assert rec.alerts[-1] == ("success", "Task created", "Your task has been created successfully.")
    # tasks stay out of the notification list by default
    assert notifications.notifications == []


def test_add_with_blank_title_is_skipped(vm, flaky, record_alerts):
    rec = record_alerts(vm)
    res = vm.add({"title": "   "})
    assert not res.ok and res.code == "skipped"
    assert _store_writes(flaky) == []
    assert rec.alerts == []
    assert vm.tasks == []


def test_add_notifies_when_policy_allows(vm, notifications):
    vm.set_policy(NotificationPolicy(on_add=True))
    vm.add({"title": "Press"})
    n = notifications.notifications[0]
    assert (n.type, n.title) == ("success", "New Task Created")
    assert n.message == 'Task "Press" has been created successfully.'


def test_add_failure_leaves_cache(vm, flaky, record_alerts):
    rec = record_alerts(vm)
    flaky.fail = {"insert"}
    res = vm.add({"title": "Doomed"})
    assert res.code == "remote_error"
    assert vm.tasks == []
    assert rec.errors == [("error", "Error", "Failed to create task. Please try again.")]


def test_toggle_walks_the_cycle(vm):
    t = vm.add({"title": "Pack"}).entity
    seen = []
    for _ in range(3):
        seen.append(vm.toggle_status(t.id).entity.status)
    assert seen == ["in_progress", "completed", "todo"]
    assert vm.find(t.id).status == "todo"


def test_status_notifications(vm, notifications):
    vm.set_policy(NotificationPolicy(on_status_change=True))
    t = vm.add({"title": "Iron"}).entity
    vm.update(t.id, {"status": "in_progress"})
    vm.update(t.id, {"status": "completed"})
    vm.update(t.id, {"title": "Iron shirts"})       # not a status change
    kinds = [(n.type, n.message) for n in notifications.notifications]
    assert kinds == [
        ("success", 'Task "Iron": Task has been completed'),
        ("info", 'Task "Iron": Task is now in progress'),
    ]


def test_update_replaces_in_place(vm):
    a = vm.add({"title": "A"}).entity
    vm.add({"title": "B"})
    vm.update(a.id, {"description": "first one"})
    assert [t.title for t in vm.tasks] == ["B", "A"]
    assert vm.find(a.id).description == "first one"


def test_update_failure_keeps_old_entity(vm, flaky, record_alerts):
    t = vm.add({"title": "Dye"}).entity
    rec = record_alerts(vm)
    flaky.fail = {"update"}
    res = vm.update(t.id, {"status": "completed"})
    assert res.code == "remote_error"
    assert vm.find(t.id).status == "todo"
    assert rec.errors == [("error", "Error", "Failed to update task. Please try again.")]


def test_update_and_delete_of_uncached_id(vm, flaky, record_alerts):
    rec = record_alerts(vm)
    assert vm.update("ghost", {"title": "x"}).code == "not_found"
    assert vm.delete("ghost").code == "not_found"
    assert _store_writes(flaky) == []
    assert len(rec.errors) == 2


def test_delete_is_idempotent_from_the_callers_view(vm):
    t = vm.add({"title": "Fold"}).entity
    assert vm.delete(t.id).ok
    assert vm.delete(t.id).code == "not_found"
    assert vm.tasks == []


def test_load_failure_alerts_and_keeps_cache(vm, flaky, record_alerts):
    vm.add({"title": "Keep me"})
    rec = record_alerts(vm)
    flaky.fail = {"list"}
    assert vm.refetch() is False
    assert [t.title for t in vm.tasks] == ["Keep me"]
    assert rec.errors == [("error", "Error", "Failed to load tasks. Please try again.")]
    assert vm.loading is False


def test_sign_out_clears_and_refuses(vm, session, record_alerts):
    vm.add({"title": "Private"})
    session.sign_out()
    assert vm.tasks == []
    rec = record_alerts(vm)
    res = vm.add({"title": "After"})
    assert res.code == "auth_required"
    assert rec.errors == [("error", "Authentication required", "Please sign in to add tasks.")]


def test_switching_user_reloads_their_rows(vm, session):
    vm.add({"title": "Owner task"})
    session.sign_out()
    session.sign_up("second@example.com", "pw")
    assert vm.tasks == []
    vm.add({"title": "Second task"})
    session.sign_out()
    session.sign_in("owner@example.com", "secret")
    assert [t.title for t in vm.tasks] == ["Owner task"]


def test_cache_changed_carries_snapshot(vm):
    seen = []
    vm.cacheChanged.connect(seen.append)
    vm.add({"title": "One"})
    assert [t.title for t in seen[-1]] == ["One"]
    seen[-1].clear()
    assert len(vm.tasks) == 1
