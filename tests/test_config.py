# tests/test_config.py
from __future__ import annotations

import json
from pathlib import Path

from garmentz.utils import config
from garmentz.viewmodels.entity_viewmodel import NotificationPolicy


def test_missing_file_gives_defaults(tmp_path: Path):
    s = config.load_settings(tmp_path / "nope.json")
    assert s == config.defaults()
    assert s["orders"]["recent_limit"] == 5


def test_partial_file_merges_deep(tmp_path: Path):
    p = tmp_path / "settings.json"
    p.write_text(json.dumps({"notifications": {"policies": {"tasks": {"on_add": True}}}}), encoding="utf-8")
    s = config.load_settings(p)
    assert s["notifications"]["policies"]["tasks"]["on_add"] is True
    assert s["notifications"]["policies"]["tasks"]["on_status_change"] is False
    assert s["notifications"]["policies"]["orders"]["on_add"] is True
    assert s["notifications"]["preview_limit"] == 5


def test_corrupt_file_falls_back(tmp_path: Path):
    p = tmp_path / "settings.json"
    p.write_text("{not json", encoding="utf-8")
    assert config.load_settings(p) == config.defaults()


def test_save_then_load(tmp_path: Path):
    p = tmp_path / "nested" / "settings.json"
    s = config.defaults()
    s["main_window"]["width"] = 1600
    config.save_settings(s, p)
    assert config.load_settings(p)["main_window"]["width"] == 1600


def test_defaults_are_independent_copies():
    a = config.defaults()
    a["orders"]["recent_limit"] = 99
    assert config.defaults()["orders"]["recent_limit"] == 5


def test_database_path_precedence(tmp_path: Path, monkeypatch):
    monkeypatch.delenv("GARMENTZ_DB", raising=False)
    s = config.defaults()
    assert config.database_path(s) == config.DB_PATH
    s["database"]["path"] = str(tmp_path / "custom.db")
    assert config.database_path(s) == tmp_path / "custom.db"
    monkeypatch.setenv("GARMENTZ_DB", str(tmp_path / "env.db"))
    assert config.database_path(s) == tmp_path / "env.db"


def test_policy_from_settings():
    s = config.defaults()
    assert NotificationPolicy.from_settings(s, "orders") == NotificationPolicy(on_add=True, on_status_change=True)
    assert NotificationPolicy.from_settings(s, "tasks") == NotificationPolicy()
    assert NotificationPolicy.from_settings({}, "orders") == NotificationPolicy()
