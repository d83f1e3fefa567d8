from __future__ import annotations

import json
import logging
import os

from eventreg import config
from eventreg.db import JsonFileStore, get_store, next_id


def test_open_creates_empty_documents(tmp_path):
    store = JsonFileStore(str(tmp_path / "data"))
    store.open()
    for name in (config.EVENTS_FILE, config.REGISTRATIONS_FILE):
        with open(tmp_path / "data" / name) as f:
            assert json.load(f) == []


def test_open_keeps_existing_documents(store):
    store.save(config.EVENTS, [{"id": 1, "title": "Keep"}])
    store.open()
    assert store.load(config.EVENTS) == [{"id": 1, "title": "Keep"}]


def test_load_missing_document_is_empty(store):
    assert store.load(config.REGISTRATIONS) == []


def test_load_unreadable_document_logs_and_returns_empty(store, caplog):
    with open(store.path_for(config.EVENTS), "w") as f:
        f.write("[{broken")
    with caplog.at_level(logging.ERROR):
        assert store.load(config.EVENTS) == []
    assert "Error loading events" in caplog.text


def test_load_non_array_document(store, caplog):
    with open(store.path_for(config.EVENTS), "w") as f:
        json.dump({"id": 1}, f)
    with caplog.at_level(logging.ERROR):
        assert store.load(config.EVENTS) == []
    assert "not an array" in caplog.text


def test_save_failure_returns_false(tmp_path, caplog):
    store = JsonFileStore(str(tmp_path / "missing-dir"))
    with caplog.at_level(logging.ERROR):
        assert store.save(config.EVENTS, []) is False
    assert "Error saving events" in caplog.text


def test_save_pretty_prints(store):
    assert store.save(config.REGISTRATIONS, [{"id": 1, "email": "a@x.com"}]) is True
    with open(store.path_for(config.REGISTRATIONS)) as f:
        assert f.read() == json.dumps([{"id": 1, "email": "a@x.com"}], indent=2)


def test_custom_filenames(tmp_path):
    store = JsonFileStore(str(tmp_path), files={config.EVENTS: "ev.json"})
    store.open()
    assert os.path.exists(tmp_path / "ev.json")
    assert os.path.exists(tmp_path / config.REGISTRATIONS_FILE)


def test_get_and_put(store):
    store.open()
    assert store.put(config.EVENTS, {"id": 1, "title": "A"})
    assert store.put(config.EVENTS, {"id": 2, "title": "B"})
    assert store.put(config.EVENTS, {"id": 1, "title": "A2"})
    assert store.list(config.EVENTS) == [{"id": 1, "title": "A2"}, {"id": 2, "title": "B"}]
    assert store.get(config.EVENTS, 2) == {"id": 2, "title": "B"}
    assert store.get(config.EVENTS, 3) is None


def test_next_id():
    assert next_id([]) == 1
    assert next_id([{"id": 3}, {"id": 1}]) == 4


def test_get_store_from_config(monkeypatch, tmp_path):
    monkeypatch.setattr(config, "DATA_DIR", str(tmp_path))
    store = get_store("json")
    assert isinstance(store, JsonFileStore)
    assert store.data_dir == str(tmp_path)
    assert store.ping() is True
