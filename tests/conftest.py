import os
import pytest
import requests
from mongomock import MongoClient as MockClient

# Keep tests off any real database / data directory
os.environ.setdefault("STORE_BACKEND", "json")
os.environ.setdefault("MONGODB_URI", "")
os.environ.setdefault("MONGO_DB", "event_registration_test")
os.environ.setdefault("FLASK_ENV", "testing")

from eventreg import create_app  # noqa: E402
from eventreg.db import JsonFileStore  # noqa: E402
import eventreg.config as cfg  # noqa: E402


class _DummyResp:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._payload is None:
            raise ValueError("no JSON body")
        return self._payload


@pytest.fixture(autouse=True)
def _patch_cfg(monkeypatch):
    monkeypatch.setattr(cfg, "FLASK_ENV", "testing", raising=False)
    monkeypatch.setattr(cfg, "API_PREFIX", "", raising=False)
    monkeypatch.setattr(cfg, "API_BASE_URL", "http://localhost:3000", raising=False)
    yield


@pytest.fixture
def store(tmp_path):
    return JsonFileStore(str(tmp_path))


@pytest.fixture
def app(store):
    return create_app(store=store, testing=True)


@pytest.fixture
def app_client(app):
    with app.test_client() as c:
        yield c


@pytest.fixture
def make_event(app_client):
    def _make(title="Meetup", description="D", date="2025-01-01", location="HQ"):
        r = app_client.post("/events", json={
            "title": title, "description": description, "date": date, "location": location,
        })
        assert r.status_code == 200
        return r.get_json()["event"]
    return _make


@pytest.fixture
def mock_db():
    client = MockClient()
    return client, client["event_registration_test"]


@pytest.fixture
def fake_requests(monkeypatch):
    calls = []

    def install(mapper):
        def _make(method):
            def _send(url, json=None, headers=None, params=None, timeout=None):
                calls.append({"method": method, "url": url, "json": json})
                if callable(mapper):
                    payload, status = mapper(method, url, json)
                else:
                    payload, status = mapper.get((method, url), ({}, 200))
                return _DummyResp(status_code=status, payload=payload)
            return _send

        for method in ("get", "post", "put"):
            monkeypatch.setattr(f"requests.{method}", _make(method), raising=True)
        return calls

    return install
