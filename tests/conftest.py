"""Shared fixtures for the test suite."""

import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from database import RecordStore
from models import Record


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "received_data.db")


@pytest.fixture
def tmp_store(db_path):
    """Initialized RecordStore backed by a real SQLite DB in tmp_path."""
    store = RecordStore(db_path=db_path)
    store.initialize()
    yield store
    store.shutdown()


@pytest.fixture
def app(db_path):
    return create_app(db_path=db_path)


@pytest.fixture
def client(app):
    """TestClient with startup/shutdown hooks run around each test."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def sample_record():
    """Factory fixture: call with overrides to get a Record."""
    def _make(**overrides):
        data = {
            "id": "unique123",
            "origin": "web-app",
            "mime_data": "This is some text data.",
            "datetime": "2025-04-09T10:15:30.123Z",
        }
        data.update(overrides)
        return Record(**data)
    return _make


@pytest.fixture
def submission():
    """Factory fixture for POST /data bodies."""
    def _make(**overrides):
        body = {"id": "unique123", "origin": "web-app", "mime_data": "This is some text data."}
        body.update(overrides)
        return body
    return _make
