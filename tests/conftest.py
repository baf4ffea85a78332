"""Pytest configuration and shared fixtures for HabitFlow tests.

Provides an isolated SQLite-backed key/value store per test, a controllable
clock, and a Flask app/client wired to both.
"""

from __future__ import annotations

import tempfile
from datetime import date, timedelta
from pathlib import Path

import pytest
from sqlmodel import SQLModel, create_engine

import habitflow.models  # noqa: F401  # register tables on the metadata
from habitflow import create_app
from habitflow.config import TestConfig
from habitflow.extensions import EXTENSION_KEY
from habitflow.infra.database import create_session_factory
from habitflow.infra.store import SQLModelKeyValueStore
from habitflow.services.persistence import SnapshotStore
from habitflow.services.session import AppSession

# Monday
TODAY = date(2026, 10, 19)


class FakeClock:
    """Callable clock returning a fixed local date that tests can move."""

    def __init__(self, day: date = TODAY):
        self.day = day

    def __call__(self) -> date:
        return self.day

    def advance(self, days: int = 1) -> date:
        self.day = self.day + timedelta(days=days)
        return self.day


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture(scope="function")
def db_engine():
    """Create an isolated SQLite database file for each test."""

    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        db_path = Path(f.name)

    engine = create_engine(f"sqlite:///{db_path}", echo=False)
    SQLModel.metadata.create_all(engine)

    yield engine

    engine.dispose()
    db_path.unlink(missing_ok=True)


@pytest.fixture
def session_factory(db_engine):
    return create_session_factory(db_engine)


@pytest.fixture
def kv_store(session_factory) -> SQLModelKeyValueStore:
    return SQLModelKeyValueStore(session_factory)


@pytest.fixture
def snapshot_store(kv_store) -> SnapshotStore:
    return SnapshotStore(kv_store)


@pytest.fixture
def app_session(snapshot_store, clock) -> AppSession:
    """Session controller over the temporary store, nobody logged in yet."""

    return AppSession(snapshot_store, clock=clock)


@pytest.fixture
def logged_in(app_session) -> AppSession:
    app_session.login("alice")
    return app_session


# =============================================================================
# Flask Fixtures
# =============================================================================


@pytest.fixture
def config(tmp_path, monkeypatch) -> TestConfig:
    monkeypatch.setenv("HABITFLOW_DATA_DIR", str(tmp_path))
    monkeypatch.delenv("HABITFLOW_DATABASE_URL", raising=False)
    monkeypatch.delenv("HABITFLOW_HISTORY_RETENTION_DAYS", raising=False)
    return TestConfig()


@pytest.fixture
def app(config, clock):
    application = create_app(config=config, clock=clock)
    application.config.update(TESTING=True)
    yield application
    application.extensions[EXTENSION_KEY]["engine"].dispose()


@pytest.fixture
def client(app):
    with app.test_client() as test_client:
        yield test_client


@pytest.fixture
def auth_client(client):
    """Test client with ``alice`` logged in."""

    response = client.post("/auth/login", json={"name": "alice"})
    assert response.status_code == 200
    return client
