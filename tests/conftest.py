from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient

from task_api.main import app
from task_api.repositories import InMemoryTaskStore, get_store


class FakeClock:
    """Deterministic clock that advances one second per reading."""

    def __init__(self, start=None):
        self.current = start or datetime(2026, 2, 18, 9, 0, 0, tzinfo=timezone.utc)

    def __call__(self):
        self.current = self.current + timedelta(seconds=1)
        return self.current


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def store(clock):
    return InMemoryTaskStore(clock=clock)


@pytest.fixture()
def client():
    # Fresh store per test so ids and listings do not leak between tests
    fresh = InMemoryTaskStore()
    app.dependency_overrides[get_store] = lambda: fresh
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
