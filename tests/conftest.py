"""Shared fixtures: a fresh store and a hand-cranked clock for every test."""

import pytest
from fastapi.testclient import TestClient

from organizeit.config import API_PREFIX
from organizeit.main import app
from organizeit.store import KVStore, StoreError

AUTH = {"Authorization": "Bearer demo-token"}

# 2024-06-10T14:00:00Z, inside business hours.
START = 1718028000.0


class FakeClock:
    def __init__(self, now: float = START) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FailingStore(KVStore):
    """A store whose backend is down: every read and write raises."""

    async def get(self, key):
        raise StoreError("connection refused")

    async def set(self, key, value):
        raise StoreError("connection refused")

    async def mset(self, items):
        raise StoreError("connection refused")

    async def delete(self, key):
        raise StoreError("connection refused")


def url(path: str) -> str:
    return f"{API_PREFIX}{path}"


@pytest.fixture(autouse=True)
def clock() -> FakeClock:
    fake = FakeClock()
    app.state.store = KVStore()
    app.state.clock = fake
    return fake


@pytest.fixture
def store() -> KVStore:
    return app.state.store


@pytest.fixture
def failing_store() -> FailingStore:
    app.state.store = FailingStore()
    return app.state.store


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)
