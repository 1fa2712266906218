"""Shared fixtures: in-memory store and an API client with pinned randomness."""

import pytest
from fastapi.testclient import TestClient

from backend.main import app, get_random_source, get_store
from backend.store import MemoryStore


def zero_jitter() -> float:
    """Random source that makes every (rng() - 0.5) jitter term vanish."""
    return 0.5


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_random_source] = lambda: zero_jitter
    yield TestClient(app)
    app.dependency_overrides.clear()
