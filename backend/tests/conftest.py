"""Shared test configuration and fixtures."""

import pytest

from services.storage import InMemoryStore, set_store


@pytest.fixture
def store():
    """Fresh in-memory store, installed as the process-wide store for the test."""
    fresh = InMemoryStore()
    set_store(fresh)
    yield fresh
    set_store(None)
