"""Shared dependencies for API routes."""

from services.storage import KeyValueStore, get_store


def get_kv_store() -> KeyValueStore:
    return get_store()
