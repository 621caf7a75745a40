"""Async per-user key-value store for persisted records.

Values are plain JSON data. There is no locking: concurrent
read-modify-write cycles for the same key resolve last-writer-wins.
"""

import asyncio
import copy
import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from config import settings

logger = logging.getLogger(__name__)


def interviews_key(user_id: str) -> str:
    return f"interviews_{user_id}"


def assessment_key(user_id: str) -> str:
    return f"assessment_{user_id}"


def profile_key(user_id: str) -> str:
    return f"profile_{user_id}"


def score_history_key(user_id: str) -> str:
    return f"score_history_{user_id}"


def readiness_score_key(user_id: str) -> str:
    return f"readiness_score_{user_id}"


def es_contents_key(user_id: str) -> str:
    return f"es_contents_{user_id}"


class KeyValueStore(ABC):
    """Base class for store backends.

    Subclasses must implement:
        - get(key): stored value or None
        - set(key, value): replace the stored value
    """

    backend_name: str = ""

    @abstractmethod
    async def get(self, key: str) -> Any:
        """Return the stored value, or None when the key is absent."""

    @abstractmethod
    async def set(self, key: str, value: Any) -> None:
        """Store a JSON-compatible value under key."""


class InMemoryStore(KeyValueStore):
    backend_name = "memory"

    def __init__(self) -> None:
        self._data: dict[str, Any] = {}

    async def get(self, key: str) -> Any:
        return copy.deepcopy(self._data.get(key))

    async def set(self, key: str, value: Any) -> None:
        self._data[key] = copy.deepcopy(value)


class JsonFileStore(KeyValueStore):
    """All keys in one JSON document on disk."""

    backend_name = "json"

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            return json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            logger.warning("Corrupt store file %s, treating as empty: %s", self.path, e)
            return {}

    def _dump(self, data: dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp.write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        tmp.replace(self.path)

    async def get(self, key: str) -> Any:
        data = await asyncio.to_thread(self._load)
        return data.get(key)

    async def set(self, key: str, value: Any) -> None:
        data = await asyncio.to_thread(self._load)
        data[key] = value
        await asyncio.to_thread(self._dump, data)


_store: KeyValueStore | None = None


def _create_store(backend: str) -> KeyValueStore:
    if backend == "memory":
        return InMemoryStore()
    elif backend == "json":
        return JsonFileStore(settings.store_path)
    else:
        raise ValueError(f"Unknown store backend: {backend}")


def get_store() -> KeyValueStore:
    """Process-wide store, created on first access from settings."""
    global _store
    if _store is None:
        _store = _create_store(settings.store_backend)
        logger.info("Using %s key-value store", _store.backend_name)
    return _store


def set_store(store: KeyValueStore | None) -> None:
    """Replace the process-wide store. None resets it. Useful for testing."""
    global _store
    _store = store
