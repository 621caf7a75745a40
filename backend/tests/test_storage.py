import pytest

from config import settings
from services import storage
from services.storage import InMemoryStore, JsonFileStore, get_store, set_store


class TestInMemoryStore:
    @pytest.mark.asyncio
    async def test_missing_key(self):
        assert await InMemoryStore().get("interviews_u1") is None

    @pytest.mark.asyncio
    async def test_set_then_get(self):
        kv = InMemoryStore()
        await kv.set("profile_u1", {"name": "山田"})
        assert await kv.get("profile_u1") == {"name": "山田"}

    @pytest.mark.asyncio
    async def test_values_are_copied(self):
        kv = InMemoryStore()
        value = [{"id": "a"}]
        await kv.set("k", value)
        value.append({"id": "b"})
        loaded = await kv.get("k")
        loaded.append({"id": "c"})
        assert await kv.get("k") == [{"id": "a"}]


class TestJsonFileStore:
    @pytest.mark.asyncio
    async def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "store.json"
        await JsonFileStore(path).set("profile_u1", {"name": "山田"})
        assert await JsonFileStore(path).get("profile_u1") == {"name": "山田"}

    @pytest.mark.asyncio
    async def test_missing_file(self, tmp_path):
        assert await JsonFileStore(tmp_path / "none.json").get("k") is None

    @pytest.mark.asyncio
    async def test_creates_parent_dirs(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "store.json"
        await JsonFileStore(path).set("k", 1)
        assert path.exists()

    @pytest.mark.asyncio
    async def test_corrupt_file_treated_as_empty(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{not json", encoding="utf-8")
        kv = JsonFileStore(path)
        assert await kv.get("k") is None
        await kv.set("k", [1, 2])
        assert await kv.get("k") == [1, 2]

    @pytest.mark.asyncio
    async def test_keys_independent(self, tmp_path):
        kv = JsonFileStore(tmp_path / "store.json")
        await kv.set("a", 1)
        await kv.set("b", 2)
        assert await kv.get("a") == 1
        assert await kv.get("b") == 2


class TestStoreSingleton:
    def setup_method(self):
        set_store(None)

    def teardown_method(self):
        set_store(None)

    def test_default_backend(self):
        kv = get_store()
        assert isinstance(kv, InMemoryStore)
        assert get_store() is kv

    def test_json_backend(self, monkeypatch, tmp_path):
        monkeypatch.setattr(settings, "store_backend", "json")
        monkeypatch.setattr(settings, "store_path", str(tmp_path / "store.json"))
        kv = get_store()
        assert isinstance(kv, JsonFileStore)
        assert kv.backend_name == "json"

    def test_unknown_backend(self, monkeypatch):
        monkeypatch.setattr(settings, "store_backend", "bogus")
        with pytest.raises(ValueError):
            get_store()

    def test_set_store_overrides(self):
        kv = InMemoryStore()
        set_store(kv)
        assert get_store() is kv


def test_key_helpers():
    assert storage.interviews_key("u1") == "interviews_u1"
    assert storage.assessment_key("u1") == "assessment_u1"
    assert storage.profile_key("u1") == "profile_u1"
    assert storage.score_history_key("u1") == "score_history_u1"
    assert storage.readiness_score_key("u1") == "readiness_score_u1"
    assert storage.es_contents_key("u1") == "es_contents_u1"
