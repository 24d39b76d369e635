"""Tests for the module-level library surface."""

import pytest

from src import vecstore
from src.vecstore import api
from src.vecstore.config import LockConfig, StoreConfig
from src.vecstore.exceptions import InvalidInputError, SchemaMismatchError
from src.vecstore.path_policy import PathPolicy
from src.vecstore.store import VectorStore


@pytest.fixture
def default_store(tmp_path):
    store = VectorStore(
        StoreConfig(lock=LockConfig(retries=1, min_timeout_ms=1, max_timeout_ms=2)),
        path_policy=PathPolicy(allowed_root=tmp_path),
    )
    api.reset_default_store(store)
    yield store
    api.reset_default_store()


class TestLibrarySurface:
    """Tests for configure_store_path, add_document and search."""

    def test_scenario(self, default_store, tmp_path):
        path = tmp_path / "store.json"

        vecstore.configure_store_path(str(path), 3)
        vecstore.add_document("doc-a", [1, 0, 0])
        vecstore.add_document("doc-b", [0, 1, 0])
        results = vecstore.search([1, 0, 0], k=1)

        assert [r.content for r in results] == ["doc-a"]

    def test_uses_default_store(self, default_store):
        assert api.get_default_store() is default_store

    def test_schema_mismatch(self, default_store, tmp_path):
        path = tmp_path / "store.json"
        api.configure_store_path(path, 3)

        with pytest.raises(SchemaMismatchError):
            api.configure_store_path(path, 5)

    def test_dimension_mismatch(self, default_store, tmp_path):
        path = tmp_path / "store.json"
        api.configure_store_path(path, 3)
        before = path.read_bytes()

        with pytest.raises(InvalidInputError):
            api.add_document("x", [1, 2])

        assert path.read_bytes() == before

    def test_search_default_k(self, default_store, tmp_path):
        api.configure_store_path(tmp_path / "store.json", 2)
        for i in range(7):
            api.add_document(f"doc-{i}", [1.0, float(i)])

        assert len(api.search([1.0, 0.0])) == 5


class TestDefaultStore:
    """Tests for the process-default store lifecycle."""

    @pytest.fixture(autouse=True)
    def reset(self):
        api.reset_default_store()
        yield
        api.reset_default_store()

    def test_created_once(self):
        assert api.get_default_store() is api.get_default_store()

    def test_reads_config_from_env(self, monkeypatch):
        monkeypatch.setenv("VECSTORE_MAX_STORE_SIZE", "7")

        assert api.get_default_store().config.max_store_size == 7

    def test_reset_closes_previous(self):
        previous = api.get_default_store()

        api.reset_default_store()

        assert api.get_default_store() is not previous
        assert previous._closed is True
