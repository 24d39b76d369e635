"""Tests for the command-line interface."""

import json

import pytest

from src import cli
from src.vecstore.lock import release_held_lock


@pytest.fixture(autouse=True)
def no_signal_handlers(monkeypatch):
    monkeypatch.setattr(cli, "install_shutdown_handlers", lambda: None)
    monkeypatch.delenv("VECSTORE_MAX_STORE_SIZE", raising=False)
    monkeypatch.delenv("MAX_STORE_SIZE", raising=False)
    yield
    release_held_lock()


class TestCli:
    """Tests for cli.main."""

    @pytest.fixture
    def store_path(self, tmp_path):
        return tmp_path / "store.json"

    @pytest.fixture
    def run(self, tmp_path):
        def runner(*args):
            return cli.main(["--allowed-root", str(tmp_path), *args])
        return runner

    def test_init_creates_store(self, run, store_path, capsys):
        assert run("init", "--store", str(store_path), "--embedding-size", "3") == 0

        assert json.loads(store_path.read_text()) == {"embeddingSize": 3, "documents": []}
        assert "embedding size 3" in capsys.readouterr().out

    def test_add_and_search(self, run, store_path, capsys):
        run("init", "--store", str(store_path), "--embedding-size", "3")
        assert run("add", "--store", str(store_path), "--content", "doc-a", "--embedding", "[1, 0, 0]") == 0
        assert run("add", "--store", str(store_path), "--content", "doc-b", "--embedding", "[0, 1, 0]") == 0
        capsys.readouterr()

        assert run("search", "--store", str(store_path), "--embedding", "[1, 0, 0]", "--top-k", "1") == 0

        out = capsys.readouterr().out
        assert "Found 1 result(s)" in out
        assert "doc-a" in out
        assert "doc-b" not in out

    def test_search_empty_store(self, run, store_path, capsys):
        run("init", "--store", str(store_path), "--embedding-size", "2")
        capsys.readouterr()

        assert run("search", "--store", str(store_path), "--embedding", "[1, 0]") == 0
        assert "No results found." in capsys.readouterr().out

    def test_stats(self, run, store_path, capsys):
        run("init", "--store", str(store_path), "--embedding-size", "3")
        run("add", "--store", str(store_path), "--content", "doc", "--embedding", "[1, 2, 3]")
        capsys.readouterr()

        assert run("stats", "--store", str(store_path)) == 0

        out = capsys.readouterr().out
        assert "Embedding size: 3" in out
        assert "Documents: 1 / 10000" in out

    def test_store_error_exit_code(self, run, store_path):
        run("init", "--store", str(store_path), "--embedding-size", "3")
        before = store_path.read_bytes()

        assert run("add", "--store", str(store_path), "--content", "x", "--embedding", "[1, 2]") == 1
        assert store_path.read_bytes() == before

    def test_init_without_size_fails(self, run, store_path):
        assert run("init", "--store", str(store_path)) == 1
        assert not store_path.exists()

    def test_invalid_embedding_json(self, run, store_path):
        with pytest.raises(SystemExit) as exc_info:
            run("add", "--store", str(store_path), "--content", "x", "--embedding", "not-json")
        assert exc_info.value.code == 2
