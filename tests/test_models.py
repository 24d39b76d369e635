"""Tests for vecstore data models."""

import dataclasses

import pytest

from src.vecstore.models import Document, ScoredDocument, StoreData, current_timestamp_ms


class TestDocument:
    """Tests for Document."""

    def test_to_dict(self):
        doc = Document(content="hello", embedding=[1.0, 2.0], timestamp=123)
        assert doc.to_dict() == {"content": "hello", "embedding": [1.0, 2.0], "timestamp": 123}

    def test_from_dict(self):
        doc = Document.from_dict({"content": "hello", "embedding": [1, 2.5], "timestamp": 123})
        assert doc.content == "hello"
        assert doc.embedding == [1.0, 2.5]
        assert doc.timestamp == 123

    def test_is_immutable(self):
        doc = Document(content="hello", embedding=[1.0], timestamp=1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            doc.content = "changed"

    @pytest.mark.parametrize("data", [
        {"embedding": [1.0], "timestamp": 1},
        {"content": "x", "timestamp": 1},
        {"content": "x", "embedding": [1.0]},
        {"content": 5, "embedding": [1.0], "timestamp": 1},
        {"content": "x", "embedding": "1.0", "timestamp": 1},
        {"content": "x", "embedding": [1.0, "a"], "timestamp": 1},
        {"content": "x", "embedding": [1.0], "timestamp": "now"},
        ["content", "embedding"],
    ])
    def test_from_dict_rejects_malformed(self, data):
        with pytest.raises(ValueError):
            Document.from_dict(data)


class TestScoredDocument:
    """Tests for ScoredDocument."""

    def test_from_document(self):
        doc = Document(content="hello", embedding=[1.0], timestamp=7)
        scored = ScoredDocument.from_document(doc, 0.25)

        assert isinstance(scored, Document)
        assert scored.content == "hello"
        assert scored.timestamp == 7
        assert scored.score == 0.25

    def test_to_dict_includes_score(self):
        scored = ScoredDocument(content="a", embedding=[1.0], timestamp=1, score=0.5)
        assert scored.to_dict()["score"] == 0.5


class TestStoreData:
    """Tests for StoreData."""

    def test_to_dict_uses_file_keys(self):
        store = StoreData(
            embedding_size=2,
            documents=[Document(content="a", embedding=[1.0, 0.0], timestamp=1)],
        )
        assert store.to_dict() == {
            "embeddingSize": 2,
            "documents": [{"content": "a", "embedding": [1.0, 0.0], "timestamp": 1}],
        }

    def test_from_dict_round_trip(self):
        raw = {
            "embeddingSize": 2,
            "documents": [
                {"content": "a", "embedding": [1.0, 0.0], "timestamp": 1},
                {"content": "b", "embedding": [0.0, 1.0], "timestamp": 2},
            ],
        }
        assert StoreData.from_dict(raw).to_dict() == raw

    def test_from_dict_rejects_wrong_embedding_length(self):
        raw = {
            "embeddingSize": 3,
            "documents": [{"content": "a", "embedding": [1.0, 0.0], "timestamp": 1}],
        }
        with pytest.raises(ValueError, match=r"documents\[0\]"):
            StoreData.from_dict(raw)

    def test_with_document_returns_copy(self):
        store = StoreData(embedding_size=1)
        doc = Document(content="a", embedding=[1.0], timestamp=1)

        updated = store.with_document(doc)

        assert len(store) == 0
        assert len(updated) == 1
        assert updated.documents[0] is doc


def test_current_timestamp_ms_is_milliseconds():
    ts = current_timestamp_ms()
    assert isinstance(ts, int)
    # Later than 2020-01-01 in ms
    assert ts > 1_577_836_800_000
