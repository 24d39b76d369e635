"""
Data models for the vecstore package.
"""

from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Dict, List
import math
import time


def current_timestamp_ms() -> int:
    """Milliseconds since the epoch."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class Document:
    """A stored piece of text with its embedding."""
    content: str
    embedding: List[float]
    timestamp: int

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the on-disk representation."""
        return {
            "content": self.content,
            "embedding": list(self.embedding),
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Document":
        """
        Deserialize from the on-disk representation.

        Raises:
            ValueError: If a field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise ValueError(f"document must be an object, got {type(data).__name__}")
        missing = [key for key in ("content", "embedding", "timestamp") if key not in data]
        if missing:
            raise ValueError(f"document is missing field(s): {', '.join(missing)}")

        content = data["content"]
        embedding = data["embedding"]
        timestamp = data["timestamp"]

        if not isinstance(content, str):
            raise ValueError("document content must be a string")
        if not isinstance(embedding, list) or not all(
            isinstance(v, Real) and not isinstance(v, bool) for v in embedding
        ):
            raise ValueError("document embedding must be a list of numbers")
        try:
            values = [float(v) for v in embedding]
        except OverflowError as e:
            raise ValueError("document embedding contains an out-of-range number") from e
        if not all(math.isfinite(v) for v in values):
            raise ValueError("document embedding must only contain finite numbers")
        if isinstance(timestamp, bool) or not isinstance(timestamp, Real):
            raise ValueError("document timestamp must be a number")
        if isinstance(timestamp, float) and not math.isfinite(timestamp):
            raise ValueError("document timestamp must be finite")

        return cls(
            content=content,
            embedding=values,
            timestamp=int(timestamp),
        )


@dataclass(frozen=True)
class ScoredDocument(Document):
    """A document returned from similarity search, with its score."""
    score: float = 0.0

    @classmethod
    def from_document(cls, document: Document, score: float) -> "ScoredDocument":
        return cls(
            content=document.content,
            embedding=document.embedding,
            timestamp=document.timestamp,
            score=score,
        )

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["score"] = self.score
        return data


@dataclass
class StoreData:
    """The whole persisted store: embedding size plus documents in insertion order."""
    embedding_size: int
    documents: List[Document] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.documents)

    def with_document(self, document: Document) -> "StoreData":
        """Return a copy with ``document`` appended."""
        return StoreData(
            embedding_size=self.embedding_size,
            documents=self.documents + [document],
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the on-disk representation."""
        return {
            "embeddingSize": self.embedding_size,
            "documents": [doc.to_dict() for doc in self.documents],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StoreData":
        """
        Deserialize a schema-checked store object.

        Raises:
            ValueError: If a document cannot be decoded or has the wrong size
        """
        embedding_size = data["embeddingSize"]
        documents = []
        for i, raw_doc in enumerate(data["documents"]):
            try:
                doc = Document.from_dict(raw_doc)
            except ValueError as e:
                raise ValueError(f"documents[{i}]: {e}") from e
            if len(doc.embedding) != embedding_size:
                raise ValueError(
                    f"documents[{i}]: embedding has {len(doc.embedding)} dimensions, "
                    f"expected {embedding_size}"
                )
            documents.append(doc)
        return cls(embedding_size=embedding_size, documents=documents)
