"""
Module-level library surface over a process-default store.

The default store is created on first use with configuration read from
the environment.
"""

import threading
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .config import StoreConfig
from .models import ScoredDocument
from .store import VectorStore

_default_store: Optional[VectorStore] = None
_default_store_guard = threading.Lock()


def get_default_store() -> VectorStore:
    """Return the process-default store, creating it on first call."""
    global _default_store
    with _default_store_guard:
        if _default_store is None:
            _default_store = VectorStore(StoreConfig.from_env())
        return _default_store


def reset_default_store(store: Optional[VectorStore] = None) -> None:
    """Replace (or drop) the process-default store."""
    global _default_store
    with _default_store_guard:
        if _default_store is not None and _default_store is not store:
            _default_store.close()
        _default_store = store


def configure_store_path(path: Union[str, Path], embedding_size: Optional[int] = None) -> None:
    """Configure the default store. See ``VectorStore.configure``."""
    get_default_store().configure(path, embedding_size)


def add_document(content: str, embedding: Sequence[float]) -> None:
    """Add a document to the default store. See ``VectorStore.add_document``."""
    get_default_store().add_document(content, embedding)


def search(embedding: Sequence[float], k: int = 5) -> List[ScoredDocument]:
    """Search the default store. See ``VectorStore.search``."""
    return get_default_store().search(embedding, k)
