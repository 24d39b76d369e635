"""
Vector store engine.

Owns the configured store path and the cached store, and runs every
operation through the same sequence: validate, lock, re-read from disk,
modify or scan, persist, release.
"""

import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

from .config import StoreConfig
from .exceptions import (
    InvalidInputError,
    SchemaMismatchError,
    StoreFullError,
    VectorStoreError,
)
from .lock import FileLock
from .models import Document, ScoredDocument, StoreData, current_timestamp_ms
from .observer import LoggingObserver, StoreObserver
from .path_policy import PathPolicy
from .persistence import load_store, save_store
from .search import top_k_similar
from .validation import (
    validate_content,
    validate_embedding,
    validate_embedding_size,
    validate_k,
)

logger = logging.getLogger(__name__)

PathAuthorizer = Callable[[Union[str, Path]], bool]


class VectorStore:
    """Single-file document store with exhaustive cosine-similarity search."""

    def __init__(
        self,
        config: Optional[StoreConfig] = None,
        path_policy: Optional[PathAuthorizer] = None,
        observer: Optional[StoreObserver] = None,
    ):
        """
        Initialize vector store.

        Args:
            config: Store configuration
            path_policy: Callable deciding whether a store path is allowed
                (defaults to ``PathPolicy()``)
            observer: Receives a message for every failed operation
        """
        self.config = config or StoreConfig()
        self._path_policy = path_policy if path_policy is not None else PathPolicy()
        self._observer = observer or LoggingObserver()
        self._path: Optional[Path] = None
        self._cache: Optional[StoreData] = None
        self._closed = False

    @property
    def path(self) -> Optional[Path]:
        return self._path

    def _check_closed(self) -> None:
        """Check if store is closed."""
        if self._closed:
            raise VectorStoreError("Store is closed")

    def _require_path(self) -> Path:
        if self._path is None:
            raise InvalidInputError(
                "Store path is not configured. Please call configure(path) before using the store."
            )
        return self._path

    def _notify(self, message: str, error: BaseException) -> None:
        try:
            self._observer.notify("error", message, error)
        except Exception as e:
            logger.debug(f"Observer failed while reporting {message!r}: {e}")

    def _lock(self, path: Path) -> FileLock:
        return FileLock(path, self.config.lock)

    def _get_store_data(self) -> StoreData:
        """Return the cached store, loading it if needed."""
        path = self._require_path()
        if self._cache is None:
            self._cache = load_store(path)
        return self._cache

    # Configuration

    def configure(self, path: Union[str, Path], embedding_size: Optional[int] = None) -> None:
        """
        Point the engine at a store file, creating it if needed.

        Args:
            path: Store file path
            embedding_size: Required when the file does not exist; must match
                the stored value when it does

        Raises:
            InvalidInputError: If the path is not allowed or the embedding
                size is missing or invalid for a new store
            SchemaMismatchError: If the existing store has a different size
            CorruptStoreError: If the existing file is not a valid store
        """
        self._check_closed()
        try:
            self._configure(Path(path), embedding_size)
        except VectorStoreError as e:
            self._notify(f"Failed to configure store path {path}", e)
            raise

    def _configure(self, path: Path, embedding_size: Optional[int]) -> None:
        self._cache = None

        if not self._path_policy(path):
            raise InvalidInputError(
                f"Invalid store path: {path}. Path is not permitted by the store path policy."
            )

        if path.exists():
            existing = load_store(path)
            if embedding_size is not None and existing.embedding_size != embedding_size:
                raise SchemaMismatchError(
                    f"Embedding size mismatch: store file has embedding size "
                    f"{existing.embedding_size}, but {embedding_size} was provided.",
                    stored_size=existing.embedding_size,
                    requested_size=embedding_size,
                )
            self._path = path
            logger.debug(f"Configured existing store {path} ({len(existing)} documents)")
            return

        if embedding_size is None:
            raise InvalidInputError("Embedding size is required to initialize a new store.")
        validate_embedding_size(embedding_size)

        store = StoreData(embedding_size=embedding_size)
        save_store(store, path)
        self._path = path
        self._cache = store
        logger.info(f"Created new store {path} with embedding size {embedding_size}")

    # Document operations

    def add_document(self, content: str, embedding: Sequence[float]) -> None:
        """
        Append a document to the store.

        Args:
            content: Document text
            embedding: Embedding matching the store's embedding size

        Raises:
            InvalidInputError: If content or embedding is invalid
            StoreFullError: If the store has reached ``max_store_size``
            LockError: If the lock cannot be acquired or is compromised
            StoreIOError: If the store cannot be written
        """
        self._check_closed()
        try:
            self._add_document(content, embedding)
        except VectorStoreError as e:
            self._notify("Failed to add document", e)
            raise

    def _add_document(self, content: str, embedding: Sequence[float]) -> None:
        validate_content(content)
        cached = self._get_store_data()
        validate_embedding(embedding, cached.embedding_size)
        self._check_capacity(cached)

        path = self._require_path()
        with self._lock(path) as lock:
            # The file may have changed since the cache was filled
            current = load_store(path)
            validate_embedding(embedding, current.embedding_size)
            self._check_capacity(current)

            document = Document(
                content=content,
                embedding=[float(v) for v in embedding],
                timestamp=current_timestamp_ms(),
            )
            updated = current.with_document(document)

            lock.check()
            save_store(updated, path)
            self._cache = updated

        logger.debug(f"Added document to {path} ({len(updated)} total)")

    def _check_capacity(self, store: StoreData) -> None:
        if len(store) >= self.config.max_store_size:
            raise StoreFullError(
                f"Store is too large ({len(store)} documents, limit "
                f"{self.config.max_store_size}). Consider using a database for better performance.",
                max_size=self.config.max_store_size,
            )

    # Search operations

    def search(self, embedding: Sequence[float], k: int = 5) -> List[ScoredDocument]:
        """
        Find the ``k`` documents most similar to ``embedding``.

        Args:
            embedding: Query embedding
            k: Maximum number of results

        Returns:
            Scored documents, most similar first

        Raises:
            InvalidInputError: If k or the embedding is invalid
            LockError: If the lock cannot be acquired or is compromised
            StoreIOError: If the store cannot be read
        """
        self._check_closed()
        try:
            return self._search(embedding, k)
        except VectorStoreError as e:
            self._notify("Failed to search store", e)
            raise

    def _search(self, embedding: Sequence[float], k: int) -> List[ScoredDocument]:
        validate_k(k)
        validate_embedding(embedding, self._get_store_data().embedding_size)

        path = self._require_path()
        with self._lock(path) as lock:
            current = load_store(path)
            validate_embedding(embedding, current.embedding_size)
            results = top_k_similar(embedding, current.documents, k)
            lock.check()
            self._cache = current

        logger.debug(f"Search over {len(current)} documents returned {len(results)} result(s)")
        return results

    def get_stats(self) -> Dict[str, Any]:
        """Get store statistics."""
        self._check_closed()
        try:
            path = self._require_path()
            with self._lock(path):
                current = load_store(path)
                self._cache = current
        except VectorStoreError as e:
            self._notify("Failed to read store statistics", e)
            raise

        return {
            "path": str(path),
            "embedding_size": current.embedding_size,
            "document_count": len(current),
            "max_store_size": self.config.max_store_size,
        }

    def close(self) -> None:
        """Close the store."""
        self._closed = True
        self._cache = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
