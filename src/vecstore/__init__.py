"""
Vecstore package: a single-file document store with embedding search.

Documents (text plus a fixed-size embedding) are kept in one JSON file,
written atomically and guarded by an exclusive lock. Queries rank every
document by cosine similarity.
"""

from .models import (
    Document,
    ScoredDocument,
    StoreData,
)

from .config import (
    StoreConfig,
    LockConfig,
)

from .exceptions import (
    VectorStoreError,
    InvalidInputError,
    SchemaMismatchError,
    StoreNotFoundError,
    CorruptStoreError,
    StoreFullError,
    StoreIOError,
    LockError,
    LockTimeoutError,
    LockCompromisedError,
)

from .vector_utils import cosine_similarity

from .search import top_k_similar

from .persistence import load_store, save_store

from .lock import (
    FileLock,
    release_held_lock,
    install_shutdown_handlers,
)

from .path_policy import PathPolicy

from .observer import StoreObserver, LoggingObserver

from .store import VectorStore

from .api import (
    configure_store_path,
    add_document,
    search,
    get_default_store,
    reset_default_store,
)


__all__ = [
    # Models
    "Document",
    "ScoredDocument",
    "StoreData",

    # Config
    "StoreConfig",
    "LockConfig",

    # Exceptions
    "VectorStoreError",
    "InvalidInputError",
    "SchemaMismatchError",
    "StoreNotFoundError",
    "CorruptStoreError",
    "StoreFullError",
    "StoreIOError",
    "LockError",
    "LockTimeoutError",
    "LockCompromisedError",

    # Ranking
    "cosine_similarity",
    "top_k_similar",

    # Persistence
    "load_store",
    "save_store",

    # Locking
    "FileLock",
    "release_held_lock",
    "install_shutdown_handlers",

    # Collaborators
    "PathPolicy",
    "StoreObserver",
    "LoggingObserver",

    # Store
    "VectorStore",

    # Library surface
    "configure_store_path",
    "add_document",
    "search",
    "get_default_store",
    "reset_default_store",
]
