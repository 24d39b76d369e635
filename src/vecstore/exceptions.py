"""
Custom exceptions for the vecstore package.
"""


class VectorStoreError(Exception):
    """Base exception for vector store errors."""
    pass


class InvalidInputError(VectorStoreError):
    """Caller supplied bad content, embedding, path or k."""
    pass


class SchemaMismatchError(VectorStoreError):
    """Existing store's embedding size disagrees with the caller's."""
    def __init__(self, message: str, stored_size: int = None, requested_size: int = None):
        super().__init__(message)
        self.stored_size = stored_size
        self.requested_size = requested_size


class StoreNotFoundError(VectorStoreError):
    """Store file is missing."""
    pass


class CorruptStoreError(VectorStoreError):
    """Store file cannot be parsed or fails schema validation."""
    pass


class StoreFullError(VectorStoreError):
    """Store has reached its size ceiling."""
    def __init__(self, message: str, max_size: int = None):
        super().__init__(message)
        self.max_size = max_size


class StoreIOError(VectorStoreError):
    """Filesystem read, write or rename failure."""
    pass


class LockError(VectorStoreError):
    """Error acquiring or holding the store lock."""
    pass


class LockTimeoutError(LockError):
    """Lock is held by someone else and retries are exhausted."""
    def __init__(self, message: str, attempts: int = None):
        super().__init__(message)
        self.attempts = attempts


class LockCompromisedError(LockError):
    """Held lock was removed or reclaimed externally."""
    pass
