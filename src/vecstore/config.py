"""
Configuration for the vecstore package.
"""

import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

DEFAULT_MAX_STORE_SIZE = 10000
MAX_STORE_SIZE_ENV_VARS = ("VECSTORE_MAX_STORE_SIZE", "MAX_STORE_SIZE")


@dataclass
class LockConfig:
    """Configuration for the store file lock."""
    retries: int = 5
    factor: float = 2.0
    min_timeout_ms: int = 50
    max_timeout_ms: int = 500
    stale_ms: int = 30000

    def backoff_seconds(self, attempt: int) -> float:
        """Wait before retry number ``attempt`` (0-based)."""
        wait_ms = min(self.min_timeout_ms * (self.factor ** attempt), self.max_timeout_ms)
        return wait_ms / 1000.0


@dataclass
class StoreConfig:
    """Configuration for the vector store engine."""
    max_store_size: int = DEFAULT_MAX_STORE_SIZE
    lock: LockConfig = field(default_factory=LockConfig)

    def __post_init__(self):
        if isinstance(self.lock, dict):
            self.lock = LockConfig(**self.lock)
        if isinstance(self.max_store_size, bool) or not isinstance(self.max_store_size, int) \
                or self.max_store_size <= 0:
            raise ValueError(f"max_store_size must be a positive integer: {self.max_store_size!r}")

    @classmethod
    def from_env(cls) -> "StoreConfig":
        """Build config from environment variables."""
        return cls(max_store_size=_max_store_size_from_env())


def _max_store_size_from_env() -> int:
    for name in MAX_STORE_SIZE_ENV_VARS:
        raw = os.environ.get(name)
        if not raw:
            continue
        try:
            value = int(raw)
        except ValueError:
            logger.warning(f"Ignoring {name}={raw!r}: not an integer")
            return DEFAULT_MAX_STORE_SIZE
        if value <= 0:
            logger.warning(f"Ignoring {name}={raw!r}: must be positive")
            return DEFAULT_MAX_STORE_SIZE
        return value
    return DEFAULT_MAX_STORE_SIZE
