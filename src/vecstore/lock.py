"""
Exclusive advisory lock on a store file.

The lock is a directory named ``<store path>.lock``. ``os.mkdir`` either
creates it or fails, which gives atomic create-or-fail semantics without
any platform-specific locking API. A lock directory older than the stale
threshold is treated as left behind by a crashed holder and reclaimed.

At most one lock is held per process. It is recorded in a module-level
slot so that shutdown hooks can release it even while the operation that
acquired it is still on the stack.
"""

import atexit
import logging
import os
import signal
import sys
import threading
import time
from pathlib import Path
from typing import Iterable, Optional, Tuple, Union

from .config import LockConfig
from .exceptions import LockCompromisedError, LockError, LockTimeoutError

logger = logging.getLogger(__name__)

LOCK_SUFFIX = ".lock"

# RLock: a signal handler may run while the main thread is inside the guard
_slot_guard = threading.RLock()
_held_lock: Optional["FileLock"] = None


def held_lock() -> Optional["FileLock"]:
    """Return the lock currently held by this process, if any."""
    with _slot_guard:
        return _held_lock


def _arm(lock: "FileLock") -> None:
    global _held_lock
    with _slot_guard:
        if _held_lock is not None and _held_lock is not lock:
            raise LockError(
                f"Another store lock is already held by this process: {_held_lock.lock_path}"
            )
        _held_lock = lock


def _disarm(lock: "FileLock") -> None:
    global _held_lock
    with _slot_guard:
        if _held_lock is lock:
            _held_lock = None


def release_held_lock() -> None:
    """Force-release the lock held by this process. Safe to call at any time."""
    lock = held_lock()
    if lock is not None:
        logger.debug(f"Force-releasing held lock {lock.lock_path}")
        lock.release()


def install_shutdown_handlers(
    signals: Iterable[int] = (signal.SIGINT, signal.SIGTERM),
) -> None:
    """
    Release the held lock when the process is asked to stop.

    Must be called from the main thread. The handler releases the lock and
    exits with ``128 + signum``.
    """
    def _handler(signum, frame):
        logger.info(f"Received signal {signum}, releasing store lock")
        release_held_lock()
        sys.exit(128 + signum)

    for signum in signals:
        signal.signal(signum, _handler)


atexit.register(release_held_lock)


class FileLock:
    """Stale-aware exclusive lock keyed on a store file path."""

    def __init__(self, path: Union[str, Path], config: Optional[LockConfig] = None):
        """
        Initialize lock.

        Args:
            path: Store file the lock protects (need not exist)
            config: Retry, backoff and staleness settings
        """
        self.path = Path(path).resolve()
        self.lock_path = self.path.with_name(self.path.name + LOCK_SUFFIX)
        self.config = config or LockConfig()
        self._identity: Optional[Tuple[int, int]] = None

    @property
    def is_held(self) -> bool:
        return self._identity is not None

    def acquire(self) -> "FileLock":
        """
        Acquire the lock, retrying with exponential backoff.

        Raises:
            LockTimeoutError: If the lock is still held after all retries
            LockError: If this process already holds a lock or the lock
                directory cannot be created
        """
        if self.is_held:
            raise LockError(f"Lock already held: {self.lock_path}")
        with _slot_guard:
            if _held_lock is not None:
                raise LockError(
                    f"Another store lock is already held by this process: {_held_lock.lock_path}"
                )

        retry = 0
        while True:
            try:
                os.mkdir(self.lock_path)
                break
            except FileExistsError:
                if self._reclaim_if_stale():
                    continue
                if retry >= self.config.retries:
                    raise LockTimeoutError(
                        f"Store file is locked by another process: {self.path}",
                        attempts=retry + 1,
                    )
                wait = self.config.backoff_seconds(retry)
                logger.debug(f"Lock {self.lock_path} busy, retry {retry + 1} in {wait:.3f}s")
                time.sleep(wait)
                retry += 1
            except OSError as e:
                raise LockError(f"Failed to create lock {self.lock_path}: {e}") from e

        try:
            self._identity = self._stat_identity()
        except OSError as e:
            raise LockCompromisedError(
                f"Lock on store file was compromised right after acquisition: {e}"
            ) from e
        _arm(self)
        logger.debug(f"Acquired lock {self.lock_path}")
        return self

    def check(self) -> None:
        """
        Verify the lock is still ours.

        Raises:
            LockCompromisedError: If the lock directory vanished or was replaced
        """
        if not self.is_held:
            raise LockError(f"Lock is not held: {self.lock_path}")
        try:
            identity = self._stat_identity()
        except FileNotFoundError as e:
            raise LockCompromisedError(
                "Lock on store file was compromised: lock was removed externally."
            ) from e
        except OSError as e:
            raise LockCompromisedError(f"Lock on store file was compromised: {e}") from e
        if identity != self._identity:
            raise LockCompromisedError(
                "Lock on store file was compromised: lock was reclaimed by another process."
            )

    def release(self) -> None:
        """Release the lock. Failures are logged and suppressed."""
        if not self.is_held:
            return
        try:
            if self._stat_identity() == self._identity:
                os.rmdir(self.lock_path)
            else:
                logger.debug(f"Not removing {self.lock_path}: no longer ours")
        except OSError as e:
            logger.debug(f"Ignoring error releasing lock {self.lock_path}: {e}")
        finally:
            self._identity = None
            _disarm(self)
        logger.debug(f"Released lock {self.lock_path}")

    def _stat_identity(self) -> Tuple[int, int]:
        st = os.stat(self.lock_path)
        return (st.st_ino, st.st_mtime_ns)

    def _reclaim_if_stale(self) -> bool:
        """Remove the lock directory if it is stale. Returns True if a retry should happen now."""
        try:
            st = os.stat(self.lock_path)
        except FileNotFoundError:
            # Released between mkdir and stat
            return True
        except OSError as e:
            raise LockError(f"Failed to inspect lock {self.lock_path}: {e}") from e

        age_ms = (time.time() - st.st_mtime) * 1000
        if age_ms < self.config.stale_ms:
            return False

        logger.warning(f"Reclaiming stale lock {self.lock_path} (age {age_ms:.0f}ms)")
        try:
            os.rmdir(self.lock_path)
        except FileNotFoundError:
            pass
        except OSError as e:
            raise LockError(f"Failed to remove stale lock {self.lock_path}: {e}") from e
        return True

    def __enter__(self):
        return self.acquire()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()
        return False
