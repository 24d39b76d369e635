"""
Failure observers for the vecstore package.

The store reports every failed operation to an observer. Observers must
never affect the outcome of the operation, so the store swallows anything
they raise.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

logger = logging.getLogger(__name__)

SEVERITY_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


class StoreObserver(ABC):
    """Abstract base class for receivers of store messages."""

    @abstractmethod
    def notify(self, severity: str, message: str, cause: Optional[BaseException] = None) -> None:
        """
        Receive a message from the store.

        Args:
            severity: "debug", "info", "warning", "error" or "critical"
            message: Human-readable description
            cause: Exception that triggered the message, if any
        """
        pass


class LoggingObserver(StoreObserver):
    """Forwards store messages to the ``logging`` module."""

    def __init__(self, log: Optional[logging.Logger] = None):
        self._logger = log or logger

    def notify(self, severity: str, message: str, cause: Optional[BaseException] = None) -> None:
        level = SEVERITY_LEVELS.get(severity.lower(), logging.ERROR)
        if cause is not None:
            exc_info = cause if self._logger.isEnabledFor(logging.DEBUG) else None
            self._logger.log(level, f"{message} | {cause}", exc_info=exc_info)
        else:
            self._logger.log(level, message)
