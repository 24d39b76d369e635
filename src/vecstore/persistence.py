"""
Whole-store persistence with atomic writes.

A store is one JSON file. Writes go to ``<path>.tmp`` first and are then
renamed over the target, so readers never see a partial file.
"""

import json
import logging
import os
from pathlib import Path
from typing import Union

from .exceptions import CorruptStoreError, StoreIOError, StoreNotFoundError
from .models import StoreData
from .validation import validate_store_schema

logger = logging.getLogger(__name__)

TEMP_SUFFIX = ".tmp"


def temp_path_for(path: Path) -> Path:
    return path.with_name(path.name + TEMP_SUFFIX)


def _reject_constant(name: str):
    raise ValueError(f"non-finite number {name} is not allowed")


def load_store(path: Union[str, Path]) -> StoreData:
    """
    Load and decode a store file.

    Args:
        path: Store file path

    Returns:
        Decoded store

    Raises:
        StoreNotFoundError: If the file does not exist
        CorruptStoreError: If the file is not valid JSON or fails validation
        StoreIOError: On any other read failure
    """
    path = Path(path)
    try:
        raw_text = path.read_text(encoding="utf-8")
    except FileNotFoundError as e:
        raise StoreNotFoundError(f"Store file does not exist: {path}") from e
    except UnicodeDecodeError as e:
        raise CorruptStoreError(f"Store file is not valid UTF-8: {path}") from e
    except OSError as e:
        raise StoreIOError(f"Failed to read store file {path}: {e}") from e

    try:
        raw = json.loads(raw_text, parse_constant=_reject_constant)
    except ValueError as e:
        raise CorruptStoreError(f"Store file is not valid JSON: {path}: {e}") from e

    validate_store_schema(raw)

    try:
        store = StoreData.from_dict(raw)
    except ValueError as e:
        raise CorruptStoreError(f"Invalid store file format: {e}") from e

    logger.debug(f"Loaded {len(store)} document(s) from {path}")
    return store


def atomic_write_text(path: Union[str, Path], text: str) -> None:
    """
    Write ``text`` to ``path`` via a sibling temp file and rename.

    Raises:
        StoreIOError: If writing or renaming fails; ``path`` is left untouched
    """
    path = Path(path)
    tmp_path = temp_path_for(path)
    try:
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except OSError as e:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise StoreIOError(f"Failed to save store file {path}: {e}") from e


def save_store(store: StoreData, path: Union[str, Path]) -> None:
    """
    Serialize the whole store and write it atomically.

    Args:
        store: Store to persist
        path: Target file path
    """
    text = json.dumps(store.to_dict(), indent=2, allow_nan=False)
    atomic_write_text(path, text)
    logger.debug(f"Saved {len(store)} document(s) to {path}")
