"""
Input and schema validation for the vecstore package.

All checks are pure and raise on failure.
"""

import math
from numbers import Real
from typing import Any, Sequence

from .exceptions import CorruptStoreError, InvalidInputError


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_content(content: Any) -> None:
    """Content must be a string with at least one non-whitespace character."""
    if not isinstance(content, str) or not content.strip():
        raise InvalidInputError("Content must be a non-empty string.")


def validate_embedding(embedding: Any, expected_size: int) -> None:
    """
    Check embedding shape and values.

    Args:
        embedding: Candidate embedding
        expected_size: Dimensions the store was configured with

    Raises:
        InvalidInputError: If the embedding is not a sequence of
            ``expected_size`` finite numbers
    """
    if not isinstance(embedding, (list, tuple)):
        raise InvalidInputError("Embedding must be an array.")
    if len(embedding) != expected_size:
        raise InvalidInputError(
            f"Embedding must be {expected_size} dimensions, but got {len(embedding)}."
        )
    for value in embedding:
        if isinstance(value, bool) or not isinstance(value, Real):
            raise InvalidInputError("Embedding must only contain finite valid numbers.")
        try:
            finite = math.isfinite(value)
        except (OverflowError, TypeError) as e:
            raise InvalidInputError("Embedding must only contain finite valid numbers.") from e
        if not finite:
            raise InvalidInputError("Embedding must only contain finite valid numbers.")


def validate_embedding_size(embedding_size: Any) -> None:
    if not _is_int(embedding_size) or embedding_size <= 0:
        raise InvalidInputError(
            f"Embedding size must be a positive integer, got {embedding_size!r}."
        )


def validate_k(k: Any) -> None:
    if not _is_int(k) or k <= 0:
        raise InvalidInputError("k must be a positive integer.")


def validate_store_schema(raw: Any) -> None:
    """
    Check the decoded store file has the expected top-level shape.

    Raises:
        CorruptStoreError: If ``embeddingSize`` is not a positive integer or
            ``documents`` is not a list
    """
    if not isinstance(raw, dict):
        raise CorruptStoreError("Invalid store file format: expected a JSON object.")
    if not _is_int(raw.get("embeddingSize")) or raw["embeddingSize"] <= 0:
        raise CorruptStoreError("Invalid store file format: missing or invalid 'embeddingSize'.")
    if not isinstance(raw.get("documents"), list):
        raise CorruptStoreError("Invalid store file format: missing or invalid 'documents'.")


def ensure_same_length(a: Sequence[float], b: Sequence[float]) -> None:
    if len(a) != len(b):
        raise ValueError(f"Vectors must have the same length ({len(a)} != {len(b)})")
