"""
Vector math helpers.
"""

from typing import Sequence

import numpy as np

from .validation import ensure_same_length


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """
    Cosine similarity between two equal-length vectors.

    Returns 0.0 when either vector has zero norm.

    Raises:
        ValueError: If the vectors differ in length
    """
    ensure_same_length(a, b)

    vec_a = np.asarray(a, dtype=np.float64)
    vec_b = np.asarray(b, dtype=np.float64)
    scale_a = np.max(np.abs(vec_a)) if vec_a.size else 0.0
    scale_b = np.max(np.abs(vec_b)) if vec_b.size else 0.0
    if scale_a == 0 or scale_b == 0:
        return 0.0

    # Scale to max-abs 1 so the norms cannot overflow or underflow
    vec_a = vec_a / scale_a
    vec_b = vec_b / scale_b
    norm_a = np.linalg.norm(vec_a)
    norm_b = np.linalg.norm(vec_b)

    return float(np.dot(vec_a, vec_b) / (norm_a * norm_b))
