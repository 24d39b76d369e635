"""
Similarity ranking over stored documents.
"""

from typing import List, Sequence

from .models import Document, ScoredDocument
from .vector_utils import cosine_similarity


def top_k_similar(
    query_embedding: Sequence[float],
    documents: Sequence[Document],
    k: int,
) -> List[ScoredDocument]:
    """
    Rank documents by cosine similarity to the query.

    Every document is scored (linear scan). Ties keep insertion order.

    Args:
        query_embedding: Query vector
        documents: Documents in insertion order
        k: Maximum number of results

    Returns:
        Up to ``k`` scored documents, best first
    """
    results = [
        ScoredDocument.from_document(doc, cosine_similarity(query_embedding, doc.embedding))
        for doc in documents
    ]

    # list.sort is stable, including with reverse=True
    results.sort(key=lambda x: x.score, reverse=True)
    return results[:k]
