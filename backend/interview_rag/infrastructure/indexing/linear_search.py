"""Linear search vector index implementation."""

import math
from typing import List, Sequence

from ...modules.common.exceptions import DimensionMismatchError
from .base import ChunkVector, IndexType, SearchResult, VectorIndex


def cosine_similarity(vec1: Sequence[float], vec2: Sequence[float]) -> float:
    """Calculate cosine similarity between two vectors.

    Formula: cos(θ) = (A · B) / (||A|| ||B||)

    Args:
        vec1: First vector
        vec2: Second vector

    Returns:
        Similarity in [-1, 1]; 0.0 when either vector has zero magnitude or
        the score is not finite (NaN or overflowing components)

    Raises:
        DimensionMismatchError: If the vectors differ in length
    """
    if len(vec1) != len(vec2):
        raise DimensionMismatchError(expected=len(vec1), actual=len(vec2))

    dot_product = sum(a * b for a, b in zip(vec1, vec2))

    magnitude1 = math.sqrt(sum(a * a for a in vec1))
    magnitude2 = math.sqrt(sum(b * b for b in vec2))

    if magnitude1 == 0.0 or magnitude2 == 0.0:
        return 0.0

    similarity = dot_product / (magnitude1 * magnitude2)
    if not math.isfinite(similarity):
        return 0.0

    # Rounding can push parallel vectors slightly past 1.
    return max(-1.0, min(1.0, similarity))


class LinearSearchIndex(VectorIndex):
    """Linear search vector index using brute-force cosine similarity.

    Compares the query against every stored vector, so results are exact.
    Search is O(n * d) for n vectors of dimension d, which is fine for the
    few thousand chunks a curated knowledge base holds.

    Vectors with equal scores keep the order in which they were added.
    """

    @property
    def index_type(self) -> IndexType:
        """Return the type of this index."""
        return IndexType.LINEAR_SEARCH

    async def add_vectors(self, vectors: List[ChunkVector]) -> None:
        """Add multiple vectors, validating all of them before any is stored.

        Args:
            vectors: List of vectors to add to the index
        """
        for vector in vectors:
            self._validate_embedding(vector.embedding)

        self.vectors.extend(vectors)

    async def search(self, query_embedding: List[float], k: int) -> List[SearchResult]:
        """Search for the k most similar vectors using linear search.

        Args:
            query_embedding: The query vector
            k: Number of nearest neighbors to return; 0 or less returns nothing

        Returns:
            List of search results sorted by similarity (descending)
        """
        self._validate_embedding(query_embedding)

        if k <= 0 or not self.vectors:
            return []

        scored = [(vector, cosine_similarity(query_embedding, vector.embedding)) for vector in self.vectors]

        # list.sort is stable, so ties stay in insertion order.
        scored.sort(key=lambda item: item[1], reverse=True)

        return [
            SearchResult(
                chunk_id=vector.chunk_id,
                source=vector.source,
                content=vector.content,
                chunk_index=vector.chunk_index,
                similarity_score=score,
                page=vector.page,
                section=vector.section,
            )
            for vector, score in scored[:k]
        ]
