"""Vector indexing infrastructure for similarity search."""

from .base import ChunkVector, IndexType, SearchResult, VectorIndex
from .linear_search import LinearSearchIndex, cosine_similarity

__all__ = [
    "VectorIndex",
    "IndexType",
    "ChunkVector",
    "SearchResult",
    "LinearSearchIndex",
    "cosine_similarity",
]
