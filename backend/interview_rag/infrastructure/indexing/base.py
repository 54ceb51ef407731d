"""Abstract base classes for vector indexing algorithms."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from ...modules.common.exceptions import DimensionMismatchError


class IndexType(str, Enum):
    """Supported index types."""

    LINEAR_SEARCH = "linear_search"


@dataclass
class ChunkVector:
    """A stored chunk together with its parsed embedding."""

    chunk_id: str
    source: str
    content: str
    chunk_index: int
    embedding: List[float]
    page: Optional[int] = None
    section: Optional[str] = None


@dataclass
class SearchResult:
    """A chunk scored against a query vector."""

    chunk_id: str
    source: str
    content: str
    chunk_index: int
    similarity_score: float
    page: Optional[int] = None
    section: Optional[str] = None


class VectorIndex(ABC):
    """Abstract base class for vector indexing algorithms.

    Every vector held by an index has the index's dimension; adding or
    querying with any other length raises ``DimensionMismatchError``.
    """

    def __init__(self, dimension: int):
        """Initialize the vector index.

        Args:
            dimension: The dimension of the vectors to be indexed
        """
        self.dimension = dimension
        self.vectors: List[ChunkVector] = []

    def __len__(self) -> int:
        return len(self.vectors)

    @property
    @abstractmethod
    def index_type(self) -> IndexType:
        """Return the type of this index."""
        pass

    @abstractmethod
    async def add_vectors(self, vectors: List[ChunkVector]) -> None:
        """Add vectors to the index.

        Args:
            vectors: Vectors to add, all of the index dimension
        """
        pass

    @abstractmethod
    async def search(self, query_embedding: List[float], k: int) -> List[SearchResult]:
        """Search for the k most similar vectors.

        Args:
            query_embedding: The query vector
            k: Maximum number of results to return

        Returns:
            List of search results sorted by similarity (descending)
        """
        pass

    async def add_vector(self, vector: ChunkVector) -> None:
        await self.add_vectors([vector])

    async def clear(self) -> None:
        """Clear all vectors from the index."""
        self.vectors.clear()

    def _validate_embedding(self, embedding: List[float]) -> None:
        """Validate that an embedding has the index dimension.

        Raises:
            DimensionMismatchError: If the embedding dimension is incorrect
        """
        if len(embedding) != self.dimension:
            raise DimensionMismatchError(expected=self.dimension, actual=len(embedding))
