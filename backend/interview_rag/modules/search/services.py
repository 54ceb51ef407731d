"""Similarity search over stored chunk embeddings and the retrieval facade."""

import json
import math
from typing import List, Optional, Sequence

from ...infrastructure.indexing import ChunkVector, LinearSearchIndex, SearchResult
from ...infrastructure.logging import get_logger
from ..chunk.schemas import ChunkRead
from ..common.exceptions import MalformedEmbeddingError
from ..document.models import DocumentStatus
from ..document.schemas import DocumentStats
from ..embedding.services import EmbeddingGenerator
from ..storage.base import DocumentRepository
from .schemas import DocumentSearchHit

logger = get_logger(__name__)

NO_CONTEXT_MESSAGE = "No relevant context found in the knowledge base."
CONTEXT_SEPARATOR = "\n---\n\n"


def parse_embedding(chunk: ChunkRead) -> List[float]:
    """Decode the JSON embedding stored on a chunk.

    Raises:
        MalformedEmbeddingError: The text is not JSON, not a list of finite numbers, or empty
    """
    try:
        value = json.loads(chunk.embedding)
    except (TypeError, ValueError) as e:
        raise MalformedEmbeddingError(chunk.id, f"invalid JSON ({e})") from e

    if not isinstance(value, list):
        raise MalformedEmbeddingError(chunk.id, f"expected a list, got {type(value).__name__}")
    if not value:
        raise MalformedEmbeddingError(chunk.id, "empty vector")
    if not all(isinstance(item, (int, float)) and not isinstance(item, bool) for item in value):
        raise MalformedEmbeddingError(chunk.id, "non-numeric component")
    if not all(math.isfinite(item) for item in value):
        raise MalformedEmbeddingError(chunk.id, "non-finite component")

    return [float(item) for item in value]


class SimilaritySearchService:
    """Brute-force cosine search over every chunk that has an embedding.

    The index is rebuilt from storage on each call, so newly backfilled
    chunks are searchable immediately.
    """

    def __init__(self, repository: DocumentRepository):
        self.repository = repository

    async def search(self, query_vector: List[float], limit: int) -> List[SearchResult]:
        """Return up to ``limit`` chunks ranked by similarity to ``query_vector``.

        Chunks whose stored embedding cannot be parsed are logged and skipped.

        Raises:
            DimensionMismatchError: A stored embedding differs in length from the query
        """
        if limit <= 0:
            return []

        chunks = await self.repository.find_chunks_with_embedding()

        vectors: List[ChunkVector] = []
        for chunk in chunks:
            try:
                embedding = parse_embedding(chunk)
            except MalformedEmbeddingError as e:
                logger.warning("Skipping chunk with malformed embedding", extra={"chunk_id": chunk.id, "error": str(e)})
                continue

            vectors.append(
                ChunkVector(
                    chunk_id=chunk.id,
                    source=chunk.source,
                    content=chunk.content,
                    chunk_index=chunk.chunk_index,
                    embedding=embedding,
                    page=chunk.page,
                    section=chunk.section,
                )
            )

        index = LinearSearchIndex(dimension=len(query_vector))
        await index.add_vectors(vectors)
        return await index.search(query_vector, limit)


class RetrievalService:
    """What the chat side calls: text search, knowledge-base stats and prompt context."""

    def __init__(self, repository: DocumentRepository, generator: EmbeddingGenerator, default_limit: int = 5):
        self.repository = repository
        self.generator = generator
        self.default_limit = default_limit
        self.search_service = SimilaritySearchService(repository)

    async def search_documents(self, query_text: str, limit: Optional[int] = None) -> List[DocumentSearchHit]:
        """Embed a query and return the most similar chunks.

        Args:
            query_text: Free-text query
            limit: Maximum number of hits; defaults to ``default_limit``

        Returns:
            Hits sorted by descending similarity
        """
        limit = self.default_limit if limit is None else limit
        if limit <= 0:
            return []

        query_vector = await self.generator.embed_query(query_text)
        results = await self.search_service.search(query_vector, limit)

        logger.debug("Document search", extra={"limit": limit, "hits": len(results)})

        return [
            DocumentSearchHit(
                content=result.content,
                source=result.source,
                similarity=result.similarity_score,
                page=result.page,
                section=result.section,
                chunk_index=result.chunk_index,
            )
            for result in results
        ]

    async def get_document_stats(self) -> DocumentStats:
        """Count documents by status and sum chunks and tokens of completed ones."""
        documents = await self.repository.list_documents()
        completed = [document for document in documents if document.status == DocumentStatus.COMPLETED]

        return DocumentStats(
            total_documents=len(documents),
            completed_documents=len(completed),
            failed_documents=sum(1 for document in documents if document.status == DocumentStatus.FAILED),
            total_chunks=sum(document.total_chunks for document in completed),
            total_tokens=sum(document.total_tokens for document in completed),
        )

    @staticmethod
    def build_context(results: Sequence[DocumentSearchHit]) -> str:
        """Format hits as numbered context blocks for a chat prompt.

        Example:
            >>> RetrievalService.build_context([])
            'No relevant context found in the knowledge base.'
        """
        if not results:
            return NO_CONTEXT_MESSAGE

        blocks = [
            f"[Context {number}] (Relevance: {result.similarity * 100:.1f}%)\n{result.content}\n"
            for number, result in enumerate(results, start=1)
        ]
        return CONTEXT_SEPARATOR.join(blocks)
