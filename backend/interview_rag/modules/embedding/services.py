"""Embedding generation for queries and for stored chunks awaiting a vector."""

import asyncio
import math
from typing import List, Sequence

from ...infrastructure.embedding import EmbeddingProvider
from ...infrastructure.logging import get_logger
from ..chunk.schemas import PendingChunk
from ..common.exceptions import EmbeddingProviderError
from ..storage.base import DocumentRepository

logger = get_logger(__name__)


class EmbeddingGenerator:
    """Computes embeddings through a provider and writes them back to storage.

    Chunks are embedded in batches of ``batch_size``, one provider call per
    batch, with a ``batch_delay`` second pause between consecutive batches to
    stay under provider rate limits. Nothing is retried: a failing batch
    stops the run, and vectors written by earlier batches are kept.
    """

    def __init__(
        self,
        repository: DocumentRepository,
        provider: EmbeddingProvider,
        batch_size: int = 100,
        batch_delay: float = 0.1,
    ):
        if batch_size <= 0:
            raise ValueError("batch_size must be positive")

        self.repository = repository
        self.provider = provider
        self.batch_size = batch_size
        self.batch_delay = batch_delay

    async def embed_query(self, text: str) -> List[float]:
        """Embed a single search query.

        Raises:
            EmbeddingProviderError: The provider failed or returned an unusable vector
        """
        vectors = await self._embed([text])
        return vectors[0]

    async def embed_batch(self, chunks: Sequence[PendingChunk]) -> int:
        """Embed chunks and persist each vector on its chunk.

        Args:
            chunks: Chunks to embed, identified by id

        Returns:
            Number of chunks whose embedding was written
        """
        embedded = 0

        for start in range(0, len(chunks), self.batch_size):
            if start > 0 and self.batch_delay > 0:
                await asyncio.sleep(self.batch_delay)

            batch = chunks[start : start + self.batch_size]
            vectors = await self._embed([chunk.content for chunk in batch])

            for chunk, vector in zip(batch, vectors):
                await self.repository.update_chunk_embedding(chunk.id, vector)

            embedded += len(batch)
            logger.info(
                "Embedded chunk batch",
                extra={"batch_number": start // self.batch_size + 1, "batch_size": len(batch), "embedded_total": embedded},
            )

        return embedded

    async def process_pending_chunks(self) -> int:
        """Backfill embeddings for every chunk that does not have one yet.

        Returns:
            Number of chunks embedded
        """
        pending = await self.repository.find_chunks_without_embedding()

        if not pending:
            logger.info("No chunks pending embedding")
            return 0

        logger.info("Starting embedding backfill", extra={"pending_chunks": len(pending), "model": self.provider.model_name})
        processed = await self.embed_batch([PendingChunk(id=chunk.id, content=chunk.content) for chunk in pending])
        logger.info("Embedding backfill complete", extra={"processed_chunks": processed})
        return processed

    async def _embed(self, texts: List[str]) -> List[List[float]]:
        try:
            vectors = await self.provider.embed(texts)
        except Exception as e:
            raise EmbeddingProviderError(f"Embedding provider {self.provider.model_name} failed: {e}") from e

        if len(vectors) != len(texts):
            raise EmbeddingProviderError(f"Embedding provider returned {len(vectors)} vectors for {len(texts)} texts")

        expected = self.provider.embedding_dimension
        for vector in vectors:
            if len(vector) != expected:
                raise EmbeddingProviderError(
                    f"Embedding provider returned a vector of dimension {len(vector)}, expected {expected}"
                )
            if not all(math.isfinite(value) for value in vector):
                raise EmbeddingProviderError("Embedding provider returned a vector with non-finite components")

        return vectors
