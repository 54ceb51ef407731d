"""Local embeddings using sentence-transformers."""

import asyncio
from typing import List, Optional, cast

from sentence_transformers import SentenceTransformer

from .base import EmbeddingProvider


class SentenceTransformerProvider(EmbeddingProvider):
    """Generates embeddings on the local machine.

    Uses all-mpnet-base-v2 by default (768-dimensional, normalized vectors).
    The model is loaded lazily on the first call, and inference runs in a
    worker thread so the event loop keeps serving requests.
    """

    def __init__(self, model_name: str = "all-mpnet-base-v2", dimension: int = 768):
        """Initialize the provider.

        Args:
            model_name: HuggingFace model name for sentence transformers
            dimension: Output dimension of the model
        """
        self._model_name = model_name
        self._dimension = dimension
        self._model: Optional[SentenceTransformer] = None
        self._model_lock = asyncio.Lock()

    @property
    def model_name(self) -> str:
        return self._model_name

    @property
    def embedding_dimension(self) -> int:
        return self._dimension

    async def _get_model(self) -> SentenceTransformer:
        """Get model instance, loading it if necessary."""
        if self._model is None:
            async with self._model_lock:
                if self._model is None:
                    self._model = cast(SentenceTransformer, await asyncio.to_thread(SentenceTransformer, self._model_name))
        return self._model

    async def embed(self, texts: List[str]) -> List[List[float]]:
        if not texts:
            return []

        model = await self._get_model()

        embeddings = await asyncio.to_thread(
            model.encode,
            texts,
            convert_to_tensor=False,
            normalize_embeddings=True,
            batch_size=32,
        )

        if hasattr(embeddings, "tolist"):
            return cast(List[List[float]], embeddings.tolist())
        return [embedding.tolist() for embedding in embeddings]

    def is_loaded(self) -> bool:
        return self._model is not None
