"""Embedding infrastructure for text-to-vector conversion."""

from functools import lru_cache

from ..config import EmbeddingProviderOption, get_settings
from .base import EmbeddingProvider
from .openai_provider import OpenAIEmbeddingProvider
from .sentence_transformer import SentenceTransformerProvider


@lru_cache()
def get_embedding_provider() -> EmbeddingProvider:
    """Get the singleton provider selected by ``EMBEDDING_PROVIDER``."""
    settings = get_settings()

    if settings.EMBEDDING_PROVIDER == EmbeddingProviderOption.SENTENCE_TRANSFORMERS:
        return SentenceTransformerProvider(model_name=settings.SENTENCE_TRANSFORMER_MODEL)

    return OpenAIEmbeddingProvider(
        api_key=settings.OPENAI_API_KEY,
        model_name=settings.OPENAI_EMBEDDING_MODEL,
        dimension=settings.OPENAI_EMBEDDING_DIMENSION,
    )


__all__ = [
    "EmbeddingProvider",
    "OpenAIEmbeddingProvider",
    "SentenceTransformerProvider",
    "get_embedding_provider",
]
