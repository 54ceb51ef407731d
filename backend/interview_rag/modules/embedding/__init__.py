"""Embedding generation for chunks and search queries."""

from .services import EmbeddingGenerator

__all__ = ["EmbeddingGenerator"]
