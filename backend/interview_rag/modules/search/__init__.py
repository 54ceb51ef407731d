"""Similarity search and retrieval for the chat side."""

from .schemas import DocumentSearchHit
from .services import RetrievalService, SimilaritySearchService

__all__ = ["DocumentSearchHit", "RetrievalService", "SimilaritySearchService"]
