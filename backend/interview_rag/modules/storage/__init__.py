"""Storage backends for documents and chunks."""

from .base import DocumentRepository
from .memory import InMemoryDocumentRepository
from .postgres import SQLAlchemyDocumentRepository

__all__ = [
    "DocumentRepository",
    "InMemoryDocumentRepository",
    "SQLAlchemyDocumentRepository",
]
