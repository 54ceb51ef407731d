"""Storage interface consumed by the ingestion, embedding and search services."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from ..chunk.schemas import ChunkCreate, ChunkRead
from ..document.schemas import DocumentCreate, DocumentRead, DocumentUpdate


class DocumentRepository(ABC):
    """Persistence operations for documents and their chunks.

    Services receive a repository instead of reaching for a global session, so
    the same processing code runs against PostgreSQL or the in-memory store.
    Deleting a document's chunks is the caller's job; implementations are not
    required to cascade.
    """

    @abstractmethod
    async def insert_document(self, document: DocumentCreate) -> str:
        """Persist a new document and return its id."""
        pass

    @abstractmethod
    async def update_document(self, document_id: str, patch: DocumentUpdate) -> Optional[DocumentRead]:
        """Apply the fields set on ``patch``; returns the updated document or None if absent."""
        pass

    @abstractmethod
    async def find_document_by_id(self, document_id: str) -> Optional[DocumentRead]:
        pass

    @abstractmethod
    async def find_document_by_path(self, file_path: str) -> Optional[DocumentRead]:
        pass

    @abstractmethod
    async def list_documents(self, order_by: str = "created_at", descending: bool = True) -> List[DocumentRead]:
        pass

    @abstractmethod
    async def delete_document(self, document_id: str) -> bool:
        """Delete the document row; returns False when it did not exist."""
        pass

    @abstractmethod
    async def insert_chunks(self, chunks: Sequence[ChunkCreate]) -> List[ChunkRead]:
        """Persist chunks with their embedding unset."""
        pass

    @abstractmethod
    async def find_chunks_by_source(self, document_id: str) -> List[ChunkRead]:
        """Return a document's chunks ordered by chunk index."""
        pass

    @abstractmethod
    async def find_chunks_with_embedding(self) -> List[ChunkRead]:
        pass

    @abstractmethod
    async def find_chunks_without_embedding(self) -> List[ChunkRead]:
        pass

    @abstractmethod
    async def update_chunk_embedding(self, chunk_id: str, embedding: Sequence[float]) -> None:
        pass

    @abstractmethod
    async def delete_chunks_by_source(self, document_id: str) -> int:
        """Delete every chunk of a document and return how many were removed."""
        pass
