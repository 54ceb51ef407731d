"""Dictionary-backed repository for tests and database-less runs."""

import asyncio
import json
from datetime import UTC, datetime
from typing import Dict, List, Optional, Sequence

from ...infrastructure.database.models import generate_uuid
from ..chunk.schemas import ChunkCreate, ChunkRead
from ..common.constants import EMBEDDING_PENDING
from ..document.schemas import DocumentCreate, DocumentRead, DocumentUpdate
from .base import DocumentRepository


class InMemoryDocumentRepository(DocumentRepository):
    """Keeps documents and chunks in insertion-ordered dicts.

    Records are stored as pydantic models and copied on the way out, so callers
    never mutate stored state by accident. A single lock serializes writes.
    """

    def __init__(self):
        self.documents: Dict[str, DocumentRead] = {}
        self.chunks: Dict[str, ChunkRead] = {}
        self._lock = asyncio.Lock()

    async def insert_document(self, document: DocumentCreate) -> str:
        async with self._lock:
            if any(existing.file_path == document.file_path for existing in self.documents.values()):
                raise ValueError(f"Document with path {document.file_path} already exists")

            now = datetime.now(UTC)
            record = DocumentRead(
                id=generate_uuid(),
                created_at=now,
                updated_at=now,
                **document.model_dump(),
            )
            self.documents[record.id] = record
            return record.id

    async def update_document(self, document_id: str, patch: DocumentUpdate) -> Optional[DocumentRead]:
        async with self._lock:
            current = self.documents.get(document_id)
            if current is None:
                return None

            changes = patch.model_dump(exclude_unset=True)
            changes["updated_at"] = datetime.now(UTC)
            updated = current.model_copy(update=changes)
            self.documents[document_id] = updated
            return updated.model_copy()

    async def find_document_by_id(self, document_id: str) -> Optional[DocumentRead]:
        document = self.documents.get(document_id)
        return document.model_copy() if document else None

    async def find_document_by_path(self, file_path: str) -> Optional[DocumentRead]:
        for document in self.documents.values():
            if document.file_path == file_path:
                return document.model_copy()
        return None

    async def list_documents(self, order_by: str = "created_at", descending: bool = True) -> List[DocumentRead]:
        documents = [document.model_copy() for document in self.documents.values()]
        documents.sort(key=lambda document: getattr(document, order_by), reverse=descending)
        return documents

    async def delete_document(self, document_id: str) -> bool:
        async with self._lock:
            return self.documents.pop(document_id, None) is not None

    async def insert_chunks(self, chunks: Sequence[ChunkCreate]) -> List[ChunkRead]:
        async with self._lock:
            now = datetime.now(UTC)
            created = []
            for chunk in chunks:
                record = ChunkRead(id=generate_uuid(), created_at=now, updated_at=now, **chunk.model_dump())
                self.chunks[record.id] = record
                created.append(record.model_copy())
            return created

    async def find_chunks_by_source(self, document_id: str) -> List[ChunkRead]:
        chunks = [chunk.model_copy() for chunk in self.chunks.values() if chunk.source == document_id]
        chunks.sort(key=lambda chunk: chunk.chunk_index)
        return chunks

    async def find_chunks_with_embedding(self) -> List[ChunkRead]:
        return [chunk.model_copy() for chunk in self.chunks.values() if chunk.embedding != EMBEDDING_PENDING]

    async def find_chunks_without_embedding(self) -> List[ChunkRead]:
        return [chunk.model_copy() for chunk in self.chunks.values() if chunk.embedding == EMBEDDING_PENDING]

    async def update_chunk_embedding(self, chunk_id: str, embedding: Sequence[float]) -> None:
        async with self._lock:
            current = self.chunks.get(chunk_id)
            if current is None:
                return
            self.chunks[chunk_id] = current.model_copy(
                update={"embedding": json.dumps(list(embedding)), "updated_at": datetime.now(UTC)}
            )

    async def delete_chunks_by_source(self, document_id: str) -> int:
        async with self._lock:
            doomed = [chunk_id for chunk_id, chunk in self.chunks.items() if chunk.source == document_id]
            for chunk_id in doomed:
                del self.chunks[chunk_id]
            return len(doomed)

