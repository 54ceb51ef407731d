"""PostgreSQL-backed repository built on FastCRUD and an AsyncSession."""

import json
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, List, Optional, Sequence, cast

from sqlalchemy import delete, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..chunk.crud import chunk_crud
from ..chunk.models import DocumentChunk
from ..chunk.schemas import ChunkCreate, ChunkRead
from ..common.constants import EMBEDDING_PENDING
from ..document.crud import document_crud
from ..document.models import Document
from ..document.schemas import DocumentCreate, DocumentRead, DocumentUpdate
from .base import DocumentRepository

DOCUMENT_SORT_COLUMNS = {"created_at", "updated_at", "original_name", "filename", "status"}


class SQLAlchemyDocumentRepository(DocumentRepository):
    """Repository bound to one database session.

    Each write commits immediately, matching the per-step status updates the
    processing service relies on: a failure mid-ingestion still leaves the
    ``processing``/``failed`` status visible to other sessions.

    A failed write rolls the session back before the error propagates, so the
    caller can still record the failure through the same session.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def _write(self) -> AsyncIterator[None]:
        try:
            yield
        except Exception:
            await self.db.rollback()
            raise

    async def insert_document(self, document: DocumentCreate) -> str:
        async with self._write():
            created = cast(Any, await document_crud.create(db=self.db, object=document))
        return str(created.id)

    async def update_document(self, document_id: str, patch: DocumentUpdate) -> Optional[DocumentRead]:
        if not await document_crud.exists(db=self.db, id=document_id):
            return None

        changes = patch.model_dump(exclude_unset=True)
        if changes:
            async with self._write():
                await document_crud.update(db=self.db, object=changes, id=document_id)

        return await self.find_document_by_id(document_id)

    async def find_document_by_id(self, document_id: str) -> Optional[DocumentRead]:
        row = await document_crud.get(db=self.db, id=document_id)
        return DocumentRead.model_validate(row) if row else None

    async def find_document_by_path(self, file_path: str) -> Optional[DocumentRead]:
        row = await document_crud.get(db=self.db, file_path=file_path)
        return DocumentRead.model_validate(row) if row else None

    async def list_documents(self, order_by: str = "created_at", descending: bool = True) -> List[DocumentRead]:
        if order_by not in DOCUMENT_SORT_COLUMNS:
            raise ValueError(f"Cannot sort documents by {order_by}")

        result = await document_crud.get_multi(
            db=self.db,
            offset=0,
            limit=None,
            sort_columns=order_by,
            sort_orders="desc" if descending else "asc",
        )
        rows = result.get("data", [])
        return [DocumentRead.model_validate(row) for row in cast(List[Any], rows)]

    async def delete_document(self, document_id: str) -> bool:
        async with self._write():
            result = await self.db.execute(delete(Document).where(Document.id == document_id))
            await self.db.commit()
        return cast(Any, result).rowcount > 0

    async def insert_chunks(self, chunks: Sequence[ChunkCreate]) -> List[ChunkRead]:
        if not chunks:
            return []

        objects = [DocumentChunk(**chunk.model_dump()) for chunk in chunks]
        rows_to_insert = [
            {
                "id": obj.id,
                "content": obj.content,
                "source": obj.source,
                "chunk_index": obj.chunk_index,
                "token_count": obj.token_count,
                "page": obj.page,
                "section": obj.section,
                "embedding": EMBEDDING_PENDING,
                "created_at": obj.created_at,
                "updated_at": obj.updated_at,
            }
            for obj in objects
        ]

        async with self._write():
            await self.db.execute(insert(DocumentChunk), rows_to_insert)
            await self.db.commit()

        return [ChunkRead.model_validate(row) for row in rows_to_insert]

    async def find_chunks_by_source(self, document_id: str) -> List[ChunkRead]:
        result = await chunk_crud.get_multi(
            db=self.db,
            offset=0,
            limit=None,
            sort_columns="chunk_index",
            sort_orders="asc",
            source=document_id,
        )
        rows = result.get("data", [])
        return [ChunkRead.model_validate(row) for row in cast(List[Any], rows)]

    async def find_chunks_with_embedding(self) -> List[ChunkRead]:
        stmt = select(DocumentChunk).where(DocumentChunk.embedding != EMBEDDING_PENDING).order_by(
            DocumentChunk.created_at, DocumentChunk.chunk_index
        )
        result = await self.db.execute(stmt)
        return [ChunkRead.model_validate(chunk) for chunk in result.scalars().all()]

    async def find_chunks_without_embedding(self) -> List[ChunkRead]:
        stmt = select(DocumentChunk).where(DocumentChunk.embedding == EMBEDDING_PENDING).order_by(
            DocumentChunk.created_at, DocumentChunk.chunk_index
        )
        result = await self.db.execute(stmt)
        return [ChunkRead.model_validate(chunk) for chunk in result.scalars().all()]

    async def update_chunk_embedding(self, chunk_id: str, embedding: Sequence[float]) -> None:
        stmt = update(DocumentChunk).where(DocumentChunk.id == chunk_id).values(embedding=json.dumps(list(embedding)))
        async with self._write():
            await self.db.execute(stmt)
            await self.db.commit()

    async def delete_chunks_by_source(self, document_id: str) -> int:
        async with self._write():
            result = await self.db.execute(delete(DocumentChunk).where(DocumentChunk.source == document_id))
            await self.db.commit()
        return cast(Any, result).rowcount
