"""Tests for InMemoryDocumentRepository."""

import json

import pytest

from interview_rag.modules.chunk.schemas import ChunkCreate
from interview_rag.modules.document.models import DocumentStatus
from interview_rag.modules.document.schemas import DocumentCreate, DocumentUpdate


def document_data(path: str = "/docs/guide.pdf") -> DocumentCreate:
    return DocumentCreate(
        filename="guide.pdf",
        original_name="Guide.pdf",
        file_path=path,
        file_size=2048,
        mime_type="application/pdf",
    )


class TestInMemoryDocumentRepository:
    """Test suite for the in-memory repository."""

    @pytest.mark.asyncio
    async def test_insert_and_find(self, repository):
        document_id = await repository.insert_document(document_data())

        by_id = await repository.find_document_by_id(document_id)
        by_path = await repository.find_document_by_path("/docs/guide.pdf")

        assert by_id == by_path
        assert by_id.status == DocumentStatus.PENDING
        assert by_id.total_chunks == 0
        assert by_id.created_at is not None

    @pytest.mark.asyncio
    async def test_duplicate_path_rejected(self, repository):
        await repository.insert_document(document_data())

        with pytest.raises(ValueError):
            await repository.insert_document(document_data())

    @pytest.mark.asyncio
    async def test_update_applies_only_set_fields(self, repository):
        document_id = await repository.insert_document(document_data())

        updated = await repository.update_document(document_id, DocumentUpdate(status=DocumentStatus.FAILED, error_message="boom"))

        assert updated.status == DocumentStatus.FAILED
        assert updated.error_message == "boom"
        assert updated.original_name == "Guide.pdf"

    @pytest.mark.asyncio
    async def test_update_missing_document(self, repository):
        assert await repository.update_document("missing", DocumentUpdate(status=DocumentStatus.FAILED)) is None

    @pytest.mark.asyncio
    async def test_returned_records_are_copies(self, repository):
        document_id = await repository.insert_document(document_data())

        document = await repository.find_document_by_id(document_id)
        document.original_name = "changed"

        assert (await repository.find_document_by_id(document_id)).original_name == "Guide.pdf"

    @pytest.mark.asyncio
    async def test_chunk_lifecycle(self, repository):
        document_id = await repository.insert_document(document_data())
        created = await repository.insert_chunks(
            [ChunkCreate(content=f"chunk {i}", source=document_id, chunk_index=i, token_count=3) for i in (2, 0, 1)]
        )

        assert [chunk.chunk_index for chunk in await repository.find_chunks_by_source(document_id)] == [0, 1, 2]
        assert len(await repository.find_chunks_without_embedding()) == 3

        await repository.update_chunk_embedding(created[0].id, [0.5, 0.25])

        [embedded] = await repository.find_chunks_with_embedding()
        assert embedded.id == created[0].id
        assert json.loads(embedded.embedding) == [0.5, 0.25]
        assert embedded.has_embedding is True

        assert await repository.delete_chunks_by_source(document_id) == 3
        assert await repository.find_chunks_by_source(document_id) == []

    @pytest.mark.asyncio
    async def test_delete_document(self, repository):
        document_id = await repository.insert_document(document_data())

        assert await repository.delete_document(document_id) is True
        assert await repository.delete_document(document_id) is False
        assert await repository.find_document_by_id(document_id) is None
