"""Document lifecycle: ingestion of source files, listing and deletion."""

import os
from typing import List, Optional

from ...infrastructure.logging import get_logger
from ..chunk.schemas import ChunkCreate, ChunkSummary
from ..common.exceptions import DocumentNotFoundError, ResourceNotFoundError
from ..ingestion import chunk_text, extract_text, get_extension, get_mime_type, normalize_text
from ..ingestion.chunker import DEFAULT_MAX_CHUNK_SIZE, DEFAULT_OVERLAP
from ..ingestion.extractor import get_extractor
from ..storage.base import DocumentRepository
from .models import DocumentStatus
from .schemas import DocumentCreate, DocumentDetail, DocumentRead, DocumentUpdate

logger = get_logger(__name__)


class DocumentProcessingService:
    """Service for turning source files into stored, chunked documents.

    A document is keyed by its file path. Processing a path again is a no-op
    once it is ``completed`` (or still ``processing``); a ``pending`` or
    ``failed`` record is reset and processed from scratch.

    Chunks are stored without embeddings; ``EmbeddingGenerator`` fills them in
    later.
    """

    def __init__(
        self,
        repository: DocumentRepository,
        chunk_max_size: int = DEFAULT_MAX_CHUNK_SIZE,
        chunk_overlap: int = DEFAULT_OVERLAP,
    ):
        self.repository = repository
        self.chunk_max_size = chunk_max_size
        self.chunk_overlap = chunk_overlap

    async def process_document(self, file_path: str, original_name: Optional[str] = None) -> DocumentRead:
        """Extract, normalize and chunk a PDF or DOCX file and store the result.

        Args:
            file_path: Path of the file to ingest; also its identity
            original_name: Display name, defaults to the file's base name

        Returns:
            The document record, ``completed`` unless it was skipped

        Raises:
            UnsupportedFormatError: The extension is not ``.pdf`` or ``.docx``; nothing is stored
            ResourceNotFoundError: The file does not exist; nothing is stored
            ExtractionError: The file could not be parsed; the document is marked ``failed``
        """
        filename = os.path.basename(file_path)
        existing = await self.repository.find_document_by_path(file_path)

        if existing and existing.status in (DocumentStatus.COMPLETED, DocumentStatus.PROCESSING):
            logger.info(
                "Document already handled, skipping",
                extra={"document_id": existing.id, "file_name": filename, "status": existing.status.value},
            )
            return existing

        get_extractor(file_path)

        try:
            file_size = os.stat(file_path).st_size
        except FileNotFoundError as e:
            raise ResourceNotFoundError(f"File not found: {file_path}") from e

        display_name = original_name or filename
        mime_type = get_mime_type(get_extension(file_path))

        if existing:
            document_id = existing.id
            removed = await self.repository.delete_chunks_by_source(document_id)
            await self.repository.update_document(
                document_id,
                DocumentUpdate(
                    original_name=display_name,
                    file_size=file_size,
                    mime_type=mime_type,
                    status=DocumentStatus.PROCESSING,
                    total_chunks=0,
                    total_tokens=0,
                    error_message=None,
                ),
            )
            logger.info(
                "Reprocessing document",
                extra={"document_id": document_id, "file_name": filename, "stale_chunks_removed": removed},
            )
        else:
            document_id = await self.repository.insert_document(
                DocumentCreate(
                    filename=filename,
                    original_name=display_name,
                    file_path=file_path,
                    file_size=file_size,
                    mime_type=mime_type,
                    status=DocumentStatus.PROCESSING,
                )
            )
            logger.info("Processing document", extra={"document_id": document_id, "file_name": filename})

        try:
            text = await extract_text(file_path)
            chunks = chunk_text(
                normalize_text(text),
                document_id,
                max_chunk_size=self.chunk_max_size,
                overlap=self.chunk_overlap,
            )

            await self.repository.insert_chunks(
                [
                    ChunkCreate(
                        content=chunk.content,
                        source=chunk.source,
                        chunk_index=chunk.chunk_index,
                        token_count=chunk.token_count,
                        page=chunk.page,
                        section=chunk.section,
                    )
                    for chunk in chunks
                ]
            )

            document = await self.repository.update_document(
                document_id,
                DocumentUpdate(
                    status=DocumentStatus.COMPLETED,
                    total_chunks=len(chunks),
                    total_tokens=sum(chunk.token_count for chunk in chunks),
                ),
            )
        except Exception as e:
            logger.error("Document processing failed", extra={"document_id": document_id, "file_name": filename, "error": str(e)})
            await self.repository.update_document(
                document_id, DocumentUpdate(status=DocumentStatus.FAILED, error_message=str(e) or type(e).__name__)
            )
            raise

        if document is None:
            raise DocumentNotFoundError(f"Document {document_id} disappeared during processing")

        logger.info(
            "Document processed",
            extra={"document_id": document_id, "total_chunks": document.total_chunks, "total_tokens": document.total_tokens},
        )
        return document

    async def get_documents(self) -> List[DocumentRead]:
        """All documents, newest first."""
        return await self.repository.list_documents(order_by="created_at", descending=True)

    async def get_document_by_id(self, document_id: str) -> DocumentDetail:
        """Get a document with its chunks ordered by chunk index.

        Raises:
            DocumentNotFoundError: No document has this id
        """
        document = await self.repository.find_document_by_id(document_id)
        if document is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")

        chunks = await self.repository.find_chunks_by_source(document_id)
        return DocumentDetail(
            **document.model_dump(), chunks=[ChunkSummary(**chunk.model_dump()) for chunk in chunks]
        )

    async def delete_document(self, document_id: str) -> None:
        """Delete a document's chunks, then the document itself.

        Raises:
            DocumentNotFoundError: No document has this id
        """
        document = await self.repository.find_document_by_id(document_id)
        if document is None:
            raise DocumentNotFoundError(f"Document {document_id} not found")

        removed = await self.repository.delete_chunks_by_source(document_id)
        await self.repository.delete_document(document_id)

        logger.info("Document deleted", extra={"document_id": document_id, "chunks_removed": removed})
