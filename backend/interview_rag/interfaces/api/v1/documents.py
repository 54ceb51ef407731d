"""Document API endpoints."""

from typing import List

from fastapi import APIRouter, Depends, status

from ....modules.common.utils.error_handler import to_http_exception
from ....modules.document.schemas import DocumentDetail, DocumentProcessRequest, DocumentRead
from ....modules.document.services import DocumentProcessingService
from ..dependencies import get_document_service

router = APIRouter(prefix="/documents", tags=["Documents"])


@router.post(
    "/process",
    summary="Process Document",
    description="""
    Ingests a PDF or DOCX file that is already on the server's filesystem.

    The text is extracted, normalized and split into chunks. Chunks are stored
    without embeddings; run the embedding backfill to make them searchable.

    - **file_path**: Path of the file; also identifies the document
    - **original_name**: Optional display name (defaults to the file name)

    Submitting a path that is already completed returns the stored document.
    """,
    responses={
        200: {"description": "Document processed, or already processed"},
        404: {"description": "File not found"},
        415: {"description": "Unsupported file type"},
        422: {"description": "The file could not be parsed"},
    },
)
async def process_document(
    request: DocumentProcessRequest,
    document_service: DocumentProcessingService = Depends(get_document_service),
) -> DocumentRead:
    """Process a document file."""
    try:
        return await document_service.process_document(request.file_path, request.original_name)
    except Exception as e:
        raise to_http_exception(e)


@router.get(
    "",
    summary="List Documents",
    description="Lists every document, newest first, with its processing status and chunk totals.",
)
async def list_documents(
    document_service: DocumentProcessingService = Depends(get_document_service),
) -> List[DocumentRead]:
    """List all documents."""
    try:
        return await document_service.get_documents()
    except Exception as e:
        raise to_http_exception(e)


@router.get(
    "/{document_id}",
    summary="Get Document Details",
    description="Returns a document together with its chunks in document order.",
    responses={
        200: {"description": "Document with chunks"},
        404: {"description": "Document not found"},
    },
)
async def get_document(
    document_id: str,
    document_service: DocumentProcessingService = Depends(get_document_service),
) -> DocumentDetail:
    """Get a document by ID."""
    try:
        return await document_service.get_document_by_id(document_id)
    except Exception as e:
        raise to_http_exception(e)


@router.delete(
    "/{document_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete Document",
    description="""Delete a document and all its chunks.

    This action cannot be undone.
    """,
    responses={
        204: {"description": "Document deleted successfully"},
        404: {"description": "Document not found"},
    },
)
async def delete_document(
    document_id: str,
    document_service: DocumentProcessingService = Depends(get_document_service),
) -> None:
    """Delete a document and all its chunks."""
    try:
        await document_service.delete_document(document_id)
    except Exception as e:
        raise to_http_exception(e)
