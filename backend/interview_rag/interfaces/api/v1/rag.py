"""Retrieval API endpoints used by the chat side."""

from typing import List

from fastapi import APIRouter, Depends, Query

from ....modules.common.utils.error_handler import to_http_exception
from ....modules.document.schemas import DocumentStats
from ....modules.embedding.services import EmbeddingGenerator
from ....modules.search.schemas import BackfillResponse, ContextRequest, ContextResponse, DocumentSearchHit
from ....modules.search.services import RetrievalService
from ..dependencies import get_embedding_generator, get_retrieval_service

router = APIRouter(prefix="/rag", tags=["Retrieval"])


@router.get(
    "/search",
    summary="Search Documents",
    description="""
    Embeds the query and returns the most similar chunks by cosine similarity.

    - **query**: Free-text query
    - **limit**: Maximum number of hits (default 5)
    """,
    responses={
        200: {"description": "Hits sorted by descending similarity"},
        409: {"description": "Stored embeddings do not match the query model's dimension"},
        502: {"description": "The embedding provider failed"},
    },
)
async def search_documents(
    query: str = Query(..., min_length=1, description="Search query"),
    limit: int = Query(5, ge=1, le=50, description="Maximum number of hits"),
    retrieval_service: RetrievalService = Depends(get_retrieval_service),
) -> List[DocumentSearchHit]:
    """Search the knowledge base."""
    try:
        return await retrieval_service.search_documents(query, limit)
    except Exception as e:
        raise to_http_exception(e)


@router.get("/stats", summary="Knowledge Base Statistics")
async def get_stats(
    retrieval_service: RetrievalService = Depends(get_retrieval_service),
) -> DocumentStats:
    """Document counts by status and chunk/token totals over completed documents."""
    try:
        return await retrieval_service.get_document_stats()
    except Exception as e:
        raise to_http_exception(e)


@router.post(
    "/embeddings/backfill",
    summary="Backfill Embeddings",
    description="Embeds every chunk that does not have an embedding yet, in batches.",
    responses={
        200: {"description": "Number of chunks embedded"},
        502: {"description": "The embedding provider failed; earlier batches are kept"},
    },
)
async def backfill_embeddings(
    generator: EmbeddingGenerator = Depends(get_embedding_generator),
) -> BackfillResponse:
    """Run the embedding backfill."""
    try:
        return BackfillResponse(processed=await generator.process_pending_chunks())
    except Exception as e:
        raise to_http_exception(e)


@router.post(
    "/context",
    summary="Build Prompt Context",
    description="Searches the knowledge base and formats the hits as numbered context blocks for a chat prompt.",
)
async def build_context(
    request: ContextRequest,
    retrieval_service: RetrievalService = Depends(get_retrieval_service),
) -> ContextResponse:
    """Search and format the results as prompt context."""
    try:
        results = await retrieval_service.search_documents(request.query, request.limit)
        return ContextResponse(context=retrieval_service.build_context(results), results=results)
    except Exception as e:
        raise to_http_exception(e)
