"""Pydantic schemas for retrieval requests and results."""

from typing import Annotated, List, Optional

from pydantic import BaseModel, Field


class DocumentSearchHit(BaseModel):
    """A chunk returned for a query, with its cosine similarity to it."""

    content: str
    source: str = Field(description="ID of the document the chunk belongs to")
    similarity: float = Field(ge=-1.0, le=1.0)
    page: Optional[int] = None
    section: Optional[str] = None
    chunk_index: int


class ContextRequest(BaseModel):
    """Request for a prompt-ready context block."""

    query: Annotated[str, Field(min_length=1, description="Question or topic to retrieve context for")]
    limit: int = Field(default=5, ge=1, le=50)


class ContextResponse(BaseModel):
    context: str
    results: List[DocumentSearchHit]


class BackfillResponse(BaseModel):
    processed: int = Field(description="Number of chunks that received an embedding")
