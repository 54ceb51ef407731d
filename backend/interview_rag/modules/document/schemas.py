"""Pydantic schemas for document entities."""

from typing import Annotated, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..chunk.schemas import ChunkSummary
from ..common.schemas import TimestampSchema
from .models import DocumentStatus


class DocumentBase(BaseModel):
    """Base schema for document data."""

    filename: Annotated[str, Field(min_length=1, max_length=255, description="File name on disk")]
    original_name: Annotated[str, Field(min_length=1, max_length=255, description="Name the file was submitted as")]
    file_path: Annotated[str, Field(min_length=1, max_length=1024, description="Path the file was read from")]
    file_size: int = Field(ge=0, description="File size in bytes")
    mime_type: str = Field(description="MIME type derived from the file extension")


class DocumentCreate(DocumentBase):
    """Schema for creating a new document record."""

    status: DocumentStatus = Field(default=DocumentStatus.PENDING)


class DocumentUpdate(BaseModel):
    """Partial update of a document; only set fields are written."""

    original_name: Optional[str] = None
    file_size: Optional[int] = Field(default=None, ge=0)
    mime_type: Optional[str] = None
    status: Optional[DocumentStatus] = None
    total_chunks: Optional[int] = Field(default=None, ge=0)
    total_tokens: Optional[int] = Field(default=None, ge=0)
    error_message: Optional[str] = None


class DocumentRead(TimestampSchema, DocumentBase):
    """Schema for reading document data."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    status: DocumentStatus
    total_chunks: int = 0
    total_tokens: int = 0
    error_message: Optional[str] = None


class DocumentDetail(DocumentRead):
    """A document together with its chunks ordered by chunk index."""

    chunks: List[ChunkSummary] = Field(default_factory=list)


class DocumentProcessRequest(BaseModel):
    """Request to ingest a file already present on the server's filesystem."""

    file_path: Annotated[str, Field(min_length=1, max_length=1024, description="Path of the PDF or DOCX file")]
    original_name: Optional[Annotated[str, Field(min_length=1, max_length=255)]] = Field(
        default=None, description="Display name; defaults to the file's base name"
    )


class DocumentStats(BaseModel):
    """Aggregate counts over all documents.

    Chunk and token totals only count completed documents.
    """

    total_documents: int
    completed_documents: int
    failed_documents: int
    total_chunks: int
    total_tokens: int
