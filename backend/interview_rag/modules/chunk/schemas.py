"""Pydantic schemas for chunk entities."""

from typing import Annotated, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from ..common.constants import EMBEDDING_PENDING
from ..common.schemas import TimestampSchema


class ChunkBase(BaseModel):
    """Base schema for chunk data."""

    content: Annotated[str, Field(min_length=1, description="Text content of the chunk")]
    source: str = Field(description="ID of the document this chunk belongs to")
    chunk_index: int = Field(ge=0, description="Position of the chunk within its document")
    token_count: int = Field(ge=0, description="Estimated token count")
    page: Optional[int] = Field(default=None, description="Page number, when known")
    section: Optional[str] = Field(default=None, description="Section label, when known")


class ChunkCreate(ChunkBase):
    """Schema for creating a chunk; the embedding always starts out pending."""

    pass


class ChunkRead(TimestampSchema, ChunkBase):
    """Schema for reading chunk data.

    ``embedding`` keeps the stored JSON text and is left out of serialized
    output; ``has_embedding`` reports whether the backfill reached this chunk.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str
    embedding: str = Field(default=EMBEDDING_PENDING, exclude=True)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def has_embedding(self) -> bool:
        return self.embedding != EMBEDDING_PENDING


class PendingChunk(BaseModel):
    """The slice of a chunk the embedding backfill needs."""

    id: str
    content: str


class ChunkSummary(TimestampSchema, ChunkBase):
    """Chunk as returned by the API: no vector, only whether it has one."""

    id: str
    has_embedding: bool
