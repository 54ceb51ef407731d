"""SQLAlchemy models for chunk entities."""

from typing import Optional

from sqlalchemy import ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ...infrastructure.database.models import TimestampMixin, UUIDMixin
from ...infrastructure.database.session import Base
from ..common.constants import EMBEDDING_PENDING


class DocumentChunk(Base, UUIDMixin, TimestampMixin):
    """A slice of a document's text, the unit of embedding and retrieval.

    The embedding is stored as JSON text. ``"[]"`` marks a chunk whose vector
    has not been computed yet; the backfill replaces it exactly once.
    """

    __tablename__ = "document_chunks"
    __table_args__ = (
        Index("ix_document_chunks_source_chunk_index", "source", "chunk_index"),
        Index("ix_document_chunks_source_page", "source", "page"),
    )

    content: Mapped[str] = mapped_column(Text)
    source: Mapped[str] = mapped_column(String(36), ForeignKey("documents.id", ondelete="CASCADE"))
    chunk_index: Mapped[int] = mapped_column(Integer, default=0)
    token_count: Mapped[int] = mapped_column(Integer, default=0)
    page: Mapped[Optional[int]] = mapped_column(Integer, default=None)
    section: Mapped[Optional[str]] = mapped_column(String(255), default=None)
    embedding: Mapped[str] = mapped_column(Text, default=EMBEDDING_PENDING)
