"""SQLAlchemy models for document entities."""

from enum import Enum
from typing import Optional

from sqlalchemy import BigInteger, Integer, String, Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.orm import Mapped, mapped_column

from ...infrastructure.database.models import TimestampMixin, UUIDMixin
from ...infrastructure.database.session import Base


class DocumentStatus(str, Enum):
    """Processing state of a source document.

    Transitions: PENDING -> PROCESSING -> COMPLETED | FAILED.
    """

    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


class Document(Base, UUIDMixin, TimestampMixin):
    """A source file (PDF or DOCX) whose text has been split into chunks.

    ``total_chunks`` and ``total_tokens`` are only filled in once chunking
    succeeded, and then match the document's chunk rows.
    """

    __tablename__ = "documents"

    filename: Mapped[str] = mapped_column(String(255))
    original_name: Mapped[str] = mapped_column(String(255))
    file_path: Mapped[str] = mapped_column(String(1024), unique=True, index=True)
    file_size: Mapped[int] = mapped_column(BigInteger)
    mime_type: Mapped[str] = mapped_column(String(255))
    status: Mapped[DocumentStatus] = mapped_column(
        SAEnum(DocumentStatus, name="document_status", values_callable=lambda enum: [member.value for member in enum]),
        default=DocumentStatus.PENDING,
        index=True,
    )
    total_chunks: Mapped[int] = mapped_column(Integer, default=0)
    total_tokens: Mapped[int] = mapped_column(Integer, default=0)
    error_message: Mapped[Optional[str]] = mapped_column(Text, default=None)
