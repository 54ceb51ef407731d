"""FastAPI dependencies for use in API endpoints."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ...infrastructure.config import get_settings
from ...infrastructure.database import async_session
from ...infrastructure.embedding import EmbeddingProvider, get_embedding_provider
from ...modules.document.services import DocumentProcessingService
from ...modules.embedding.services import EmbeddingGenerator
from ...modules.search.services import RetrievalService
from ...modules.storage import DocumentRepository, SQLAlchemyDocumentRepository

DbSession = Annotated[AsyncSession, Depends(async_session)]


def get_repository(db: DbSession) -> DocumentRepository:
    """Dependency for a repository bound to the request's database session."""
    return SQLAlchemyDocumentRepository(db)


def get_provider() -> EmbeddingProvider:
    """Dependency for the configured embedding provider."""
    return get_embedding_provider()


Repository = Annotated[DocumentRepository, Depends(get_repository)]
Provider = Annotated[EmbeddingProvider, Depends(get_provider)]


def get_document_service(repository: Repository) -> DocumentProcessingService:
    """Dependency for providing a DocumentProcessingService instance."""
    settings = get_settings()
    return DocumentProcessingService(
        repository, chunk_max_size=settings.CHUNK_MAX_SIZE, chunk_overlap=settings.CHUNK_OVERLAP
    )


def get_embedding_generator(repository: Repository, provider: Provider) -> EmbeddingGenerator:
    """Dependency for providing an EmbeddingGenerator instance."""
    settings = get_settings()
    return EmbeddingGenerator(
        repository,
        provider,
        batch_size=settings.EMBEDDING_BATCH_SIZE,
        batch_delay=settings.EMBEDDING_BATCH_DELAY_MS / 1000,
    )


def get_retrieval_service(
    repository: Repository, generator: Annotated[EmbeddingGenerator, Depends(get_embedding_generator)]
) -> RetrievalService:
    """Dependency for providing a RetrievalService instance."""
    return RetrievalService(repository, generator, default_limit=get_settings().SEARCH_DEFAULT_LIMIT)
