"""Test configuration and fixtures for the interview RAG backend."""

import os
from typing import List

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

# mypy: disable-error-code="import-untyped"
from testcontainers.core.docker_client import DockerClient
from testcontainers.postgres import PostgresContainer

os.environ.setdefault("ENVIRONMENT", "local")
os.environ.setdefault("LOG_FILE_ENABLED", "false")
os.environ.setdefault("EMBEDDING_BATCH_DELAY_MS", "0")

from interview_rag.infrastructure.database.session import Base  # noqa: E402
from interview_rag.infrastructure.embedding import EmbeddingProvider  # noqa: E402
from interview_rag.infrastructure.logging import configure_testing_logging  # noqa: E402
from interview_rag.interfaces.api.dependencies import get_provider, get_repository  # noqa: E402
from interview_rag.interfaces.main import app  # noqa: E402
from interview_rag.modules.document.services import DocumentProcessingService  # noqa: E402
from interview_rag.modules.embedding.services import EmbeddingGenerator  # noqa: E402
from interview_rag.modules.search.services import RetrievalService  # noqa: E402
from interview_rag.modules.storage import InMemoryDocumentRepository, SQLAlchemyDocumentRepository  # noqa: E402

configure_testing_logging()

KEYWORDS = ("research", "usability", "portfolio")


class KeywordEmbeddingProvider(EmbeddingProvider):
    """Deterministic 3-dimensional provider counting topic keywords.

    Each component is the number of occurrences of one of ``KEYWORDS``, so
    tests can reason about rankings without a real model.
    """

    def __init__(self):
        self.calls: List[List[str]] = []

    @property
    def model_name(self) -> str:
        return "keyword-test-model"

    @property
    def embedding_dimension(self) -> int:
        return len(KEYWORDS)

    async def embed(self, texts: List[str]) -> List[List[float]]:
        self.calls.append(list(texts))
        return [[float(text.lower().count(keyword)) for keyword in KEYWORDS] for text in texts]


@pytest.fixture
def repository() -> InMemoryDocumentRepository:
    """Fresh in-memory repository."""
    return InMemoryDocumentRepository()


@pytest.fixture
def provider() -> KeywordEmbeddingProvider:
    return KeywordEmbeddingProvider()


@pytest.fixture
def generator(repository, provider) -> EmbeddingGenerator:
    """Embedding generator without the inter-batch delay."""
    return EmbeddingGenerator(repository, provider, batch_size=100, batch_delay=0)


@pytest.fixture
def document_service(repository) -> DocumentProcessingService:
    return DocumentProcessingService(repository)


@pytest.fixture
def retrieval_service(repository, generator) -> RetrievalService:
    return RetrievalService(repository, generator)


@pytest.fixture
def make_docx(tmp_path):
    """Write a DOCX file with one paragraph per string and return its path."""
    import docx

    def _make_docx(paragraphs: List[str], name: str = "guide.docx") -> str:
        document = docx.Document()
        for paragraph in paragraphs:
            document.add_paragraph(paragraph)
        path = tmp_path / name
        document.save(str(path))
        return str(path)

    return _make_docx


@pytest_asyncio.fixture(scope="function")
async def client(repository, provider):
    """HTTP client whose requests share the in-memory repository and keyword provider."""
    app.dependency_overrides = {}
    app.dependency_overrides[get_repository] = lambda: repository
    app.dependency_overrides[get_provider] = lambda: provider

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides = {}


def is_docker_running() -> bool:
    """Check if Docker daemon is running."""
    try:
        DockerClient()
        return True
    except Exception:
        return False


@pytest.fixture(scope="session")
def pg_container():
    """Create a PostgreSQL container for testing."""
    if not is_docker_running():
        pytest.skip("Docker is required, but not running")

    with PostgresContainer("postgres:16-alpine") as pg:
        yield pg


@pytest.fixture(scope="session")
def test_db_url(pg_container) -> str:
    """Create a proper asyncpg URL for PostgreSQL."""
    host = pg_container.get_container_host_ip()
    port = pg_container.get_exposed_port(5432)
    return f"postgresql+asyncpg://{pg_container.username}:{pg_container.password}@{host}:{port}/{pg_container.dbname}"


@pytest_asyncio.fixture(scope="function")
async def test_db_engine(test_db_url):
    """Create a SQLAlchemy engine with fresh tables for one test."""
    engine = create_async_engine(test_db_url, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def db_session(test_db_engine):
    """Create a test database session."""
    session_factory = async_sessionmaker(test_db_engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest.fixture
def pg_repository(db_session) -> SQLAlchemyDocumentRepository:
    return SQLAlchemyDocumentRepository(db_session)
