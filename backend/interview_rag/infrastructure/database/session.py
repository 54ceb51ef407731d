from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, MappedAsDataclass

from ..config.settings import settings

engine = create_async_engine(
    settings.DATABASE_URL,
    echo=False,
    future=True,
    pool_size=settings.POSTGRES_POOL_SIZE,
    max_overflow=settings.POSTGRES_MAX_OVERFLOW,
)

local_session = async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase, MappedAsDataclass):
    """Base class for all database models.

    Combines SQLAlchemy's DeclarativeBase with MappedAsDataclass so models get
    dataclass ``__init__``/``__repr__``/``__eq__`` generated from their mapped
    columns.
    """

    pass


async def async_session() -> AsyncGenerator[AsyncSession, None]:
    """Dependency yielding a database session that is closed on exit.

    Example:
        ```python
        @router.get("/documents")
        async def list_documents(db: AsyncSession = Depends(async_session)):
            ...
        ```
    """
    async with local_session() as db:
        yield db


async def create_tables() -> None:
    """Create all tables that don't exist yet.

    Idempotent: existing tables are left unchanged. Model modules must be
    imported before this runs so their tables are registered on the metadata.
    """
    from ...modules.chunk import models as _chunk_models  # noqa: F401
    from ...modules.document import models as _document_models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
