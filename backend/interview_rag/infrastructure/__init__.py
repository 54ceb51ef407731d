"""Config, database, logging and embedding backends shared by the RAG modules."""

from .config import get_settings
from .database.session import async_session, create_tables
from .embedding import get_embedding_provider
from .logging import configure_logging, get_logger

__all__ = [
    "async_session",
    "configure_logging",
    "create_tables",
    "get_embedding_provider",
    "get_logger",
    "get_settings",
]
