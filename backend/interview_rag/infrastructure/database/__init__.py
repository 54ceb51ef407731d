"""Database engine, session and model mixins."""

from .session import Base, async_session, create_tables, engine, local_session

__all__ = [
    "Base",
    "async_session",
    "create_tables",
    "engine",
    "local_session",
]
