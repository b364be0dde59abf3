"""Database engine construction and the declarative base."""

from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    """Base class for all database models."""

    pass


def is_memory_url(database_url: str) -> bool:
    """Check whether a SQLite URL points at an in-memory database."""
    if not database_url.startswith("sqlite"):
        return False
    path = database_url.split("://", 1)[-1]
    return path in ("", "/", "/:memory:") or "mode=memory" in path


def build_engine(database_url: str, echo: bool = False) -> AsyncEngine:
    """Create the async engine backing the store.

    In-memory SQLite lives inside a single connection, so the engine is pinned
    to one shared connection with StaticPool.
    """
    if is_memory_url(database_url):
        return create_async_engine(
            database_url,
            echo=echo,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_async_engine(database_url, echo=echo)
