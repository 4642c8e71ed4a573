"""
Database table creation script.

Creates all tables defined in ORM models using SQLAlchemy metadata.
On PostgreSQL the pgvector extension is enabled first.

Dependencies: sqlalchemy, pgvector, blogsearch.configs
System role: Database schema initialization

Usage:
    python -m blogsearch.boundary.db.create_tables
"""

import asyncio
import logging

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine

from blogsearch.boundary.db.base import Base
from blogsearch.boundary.db.connection import get_async_engine

# Import all models to register them with Base.metadata
from blogsearch.boundary.db.models import (  # noqa: F401
    IndexJobModel,
    PostEmbeddingModel,
    PostModel,
)

logger = logging.getLogger(__name__)


async def create_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: existing tables remain unchanged.

    Args:
        engine: Target engine; the configured engine when None

    Raises:
        SQLAlchemyError: If connection or table creation fails
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        if conn.dialect.name == "postgresql":
            await conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
        await conn.run_sync(Base.metadata.create_all)
    logger.info(f"{__name__}:create_all_tables - Tables created")


async def drop_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Drop all database tables and their data.

    WARNING: Irreversible data loss. Only use in development environments.
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.info(f"{__name__}:drop_all_tables - Tables dropped")


if __name__ == "__main__":
    from blogsearch.observability import configure_logging

    configure_logging()
    asyncio.run(create_all_tables())
