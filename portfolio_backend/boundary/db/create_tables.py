"""
Database table creation script.

Creates all tables defined in ORM models using SQLAlchemy metadata.

Dependencies: sqlalchemy, portfolio_backend.configs
System role: Database schema initialization

Usage:
    python -m portfolio_backend.boundary.db.create_tables
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncEngine

from portfolio_backend.boundary.db.base import Base
from portfolio_backend.boundary.db.connection import get_async_engine
from portfolio_backend.configs import get_settings

# Import all models to register them with Base.metadata
from portfolio_backend.boundary.db import models  # noqa: F401

logger = logging.getLogger(__name__)


async def create_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Create all database tables from registered ORM models.

    Idempotent: calls CREATE TABLE IF NOT EXISTS for each model, so safe
    to run multiple times. Existing tables remain unchanged.

    Args:
        engine: Engine to use; a configured engine is created if None

    Raises:
        SQLAlchemyError: If database connection fails or table creation fails
    """
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("All tables created successfully.")


async def drop_all_tables(engine: AsyncEngine | None = None) -> None:
    """
    Drop all database tables and their data.

    WARNING: Irreversible data loss. Refused when ENVIRONMENT=production.
    Blob store objects referenced by the dropped rows are not deleted.

    Args:
        engine: Engine to use; a configured engine is created if None

    Raises:
        RuntimeError: If ENVIRONMENT is production
        SQLAlchemyError: If database connection fails or drop fails
    """
    if get_settings().is_production:
        raise RuntimeError("Refusing to drop tables in production")
    engine = engine or get_async_engine()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    logger.info("All tables dropped successfully.")


if __name__ == "__main__":
    from portfolio_backend.observability.logger import configure_logging

    configure_logging()
    asyncio.run(create_all_tables())
