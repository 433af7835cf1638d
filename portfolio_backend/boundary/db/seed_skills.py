"""
Skill catalog seeding.

Inserts catalog names that are not present yet. Safe to run repeatedly.

Dependencies: sqlalchemy, portfolio_backend.boundary.db
System role: Catalog bootstrap for operators and tests

Usage:
    python -m portfolio_backend.boundary.db.seed_skills python java go rust
"""

import asyncio
import logging
import sys
from typing import Iterable, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from portfolio_backend.boundary.db.CRUD.skill_crud import skill_crud
from portfolio_backend.boundary.db.connection import get_async_engine, get_async_session_factory
from portfolio_backend.boundary.db.models.skill_model import SkillModel

logger = logging.getLogger(__name__)


async def seed_skills(session: AsyncSession, names: Iterable[str]) -> Sequence[SkillModel]:
    """
    Ensure every name exists in the catalog and commit.

    Args:
        session: Async database session
        names: Skill names in any case

    Returns:
        Catalog rows for the given names
    """
    skills = await skill_crud.ensure_names(session, names)
    await session.commit()
    logger.info(
        f"{__name__}:seed_skills - Catalog seeded",
        extra={"skill_count": len(skills)},
    )
    return skills


async def _main(names: list[str]) -> None:
    engine = get_async_engine()
    try:
        async with get_async_session_factory(engine)() as session:
            await seed_skills(session, names)
    finally:
        await engine.dispose()


if __name__ == "__main__":
    from portfolio_backend.observability.logger import configure_logging

    configure_logging()
    if len(sys.argv) < 2:
        print("Usage: python -m portfolio_backend.boundary.db.seed_skills NAME [NAME ...]")
        sys.exit(1)
    asyncio.run(_main(sys.argv[1:]))
