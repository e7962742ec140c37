"""Tag Seeding — inserts the default tag vocabulary. Run: python -m devjournal.seed

Invariants:
    - Idempotent: re-running never duplicates tags (goes through TagRegistry.resolve)
"""

import asyncio
import logging
from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from devjournal.config import get_settings
from devjournal.db.session import create_session_factory
from devjournal.infrastructure.observability import setup_logging
from devjournal.services.tag_registry import TagRegistry

logger = logging.getLogger(__name__)


async def seed_default_tags(
    session_factory: async_sessionmaker[AsyncSession], names: Sequence[str],
) -> int:
    """Ensure every name exists as a Tag. Returns the number of tags resolved."""
    async with session_factory() as db:
        tags = await TagRegistry(db).resolve(names)
        await db.commit()
    return len(tags)


async def _run() -> None:
    settings = get_settings()
    session_factory = create_session_factory(settings.database_url)
    try:
        count = await seed_default_tags(session_factory, settings.default_tags)
        logger.info(f"Seeded tags ({count} present)", extra={"tag_count": count})
    finally:
        await session_factory.kw["bind"].dispose()


def main() -> None:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    asyncio.run(_run())


if __name__ == "__main__":
    main()
