"""Tag Registry — normalizes free-text tag names into unique persistent Tag rows.

Invariants:
    - resolve() never creates two Tag rows with the same name, even when the input
      repeats a name or two requests resolve the same new name concurrently
    - Returned tags are the union of pre-existing and newly created rows (order not guaranteed)
    - Tags are never deleted here

Design Decisions:
    - Atomic "insert if absent, else fetch": INSERT ... ON CONFLICT (name) DO NOTHING,
      then one SELECT for all names. Closes the check-then-insert race
    - Dialects without ON CONFLICT support fall back to one SAVEPOINT per missing name,
      treating IntegrityError as "another request created it first"
    - flush only, never commit: the caller owns the transaction
"""

import logging
from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from devjournal.core.tag_names import normalize_tag_names
from devjournal.models.tag import Tag

logger = logging.getLogger(__name__)

_UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


class TagRegistry:
    """Get-or-create access to the global tag vocabulary."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def resolve(self, names: Sequence[str]) -> list[Tag]:
        """Return a Tag for every distinct name, creating missing ones."""
        unique_names = normalize_tag_names(names)
        if not unique_names:
            return []

        dialect = self.db.get_bind().dialect.name
        insert_fn = _UPSERT_INSERTS.get(dialect)
        if insert_fn is not None:
            await self.db.execute(
                insert_fn(Tag)
                .values([{"name": name} for name in unique_names])
                .on_conflict_do_nothing(index_elements=["name"]),
            )
        else:
            await self._insert_missing_with_savepoints(unique_names)

        result = await self.db.execute(
            select(Tag).where(Tag.name.in_(unique_names)),
        )
        tags = list(result.scalars().all())
        logger.debug(
            f"Resolved {len(tags)} tag(s)", extra={"tag_count": len(tags)},
        )
        return tags

    async def list_all(self) -> list[Tag]:
        result = await self.db.execute(select(Tag).order_by(Tag.name))
        return list(result.scalars().all())

    async def _insert_missing_with_savepoints(self, names: list[str]) -> None:
        result = await self.db.execute(
            select(Tag.name).where(Tag.name.in_(names)),
        )
        existing = set(result.scalars().all())
        for name in names:
            if name in existing:
                continue
            try:
                async with self.db.begin_nested():
                    self.db.add(Tag(name=name))
            except IntegrityError:
                logger.info(f"Tag '{name}' created concurrently, reusing it")
