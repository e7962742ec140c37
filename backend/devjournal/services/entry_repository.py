"""Entry Repository — entry CRUD composed with resolved tags and linked projects.

Invariants:
    - list_by_owner() returns only the owner's entries, date descending (id breaks ties)
    - get() enriches exactly like list_by_owner(); when owner_id is given the read is owner-scoped
    - create() attaches owner_id and timestamps server-side; caller input never sets them
    - update()/delete() match on id AND owner_id; a foreign or missing id touches nothing
    - tag_names/project_ids = None leaves associations untouched; [] clears them
    - delete() removes join rows (children) before the entry row (parent)
    - No commits here: the facade commits once per operation, so field updates and
      association replacement land atomically

Design Decisions:
    - Enrichment batched per page through AssociationManager.*_by_entry
    - update() loads the owned row and assigns attributes: one ownership check serves
      both the field write and the association replacement. apply_update() takes a row
      the caller already loaded and checked
    - list_by_owner(since=...) filters by date in SQL, served by the (owner_id, date) index
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from devjournal.models.entry import Entry
from devjournal.models.project import Project
from devjournal.services.associations import AssociationManager
from devjournal.services.tag_registry import TagRegistry

logger = logging.getLogger(__name__)


@dataclass
class EnrichedEntry:
    """An Entry plus its resolved tag names and linked Project records."""
    entry: Entry
    tags: list[str] = field(default_factory=list)
    projects: list[Project] = field(default_factory=list)


class EntryRepository:
    """Owner-scoped entry persistence."""

    def __init__(
        self,
        db: AsyncSession,
        tag_registry: TagRegistry | None = None,
        associations: AssociationManager | None = None,
    ):
        self.db = db
        self.tag_registry = tag_registry or TagRegistry(db)
        self.associations = associations or AssociationManager(db)

    async def list_by_owner(
        self, owner_id: str, since: datetime | None = None,
    ) -> list[EnrichedEntry]:
        """Owner's entries, optionally only those dated at or after `since`."""
        query = select(Entry).where(Entry.owner_id == owner_id)
        if since is not None:
            query = query.where(Entry.date >= since)
        result = await self.db.execute(
            query.order_by(Entry.date.desc(), Entry.id.desc()),
        )
        return await self._enrich(list(result.scalars().all()))

    async def get(
        self, entry_id: int, owner_id: str | None = None,
    ) -> EnrichedEntry | None:
        query = select(Entry).where(Entry.id == entry_id)
        if owner_id is not None:
            query = query.where(Entry.owner_id == owner_id)
        entry = (await self.db.execute(query)).scalar_one_or_none()
        if entry is None:
            return None
        enriched = await self._enrich([entry])
        return enriched[0]

    async def get_owned(self, entry_id: int, owner_id: str) -> Entry | None:
        """Bare owned row, no enrichment."""
        result = await self.db.execute(
            select(Entry).where(Entry.id == entry_id, Entry.owner_id == owner_id),
        )
        return result.scalar_one_or_none()

    async def create(
        self,
        owner_id: str,
        fields: dict[str, Any],
        tag_names: Sequence[str] | None = None,
        project_ids: Sequence[int] | None = None,
    ) -> Entry:
        entry = Entry(**fields, owner_id=owner_id)
        self.db.add(entry)
        await self.db.flush()

        if tag_names:
            tags = await self.tag_registry.resolve(tag_names)
            await self.associations.set_tags_for_entry(
                entry.id, [t.id for t in tags],
            )
        if project_ids:
            await self.associations.set_projects_for_entry(entry.id, project_ids)

        logger.info(
            "Entry created",
            extra={"entry_id": entry.id, "owner_id": owner_id},
        )
        return entry

    async def update(
        self,
        entry_id: int,
        owner_id: str,
        fields: dict[str, Any],
        tag_names: Sequence[str] | None = None,
        project_ids: Sequence[int] | None = None,
    ) -> Entry | None:
        """Apply a partial update. Returns None when no owned entry matches."""
        entry = await self.get_owned(entry_id, owner_id)
        if entry is None:
            return None
        return await self.apply_update(entry, fields, tag_names, project_ids)

    async def apply_update(
        self,
        entry: Entry,
        fields: dict[str, Any],
        tag_names: Sequence[str] | None = None,
        project_ids: Sequence[int] | None = None,
    ) -> Entry:
        """Partial update of an already-loaded owned row."""
        for name, value in fields.items():
            setattr(entry, name, value)
        await self.db.flush()

        if tag_names is not None:
            tags = await self.tag_registry.resolve(tag_names)
            await self.associations.set_tags_for_entry(
                entry.id, [t.id for t in tags],
            )
        if project_ids is not None:
            await self.associations.set_projects_for_entry(entry.id, project_ids)

        logger.info(
            "Entry updated",
            extra={"entry_id": entry.id, "owner_id": entry.owner_id},
        )
        return entry

    async def delete(self, entry_id: int, owner_id: str) -> bool:
        """Delete an owned entry and its join rows. False (no-op) when nothing matched."""
        entry = await self.get_owned(entry_id, owner_id)
        if entry is None:
            return False

        await self.associations.clear_entry(entry.id)
        await self.db.delete(entry)
        await self.db.flush()

        logger.info(
            "Entry deleted",
            extra={"entry_id": entry_id, "owner_id": owner_id},
        )
        return True

    async def _enrich(self, entries: list[Entry]) -> list[EnrichedEntry]:
        ids = [e.id for e in entries]
        tags = await self.associations.tags_by_entry(ids)
        projects = await self.associations.projects_by_entry(ids)
        return [
            EnrichedEntry(
                entry=e,
                tags=tags.get(e.id, []),
                projects=projects.get(e.id, []),
            )
            for e in entries
        ]
