"""Association Manager — maintains the entry<->tag and entry<->project join relations.

Invariants:
    - set_*_for_entry(entry_id, ids) leaves exactly one join row per distinct id, and none other
    - Replacement is a diff-and-apply inside the caller's transaction: stale rows deleted,
      missing rows inserted, unchanged rows untouched (no transient empty window)
    - Read projections join through the join table and never return orphans
    - flush-free Core statements only: the caller owns commit/rollback

Design Decisions:
    - Explicit join-table operations over ORM collections: keeps every read an awaited
      query (no async lazy loading) and makes the replace semantics visible
    - Batched reads (*_by_entry) for list views: one query per relation for a whole page
      instead of one per entry
    - Concurrent replacements of the same entry are last-write-wins (no version check)
"""

import logging
from collections import defaultdict
from collections.abc import Sequence

from sqlalchemy import select, delete, insert
from sqlalchemy.ext.asyncio import AsyncSession

from devjournal.models.entry_project import EntryProject
from devjournal.models.entry_tag import EntryTag
from devjournal.models.project import Project
from devjournal.models.tag import Tag

logger = logging.getLogger(__name__)


class AssociationManager:
    """Join-table writes and read projections for entries."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Writes ──────────────────────────────────────────────────

    async def set_tags_for_entry(self, entry_id: int, tag_ids: Sequence[int]) -> None:
        """Replace the entry's tag set with tag_ids."""
        await self._replace(EntryTag, EntryTag.tag_id, "tag_id", entry_id, tag_ids)

    async def set_projects_for_entry(
        self, entry_id: int, project_ids: Sequence[int],
    ) -> None:
        """Replace the entry's project set with project_ids."""
        await self._replace(
            EntryProject, EntryProject.project_id, "project_id",
            entry_id, project_ids,
        )

    async def clear_entry(self, entry_id: int) -> None:
        """Delete every join row of the entry (both relations)."""
        await self.db.execute(delete(EntryTag).where(EntryTag.entry_id == entry_id))
        await self.db.execute(
            delete(EntryProject).where(EntryProject.entry_id == entry_id),
        )

    async def _replace(self, model, column, key: str, entry_id: int, ids) -> None:
        wanted = list(dict.fromkeys(ids))
        result = await self.db.execute(
            select(column).where(model.entry_id == entry_id),
        )
        current = set(result.scalars().all())

        stale = current.difference(wanted)
        if stale:
            await self.db.execute(
                delete(model).where(
                    model.entry_id == entry_id, column.in_(stale),
                ),
            )
        missing = [i for i in wanted if i not in current]
        if missing:
            await self.db.execute(
                insert(model),
                [{"entry_id": entry_id, key: i} for i in missing],
            )
        logger.debug(
            f"{model.__tablename__}: -{len(stale)} +{len(missing)}",
            extra={"entry_id": entry_id},
        )

    # ─── Reads ───────────────────────────────────────────────────

    async def get_tags_for_entry(self, entry_id: int) -> list[str]:
        tags = await self.tags_by_entry([entry_id])
        return tags.get(entry_id, [])

    async def get_projects_for_entry(self, entry_id: int) -> list[Project]:
        projects = await self.projects_by_entry([entry_id])
        return projects.get(entry_id, [])

    async def tags_by_entry(self, entry_ids: Sequence[int]) -> dict[int, list[str]]:
        """Tag names per entry id, alphabetical within each entry."""
        if not entry_ids:
            return {}
        result = await self.db.execute(
            select(EntryTag.entry_id, Tag.name)
            .join(Tag, EntryTag.tag_id == Tag.id)
            .where(EntryTag.entry_id.in_(entry_ids))
            .order_by(Tag.name),
        )
        grouped: dict[int, list[str]] = defaultdict(list)
        for entry_id, name in result.all():
            grouped[entry_id].append(name)
        return dict(grouped)

    async def projects_by_entry(
        self, entry_ids: Sequence[int],
    ) -> dict[int, list[Project]]:
        """Full project records per entry id, oldest project first."""
        if not entry_ids:
            return {}
        result = await self.db.execute(
            select(EntryProject.entry_id, Project)
            .join(Project, EntryProject.project_id == Project.id)
            .where(EntryProject.entry_id.in_(entry_ids))
            .order_by(Project.created_at, Project.id),
        )
        grouped: dict[int, list[Project]] = defaultdict(list)
        for entry_id, project in result.all():
            grouped[entry_id].append(project)
        return dict(grouped)
