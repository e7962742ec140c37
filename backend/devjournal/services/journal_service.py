"""Journal Service — the aggregation facade consumed by the HTTP routes.

Invariants:
    - Every read and write is owner-scoped; a foreign id is indistinguishable from a missing one
    - Each mutating operation commits exactly once (entry fields + associations atomically)
    - projectIds must reference projects the caller owns, else InputValidationError(field="projectIds")
    - Returns wire schemas, never ORM rows

Design Decisions:
    - One service per request, built around the request's AsyncSession (injected storage)
    - Validation of wire shape happens in schemas; cross-entity validation (project ownership)
      happens here, before any write
"""

import logging
from collections.abc import Sequence
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from devjournal.core.domain_types import TimeRange
from devjournal.core.errors import (
    ErrorContext, InputValidationError, ResourceNotFoundError,
)
from devjournal.core.time_range import window_start
from devjournal.schemas.entry import (
    EntryCreate, EntryUpdate, EntryResponse, EnrichedEntryResponse,
)
from devjournal.schemas.project import ProjectCreate, ProjectResponse
from devjournal.schemas.tag import TagResponse
from devjournal.services.associations import AssociationManager
from devjournal.services.entry_repository import EnrichedEntry, EntryRepository
from devjournal.services.project_repository import ProjectRepository
from devjournal.services.tag_registry import TagRegistry

logger = logging.getLogger(__name__)


def to_enriched_response(enriched: EnrichedEntry) -> EnrichedEntryResponse:
    """Compose the wire view of an enriched entry."""
    base = EntryResponse.model_validate(enriched.entry)
    return EnrichedEntryResponse(
        **base.model_dump(),
        tags=enriched.tags,
        projects=[ProjectResponse.model_validate(p) for p in enriched.projects],
    )


class JournalService:
    """Entry/tag/project read-write contract."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.tags = TagRegistry(db)
        self.associations = AssociationManager(db)
        self.entries = EntryRepository(db, self.tags, self.associations)
        self.projects = ProjectRepository(db)

    # ─── Entries ─────────────────────────────────────────────────

    async def list_entries(self, owner_id: str) -> list[EnrichedEntryResponse]:
        enriched = await self.entries.list_by_owner(owner_id)
        return [to_enriched_response(e) for e in enriched]

    async def get_entry(self, entry_id: int, owner_id: str) -> EnrichedEntryResponse:
        enriched = await self.entries.get(entry_id, owner_id=owner_id)
        if enriched is None:
            raise ResourceNotFoundError(
                "Entry", entry_id,
                ErrorContext(owner_id=owner_id, entry_id=entry_id),
            )
        return to_enriched_response(enriched)

    async def create_entry(self, owner_id: str, body: EntryCreate) -> EntryResponse:
        await self._check_project_ids(owner_id, body.project_ids)
        entry = await self.entries.create(
            owner_id, body.entry_fields(),
            tag_names=body.tags, project_ids=body.project_ids,
        )
        await self.db.commit()
        return EntryResponse.model_validate(entry)

    async def update_entry(
        self, entry_id: int, owner_id: str, body: EntryUpdate,
    ) -> EntryResponse:
        entry = await self.entries.get_owned(entry_id, owner_id)
        if entry is None:
            raise ResourceNotFoundError(
                "Entry", entry_id,
                ErrorContext(owner_id=owner_id, entry_id=entry_id),
            )
        await self._check_project_ids(owner_id, body.project_ids)
        entry = await self.entries.apply_update(
            entry, body.entry_fields(),
            tag_names=body.tags, project_ids=body.project_ids,
        )
        await self.db.commit()
        return EntryResponse.model_validate(entry)

    async def delete_entry(self, entry_id: int, owner_id: str) -> None:
        deleted = await self.entries.delete(entry_id, owner_id)
        if not deleted:
            raise ResourceNotFoundError(
                "Entry", entry_id,
                ErrorContext(owner_id=owner_id, entry_id=entry_id),
            )
        await self.db.commit()

    async def entries_in_window(
        self, owner_id: str, time_range: TimeRange, now: datetime | None = None,
    ) -> list[EnrichedEntry]:
        """Owner's entries dated inside the time range, for AI summaries."""
        now = now or datetime.now(timezone.utc)
        return await self.entries.list_by_owner(
            owner_id, since=window_start(time_range, now),
        )

    # ─── Projects ────────────────────────────────────────────────

    async def list_projects(self, owner_id: str) -> list[ProjectResponse]:
        projects = await self.projects.list_by_owner(owner_id)
        return [ProjectResponse.model_validate(p) for p in projects]

    async def get_project(self, project_id: int, owner_id: str) -> ProjectResponse:
        project = await self.projects.get(project_id, owner_id=owner_id)
        if project is None:
            raise ResourceNotFoundError(
                "Project", project_id,
                ErrorContext(owner_id=owner_id, project_id=project_id),
            )
        return ProjectResponse.model_validate(project)

    async def create_project(
        self, owner_id: str, body: ProjectCreate,
    ) -> ProjectResponse:
        project = await self.projects.create(owner_id, body.model_dump())
        await self.db.commit()
        return ProjectResponse.model_validate(project)

    # ─── Tags ────────────────────────────────────────────────────

    async def list_tags(self) -> list[TagResponse]:
        tags = await self.tags.list_all()
        return [TagResponse.model_validate(t) for t in tags]

    # ─── Helpers ─────────────────────────────────────────────────

    async def _check_project_ids(
        self, owner_id: str, project_ids: Sequence[int] | None,
    ) -> None:
        if not project_ids:
            return
        owned = await self.projects.owned_ids(owner_id, project_ids)
        unknown = [pid for pid in project_ids if pid not in owned]
        if unknown:
            raise InputValidationError(
                f"Unknown project id: {unknown[0]}", "projectIds",
                ErrorContext(owner_id=owner_id),
            )
