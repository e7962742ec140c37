"""Project Repository — owner-scoped project persistence.

Invariants:
    - list_by_owner() returns only the owner's projects, created_at descending
    - get() is owner-scoped when owner_id is given
    - owned_ids() reports which of the given ids exist AND belong to the owner
"""

import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from devjournal.models.project import Project

logger = logging.getLogger(__name__)


class ProjectRepository:
    """Project CRUD scoped to a user."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_by_owner(self, owner_id: str) -> list[Project]:
        result = await self.db.execute(
            select(Project)
            .where(Project.owner_id == owner_id)
            .order_by(Project.created_at.desc(), Project.id.desc()),
        )
        return list(result.scalars().all())

    async def get(
        self, project_id: int, owner_id: str | None = None,
    ) -> Project | None:
        query = select(Project).where(Project.id == project_id)
        if owner_id is not None:
            query = query.where(Project.owner_id == owner_id)
        return (await self.db.execute(query)).scalar_one_or_none()

    async def create(self, owner_id: str, fields: dict[str, Any]) -> Project:
        project = Project(**fields, owner_id=owner_id)
        self.db.add(project)
        await self.db.flush()
        logger.info(
            "Project created",
            extra={"project_id": project.id, "owner_id": owner_id},
        )
        return project

    async def owned_ids(self, owner_id: str, project_ids: Sequence[int]) -> set[int]:
        if not project_ids:
            return set()
        result = await self.db.execute(
            select(Project.id).where(
                Project.owner_id == owner_id, Project.id.in_(project_ids),
            ),
        )
        return set(result.scalars().all())
