"""Project Routes — list, create and fetch the caller's projects."""

import logging

from fastapi import APIRouter, Depends, status

from devjournal.api.dependencies import get_journal_service, get_owner_id
from devjournal.schemas.project import ProjectCreate, ProjectResponse
from devjournal.services.journal_service import JournalService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/projects", tags=["projects"])


@router.get("", response_model=list[ProjectResponse])
async def list_projects(
    owner_id: str = Depends(get_owner_id),
    service: JournalService = Depends(get_journal_service),
):
    """Caller's projects, newest first."""
    return await service.list_projects(owner_id)


@router.post(
    "", response_model=ProjectResponse, status_code=status.HTTP_201_CREATED,
)
async def create_project(
    body: ProjectCreate,
    owner_id: str = Depends(get_owner_id),
    service: JournalService = Depends(get_journal_service),
):
    return await service.create_project(owner_id, body)


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: int,
    owner_id: str = Depends(get_owner_id),
    service: JournalService = Depends(get_journal_service),
):
    return await service.get_project(project_id, owner_id)
