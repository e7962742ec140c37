"""Entry Routes — owner-scoped CRUD over journal entries.

Invariants:
    - All endpoints require an identity (401 otherwise)
    - GET returns enriched entries (tags + projects); POST/PUT return the bare entry
    - Missing and foreign ids both yield 404
    - DELETE returns 204 with an empty body
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from devjournal.api.dependencies import get_journal_service, get_owner_id
from devjournal.schemas.entry import (
    EntryCreate, EntryUpdate, EntryResponse, EnrichedEntryResponse,
)
from devjournal.services.journal_service import JournalService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/entries", tags=["entries"])


@router.get("", response_model=list[EnrichedEntryResponse])
async def list_entries(
    owner_id: str = Depends(get_owner_id),
    service: JournalService = Depends(get_journal_service),
):
    """All of the caller's entries, most recent first."""
    return await service.list_entries(owner_id)


@router.post(
    "", response_model=EntryResponse, status_code=status.HTTP_201_CREATED,
)
async def create_entry(
    body: EntryCreate,
    owner_id: str = Depends(get_owner_id),
    service: JournalService = Depends(get_journal_service),
):
    return await service.create_entry(owner_id, body)


@router.get("/{entry_id}", response_model=EnrichedEntryResponse)
async def get_entry(
    entry_id: int,
    owner_id: str = Depends(get_owner_id),
    service: JournalService = Depends(get_journal_service),
):
    return await service.get_entry(entry_id, owner_id)


@router.put("/{entry_id}", response_model=EntryResponse)
async def update_entry(
    entry_id: int,
    body: EntryUpdate,
    owner_id: str = Depends(get_owner_id),
    service: JournalService = Depends(get_journal_service),
):
    """Partial update; tags/projectIds replace associations only when sent."""
    return await service.update_entry(entry_id, owner_id, body)


@router.delete(
    "/{entry_id}", status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
)
async def delete_entry(
    entry_id: int,
    owner_id: str = Depends(get_owner_id),
    service: JournalService = Depends(get_journal_service),
):
    await service.delete_entry(entry_id, owner_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
