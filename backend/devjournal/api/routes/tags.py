"""Tag Routes — the shared tag vocabulary. No identity required."""

from fastapi import APIRouter, Depends

from devjournal.api.dependencies import get_journal_service
from devjournal.schemas.tag import TagResponse
from devjournal.services.journal_service import JournalService

router = APIRouter(prefix="/api/tags", tags=["tags"])


@router.get("", response_model=list[TagResponse])
async def list_tags(service: JournalService = Depends(get_journal_service)):
    return await service.list_tags()
