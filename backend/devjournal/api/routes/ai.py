"""AI Routes — journal summary and next-step suggestions.

Invariants:
    - Identity required
    - Always 200 with a well-formed body: advisor failures degrade to static defaults
"""

import logging

from fastapi import APIRouter, Depends

from devjournal.api.dependencies import (
    get_advisor, get_journal_service, get_owner_id,
)
from devjournal.core.domain_types import TimeRange
from devjournal.schemas.ai import (
    NextStepsResponse, SummaryRequest, SummaryResponse,
)
from devjournal.services.ai_advisor import AIAdvisor
from devjournal.services.journal_service import JournalService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/ai", tags=["ai"])


@router.post("/summary", response_model=SummaryResponse)
async def generate_summary(
    body: SummaryRequest | None = None,
    owner_id: str = Depends(get_owner_id),
    service: JournalService = Depends(get_journal_service),
    advisor: AIAdvisor = Depends(get_advisor),
):
    """Summarize the caller's entries from the last day or week."""
    time_range = body.time_range if body else TimeRange.DAILY
    entries = await service.entries_in_window(owner_id, time_range)
    return await advisor.summarize(entries)


@router.post("/next-steps", response_model=NextStepsResponse)
async def suggest_next_steps(
    owner_id: str = Depends(get_owner_id),
    service: JournalService = Depends(get_journal_service),
    advisor: AIAdvisor = Depends(get_advisor),
):
    entries = await service.entries_in_window(owner_id, TimeRange.WEEKLY)
    return await advisor.suggest_next(entries)
