"""Route Dependencies — identity, journal service and AI advisor injection.

Invariants:
    - get_owner_id() returns a non-empty opaque id or raises UnauthorizedError (401)
    - get_journal_service() binds one JournalService to the request's DB session
    - get_advisor() falls back to StaticAdvisor when none was configured at startup

Design Decisions:
    - Identity comes from a configurable header set by the fronting auth layer;
      dev_user_id stands in for it during local development
"""

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from devjournal.config import Settings, get_settings
from devjournal.core.errors import UnauthorizedError
from devjournal.infrastructure.database import get_db
from devjournal.services.ai_advisor import AIAdvisor, StaticAdvisor
from devjournal.services.journal_service import JournalService


def identify(request: Request, settings: Settings) -> str:
    """Resolve the acting owner id from the request, or raise UnauthorizedError."""
    owner_id = request.headers.get(settings.auth_header, "").strip()
    if owner_id:
        return owner_id
    if settings.dev_user_id:
        return settings.dev_user_id
    raise UnauthorizedError()


async def get_owner_id(
    request: Request, settings: Settings = Depends(get_settings),
) -> str:
    return identify(request, settings)


async def get_journal_service(
    db: AsyncSession = Depends(get_db),
) -> JournalService:
    return JournalService(db)


async def get_advisor(request: Request) -> AIAdvisor:
    return getattr(request.app.state, "ai_advisor", None) or StaticAdvisor()
