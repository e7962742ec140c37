"""Developer Journal API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map JournalError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database manager and AI advisor created on startup, stored on app.state,
      disposed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Storage handle injected through app.state + get_db, never a module global
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from devjournal.api.error_handlers import register_error_handlers
from devjournal.api.routes import ai, entries, health, projects, tags
from devjournal.config import get_settings
from devjournal.infrastructure.database import DatabaseSessionManager
from devjournal.infrastructure.observability import setup_logging
from devjournal.services.ai_advisor import build_advisor

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    app.state.ai_advisor = build_advisor(settings)
    logger.info("Journal API started")
    yield
    await app.state.db_manager.close()
    logger.info("Journal API shutting down")


app = FastAPI(
    title="Developer Journal API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(entries.router)
app.include_router(projects.router)
app.include_router(tags.router)
app.include_router(ai.router)

register_error_handlers(app)
