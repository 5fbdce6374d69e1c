"""Micro Journal API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map MicroJournalError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Layers built Store -> Manager -> Handler per request (journal_service.get_journal_manager)
    - Run with: uvicorn microjournal.main:app
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from microjournal.api.error_handlers import register_error_handlers
from microjournal.api.routes import health, journal_service
from microjournal.infrastructure.database import init_db
from microjournal.infrastructure.observability import setup_logging
from microjournal.config import get_settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.database_create_schema:
        await manager.create_schema()
    logger.info("Micro Journal API started")
    yield
    logger.info("Micro Journal API shutting down")
    await manager.dispose()


app = FastAPI(
    title="Micro Journal API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(journal_service.router)

register_error_handlers(app)
