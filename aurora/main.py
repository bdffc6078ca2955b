"""Aurora API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map AuroraError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized and system categories seeded on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py (ADR: import fan-out)
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from aurora import __version__
from aurora.api.error_handlers import register_error_handlers
from aurora.api.routes import (
    ai, categories, events, health, moods, preferences, productivity,
    recommendations, reminders, schedule_suggestions, self_care, wellness,
)
from aurora.config import get_settings
from aurora.infrastructure import database
from aurora.infrastructure.observability import setup_logging
from aurora.services import category_service

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    if settings.seed_system_categories:
        async with database.db_manager.session() as db:
            created = await category_service.ensure_system_categories(db)
        logger.info(f"System categories ready ({created} created)")
    logger.info("Aurora API started")
    yield
    logger.info("Aurora API shutting down")
    await database.db_manager.dispose()


app = FastAPI(title="Aurora API", version=__version__, lifespan=lifespan)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(events.router)
app.include_router(categories.router)
app.include_router(moods.router)
app.include_router(wellness.router)
app.include_router(self_care.router)
app.include_router(recommendations.router)
app.include_router(schedule_suggestions.router)
app.include_router(productivity.router)
app.include_router(ai.router)
app.include_router(reminders.router)
app.include_router(preferences.router)

register_error_handlers(app)
