"""Shared Task API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map TaskShareError -> structured JSON responses
    - CORS configured from settings (not hardcoded); ETag exposed to browsers
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api/error_handlers.py; main only wires them
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import taskshare.infrastructure.database as database
from taskshare.api.error_handlers import register_error_handlers
from taskshare.api.routes import health, shares, tasks, users
from taskshare.config import get_settings
from taskshare.infrastructure.observability import setup_logging

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
    logger.info("Task API started")
    yield
    if database.db_manager:
        await database.db_manager.close()
    logger.info("Task API shutting down")


app = FastAPI(
    title="Shared Task API", version="1.0.0", lifespan=lifespan,
)

# CORS — configured from settings, not hardcoded
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["ETag", "Location"],
)

# Routes — explicit registration
app.include_router(health.router)
app.include_router(tasks.router)
app.include_router(shares.router)
app.include_router(users.router)

register_error_handlers(app)
