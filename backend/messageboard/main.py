"""Message Board API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map MessageBoardError → structured JSON responses
    - CORS and security headers configured from settings (not hardcoded)
    - Document store initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern
    - init_store() is idempotent, so tests may initialize the store before startup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from messageboard.api.error_handlers import register_error_handlers
from messageboard.api.middleware import register_middleware
from messageboard.api.routes import health, replies, threads
from messageboard.config import get_settings
from messageboard.infrastructure.document_store import init_store
from messageboard.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_store()
    logger.info("Message board API started")
    yield
    logger.info("Message board API shutting down")


app = FastAPI(
    title="Anonymous Message Board API", version="1.0.0", lifespan=lifespan,
)

register_middleware(app, get_settings())

app.include_router(health.router)
app.include_router(threads.router)
app.include_router(replies.router)

register_error_handlers(app)
