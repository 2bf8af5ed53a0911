"""Secret Santa API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map SantaError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Event store initialized on startup and closed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Static client build served only when a ./static directory exists, mounted
      AFTER API routes so /api/* takes precedence
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from santa.api.error_handlers import register_error_handlers
from santa.api.routes import draw, events, health, storage, tickets
from santa.config import get_settings
from santa.infrastructure.event_store import close_store, init_store
from santa.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    store = init_store(settings)
    logger.info("Secret Santa API started", extra={"storage": store.backend.value})
    yield
    await close_store()
    logger.info("Secret Santa API shutting down")


settings = get_settings()
app = FastAPI(
    title="Secret Santa API", version=settings.app_version, lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(health.legacy_router)
app.include_router(storage.router)
app.include_router(events.router)
app.include_router(draw.router)
app.include_router(tickets.router)

register_error_handlers(app)

if os.path.isdir("static"):
    app.mount("/", StaticFiles(directory="static", html=True), name="static")
