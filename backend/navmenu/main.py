"""Menu Items API - FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map NavMenuError to structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Error handlers live in api.error_handlers; this module only wires
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from navmenu import __version__
from navmenu.api.error_handlers import register_error_handlers
from navmenu.api.routes import health, menu_items
from navmenu.config import get_settings
from navmenu.infrastructure.database import init_db
from navmenu.infrastructure.observability import setup_logging

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
    logger.info("Menu Items API started")
    yield
    logger.info("Menu Items API shutting down")
    await manager.dispose()


app = FastAPI(
    title="Menu Items API", version=__version__, lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Location", "Link", "X-WP-Total", "X-WP-TotalPages"],
)

app.include_router(health.router)
app.include_router(menu_items.router)

register_error_handlers(app)
