"""Acme Dashboard API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map DashboardError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database manager and view cache created on startup via lifespan, held on app.state

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Tables created on startup when database_create_tables is set; there are no migrations
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dashboard.api.error_handlers import register_error_handlers
from dashboard.api.routes import auth, health, invoices, roles, team
from dashboard.config import get_settings
from dashboard.infrastructure.database import DatabaseSessionManager
from dashboard.infrastructure.observability import setup_logging
from dashboard.infrastructure.view_cache import ViewCache

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
    if settings.database_create_tables:
        await app.state.db_manager.create_tables()
    app.state.view_cache = ViewCache()
    logger.info("Dashboard API started")
    yield
    await app.state.db_manager.dispose()
    logger.info("Dashboard API shutting down")


app = FastAPI(
    title="Acme Dashboard API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(invoices.router)
app.include_router(team.router)
app.include_router(roles.router)
app.include_router(auth.router)

register_error_handlers(app)
