"""Tasker API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers render every failure as {"success": false, "error": ...}
    - CORS configured from settings (not hardcoded)
    - Database engine created on startup and disposed on shutdown (lifespan)

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Tables are created on startup for development databases; production
      schemas are managed by alembic migrations
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from tasker_api.api.error_handlers import register_error_handlers
from tasker_api.api.routes import auth, health, payments, profiles, tasks, users
from tasker_api.config import get_settings
from tasker_api.infrastructure.database import close_db, init_db
from tasker_api.infrastructure.observability import setup_logging

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
    if settings.database_url.startswith("sqlite"):
        await manager.create_all()
    logger.info("Tasker API started")
    yield
    await close_db()
    logger.info("Tasker API shutting down")


app = FastAPI(
    title="Tasker API", version="2.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(users.router)
app.include_router(profiles.router)
app.include_router(tasks.router)
app.include_router(payments.router)

register_error_handlers(app)


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    import uvicorn

    uvicorn.run("tasker_api.main:app", host=settings.host, port=settings.port)
