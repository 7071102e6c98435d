"""FastAPI application factory and lifespan management."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from factory_pulse.api.routes.health import SERVICE_VERSION
from factory_pulse.config import settings
from factory_pulse.db.engine import create_db_engine, create_session_factory
from factory_pulse.events.webhook_config import register_from_settings
from factory_pulse.logging_config import configure_logging

# Configure logging at import time
configure_logging(log_level=settings.log_level, json_output=settings.json_logs and not settings.local_mode)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown resources."""
    db_url = settings.effective_database_url
    engine = create_db_engine(db_url)

    # Auto-create tables for SQLite (local dev — no Alembic migrations)
    if "sqlite" in db_url:
        from factory_pulse.db.base import Base
        import factory_pulse.db.models  # noqa: F401 — register all ORM models

        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("SQLite tables created (local mode)")

    app.state.db_engine = engine
    app.state.db_session_factory = create_session_factory(engine)

    subscribed = register_from_settings(settings.webhook_urls, settings.webhook_secret)
    if subscribed:
        logger.info("Registered %d webhook subscriber(s)", subscribed)

    logger.info("Factory Pulse API started (db=%s)", "sqlite" if "sqlite" in db_url else "postgresql")
    yield

    await engine.dispose()
    logger.info("Factory Pulse API shutdown complete")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Factory Pulse API",
        version=SERVICE_VERSION,
        description="Manufacturing RFQ and project workflow tracking.",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from factory_pulse.api.middleware.trace_id import TraceIdMiddleware
    app.add_middleware(TraceIdMiddleware)

    from factory_pulse.errors.handlers import register_exception_handlers
    register_exception_handlers(app)

    from factory_pulse.api.router import api_router
    app.include_router(api_router)

    return app


app = create_app()
