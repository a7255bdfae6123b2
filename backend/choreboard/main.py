"""Choreboard API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map ChoreboardError → structured JSON responses
    - The store is bootstrapped (created if missing, migrated) before the first request;
      a BootstrapError aborts startup
    - One Store and one PersonRepository per process, held on app.state

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - create_app() factory: tests build an app and fill app.state themselves
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from choreboard.api.error_handlers import register_error_handlers
from choreboard.api.routes import health, legacy, persons
from choreboard.config import get_settings
from choreboard.core.errors import BootstrapError
from choreboard.infrastructure.database import open_store
from choreboard.infrastructure.observability import setup_logging
from choreboard.services.person_repository import PersonRepository

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    logger.info("Starting Choreboard API")
    try:
        store = await open_store(settings)
    except BootstrapError as e:
        logger.critical(f"Bootstrap failed: {e.message}", extra={"error_code": e.code})
        raise
    app.state.store = store
    app.state.persons = PersonRepository(store)
    logger.info("Choreboard API started")
    yield
    logger.info("Choreboard API shutting down")
    await store.dispose()


def create_app() -> FastAPI:
    app = FastAPI(title="Choreboard API", version="0.1.0", lifespan=lifespan)
    register_error_handlers(app)
    app.include_router(health.router)
    app.include_router(persons.router)
    app.include_router(legacy.router)
    return app


app = create_app()
