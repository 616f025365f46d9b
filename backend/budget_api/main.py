"""Budget API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly under settings.api_prefix (no auto-discovery)
    - Global error handlers map every failure to one {success: false, error} envelope
    - CORS configured from settings (not hardcoded)
    - Database, query executor and rate client built in the lifespan from the Settings
      passed to create_app(), stored on app.state, and closed on shutdown

Design Decisions:
    - create_app(settings) factory: the storage engine is whatever the injected
      settings name — no process-wide environment switch
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from budget_api.api.error_handlers import register_error_handlers
from budget_api.api.routes import api_conversion, health, project_budget
from budget_api.config import Settings, get_settings
from budget_api.infrastructure.database import DatabaseSessionManager, SqlQueryExecutor
from budget_api.infrastructure.exchange_rate_client import ExchangeRateClient
from budget_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Startup/shutdown lifecycle."""
        setup_logging(settings.log_level, settings.log_format)
        db_manager = DatabaseSessionManager(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        if settings.database_create_schema:
            await db_manager.create_schema()
        rate_client = ExchangeRateClient(
            settings.exchange_rate_base_url,
            settings.exchange_rate_api_key,
            timeout_seconds=settings.exchange_rate_timeout_seconds,
        )
        app.state.db_manager = db_manager
        app.state.query_executor = SqlQueryExecutor(db_manager)
        app.state.rate_client = rate_client
        logger.info("Budget API started")
        yield
        logger.info("Budget API shutting down")
        await rate_client.aclose()
        await db_manager.dispose()

    app = FastAPI(title="Capital Project Budget API", version="1.0.0", lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router, prefix=settings.api_prefix)
    app.include_router(project_budget.router, prefix=settings.api_prefix)
    app.include_router(api_conversion.router, prefix=settings.api_prefix)

    register_error_handlers(app)
    return app


app = create_app()
