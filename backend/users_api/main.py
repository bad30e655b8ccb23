"""Users API: FastAPI application factory.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map UsersApiError → {"error": message} responses
    - Schema ensured in lifespan startup, before the server accepts traffic
    - One MetricsCollector per application instance (app.state.metrics)
    - No interactive docs/openapi routes: every unknown path is a 404
    - No trailing-slash redirects: "/health/" is unknown, not a 307

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Factory over module-level app: tests build a fresh app (and fresh counters)
      per test, and importing this module reads no settings
    - add_middleware wraps later additions around earlier ones, so layers are
      added innermost first
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from users_api.api.error_handlers import register_error_handlers
from users_api.api.middleware import (
    ConcurrencyLimitMiddleware,
    RequestCounterMiddleware,
    RequestLoggingMiddleware,
    TimeoutMiddleware,
)
from users_api.api.routes import health, metrics, users
from users_api.config import Settings, get_settings
from users_api.core.metrics import MetricsCollector
from users_api.infrastructure.database import init_db

logger = logging.getLogger(__name__)

CORS_METHODS = ["GET", "POST", "DELETE"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    logger.info("Connecting to database...")
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    await manager.create_schema()
    logger.info("Database schema ready")
    yield
    logger.info("Users API shutting down")
    await manager.dispose()


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the application with its middleware chain and routes."""
    settings = settings or get_settings()
    app = FastAPI(
        title="Users API",
        version="1.0.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.router.redirect_slashes = False
    app.state.settings = settings
    app.state.metrics = MetricsCollector()

    app.add_middleware(RequestCounterMiddleware, metrics=app.state.metrics)
    app.add_middleware(
        ConcurrencyLimitMiddleware,
        max_concurrent=settings.max_concurrent_requests,
    )
    app.add_middleware(
        TimeoutMiddleware, timeout_seconds=settings.request_timeout_seconds,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=CORS_METHODS,
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(health.router)
    app.include_router(users.router)
    app.include_router(metrics.router)

    register_error_handlers(app)
    return app
