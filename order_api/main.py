"""Order Management API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every exception to the {success: false, error} envelope
    - Middleware order (outermost first): security headers, CORS, rate limit, request log
    - Database session manager built in the lifespan and kept on app.state

Design Decisions:
    - create_app(settings) factory: tests build apps with their own settings
      (rate limits, environment) without touching process env
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from order_api.api.error_handlers import register_error_handlers
from order_api.api.routes import auth, customers, health, orders
from order_api.config import Settings, get_settings
from order_api.infrastructure.database import DatabaseSessionManager
from order_api.infrastructure.middleware import (
    FixedWindowCounter,
    RateLimitMiddleware,
    RequestLoggingMiddleware,
    SecurityHeadersMiddleware,
)
from order_api.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format)
    app.state.db_manager = DatabaseSessionManager(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Order Management API started")
    yield
    await app.state.db_manager.dispose()
    logger.info("Order Management API shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title="Order Management API", version="1.0.0", lifespan=lifespan,
    )
    app.state.settings = settings

    # add_middleware prepends: the last one added runs first
    app.add_middleware(RequestLoggingMiddleware)
    if settings.rate_limit_max_requests > 0:
        app.add_middleware(
            RateLimitMiddleware,
            counter=FixedWindowCounter(
                settings.rate_limit_max_requests,
                settings.rate_limit_window_seconds,
            ),
        )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(SecurityHeadersMiddleware)

    app.include_router(health.router)
    app.include_router(auth.router)
    app.include_router(customers.router)
    app.include_router(orders.router)

    register_error_handlers(app, debug=settings.is_development)
    return app


app = create_app()
