"""Restaurant Payouts API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PayoutsError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database initialized on startup and disposed on shutdown via lifespan
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from payouts.api.error_handlers import register_error_handlers
from payouts.api.routes import admin_withdrawals, health, restaurant_withdrawals
from payouts.config import get_settings
from payouts.infrastructure.database import close_db, init_db
from payouts.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("Payouts API started")
    yield
    await close_db()
    logger.info("Payouts API shutting down")


app = FastAPI(
    title="Restaurant Payouts API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(restaurant_withdrawals.router)
app.include_router(admin_withdrawals.router)

register_error_handlers(app)
