import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException

from streakstats.core.config import settings, validate_config
from streakstats.core.logging import configure_logging
from streakstats.core.middleware.request_id import RequestIdMiddleware
from streakstats.core.errors import (
    AppError,
    app_error_handler,
    http_error_handler,
    unhandled_exception_handler,
)
from streakstats.api import health, stats

configure_logging(settings.ENV)
validate_config(strict=getattr(settings, "CONFIG_STRICT", False))


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger = logging.getLogger("streakstats")
    logger.info("Starting streak stats service...")
    try:
        yield
    finally:
        if stats.get_stats_service.cache_info().currsize:
            stats.get_stats_service().close()
            stats.get_stats_service.cache_clear()
        logger.info("Stopping streak stats service...")


app = FastAPI(title="Streak Stats", lifespan=lifespan)

app.add_middleware(RequestIdMiddleware)

app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(HTTPException, http_error_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

app.include_router(stats.router, tags=["stats"])
app.include_router(health.root_router, tags=["health"])
