"""FastAPI application for the channelpulse API."""

import logging
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from starlette.middleware.base import RequestResponseEndpoint
from starlette.responses import Response

from channelpulse import __version__
from channelpulse.api.exception_handlers import register_exception_handlers
from channelpulse.api.routers import channel, health
from channelpulse.config.settings import settings

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    logging.getLogger("channelpulse").setLevel(settings.log_level)
    logger.info(
        "Serving channel stats for %s (cache TTL %.0fs)",
        settings.display_handle,
        settings.cache_ttl_seconds,
    )
    yield


app = FastAPI(
    title="channelpulse API",
    description="Aggregated statistics for a single YouTube channel",
    version=__version__,
    lifespan=lifespan,
)


def _log_level_for(status_code: int) -> int:
    if status_code >= 500:
        return logging.ERROR
    if status_code >= 400:
        return logging.WARNING
    return logging.INFO


@app.middleware("http")
async def log_requests(
    request: Request, call_next: RequestResponseEndpoint
) -> Response:
    """
    Log one line per request with its status, cache outcome and timing.

    The cache outcome is the ``X-Cache`` header set by the channel
    endpoint (``HIT``, ``MISS`` or ``STALE``), or ``-`` for responses that
    did not go through the cache. A ``STALE`` serve is logged as a
    warning since it means the last refresh failed.
    """
    start_time = time.perf_counter()
    response = await call_next(request)
    duration = time.perf_counter() - start_time

    cache_status = response.headers.get("X-Cache", "-")
    log_level = _log_level_for(response.status_code)
    if cache_status == "STALE":
        log_level = max(log_level, logging.WARNING)

    logger.log(
        log_level,
        "%s %s -> %d cache=%s (%.3fs)",
        request.method,
        request.url.path,
        response.status_code,
        cache_status,
        duration,
    )

    return response


register_exception_handlers(app)

app.include_router(health.router, prefix="/api", tags=["health"])
app.include_router(channel.router, prefix="/api", tags=["channel"])
