"""Health check endpoint."""

from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from channelpulse import __version__
from channelpulse.api.deps import get_channel_cache
from channelpulse.config.settings import settings
from channelpulse.services.channel_cache import ChannelCache


class HealthStatus(BaseModel):
    """Application health status."""

    status: str  # "healthy"
    version: str  # channelpulse version
    channel: str  # configured handle
    cache: str  # "empty", "fresh", "expired"
    timestamp: datetime


router = APIRouter()


@router.get("/health", response_model=HealthStatus)
async def health_check(
    cache: ChannelCache = Depends(get_channel_cache),
) -> HealthStatus:
    """
    Health check endpoint.

    Reports version, configured channel and cache state. Never triggers
    an upstream fetch.
    """
    return HealthStatus(
        status="healthy",
        version=__version__,
        channel=settings.display_handle,
        cache=cache.state.value,
        timestamp=datetime.now(timezone.utc),
    )
