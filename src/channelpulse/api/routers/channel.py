"""Channel statistics endpoint."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from channelpulse.api.deps import get_channel_cache
from channelpulse.services.channel_cache import ChannelCache

FRESH_CACHE_CONTROL = "public, s-maxage=300, stale-while-revalidate=600"
STALE_CACHE_CONTROL = "public, s-maxage=60, stale-while-revalidate=300"

router = APIRouter()


@router.get("/channel")
async def get_channel(
    cache: ChannelCache = Depends(get_channel_cache),
) -> JSONResponse:
    """
    Return the aggregated channel record.

    Served from the in-memory cache while fresh. When a refresh fails the
    previous record is returned with ``stale: true`` and a shorter
    ``Cache-Control`` window. With nothing cached, a failed refresh
    surfaces as ``502 channel_fetch_failed`` via the exception handlers.
    """
    record, from_cache = await cache.get_channel_data()

    if record.stale:
        cache_control = STALE_CACHE_CONTROL
        cache_status = "STALE"
    else:
        cache_control = FRESH_CACHE_CONTROL
        cache_status = "HIT" if from_cache else "MISS"

    return JSONResponse(
        content=record.to_payload(),
        headers={"Cache-Control": cache_control, "X-Cache": cache_status},
    )
