"""FastAPI dependencies for API endpoints."""

from channelpulse.container import container
from channelpulse.services.channel_cache import ChannelCache


def get_channel_cache() -> ChannelCache:
    """
    Dependency for the process-wide channel cache.

    Returns
    -------
    ChannelCache
        The container's singleton cache, shared by all requests.
    """
    return container.channel_cache
