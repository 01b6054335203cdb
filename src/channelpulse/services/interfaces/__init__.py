"""
Service interfaces for channelpulse.

Abstract base classes describing the upstream collaborators, so that
tests and alternative backends can stand in for the real clients.
"""

from channelpulse.services.interfaces.channel_info_interface import (
    ChannelInfoClientInterface,
)

__all__ = ["ChannelInfoClientInterface"]
