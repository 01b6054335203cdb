"""Test factories for channelpulse models and pages."""

from tests.factories.channel_factory import (
    CHANNEL_ID,
    HANDLE,
    ChannelRecordFactory,
    ExtractionResultFactory,
    make_channel_page,
    make_initial_data,
)

__all__ = [
    "CHANNEL_ID",
    "HANDLE",
    "ChannelRecordFactory",
    "ExtractionResultFactory",
    "make_channel_page",
    "make_initial_data",
]
