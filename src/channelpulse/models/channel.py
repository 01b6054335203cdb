"""
Pydantic models for channel statistics aggregation.

Models
------
Thumbnail
    A single avatar image variant reported by the YouTube Data API.
ChannelInfo
    Author/subscriber information from the structured-stats client.
ChannelStats
    Numeric view statistics from the structured-stats client.
ExtractionResult
    Partial statistics produced by one source (API call or HTML page).
ChannelRecord
    The merged, consumer-facing channel record.
CacheEntry
    The single in-memory cache slot held by ``ChannelCache``.
"""

from __future__ import annotations

import datetime as _dt
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator
from pydantic.alias_generators import to_camel

_EPOCH = _dt.datetime(1970, 1, 1, tzinfo=_dt.timezone.utc)

STAT_FIELDS: tuple[str, ...] = (
    "subscriber_count",
    "subscriber_text",
    "video_count",
    "view_count",
    "view_text",
    "avatar_url",
)
"""Fields shared by ``ExtractionResult`` and ``ChannelRecord``, in merge order."""


class Thumbnail(BaseModel):
    """Avatar image variant. Lists of these are ordered smallest first."""

    model_config = ConfigDict(frozen=True)

    url: str
    width: int | None = None
    height: int | None = None


class ChannelInfo(BaseModel):
    """
    Author information returned by the structured-stats client.

    Attributes
    ----------
    author : str | None
        Channel display name.
    author_thumbnails : list[Thumbnail]
        Avatar variants, ordered from lowest to highest resolution.
    subscriber_count : int | None
        Exact subscriber count, or None when hidden by the channel.
    subscriber_text : str | None
        Display text for the subscriber count, if the client provides one.
    alert_message : str | None
        Set when the upstream answered but has no usable data (e.g. the
        channel does not exist or is terminated).
    """

    model_config = ConfigDict(frozen=True)

    author: str | None = None
    author_thumbnails: list[Thumbnail] = Field(default_factory=list)
    subscriber_count: int | None = None
    subscriber_text: str | None = None
    alert_message: str | None = None


class ChannelStats(BaseModel):
    """Numeric statistics returned by the structured-stats client."""

    model_config = ConfigDict(frozen=True)

    view_count: int | None = None


class ExtractionResult(BaseModel):
    """
    Partial channel statistics produced by a single source.

    Every field is independently nullable. Instances are never mutated;
    merging produces new instances (see ``channelpulse.services.merge``).
    """

    model_config = ConfigDict(frozen=True)

    subscriber_count: int | None = None
    subscriber_text: str | None = None
    video_count: int | None = None
    view_count: int | None = None
    view_text: str | None = None
    avatar_url: str | None = None

    @classmethod
    def empty(cls) -> ExtractionResult:
        """Return a result with every field unset."""
        return cls()

    def is_empty(self) -> bool:
        """True if no field carries a value."""
        return all(getattr(self, name) in (None, "") for name in STAT_FIELDS)


class ChannelRecord(BaseModel):
    """
    Aggregated channel statistics as served to consumers.

    Serialized with camelCase keys. ``fetchedAt`` is emitted as epoch
    milliseconds and ``stale`` is only present on records served from the
    fallback cache.

    Attributes
    ----------
    title : str
        Channel display name, or the configured handle if the API was
        unavailable.
    channel_id : str
        Resolved ``UC...`` channel ID.
    handle : str
        Configured handle including the ``@`` prefix.
    subscriber_count, video_count, view_count : int | None
        Parsed counts.
    subscriber_text, view_text : str | None
        Display text for the corresponding counts.
    avatar_url : str | None
        Highest-resolution avatar URL found.
    fetched_at : datetime.datetime
        Wall-clock time of the aggregation that produced this record (UTC).
    stale : bool | None
        True when re-served after a failed refresh, otherwise None.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    title: str
    channel_id: str
    handle: str
    subscriber_count: int | None = None
    subscriber_text: str | None = None
    video_count: int | None = None
    view_count: int | None = None
    view_text: str | None = None
    avatar_url: str | None = None
    fetched_at: _dt.datetime
    stale: bool | None = None

    @field_validator("fetched_at")
    @classmethod
    def validate_fetched_at(cls, v: _dt.datetime) -> _dt.datetime:
        """Require a timezone-aware timestamp."""
        if v.tzinfo is None:
            raise ValueError(
                "fetched_at must be timezone-aware (has tzinfo), "
                "got naive datetime"
            )
        return v

    @field_serializer("fetched_at")
    def serialize_fetched_at(self, v: _dt.datetime) -> int:
        """Emit epoch milliseconds."""
        return (v - _EPOCH) // _dt.timedelta(milliseconds=1)

    def as_stale(self) -> ChannelRecord:
        """Return a copy flagged as served from the fallback cache."""
        return self.model_copy(update={"stale": True})

    def to_payload(self) -> dict[str, Any]:
        """Serialize to the JSON response contract."""
        exclude = {"stale"} if self.stale is None else None
        return self.model_dump(mode="json", by_alias=True, exclude=exclude)


class CacheEntry(BaseModel):
    """
    The single in-memory cache slot.

    Attributes
    ----------
    record : ChannelRecord
        Last successfully aggregated record.
    fetched_at_monotonic : float
        Monotonic clock reading taken when ``record`` was stored.
    """

    model_config = ConfigDict(frozen=True)

    record: ChannelRecord
    fetched_at_monotonic: float

    def age(self, now: float) -> float:
        """Seconds elapsed since the entry was stored."""
        return now - self.fetched_at_monotonic

    def is_fresh(self, now: float, ttl_seconds: float) -> bool:
        """True while the entry age is below ``ttl_seconds``."""
        return self.age(now) < ttl_seconds
