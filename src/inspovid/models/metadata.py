"""
Pydantic models for resolved video metadata.

Every provider normalizes its own JSON into :class:`VideoMetadata`. The JSON
shape served to the UI uses camelCase keys (``publishedAt``, ``viewsFormatted``)
and omits unset fields.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from inspovid.config.defaults import MAX_HASHTAGS
from inspovid.config.platforms import get_platform
from inspovid.parsing.normalize import to_count
from inspovid.utils.formatting import format_number


class InspovidModel(BaseModel):
    """Base model: camelCase aliases, population by field name allowed."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_response(self) -> dict[str, Any]:
        """Serialize to the camelCase JSON shape, dropping unset fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class VideoStats(InspovidModel):
    """Engagement statistics, each count paired with a display string."""

    views: int = Field(0, ge=0)
    likes: int = Field(0, ge=0)
    comments: int = Field(0, ge=0)
    shares: int | None = Field(None, ge=0)
    views_formatted: str = "0"
    likes_formatted: str = "0"
    comments_formatted: str = "0"
    shares_formatted: str | None = None

    @classmethod
    def from_counts(
        cls,
        views: Any = 0,
        likes: Any = 0,
        comments: Any = 0,
        shares: Any = None,
    ) -> VideoStats:
        """Build stats from raw provider values.

        Ints, numeric strings and None are all accepted; anything that does
        not parse counts as zero.
        """
        views, likes, comments = to_count(views), to_count(likes), to_count(comments)
        share_count = to_count(shares) if shares is not None else None
        return cls(
            views=views,
            likes=likes,
            comments=comments,
            shares=share_count,
            views_formatted=format_number(views),
            likes_formatted=format_number(likes),
            comments_formatted=format_number(comments),
            shares_formatted=format_number(share_count) if share_count is not None else None,
        )


class VideoMetadata(InspovidModel):
    """Normalized metadata for one video, as produced by a provider.

    Attributes:
        title: Video title (TikTok: the caption)
        author: Platform-prefixed author (TikTok handles start with '@')
        description: Full description or caption text
        hashtags: Up to 10 tags in first-seen order, without '#'
        thumbnail: Cover image URL
        stats: Engagement statistics
        published_at: ISO-8601 publish timestamp (YouTube only)
        duration: Length in seconds
        is_short: Short-form flag (YouTube only)
        channel_id: Channel identifier (YouTube only)
        source: Provider that produced this record
        error: Set only on the degraded placeholder record
    """

    title: str
    author: str | None = None
    description: str | None = None
    hashtags: list[str] = Field(default_factory=list)
    thumbnail: str | None = None
    stats: VideoStats | None = None
    published_at: str | None = None
    duration: int | None = Field(None, ge=0)
    is_short: bool | None = None
    channel_id: str | None = None
    source: str | None = None
    error: str | None = None

    @field_validator("hashtags", mode="before")
    @classmethod
    def cap_hashtags(cls, v: Any) -> list[str]:
        if v is None:
            return []
        return list(v)[:MAX_HASHTAGS]

    @classmethod
    def placeholder(cls, platform: str, error: str | None = None) -> VideoMetadata:
        """Minimal record used when resolution fails entirely."""
        return cls(title=get_platform(platform)["placeholder_title"], hashtags=[], error=error)

    @property
    def is_placeholder(self) -> bool:
        return self.error is not None
