"""
Video model: a saved dashboard entry.
"""

from __future__ import annotations

import time
from enum import Enum

from pydantic import ConfigDict, Field

from inspovid.config.platforms import get_platform
from inspovid.models.metadata import VideoMetadata
from inspovid.models.video_url import VideoURL
from inspovid.parsing.normalize import parse_hashtag_input


class Platform(str, Enum):
    """Supported platforms."""

    YOUTUBE = "youtube"
    TIKTOK = "tiktok"


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class Video(VideoMetadata):
    """A saved video: the original link, its embed URL and its metadata.

    Instances are immutable. The id has the form
    ``{platform}-{video_id}-{created_at_ms}``.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    url: str
    embed_url: str
    platform: Platform
    video_id: str
    created_at: int = Field(..., ge=0, description="Creation time, epoch milliseconds")

    @classmethod
    def create(
        cls,
        video_url: VideoURL,
        metadata: VideoMetadata | None = None,
        *,
        title: str | None = None,
        author: str | None = None,
        description: str | None = None,
        hashtags: str | list[str] | None = None,
        created_at_ms: int | None = None,
    ) -> Video:
        """Finalize a record from a classified URL, fetched metadata and user edits.

        Blank edits fall back to the fetched values. A record without any
        title gets the platform placeholder title ("TikTok Video").
        """
        if created_at_ms is None:
            created_at_ms = int(time.time() * 1000)
        fetched = metadata.model_dump() if metadata is not None else {}
        fetched.pop("error", None)

        edited_tags = parse_hashtag_input(hashtags)
        final_title = (
            _clean(title)
            or (_clean(metadata.title) if metadata is not None else None)
            or get_platform(video_url.platform)["placeholder_title"]
        )

        fetched.update(
            title=final_title,
            author=_clean(author) or fetched.get("author"),
            description=_clean(description) or fetched.get("description"),
            hashtags=edited_tags or fetched.get("hashtags") or [],
        )
        return cls(
            **fetched,
            id=f"{video_url.platform}-{video_url.video_id}-{created_at_ms}",
            url=video_url.url,
            embed_url=video_url.embed_url,
            platform=Platform(video_url.platform),
            video_id=video_url.video_id,
            created_at=created_at_ms,
        )

    @property
    def is_vertical(self) -> bool:
        """TikToks and Shorts play in a 9:16 frame."""
        return self.platform is Platform.TIKTOK or bool(self.is_short)
