"""
inspovid.providers.youtube.client - YouTube Data API provider implementation.

Queries the ``videos`` endpoint for snippet, statistics and contentDetails
and normalizes the first item.

Example:
    >>> provider = YoutubeDataProvider(config)
    >>> metadata = provider.fetch(VideoURL.parse("https://youtu.be/dQw4w9WgXcQ"))
    >>> print(metadata.title, metadata.stats.views_formatted)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from inspovid.exceptions import UpstreamUnavailableError, VideoNotFoundError
from inspovid.models.metadata import VideoMetadata, VideoStats
from inspovid.parsing.normalize import (
    as_dict,
    detect_short,
    dig,
    extract_hashtags,
    first_present,
    parse_iso_duration,
)
from inspovid.providers.base import MetadataProvider
from inspovid.providers.info import PROVIDER_INFO, ProviderInfo

if TYPE_CHECKING:
    from inspovid.models.video_url import VideoURL

logger = logging.getLogger(__name__)

VIDEOS_URL = "https://www.googleapis.com/youtube/v3/videos"
VIDEO_PARTS = "snippet,statistics,contentDetails"


class YoutubeDataProvider(MetadataProvider):
    """YouTube Data API v3 provider.

    The only YouTube tier, so its failures reach the caller: a missing key
    or upstream error is a 500, an empty result set is a 404.
    """

    @property
    def info(self) -> ProviderInfo:
        return PROVIDER_INFO["youtube-data"]

    def fetch(self, video: VideoURL) -> VideoMetadata:
        self._ensure_configured("YouTube API key not configured")

        response = self._request(
            "GET",
            VIDEOS_URL,
            params={
                "id": video.video_id,
                "part": VIDEO_PARTS,
                "key": self._config.youtube_api_key,
            },
        )
        self._check_status(response, "Failed to fetch video data")
        data = self._json(response)

        items = data.get("items") if isinstance(data, dict) else None
        if not items:
            raise VideoNotFoundError("Video not found", provider=self.name)

        if not isinstance(items, list):
            raise UpstreamUnavailableError("Invalid YouTube API response", provider=self.name)
        item = self._require_dict(items[0], "Invalid YouTube API response")
        return normalize_video_item(item, original_url=video.url, source=self.name)


def normalize_video_item(
    item: dict[str, Any],
    original_url: str | None = None,
    source: str | None = None,
) -> VideoMetadata:
    """Map one ``videos`` resource to VideoMetadata.

    Args:
        item: Element of the API ``items`` array.
        original_url: Link the user pasted, used for Shorts detection.
        source: Provider name recorded on the result.

    Raises:
        UpstreamUnavailableError: If the item has no snippet.
    """
    snippet = item.get("snippet")
    if not isinstance(snippet, dict):
        raise UpstreamUnavailableError("YouTube response missing snippet", provider=source)
    statistics = as_dict(item.get("statistics"))
    raw_duration = dig(item, "contentDetails", "duration")

    description = snippet.get("description") or ""
    return VideoMetadata(
        title=snippet.get("title") or "YouTube Video",
        author=snippet.get("channelTitle"),
        description=snippet.get("description"),
        hashtags=extract_hashtags(description),
        thumbnail=first_present(
            dig(snippet, "thumbnails", "high", "url"),
            dig(snippet, "thumbnails", "default", "url"),
        ),
        published_at=snippet.get("publishedAt"),
        duration=parse_iso_duration(raw_duration),
        is_short=detect_short(original_url, raw_duration),
        stats=VideoStats.from_counts(
            views=statistics.get("viewCount"),
            likes=statistics.get("likeCount"),
            comments=statistics.get("commentCount"),
        ),
        channel_id=snippet.get("channelId"),
        source=source,
    )
