"""
inspovid.providers.tiktok_official.client - TikTok Open API provider implementation.

Obtains an app access token with the client-credentials grant, then asks the
Research API for the video and, failing that, the Display API video list.

Example:
    >>> provider = TiktokOfficialProvider(config)
    >>> metadata = provider.fetch(VideoURL.parse(url))
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from inspovid.exceptions import UpstreamUnavailableError
from inspovid.models.metadata import VideoMetadata, VideoStats
from inspovid.parsing.normalize import dig, extract_hashtags, first_present, to_count
from inspovid.providers.base import MetadataProvider
from inspovid.providers.info import PROVIDER_INFO, ProviderInfo

if TYPE_CHECKING:
    from inspovid.models.video_url import VideoURL

logger = logging.getLogger(__name__)

TOKEN_URL = "https://open.tiktokapis.com/v2/oauth/token/"
RESEARCH_QUERY_URL = "https://open.tiktokapis.com/v2/research/video/query/"
VIDEO_LIST_URL = "https://open.tiktokapis.com/v2/video/list/"

RESEARCH_FIELDS = [
    "id",
    "video_description",
    "create_time",
    "region_code",
    "share_count",
    "view_count",
    "like_count",
    "comment_count",
    "music_id",
    "hashtag_names",
    "username",
    "display_name",
]

DISPLAY_FIELDS = (
    "id,title,video_description,duration,cover_image_url,"
    "like_count,comment_count,share_count,view_count"
)


class TiktokOfficialProvider(MetadataProvider):
    """TikTok Open API provider (first TikTok tier).

    Disabled when the client key/secret pair is incomplete. A token that
    cannot be obtained is a provider failure, never a process failure.
    """

    @property
    def info(self) -> ProviderInfo:
        return PROVIDER_INFO["tiktok-official"]

    def fetch(self, video: VideoURL) -> VideoMetadata:
        self._ensure_configured("TikTok API credentials not configured")

        logger.info("Requesting TikTok access token")
        token = self.get_access_token()

        logger.info("Fetching TikTok video %s via official API", video.video_id)
        item = self._query_research_api(token, video.video_id)
        if item is None:
            item = self._query_display_api(token, video.video_id)
        if item is None:
            raise UpstreamUnavailableError(
                "Failed to fetch video data",
                provider=self.name,
                suggestion="Using fallback methods",
            )
        return item

    def get_access_token(self) -> str:
        """Exchange client credentials for an access token.

        Raises:
            UpstreamUnavailableError: If the exchange fails or returns no token.
        """
        response = self._request(
            "POST",
            TOKEN_URL,
            data={
                "client_key": self._config.tiktok_client_key,
                "client_secret": self._config.tiktok_client_secret,
                "grant_type": "client_credentials",
            },
            headers={"Cache-Control": "no-cache"},
        )
        self._check_status(response, "Failed to get access token")
        data = self._json(response)
        token = data.get("access_token") if isinstance(data, dict) else None
        if not token:
            raise UpstreamUnavailableError(
                "Failed to get access token",
                provider=self.name,
                details={"response": data if isinstance(data, dict) else None},
            )
        return token

    def _query_research_api(self, token: str, video_id: str) -> VideoMetadata | None:
        body = {
            "query": {
                "and": [
                    {"operation": "EQ", "field_name": "video_id", "field_values": [video_id]}
                ]
            },
            "max_count": 1,
            "fields": RESEARCH_FIELDS,
        }
        try:
            response = self._request(
                "POST",
                RESEARCH_QUERY_URL,
                json=body,
                headers={"Authorization": f"Bearer {token}"},
            )
            self._check_status(response, "Research API request failed")
            videos = dig(self._json(response), "data", "videos")
        except UpstreamUnavailableError as e:
            logger.warning("TikTok Research API failed: %s", e.message)
            return None

        item = videos[0] if isinstance(videos, list) and videos else None
        if not isinstance(item, dict):
            logger.warning("TikTok Research API returned no usable video")
            return None
        return normalize_research_video(item, source=self.name)

    def _query_display_api(self, token: str, video_id: str) -> VideoMetadata | None:
        try:
            response = self._request(
                "GET",
                VIDEO_LIST_URL,
                params={"fields": DISPLAY_FIELDS},
                headers={"Authorization": f"Bearer {token}"},
            )
            self._check_status(response, "Display API request failed")
            videos = dig(self._json(response), "data", "videos")
        except UpstreamUnavailableError as e:
            logger.warning("TikTok Display API failed: %s", e.message)
            return None

        if not isinstance(videos, list):
            return None
        for entry in videos:
            if isinstance(entry, dict) and str(entry.get("id")) == video_id:
                return normalize_display_video(entry, source=self.name)
        return None


def _stats(item: dict[str, Any]) -> VideoStats:
    return VideoStats.from_counts(
        views=item.get("view_count"),
        likes=item.get("like_count"),
        comments=item.get("comment_count"),
        shares=to_count(item.get("share_count")),
    )


def normalize_research_video(item: dict[str, Any], source: str | None = None) -> VideoMetadata:
    """Map a Research API video to VideoMetadata."""
    description = item.get("video_description") or ""
    handle = first_present(item.get("display_name"), item.get("username"))
    return VideoMetadata(
        title=description or "TikTok Video",
        author=f"@{handle}" if handle else None,
        description=description,
        hashtags=extract_hashtags(description),
        stats=_stats(item),
        source=source,
    )


def normalize_display_video(item: dict[str, Any], source: str | None = None) -> VideoMetadata:
    """Map a Display API video to VideoMetadata.

    The Display API does not expose the author, so the generic
    "TikTok User" display name is used.
    """
    description = first_present(item.get("title"), item.get("video_description")) or ""
    return VideoMetadata(
        title=description or "TikTok Video",
        author="@TikTok User",
        description=description,
        hashtags=extract_hashtags(description),
        thumbnail=item.get("cover_image_url"),
        duration=to_count(item.get("duration")),
        stats=_stats(item),
        source=source,
    )
