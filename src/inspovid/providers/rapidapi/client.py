"""
inspovid.providers.rapidapi.client - Keyed RapidAPI proxy providers.

Two TikTok scraping services share the RapidAPI key and header scheme:

- RapidapiNowatermarkProvider: POST with a JSON body to
  tiktok-video-no-watermark2. Valid envelope: ``code == 0`` and ``data``.
- RapidapiScraperProvider: GET with a query string to tiktok-scraper7.
  Valid envelope: truthy ``success`` and ``data``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from inspovid.exceptions import UpstreamUnavailableError
from inspovid.models.metadata import VideoMetadata, VideoStats
from inspovid.parsing.normalize import as_dict, dig, extract_hashtags, first_present
from inspovid.providers.base import MetadataProvider
from inspovid.providers.info import PROVIDER_INFO, ProviderInfo

if TYPE_CHECKING:
    from inspovid.models.video_url import VideoURL

logger = logging.getLogger(__name__)

NOWATERMARK_HOST = "tiktok-video-no-watermark2.p.rapidapi.com"
SCRAPER_HOST = "tiktok-scraper7.p.rapidapi.com"


class _RapidapiProvider(MetadataProvider):
    """Shared plumbing for RapidAPI-hosted services."""

    host: str = ""

    def _headers(self) -> dict[str, str]:
        return {
            "X-RapidAPI-Key": self._config.rapidapi_key or "",
            "X-RapidAPI-Host": self.host,
        }

    @property
    def endpoint(self) -> str:
        return f"https://{self.host}/"


class RapidapiNowatermarkProvider(_RapidapiProvider):
    """Watermark-removal proxy (second TikTok tier)."""

    host = NOWATERMARK_HOST

    @property
    def info(self) -> ProviderInfo:
        return PROVIDER_INFO["rapidapi-nowatermark"]

    def fetch(self, video: VideoURL) -> VideoMetadata:
        self._ensure_configured("RapidAPI key not configured")

        response = self._request(
            "POST",
            self.endpoint,
            json={"url": video.url},
            headers=self._headers(),
        )
        self._check_status(response, "No-watermark API request failed")
        data = self._json(response)

        if not isinstance(data, dict) or data.get("code") != 0 or not data.get("data"):
            raise UpstreamUnavailableError(
                "Invalid TikTok video or API response",
                provider=self.name,
                details={"code": data.get("code") if isinstance(data, dict) else None},
            )
        payload = self._require_dict(data["data"], "Invalid TikTok video or API response")
        return normalize_nowatermark(payload, source=self.name)


class RapidapiScraperProvider(_RapidapiProvider):
    """Query-string scraper proxy, served by the tiktok-alt passthrough."""

    host = SCRAPER_HOST

    @property
    def info(self) -> ProviderInfo:
        return PROVIDER_INFO["rapidapi-scraper"]

    def fetch(self, video: VideoURL) -> VideoMetadata:
        self._ensure_configured("RapidAPI key not configured")

        response = self._request(
            "GET",
            self.endpoint,
            params={"url": video.url},
            headers=self._headers(),
        )
        self._check_status(response, "TikTok Scraper API request failed")
        data = self._json(response)

        if not isinstance(data, dict) or not data.get("success") or not data.get("data"):
            raise UpstreamUnavailableError(
                "Invalid TikTok video or API response", provider=self.name
            )
        payload = self._require_dict(data["data"], "Invalid TikTok video or API response")
        return normalize_scraper(payload, source=self.name)


def normalize_nowatermark(payload: dict[str, Any], source: str | None = None) -> VideoMetadata:
    """Map a tiktok-video-no-watermark2 ``data`` object to VideoMetadata."""
    video = as_dict(payload.get("video"))
    stats = as_dict(payload.get("stats"))
    description = video.get("title") or ""
    handle = dig(payload, "author", "unique_id")
    return VideoMetadata(
        title=description or "TikTok Video",
        author=f"@{handle}" if handle else None,
        description=video.get("title"),
        hashtags=extract_hashtags(description),
        thumbnail=first_present(video.get("cover"), video.get("dynamic_cover")),
        stats=VideoStats.from_counts(
            views=stats.get("play_count"),
            likes=stats.get("digg_count"),
            comments=stats.get("comment_count"),
            shares=stats.get("share_count") or 0,
        ),
        source=source,
    )


def normalize_scraper(payload: dict[str, Any], source: str | None = None) -> VideoMetadata:
    """Map a tiktok-scraper7 ``data`` object to VideoMetadata."""
    description = first_present(payload.get("title"), payload.get("desc")) or ""
    stats = as_dict(payload.get("stats"))
    handle = dig(payload, "author", "username")
    return VideoMetadata(
        title=description or "TikTok Video",
        author=f"@{handle}" if handle else None,
        description=description,
        hashtags=extract_hashtags(description),
        thumbnail=first_present(dig(payload, "video", "cover"), dig(payload, "video", "thumbnail")),
        stats=VideoStats.from_counts(
            views=stats.get("views"),
            likes=stats.get("likes"),
            comments=stats.get("comments"),
            shares=stats.get("shares") or 0,
        ),
        source=source,
    )
