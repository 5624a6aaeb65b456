"""
inspovid.providers.info - Provider metadata.

Classes:
    ProviderInfo: Immutable metadata about one metadata provider.

Example:
    >>> from inspovid.providers.info import PROVIDER_INFO
    >>> PROVIDER_INFO["tiktok-page"].platform
    'tiktok'
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ProviderInfo:
    """Immutable provider metadata.

    Attributes:
        name: Canonical provider name (e.g., "youtube-data").
        platform: Platform key the provider resolves ("youtube" or "tiktok").
        requires: Config fields that must be set for the provider to run.
        description: One-line summary of the upstream service.
    """

    name: str
    platform: str
    requires: tuple[str, ...] = ()
    description: str = ""


PROVIDER_INFO: dict[str, ProviderInfo] = {
    "youtube-data": ProviderInfo(
        name="youtube-data",
        platform="youtube",
        requires=("youtube_api_key",),
        description="YouTube Data API v3 videos endpoint",
    ),
    "tiktok-official": ProviderInfo(
        name="tiktok-official",
        platform="tiktok",
        requires=("tiktok_client_key", "tiktok_client_secret"),
        description="TikTok Open API (client credentials, research and display endpoints)",
    ),
    "rapidapi-nowatermark": ProviderInfo(
        name="rapidapi-nowatermark",
        platform="tiktok",
        requires=("rapidapi_key",),
        description="RapidAPI tiktok-video-no-watermark2 proxy",
    ),
    "rapidapi-scraper": ProviderInfo(
        name="rapidapi-scraper",
        platform="tiktok",
        requires=("rapidapi_key",),
        description="RapidAPI tiktok-scraper7 proxy",
    ),
    "tiktok-page": ProviderInfo(
        name="tiktok-page",
        platform="tiktok",
        description="Direct scrape of the public TikTok video page",
    ),
}
