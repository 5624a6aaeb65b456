"""
inspovid.providers.tiktok_page.client - Direct TikTok page scraping provider.

Last TikTok tier. Fetches the public video page and reads the rehydration
JSON embedded in ``<script id="__UNIVERSAL_DATA_FOR_REHYDRATION__">``. When
that payload is missing or unreadable, falls back to the ``<title>``,
``profile:username`` and ``description`` meta tags for a partial result.

The page layout belongs to TikTok and changes without notice; the parsing
lives in module-level functions so it can be maintained on its own.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from bs4 import BeautifulSoup

from inspovid.exceptions import UpstreamUnavailableError
from inspovid.models.metadata import VideoMetadata, VideoStats
from inspovid.parsing.normalize import as_dict, dig, extract_hashtags
from inspovid.providers.base import MetadataProvider
from inspovid.providers.info import PROVIDER_INFO, ProviderInfo

if TYPE_CHECKING:
    from inspovid.models.video_url import VideoURL

logger = logging.getLogger(__name__)

REHYDRATION_SCRIPT_ID = "__UNIVERSAL_DATA_FOR_REHYDRATION__"
ITEM_STRUCT_PATH = ("__DEFAULT_SCOPE__", "webapp.video-detail", "itemInfo", "itemStruct")
TITLE_SUFFIX = " | TikTok"

BROWSER_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept": (
        "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,"
        "image/apng,*/*;q=0.8,application/signed-exchange;v=b3;q=0.7"
    ),
    "Accept-Language": "en-US,en;q=0.9",
    "Accept-Encoding": "gzip, deflate",
    "Connection": "keep-alive",
    "Upgrade-Insecure-Requests": "1",
}


class TiktokPageProvider(MetadataProvider):
    """Scrapes the public TikTok page. Needs no secrets."""

    @property
    def info(self) -> ProviderInfo:
        return PROVIDER_INFO["tiktok-page"]

    def fetch(self, video: VideoURL) -> VideoMetadata:
        response = self._request("GET", video.url, headers=BROWSER_HEADERS)
        self._check_status(response, f"HTTP {response.status_code} fetching TikTok page")
        html = response.text
        logger.debug("Fetched TikTok page, %d characters", len(html))
        return parse_page(html, source=self.name)


def parse_page(html: str, source: str | None = None) -> VideoMetadata:
    """Turn a TikTok video page into metadata.

    Tries the embedded rehydration payload first, then meta tags.

    Raises:
        UpstreamUnavailableError: If the page is empty.
    """
    if not html or not html.strip():
        raise UpstreamUnavailableError("TikTok page was empty", provider=source)

    soup = BeautifulSoup(html, "html.parser")
    item = extract_rehydration_item(soup)
    if item is not None:
        logger.info("Found TikTok rehydration payload")
        return normalize_item_struct(item, source=source)

    logger.info("Rehydration payload missing, using meta tags")
    return normalize_meta_tags(extract_meta_tags(soup), source=source)


def extract_rehydration_item(soup: BeautifulSoup) -> dict[str, Any] | None:
    """Return the ``itemStruct`` object from the rehydration script, or None."""
    script = soup.find("script", id=REHYDRATION_SCRIPT_ID)
    if script is None or not script.string:
        return None
    try:
        payload = json.loads(script.string)
    except ValueError as e:
        logger.warning("Error parsing TikTok rehydration JSON: %s", e)
        return None
    item = dig(payload, *ITEM_STRUCT_PATH)
    return item if isinstance(item, dict) else None


def extract_meta_tags(soup: BeautifulSoup) -> dict[str, str | None]:
    """Read the title, author handle and description from page markup."""
    title_tag = soup.find("title")
    title = title_tag.get_text() if title_tag else None
    if title:
        title = title.replace(TITLE_SUFFIX, "").strip() or None

    username = soup.find("meta", attrs={"property": "profile:username"})
    description = soup.find("meta", attrs={"name": "description"})
    return {
        "title": title,
        "username": username.get("content") if username else None,
        "description": description.get("content") if description else None,
    }


def normalize_item_struct(item: dict[str, Any], source: str | None = None) -> VideoMetadata:
    """Map a rehydration ``itemStruct`` to VideoMetadata."""
    description = item.get("desc") or ""
    stats = as_dict(item.get("stats"))
    handle = dig(item, "author", "uniqueId")
    duration = dig(item, "video", "duration")
    return VideoMetadata(
        title=description or "TikTok Video",
        author=f"@{handle}" if handle else None,
        description=description,
        hashtags=extract_hashtags(description),
        thumbnail=dig(item, "video", "cover"),
        duration=int(duration) if isinstance(duration, (int, float)) and duration >= 0 else None,
        stats=VideoStats.from_counts(
            views=stats.get("playCount"),
            likes=stats.get("diggCount"),
            comments=stats.get("commentCount"),
            shares=stats.get("shareCount") or 0,
        ),
        source=source,
    )


def normalize_meta_tags(tags: dict[str, str | None], source: str | None = None) -> VideoMetadata:
    """Build the last-resort partial record from meta tags."""
    description = tags.get("description")
    username = tags.get("username")
    return VideoMetadata(
        title=tags.get("title") or "TikTok Video",
        author=f"@{username}" if username else None,
        description=description,
        hashtags=extract_hashtags(description),
        source=source,
    )
