"""
VideoURL Pydantic model for URL classification.
"""

from __future__ import annotations

import re
from typing import ClassVar
from urllib.parse import urlparse

from pydantic import BaseModel, Field, field_validator

from inspovid.config.platforms import (
    PLATFORMS,
    SHORTS_MARKER,
    get_platform,
    list_supported_platforms,
)
from inspovid.exceptions import InvalidVideoURLError

# Build domain lookup for fast matching
_DOMAIN_TO_PLATFORM: dict[str, dict] = {}
for _platform in PLATFORMS:
    for _domain in _platform["domains"]:
        _DOMAIN_TO_PLATFORM[_domain] = _platform


def _invalid_link_message() -> str:
    return f"Please enter a valid {' or '.join(list_supported_platforms())} link"


def _normalize(raw: str) -> str:
    """Strip whitespace and ensure a scheme."""
    url = raw.strip()
    if not url.startswith(("http://", "https://")):
        url = "https://" + url
    return url


class VideoURL(BaseModel):
    """Classified video link: platform, platform video id and embed URL."""

    url: str = Field(..., description="Original URL (normalized)")
    platform: str = Field(..., description="Platform key: youtube or tiktok")
    video_id: str = Field(..., description="Platform-specific video identifier")
    embed_url: str = Field(..., description="Player URL for inline playback")

    # Class-level compiled patterns for performance
    _compiled_patterns: ClassVar[dict[str, re.Pattern]] = {}

    @field_validator("url", mode="before")
    @classmethod
    def normalize_url(cls, v: str) -> str:
        """Normalize URL - strip whitespace, ensure scheme."""
        if not isinstance(v, str) or not v.strip():
            raise ValueError("URL cannot be empty")
        return _normalize(v)

    @classmethod
    def _pattern_for(cls, platform: dict) -> re.Pattern:
        key = platform["key"]
        if key not in cls._compiled_patterns:
            cls._compiled_patterns[key] = re.compile(platform["pattern"], re.IGNORECASE)
        return cls._compiled_patterns[key]

    @classmethod
    def parse(cls, url: str) -> VideoURL:
        """Classify a pasted link.

        Args:
            url: Raw user input

        Returns:
            VideoURL with platform, video_id and embed_url

        Raises:
            InvalidVideoURLError: If the input is empty or matches no
                supported platform. No network call is made.
        """
        if not isinstance(url, str) or not url.strip():
            raise InvalidVideoURLError(url or "", "Video URL is required")

        normalized = _normalize(url)
        host = urlparse(normalized).netloc.lower().split(":")[0]
        host_clean = host.removeprefix("www.").removeprefix("m.")

        platform = _DOMAIN_TO_PLATFORM.get(host) or _DOMAIN_TO_PLATFORM.get(host_clean)
        if platform is None:
            raise InvalidVideoURLError(url, _invalid_link_message())

        match = cls._pattern_for(platform).search(normalized)
        if not match:
            raise InvalidVideoURLError(url, _invalid_link_message())

        video_id = match.group("video_id")
        return cls(
            url=normalized,
            platform=platform["key"],
            video_id=video_id,
            embed_url=platform["embed_url"].format(video_id=video_id),
        )

    @classmethod
    def for_id(cls, platform: str, video_id: str, url: str | None = None) -> VideoURL:
        """Build a VideoURL from an already-known platform id.

        Used when a caller passes the id directly. ``url`` defaults to the
        platform's canonical watch URL.

        Raises:
            KeyError: If the platform is not supported.
        """
        entry = get_platform(platform)
        return cls(
            url=url or entry["watch_url"].format(video_id=video_id),
            platform=entry["key"],
            video_id=video_id,
            embed_url=entry["embed_url"].format(video_id=video_id),
        )

    @classmethod
    def try_parse(cls, url: str) -> VideoURL | None:
        """Try to classify a URL, returning None on failure instead of raising."""
        try:
            return cls.parse(url)
        except InvalidVideoURLError:
            return None

    @property
    def is_shorts_url(self) -> bool:
        """True if the link points at a YouTube Short."""
        return self.platform == "youtube" and SHORTS_MARKER in self.url

    def __str__(self) -> str:
        return f"{self.platform}:{self.video_id}"

    def __repr__(self) -> str:
        return (
            f"VideoURL(url={self.url!r}, platform={self.platform!r}, "
            f"video_id={self.video_id!r})"
        )
