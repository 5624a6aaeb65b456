"""
URL classification utilities.
"""

from __future__ import annotations

from inspovid.models.video_url import VideoURL


def classify_url(url: str) -> dict:
    """Classify a pasted link.

    Args:
        url: Raw user input

    Returns:
        Dict with platform, video_id, embed_url and the normalized url

    Raises:
        InvalidVideoURLError: If the link is not a supported video URL
    """
    parsed = VideoURL.parse(url)
    return {
        "platform": parsed.platform,
        "video_id": parsed.video_id,
        "embed_url": parsed.embed_url,
        "url": parsed.url,
    }


def get_platform_for_url(url: str) -> str | None:
    """Get the platform key for a URL, or None if unrecognized.

    Args:
        url: Video URL

    Returns:
        "youtube", "tiktok" or None
    """
    parsed = VideoURL.try_parse(url)
    return parsed.platform if parsed else None
