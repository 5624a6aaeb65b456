"""
Supported video platforms.

Each entry drives URL classification: the host must belong to ``domains``
and the URL must match ``pattern``, whose ``video_id`` group is the
platform-specific identifier. ``embed_url`` and ``watch_url`` are formatted
with that id.
"""

from __future__ import annotations

PLATFORMS = [
    {
        "key": "youtube",
        "name": "YouTube",
        "domains": [
            "youtube.com",
            "www.youtube.com",
            "m.youtube.com",
            "music.youtube.com",
            "youtu.be",
        ],
        "pattern": (
            r"(?:youtube\.com/(?:watch\?(?:[^#]*&)?v=|embed/|v/|shorts/|live/)"
            r"|youtu\.be/)(?P<video_id>[a-zA-Z0-9_-]{11})"
        ),
        "embed_url": "https://www.youtube.com/embed/{video_id}?autoplay=1",
        "watch_url": "https://www.youtube.com/watch?v={video_id}",
        "placeholder_title": "YouTube Video",
    },
    {
        "key": "tiktok",
        "name": "TikTok",
        "domains": ["tiktok.com", "www.tiktok.com", "m.tiktok.com"],
        "pattern": r"tiktok\.com/(?:[^?#]*/)?video/(?P<video_id>\d+)",
        "embed_url": "https://www.tiktok.com/embed/v2/{video_id}",
        "watch_url": "https://www.tiktok.com/video/{video_id}",
        "placeholder_title": "TikTok Video",
    },
]

# Marker in a YouTube URL path that identifies a Short
SHORTS_MARKER = "/shorts/"


def get_platform(key: str) -> dict:
    """Look up a platform entry by its key (``youtube`` or ``tiktok``).

    Raises:
        KeyError: If the platform is not supported.
    """
    for platform in PLATFORMS:
        if platform["key"] == key:
            return platform
    raise KeyError(key)


def list_supported_platforms() -> list[str]:
    """Return display names of all supported platforms."""
    return [p["name"] for p in PLATFORMS]
