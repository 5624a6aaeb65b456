"""
View-model for the dashboard grid.

Turns saved videos into the flat, display-ready dicts a card renders:
labels, badges, aspect ratio and formatted stats. The embed URL is included
but is only meant to be loaded once the user presses play.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from inspovid.config.platforms import get_platform
from inspovid.models.video import Platform
from inspovid.utils.formatting import format_duration

if TYPE_CHECKING:
    from collections.abc import Iterable

    from inspovid.models.video import Video

VISIBLE_HASHTAGS = 3
VERTICAL_ASPECT = "9:16"
HORIZONTAL_ASPECT = "16:9"


def _badges(video: Video) -> list[str]:
    badges = []
    if video.is_short:
        badges.append("Short")
    if video.platform is Platform.TIKTOK:
        badges.append(get_platform(video.platform.value)["name"])
    return badges


def _stats(video: Video) -> dict[str, str]:
    """Formatted counts, leaving out zeros."""
    stats = video.stats
    if stats is None:
        return {}
    shown = {}
    for field in ("views", "likes", "comments"):
        if getattr(stats, field) > 0:
            shown[field] = getattr(stats, f"{field}_formatted")
    return shown


def video_card(video: Video) -> dict[str, Any]:
    """Build the card view-model for one saved video."""
    hashtags = list(video.hashtags)
    return {
        "id": video.id,
        "title": video.title,
        "platform": video.platform.value,
        "platformLabel": get_platform(video.platform.value)["name"],
        "author": video.author,
        "thumbnail": video.thumbnail,
        "url": video.url,
        "embedUrl": video.embed_url,
        "aspectRatio": VERTICAL_ASPECT if video.is_vertical else HORIZONTAL_ASPECT,
        "badges": _badges(video),
        "durationLabel": format_duration(video.duration),
        "stats": _stats(video),
        "hashtags": hashtags[:VISIBLE_HASHTAGS],
        "hiddenHashtagCount": max(len(hashtags) - VISIBLE_HASHTAGS, 0),
        "description": video.description,
        "createdAt": video.created_at,
    }


def video_grid(videos: Iterable[Video]) -> dict[str, Any]:
    """Build the grid view-model, preserving collection order."""
    cards = [video_card(video) for video in videos]
    return {"videos": cards, "count": len(cards), "empty": not cards}
