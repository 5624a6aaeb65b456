"""
Add-video operation.

Classifies a pasted link, resolves its metadata, applies the user's edits
and saves the finished record at the top of the collection.

Metadata problems never block saving: when resolution fails the platform
placeholder ("YouTube Video", "TikTok Video") is used instead. Only an
unrecognized link is rejected, and that happens before any network call.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from inspovid.exceptions import InspovidError
from inspovid.models.metadata import InspovidModel, VideoMetadata
from inspovid.models.video import Video
from inspovid.models.video_url import VideoURL

if TYPE_CHECKING:
    from collections.abc import Callable

    from inspovid.collection import VideoCollection
    from inspovid.providers.resolver import MetadataResolver

logger = logging.getLogger(__name__)


class AddVideoRequest(InspovidModel):
    """Form input for saving a video.

    Attributes:
        url: The pasted YouTube or TikTok link (required)
        title: Title override; blank keeps the fetched title
        author: Author override
        description: Description override
        hashtags: Comma/space separated string or list; '#' prefixes are dropped
    """

    url: str
    title: str | None = None
    author: str | None = None
    description: str | None = None
    hashtags: str | list[str] | None = None


def resolve_or_placeholder(video_url: VideoURL, resolver: MetadataResolver) -> VideoMetadata:
    """Resolve metadata, degrading to the platform placeholder on failure."""
    try:
        return resolver.resolve(video_url)
    except InspovidError as e:
        logger.warning("Metadata lookup failed for %s: %s", video_url, e.message)
        return VideoMetadata.placeholder(video_url.platform, error=e.message)


def fetch_metadata(url: str, resolver: MetadataResolver) -> VideoMetadata:
    """Pre-fill step: classify a link and fetch its metadata.

    Raises:
        InvalidVideoURLError: If the link is not a supported video URL.
    """
    return resolve_or_placeholder(VideoURL.parse(url), resolver)


def add_video(
    request: AddVideoRequest,
    resolver: MetadataResolver,
    collection: VideoCollection,
    *,
    clock: Callable[[], float] | None = None,
) -> Video:
    """Save a video to the collection.

    Args:
        request: Link plus optional user edits.
        resolver: Metadata resolver used to look the video up.
        collection: Collection the finished record is prepended to.
        clock: Returns the current time in epoch seconds. Defaults to time.time.

    Returns:
        The saved Video.

    Raises:
        InvalidVideoURLError: If the link is not a supported video URL.
        InputValidationError: If the generated id is already saved.
    """
    video_url = VideoURL.parse(request.url)
    metadata = resolve_or_placeholder(video_url, resolver)
    created_at_ms = int((clock or time.time)() * 1000)

    video = Video.create(
        video_url,
        metadata,
        title=request.title,
        author=request.author,
        description=request.description,
        hashtags=request.hashtags,
        created_at_ms=created_at_ms,
    )
    return collection.add(video)
