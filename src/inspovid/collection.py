"""
In-memory collection of saved videos.

Newest entries come first. Entries are never reordered, updated or removed
individually; ``clear()`` resets the whole collection the way a reload does.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING

from inspovid.exceptions import InputValidationError

if TYPE_CHECKING:
    from collections.abc import Iterator

    from inspovid.models.video import Video

logger = logging.getLogger(__name__)


class VideoCollection:
    """Ordered, process-local list of saved videos."""

    def __init__(self, videos: list[Video] | None = None):
        self._lock = threading.Lock()
        self._videos: list[Video] = []
        self._ids: set[str] = set()
        # Given oldest-first, so each add lands on top
        for video in videos or []:
            self.add(video)

    def add(self, video: Video) -> Video:
        """Insert a video at the front.

        Raises:
            InputValidationError: If a video with the same id is already saved.
        """
        with self._lock:
            if video.id in self._ids:
                raise InputValidationError(
                    f"Video {video.id} is already in the collection",
                    details={"id": video.id},
                )
            self._videos.insert(0, video)
            self._ids.add(video.id)
        logger.info("Added %s (%d saved)", video.id, len(self._videos))
        return video

    @property
    def videos(self) -> list[Video]:
        """Snapshot of the saved videos, newest first."""
        with self._lock:
            return list(self._videos)

    def get(self, video_id: str) -> Video | None:
        """Look up a saved video by its record id."""
        return next((v for v in self.videos if v.id == video_id), None)

    def clear(self) -> None:
        with self._lock:
            self._videos.clear()
            self._ids.clear()

    def __iter__(self) -> Iterator[Video]:
        return iter(self.videos)

    def __len__(self) -> int:
        return len(self._videos)

    def __contains__(self, video_id: object) -> bool:
        return video_id in self._ids

    def __repr__(self) -> str:
        return f"VideoCollection(count={len(self)})"
