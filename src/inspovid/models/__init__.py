"""
Data models for inspovid.
"""

from inspovid.models.metadata import VideoMetadata, VideoStats
from inspovid.models.video import Platform, Video
from inspovid.models.video_url import VideoURL

__all__ = [
    "VideoURL",
    "VideoMetadata",
    "VideoStats",
    "Video",
    "Platform",
]
