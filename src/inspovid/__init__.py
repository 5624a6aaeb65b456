"""
inspovid - Inspiration video dashboard backend.

Save YouTube and TikTok links to a shared board:
1. Classify the pasted link (platform, video id, embed URL)
2. Resolve metadata through each platform's provider chain
3. Keep the finished records in memory, newest first
"""

__version__ = "0.1.0"

from inspovid.collection import VideoCollection
from inspovid.config.loader import InspovidConfig, get_config, load_config

# Exceptions
from inspovid.exceptions import (
    AllProvidersExhaustedError,
    InputValidationError,
    InspovidError,
    InvalidVideoURLError,
    ProviderNotConfiguredError,
    UpstreamUnavailableError,
    VideoNotFoundError,
)

# Models
from inspovid.models.metadata import VideoMetadata, VideoStats
from inspovid.models.video import Platform, Video
from inspovid.models.video_url import VideoURL
from inspovid.operations.add_video import AddVideoRequest, add_video, fetch_metadata
from inspovid.providers.resolver import MetadataResolver

__all__ = [
    "__version__",
    # Config
    "InspovidConfig",
    "get_config",
    "load_config",
    # Exceptions
    "InspovidError",
    "InputValidationError",
    "InvalidVideoURLError",
    "UpstreamUnavailableError",
    "ProviderNotConfiguredError",
    "VideoNotFoundError",
    "AllProvidersExhaustedError",
    # Models
    "VideoURL",
    "VideoMetadata",
    "VideoStats",
    "Video",
    "Platform",
    # Operations
    "MetadataResolver",
    "VideoCollection",
    "AddVideoRequest",
    "add_video",
    "fetch_metadata",
]
