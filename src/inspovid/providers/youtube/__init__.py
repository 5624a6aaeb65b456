"""
inspovid.providers.youtube - YouTube Data API metadata provider.

Example:
    >>> from inspovid.providers.registry import get_provider
    >>> provider = get_provider("youtube-data")
    >>> metadata = provider.fetch(video_url)
"""

from inspovid.providers.youtube.client import YoutubeDataProvider

__all__ = ["YoutubeDataProvider"]
