"""
inspovid.providers.tiktok_official - TikTok Open API metadata provider.

Requires TIKTOK_CLIENT_KEY and TIKTOK_CLIENT_SECRET.
"""

from inspovid.providers.tiktok_official.client import TiktokOfficialProvider

__all__ = ["TiktokOfficialProvider"]
