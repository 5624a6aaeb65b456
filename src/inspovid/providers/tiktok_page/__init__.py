"""
inspovid.providers.tiktok_page - Direct scraping of the public TikTok page.

Needs no secrets; always available as the last TikTok tier.
"""

from inspovid.providers.tiktok_page.client import TiktokPageProvider

__all__ = ["TiktokPageProvider"]
