"""
inspovid.providers.rapidapi - RapidAPI-hosted TikTok scraping services.

Both providers require RAPIDAPI_KEY.
"""

from inspovid.providers.rapidapi.client import (
    RapidapiNowatermarkProvider,
    RapidapiScraperProvider,
)

__all__ = ["RapidapiNowatermarkProvider", "RapidapiScraperProvider"]
