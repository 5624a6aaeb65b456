"""
inspovid.providers - Video metadata provider layer.

Each provider wraps one upstream service (YouTube Data API, TikTok Open API,
RapidAPI proxies, the public TikTok page) and normalizes its response into
:class:`~inspovid.models.metadata.VideoMetadata`. The resolver chains them.

Public API:
    get_provider(name: str) -> MetadataProvider
        Build a provider instance by name.

    list_available() -> list[str]
        List providers whose secrets are configured.

    MetadataResolver
        Ordered fallback across a platform's providers.

Example:
    >>> from inspovid.providers import MetadataResolver
    >>> resolver = MetadataResolver()
    >>> resolver.resolve_url("https://youtu.be/dQw4w9WgXcQ").title
    'Rick Astley - Never Gonna Give You Up'
"""

from __future__ import annotations

from inspovid.providers.base import MetadataProvider
from inspovid.providers.info import PROVIDER_INFO, ProviderInfo
from inspovid.providers.registry import (
    PROVIDER_ALIASES,
    PROVIDER_MODULES,
    get_canonical_name,
    get_provider,
    list_all,
    list_available,
    resolve_name,
)
from inspovid.providers.resolver import PLACEHOLDER_ERROR, MetadataResolver

__all__ = [
    # Base
    "MetadataProvider",
    "ProviderInfo",
    "PROVIDER_INFO",
    # Registry
    "get_provider",
    "get_canonical_name",
    "list_available",
    "list_all",
    "resolve_name",
    "PROVIDER_MODULES",
    "PROVIDER_ALIASES",
    # Resolution
    "MetadataResolver",
    "PLACEHOLDER_ERROR",
]
