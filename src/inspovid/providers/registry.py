"""
inspovid.providers.registry - Provider discovery and instantiation.

Functions:
    get_provider: Build a provider instance by name.
    list_available: List providers whose secrets are configured.
    list_all: List all known provider names.
    resolve_name: Map an alias to its canonical name.

Example:
    >>> from inspovid.providers.registry import get_provider, list_available
    >>> provider = get_provider("tiktok-page", config)
    >>> list_available(config)
    ['tiktok-page']
"""

from __future__ import annotations

import logging
from importlib import import_module
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import requests

    from inspovid.config.loader import InspovidConfig
    from inspovid.providers.base import MetadataProvider

logger = logging.getLogger(__name__)


# Provider module mapping - maps canonical names to module paths
# Provider classes follow naming convention: {Name}Provider
# e.g., "tiktok-page" -> TiktokPageProvider, "youtube-data" -> YoutubeDataProvider
PROVIDER_MODULES: dict[str, str] = {
    "youtube-data": "inspovid.providers.youtube",
    "tiktok-official": "inspovid.providers.tiktok_official",
    "rapidapi-nowatermark": "inspovid.providers.rapidapi",
    "rapidapi-scraper": "inspovid.providers.rapidapi",
    "tiktok-page": "inspovid.providers.tiktok_page",
}


# Aliases for convenience - maps alias -> canonical name
PROVIDER_ALIASES: dict[str, str] = {
    "youtube": "youtube-data",
    "youtube-api": "youtube-data",
    "tiktok-api": "tiktok-official",
    "official": "tiktok-official",
    "rapidapi": "rapidapi-nowatermark",
    "nowatermark": "rapidapi-nowatermark",
    "tiktok-alt": "rapidapi-scraper",
    "scraper": "rapidapi-scraper",
    "scrape": "tiktok-page",
    "page": "tiktok-page",
}


def resolve_name(name: str) -> str:
    """Resolve provider aliases to canonical names.

    Args:
        name: Provider name or alias (case-insensitive).

    Returns:
        Canonical provider name.

    Example:
        >>> resolve_name("tiktok-alt")
        'rapidapi-scraper'
        >>> resolve_name("TikTok-Page")
        'tiktok-page'
    """
    normalized = name.lower().strip()
    return PROVIDER_ALIASES.get(normalized, normalized)


def _canonical_to_class_name(canonical: str) -> str:
    """Convert canonical provider name to class name.

    Example:
        >>> _canonical_to_class_name("rapidapi-nowatermark")
        'RapidapiNowatermarkProvider'
    """
    parts = canonical.split("-")
    return "".join(part.title() for part in parts) + "Provider"


def get_provider(
    name: str,
    config: InspovidConfig | None = None,
    session: requests.Session | None = None,
    timeout: float | None = None,
) -> MetadataProvider:
    """Build a provider instance by name.

    Provider modules are imported on first use. Instances are not cached
    because they are bound to a config and session.

    Args:
        name: Provider name or alias (case-insensitive).
        config: Configuration holding the secrets. Defaults to get_config().
        session: Shared HTTP session.
        timeout: Per-request timeout override.

    Returns:
        Provider instance. Check is_available() before calling fetch().

    Raises:
        ValueError: If provider name is unknown.
    """
    canonical = get_canonical_name(name)
    module = import_module(PROVIDER_MODULES[canonical])
    class_name = _canonical_to_class_name(canonical)
    provider_class = getattr(module, class_name)

    logger.debug(f"Loaded provider: {canonical} ({class_name})")
    return provider_class(config=config, session=session, timeout=timeout)


def list_available(config: InspovidConfig | None = None) -> list[str]:
    """List providers whose required secrets are configured.

    Returns:
        Canonical provider names where is_available() returns True, sorted.
    """
    return sorted(name for name in PROVIDER_MODULES if get_provider(name, config).is_available())


def list_all() -> list[str]:
    """List all known provider names, sorted alphabetically."""
    return sorted(PROVIDER_MODULES.keys())


def get_canonical_name(name: str) -> str:
    """Get the canonical name for a provider.

    Raises:
        ValueError: If name doesn't map to a known provider.
    """
    canonical = resolve_name(name)
    if canonical not in PROVIDER_MODULES:
        available = ", ".join(sorted(PROVIDER_MODULES.keys()))
        raise ValueError(f"Unknown provider '{name}'. Available: {available}")
    return canonical


__all__ = [
    "get_provider",
    "list_available",
    "list_all",
    "resolve_name",
    "get_canonical_name",
    "PROVIDER_MODULES",
    "PROVIDER_ALIASES",
]
