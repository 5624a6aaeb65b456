"""
inspovid.providers.resolver - Ordered fallback across metadata providers.

The resolver walks a platform's provider chain sequentially and returns the
first successful result. Each tier's failure is logged and recorded, never
raised past the chain. What happens when the whole chain fails depends on
the platform:

- TikTok degrades to a placeholder record with ``error="All methods failed"``.
- YouTube raises :class:`AllProvidersExhaustedError` carrying every tier error.

Example:
    >>> resolver = MetadataResolver(config)
    >>> metadata = resolver.resolve_url("https://www.tiktok.com/@u/video/123")
    >>> metadata.source
    'tiktok-page'
"""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING

from inspovid.config.defaults import PLACEHOLDER_PLATFORMS
from inspovid.exceptions import (
    AllProvidersExhaustedError,
    InspovidError,
    ProviderNotConfiguredError,
    UpstreamUnavailableError,
)
from inspovid.models.metadata import VideoMetadata
from inspovid.models.video_url import VideoURL
from inspovid.providers.registry import get_canonical_name, get_provider
from inspovid.utils.logging import log_timed

if TYPE_CHECKING:
    import requests

    from inspovid.config.loader import InspovidConfig
    from inspovid.providers.base import MetadataProvider

logger = logging.getLogger(__name__)

PLACEHOLDER_ERROR = "All methods failed"


class MetadataResolver:
    """Resolves video metadata through each platform's provider chain.

    Args:
        config: Configuration with secrets and fallback chains. If None,
            loads from get_config().
        session: HTTP session shared by every provider the resolver builds.
        providers: Pre-built provider instances keyed by canonical name.
            Names not listed here are built from the registry on first use.
    """

    def __init__(
        self,
        config: InspovidConfig | None = None,
        session: requests.Session | None = None,
        providers: dict[str, MetadataProvider] | None = None,
    ):
        if config is None:
            from inspovid.config.loader import get_config

            config = get_config()
        self._config = config
        self._session = session
        self._providers: dict[str, MetadataProvider] = dict(providers or {})
        self._lock = threading.Lock()

    @property
    def config(self) -> InspovidConfig:
        return self._config

    def get(self, name: str) -> MetadataProvider:
        """Return the provider instance for a name or alias.

        Raises:
            ValueError: If the name is not a known provider.
        """
        canonical = get_canonical_name(name)
        with self._lock:
            if canonical not in self._providers:
                self._providers[canonical] = get_provider(
                    canonical, config=self._config, session=self._session
                )
            return self._providers[canonical]

    def chain(self, platform: str) -> list[MetadataProvider]:
        """Build the ordered provider list for a platform, skipping duplicates."""
        seen: set[str] = set()
        result: list[MetadataProvider] = []
        for name in self._config.chain_for(platform):
            try:
                provider = self.get(name)
            except ValueError as e:
                logger.warning("Skipping unknown provider in %s chain: %s", platform, e)
                continue
            if provider.name in seen:
                continue
            seen.add(provider.name)
            result.append(provider)
        return result

    def resolve(self, video: VideoURL) -> VideoMetadata:
        """Resolve metadata for a classified URL.

        Raises:
            AllProvidersExhaustedError: If every tier failed on a platform
                without a placeholder policy.
        """
        start = time.monotonic()
        errors: list[UpstreamUnavailableError] = []

        for provider in self.chain(video.platform):
            try:
                logger.info("Fetching %s via %s", video, provider.name)
                metadata = provider.fetch(video)
            except ProviderNotConfiguredError as e:
                logger.info("Skipping %s: %s", provider.name, e.message)
                errors.append(e)
                continue
            except UpstreamUnavailableError as e:
                logger.warning("Provider '%s' failed for %s: %s", provider.name, video, e.message)
                errors.append(e)
                continue
            except Exception as e:
                logger.warning(
                    "Provider '%s' returned an unusable response for %s: %s",
                    provider.name,
                    video,
                    e,
                )
                errors.append(UpstreamUnavailableError(str(e), provider=provider.name))
                continue

            log_timed(f"Resolved {video} via {provider.name}", start)
            return metadata

        if video.platform in PLACEHOLDER_PLATFORMS:
            logger.warning(
                "All %d %s providers failed, using placeholder", len(errors), video.platform
            )
            return VideoMetadata.placeholder(video.platform, error=PLACEHOLDER_ERROR)

        raise AllProvidersExhaustedError(video.platform, errors)

    def resolve_url(self, url: str) -> VideoMetadata:
        """Classify a raw link, then resolve it.

        Raises:
            InvalidVideoURLError: If the link is not a supported video URL.
        """
        return self.resolve(VideoURL.parse(url))

    def resolve_with(self, name: str, video: VideoURL) -> VideoMetadata:
        """Call exactly one provider.

        Provider errors propagate unchanged; anything else the provider
        raises is wrapped in UpstreamUnavailableError.

        Raises:
            ValueError: If the provider name is unknown.
            UpstreamUnavailableError: If the provider is unconfigured or fails.
        """
        provider = self.get(name)
        logger.info("Fetching %s via %s only", video, provider.name)
        try:
            return provider.fetch(video)
        except InspovidError:
            raise
        except Exception as e:
            logger.warning(
                "Provider '%s' returned an unusable response for %s: %s",
                provider.name,
                video,
                e,
            )
            raise UpstreamUnavailableError(str(e), provider=provider.name) from e


__all__ = ["MetadataResolver", "PLACEHOLDER_ERROR"]
