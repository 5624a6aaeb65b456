"""
inspovid.providers.base - Abstract base class for metadata providers.

This module defines the contract that every metadata provider implements.
A provider wraps one external service and turns its response into a
:class:`~inspovid.models.metadata.VideoMetadata`, or raises
:class:`~inspovid.exceptions.UpstreamUnavailableError`.

Classes:
    MetadataProvider: Abstract base class for all providers.

Example:
    >>> class MyProvider(MetadataProvider):
    ...     @property
    ...     def info(self) -> ProviderInfo:
    ...         return ProviderInfo(name="my-provider", platform="tiktok")
    ...     def fetch(self, video):
    ...         ...
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

import requests

from inspovid.exceptions import ProviderNotConfiguredError, UpstreamUnavailableError

if TYPE_CHECKING:
    from inspovid.config.loader import InspovidConfig
    from inspovid.models.metadata import VideoMetadata
    from inspovid.models.video_url import VideoURL
    from inspovid.providers.info import ProviderInfo

logger = logging.getLogger(__name__)


class MetadataProvider(ABC):
    """Abstract base class for all metadata providers.

    Args:
        config: Resolved configuration holding the provider secrets. If None,
            loads from get_config().
        session: HTTP session to issue requests with. A private session is
            created on first use when omitted.
        timeout: Per-request timeout in seconds. Defaults to
            config.request_timeout.
    """

    def __init__(
        self,
        config: InspovidConfig | None = None,
        session: requests.Session | None = None,
        timeout: float | None = None,
    ):
        if config is None:
            from inspovid.config.loader import get_config

            config = get_config()
        self._config = config
        self._session = session
        self._timeout = timeout if timeout is not None else config.request_timeout

    @property
    @abstractmethod
    def info(self) -> ProviderInfo:
        """Return provider metadata (name, platform, required secrets)."""
        ...

    @property
    def name(self) -> str:
        return self.info.name

    def is_available(self) -> bool:
        """Check if every secret the provider needs is configured.

        Returns:
            True if the provider can be used, False otherwise.
        """
        return all(getattr(self._config, field, None) for field in self.info.requires)

    @abstractmethod
    def fetch(self, video: VideoURL) -> VideoMetadata:
        """Resolve metadata for a classified video.

        Args:
            video: Classified video URL.

        Returns:
            Normalized metadata.

        Raises:
            ProviderNotConfiguredError: If required secrets are missing.
            VideoNotFoundError: If the upstream reports the video does not exist.
            UpstreamUnavailableError: On any network, auth or shape failure.
        """
        ...

    # ------------------------------------------------------------------
    # HTTP helpers
    # ------------------------------------------------------------------

    @property
    def session(self) -> requests.Session:
        """Lazy-load the HTTP session."""
        if self._session is None:
            self._session = requests.Session()
        return self._session

    def _ensure_configured(self, message: str) -> None:
        if not self.is_available():
            raise ProviderNotConfiguredError(message, provider=self.name)

    def _request(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        """Send a request, converting transport errors to UpstreamUnavailableError."""
        kwargs.setdefault("timeout", self._timeout)
        try:
            return self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            raise UpstreamUnavailableError(
                f"{self.name} request failed: {e}",
                provider=self.name,
            ) from e

    def _check_status(self, response: requests.Response, message: str) -> None:
        if not response.ok:
            logger.debug(
                "%s responded %s: %s", self.name, response.status_code, response.text[:500]
            )
            raise UpstreamUnavailableError(
                message,
                provider=self.name,
                http_code=response.status_code,
            )

    def _json(self, response: requests.Response) -> Any:
        """Decode a JSON body, converting decode errors to UpstreamUnavailableError."""
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamUnavailableError(
                f"{self.name} returned invalid JSON",
                provider=self.name,
            ) from e

    def _require_dict(self, value: Any, message: str) -> dict[str, Any]:
        """Return ``value`` if it is a JSON object, else raise UpstreamUnavailableError."""
        if not isinstance(value, dict):
            raise UpstreamUnavailableError(message, provider=self.name)
        return value

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(available={self.is_available()})"


__all__ = ["MetadataProvider"]
