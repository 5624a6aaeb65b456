"""
Custom exceptions for inspovid.

All inspovid exceptions inherit from InspovidError for easy catching.
Each error carries the HTTP status the server should answer with.
"""

from __future__ import annotations

from typing import Any


class InspovidError(Exception):
    """Base exception for all inspovid errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status used when the error reaches the API surface
        details: Additional diagnostic information
        suggestion: Recommended remediation steps
    """

    status_code: int = 500

    def __init__(
        self,
        message: str,
        *,
        details: dict[str, Any] | None = None,
        suggestion: str = "",
        status_code: int | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.suggestion = suggestion
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a structured dict for JSON error responses."""
        result: dict[str, Any] = {"error": self.message}
        if self.details:
            result["details"] = self.details
        if self.suggestion:
            result["suggestion"] = self.suggestion
        return result


class InputValidationError(InspovidError):
    """Missing or invalid user input. Raised before any network call."""

    status_code = 400


class InvalidVideoURLError(InputValidationError, ValueError):
    """The pasted link is not a recognized YouTube or TikTok video URL."""

    def __init__(self, url: str, message: str | None = None):
        self.url = url
        super().__init__(
            message or "Please enter a valid YouTube or TikTok link",
            details={"url": url},
        )


class UpstreamUnavailableError(InspovidError):
    """A single provider failed (network, auth or response shape).

    Caught by the resolver, which moves on to the next tier when one exists.
    """

    def __init__(
        self,
        message: str,
        *,
        provider: str | None = None,
        details: dict[str, Any] | None = None,
        suggestion: str = "",
        status_code: int | None = None,
        http_code: int | None = None,
    ):
        details = details or {}
        if provider:
            details["provider"] = provider
        if http_code:
            details["http_code"] = http_code
        super().__init__(
            message,
            details=details,
            suggestion=suggestion,
            status_code=status_code,
        )
        self.provider = provider
        self.http_code = http_code


class ProviderNotConfiguredError(UpstreamUnavailableError):
    """Provider secrets are absent, so the tier is disabled."""


class VideoNotFoundError(UpstreamUnavailableError):
    """The upstream service reports that the video does not exist."""

    status_code = 404


class AllProvidersExhaustedError(InspovidError):
    """Every tier of a platform's fallback chain failed.

    The status code follows the last tier's error so that a single-provider
    chain surfaces exactly what its provider reported (404 for a missing
    video, 500 for a missing key).
    """

    def __init__(
        self,
        platform: str,
        errors: list[UpstreamUnavailableError] | None = None,
    ):
        self.platform = platform
        self.errors = list(errors or [])
        last = self.errors[-1] if self.errors else None
        message = last.message if last else f"No metadata provider for {platform}"
        details: dict[str, Any] = {"platform": platform}
        if len(self.errors) > 1:
            details["attempts"] = [
                {"provider": e.provider, "error": e.message} for e in self.errors
            ]
        super().__init__(
            message,
            details=details,
            status_code=last.status_code if last else 500,
        )
