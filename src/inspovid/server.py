"""
HTTP API for the dashboard.

Endpoints:
    GET  /api/youtube          YouTube metadata by video id
    GET  /api/tiktok           TikTok metadata through the full fallback chain
    GET  /api/tiktok-official  TikTok Open API only
    GET  /api/tiktok-alt       RapidAPI scraper only
    GET  /api/classify         Classify a link without any network call
    GET  /api/metadata         Pre-fill metadata for the add form
    GET  /api/videos           Saved videos as grid cards
    POST /api/videos           Save a video
    GET  /api/health           Liveness and configured providers

Every InspovidError becomes a JSON body ``{"error": ...}`` with the error's
status code.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from inspovid import __version__
from inspovid.collection import VideoCollection
from inspovid.exceptions import (
    InputValidationError,
    InspovidError,
    InvalidVideoURLError,
    ProviderNotConfiguredError,
    UpstreamUnavailableError,
)
from inspovid.models.video_url import VideoURL
from inspovid.operations.add_video import AddVideoRequest, add_video, fetch_metadata
from inspovid.presentation import video_card, video_grid
from inspovid.providers.registry import list_available
from inspovid.providers.resolver import MetadataResolver

if TYPE_CHECKING:
    from inspovid.config.loader import InspovidConfig

logger = logging.getLogger(__name__)


def _require(value: str | None, message: str) -> str:
    if not value or not value.strip():
        raise InputValidationError(message)
    return value


def _parse_tiktok(url: str, message: str = "Invalid TikTok URL") -> VideoURL:
    video = VideoURL.parse(url)
    if video.platform != "tiktok":
        raise InvalidVideoURLError(url, message)
    return video


def create_app(
    config: InspovidConfig | None = None,
    resolver: MetadataResolver | None = None,
    collection: VideoCollection | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        config: Configuration. Defaults to the resolver's config, or get_config().
        resolver: Metadata resolver. Built from ``config`` when omitted.
        collection: Saved-video store. A fresh empty one when omitted.
    """
    if resolver is None:
        resolver = MetadataResolver(config)
    if config is None:
        config = resolver.config
    collection = collection if collection is not None else VideoCollection()

    app = FastAPI(
        title="inspovid",
        description="Save YouTube and TikTok videos with their metadata.",
        version=__version__,
    )
    app.state.resolver = resolver
    app.state.collection = collection

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(config.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(InspovidError)
    async def inspovid_error_handler(request: Request, exc: InspovidError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
        return JSONResponse(exc.to_dict(), status_code=exc.status_code)

    @app.get("/api/youtube")
    def youtube_metadata(
        video_id: str | None = Query(None, alias="videoId"),
        original_url: str | None = Query(None, alias="originalUrl"),
    ) -> dict[str, Any]:
        video_id = _require(video_id, "Video ID is required")
        original_url = (original_url or "").strip() or None
        video = VideoURL.for_id("youtube", video_id.strip(), url=original_url)
        return resolver.resolve(video).to_response()

    @app.get("/api/tiktok")
    def tiktok_metadata(url: str | None = None) -> dict[str, Any]:
        url = _require(url, "Video URL is required")
        return resolver.resolve(_parse_tiktok(url)).to_response()

    @app.get("/api/tiktok-official", response_model=None)
    def tiktok_official_metadata(url: str | None = None) -> dict[str, Any] | JSONResponse:
        url = _require(url, "Video URL is required")
        provider = resolver.get("tiktok-official")
        if not provider.is_available():
            raise ProviderNotConfiguredError(
                "TikTok API credentials not configured", provider=provider.name
            )
        video = _parse_tiktok(url)
        try:
            return resolver.resolve_with(provider.name, video).to_response()
        except UpstreamUnavailableError as e:
            logger.error("TikTok Official API error: %s", e.message)
            return JSONResponse(
                {
                    "error": "TikTok Official API failed",
                    "details": e.message,
                    "suggestion": e.suggestion or "Using fallback methods",
                },
                status_code=500,
            )

    @app.get("/api/tiktok-alt")
    def tiktok_alt_metadata(url: str | None = None) -> dict[str, Any]:
        url = _require(url, "Video URL is required")
        provider = resolver.get("rapidapi-scraper")
        if not provider.is_available():
            raise ProviderNotConfiguredError("RapidAPI key not configured", provider=provider.name)
        video = _parse_tiktok(url)
        try:
            return resolver.resolve_with(provider.name, video).to_response()
        except UpstreamUnavailableError as e:
            raise UpstreamUnavailableError(
                "Failed to fetch TikTok video data",
                provider=provider.name,
                details={"reason": e.message},
            ) from e

    @app.get("/api/classify")
    def classify(url: str | None = None) -> dict[str, Any]:
        video = VideoURL.parse(url or "")
        return {
            "url": video.url,
            "platform": video.platform,
            "videoId": video.video_id,
            "embedUrl": video.embed_url,
        }

    @app.get("/api/metadata")
    def metadata(url: str | None = None) -> dict[str, Any]:
        return fetch_metadata(url or "", resolver).to_response()

    @app.get("/api/videos")
    def list_videos() -> dict[str, Any]:
        return video_grid(collection)

    @app.post("/api/videos", status_code=201)
    def create_video(body: AddVideoRequest) -> dict[str, Any]:
        video = add_video(body, resolver, collection)
        return {"video": video.to_response(), "card": video_card(video)}

    @app.get("/api/health")
    def health() -> dict[str, Any]:
        return {
            "status": "ok",
            "version": __version__,
            "providers": list_available(config),
            "videos": len(collection),
        }

    return app


__all__ = ["create_app"]
