"""Tests for the collection store, the add-video flow and card view-models."""

from __future__ import annotations

import itertools
from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock

import pytest

from inspovid.collection import VideoCollection
from inspovid.exceptions import (
    AllProvidersExhaustedError,
    InputValidationError,
    InvalidVideoURLError,
    ProviderNotConfiguredError,
)
from inspovid.models.metadata import VideoMetadata, VideoStats
from inspovid.models.video import Video
from inspovid.models.video_url import VideoURL
from inspovid.operations.add_video import AddVideoRequest, add_video, fetch_metadata
from inspovid.presentation import video_card, video_grid

TIKTOK = "https://www.tiktok.com/@dancer/video/7234567890123456789"
YOUTUBE = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"


def _video(url: str, created_at_ms: int, title: str = "t", **metadata) -> Video:
    return Video.create(
        VideoURL.parse(url),
        VideoMetadata(title=title, **metadata),
        created_at_ms=created_at_ms,
    )


def _resolver(metadata: VideoMetadata | None = None, error: Exception | None = None) -> MagicMock:
    resolver = MagicMock()
    if error is not None:
        resolver.resolve.side_effect = error
    else:
        resolver.resolve.return_value = metadata or VideoMetadata(title="Fetched", author="@a")
    return resolver


def _clock(start: float = 1700000000.0):
    counter = itertools.count()
    return lambda: start + next(counter)


# =============================================================================
# VideoCollection
# =============================================================================


class TestVideoCollection:
    """Newest-first ordering, duplicates and reset."""

    def test_add_prepends(self):
        collection = VideoCollection()
        first = collection.add(_video(YOUTUBE, 1))
        second = collection.add(_video(TIKTOK, 2))
        assert collection.videos == [second, first]
        assert len(collection) == 2

    def test_existing_entries_never_reordered(self):
        collection = VideoCollection()
        ids = []
        for ms in range(5):
            ids.append(collection.add(_video(YOUTUBE, ms)).id)
        assert [v.id for v in collection] == list(reversed(ids))

    def test_duplicate_id_rejected(self):
        collection = VideoCollection()
        video = _video(YOUTUBE, 1)
        collection.add(video)
        with pytest.raises(InputValidationError):
            collection.add(video)
        assert len(collection) == 1

    def test_videos_is_a_copy(self):
        collection = VideoCollection()
        collection.add(_video(YOUTUBE, 1))
        collection.videos.clear()
        assert len(collection) == 1

    def test_clear(self):
        collection = VideoCollection([_video(YOUTUBE, 1)])
        collection.clear()
        assert len(collection) == 0
        assert collection.videos == []

    def test_initial_videos_oldest_first(self):
        old, new = _video(YOUTUBE, 1), _video(TIKTOK, 2)
        assert VideoCollection([old, new]).videos == [new, old]

    def test_get_and_contains(self):
        collection = VideoCollection()
        video = collection.add(_video(TIKTOK, 9))
        assert collection.get(video.id) is video
        assert video.id in collection
        assert collection.get("missing") is None

    def test_concurrent_adds_lose_nothing(self):
        collection = VideoCollection()
        videos = [_video(YOUTUBE, ms) for ms in range(50)]
        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(collection.add, videos))
        assert len(collection) == 50
        assert {v.id for v in collection} == {v.id for v in videos}


# =============================================================================
# add_video
# =============================================================================


class TestAddVideo:
    """Tests for the add flow."""

    def test_adds_resolved_video(self):
        collection = VideoCollection()
        video = add_video(
            AddVideoRequest(url=TIKTOK), _resolver(), collection, clock=lambda: 1700000000.5
        )
        assert video.title == "Fetched"
        assert video.id == "tiktok-7234567890123456789-1700000000500"
        assert collection.videos == [video]

    def test_edits_applied(self):
        video = add_video(
            AddVideoRequest(url=YOUTUBE, title="Mine", hashtags="#x, y"),
            _resolver(),
            VideoCollection(),
            clock=_clock(),
        )
        assert video.title == "Mine"
        assert video.author == "@a"
        assert video.hashtags == ["x", "y"]

    def test_invalid_url_rejected_without_lookup(self):
        resolver = _resolver()
        collection = VideoCollection()
        with pytest.raises(InvalidVideoURLError):
            add_video(AddVideoRequest(url="https://vimeo.com/1"), resolver, collection)
        resolver.resolve.assert_not_called()
        assert len(collection) == 0

    def test_resolution_failure_degrades_to_placeholder(self):
        error = AllProvidersExhaustedError(
            "youtube", [ProviderNotConfiguredError("YouTube API key not configured")]
        )
        video = add_video(
            AddVideoRequest(url=YOUTUBE), _resolver(error=error), VideoCollection(), clock=_clock()
        )
        assert video.title == "YouTube Video"
        assert video.error is None

    def test_ordering_follows_completion(self):
        collection = VideoCollection()
        clock = _clock()
        first = add_video(AddVideoRequest(url=YOUTUBE), _resolver(), collection, clock=clock)
        second = add_video(AddVideoRequest(url=TIKTOK), _resolver(), collection, clock=clock)
        third = add_video(AddVideoRequest(url=YOUTUBE), _resolver(), collection, clock=clock)
        assert collection.videos == [third, second, first]

    def test_camel_case_request(self):
        request = AddVideoRequest.model_validate({"url": TIKTOK, "hashtags": ["a"]})
        assert request.hashtags == ["a"]


class TestFetchMetadata:
    """Tests for the pre-fill step."""

    def test_returns_metadata(self):
        assert fetch_metadata(TIKTOK, _resolver()).title == "Fetched"

    def test_placeholder_on_error(self):
        error = AllProvidersExhaustedError("youtube")
        metadata = fetch_metadata(YOUTUBE, _resolver(error=error))
        assert metadata.title == "YouTube Video"
        assert metadata.error == "No metadata provider for youtube"

    def test_invalid_url(self):
        with pytest.raises(InvalidVideoURLError):
            fetch_metadata("", _resolver())


# =============================================================================
# Presentation
# =============================================================================


class TestVideoCard:
    """Tests for the card view-model."""

    def test_tiktok_card(self):
        video = _video(
            TIKTOK,
            1,
            title="Dance",
            author="@dancer",
            hashtags=["a", "b", "c", "d", "e"],
            duration=75,
            stats=VideoStats.from_counts(views=1500, likes=0, comments=2),
        )
        card = video_card(video)
        assert card["aspectRatio"] == "9:16"
        assert card["badges"] == ["TikTok"]
        assert card["platformLabel"] == "TikTok"
        assert card["durationLabel"] == "1:15"
        assert card["stats"] == {"views": "1.5K", "comments": "2"}
        assert card["hashtags"] == ["a", "b", "c"]
        assert card["hiddenHashtagCount"] == 2
        assert card["embedUrl"] == "https://www.tiktok.com/embed/v2/7234567890123456789"

    def test_short_card(self):
        video = _video("https://youtube.com/shorts/abcdefghijk", 1, is_short=True, duration=30)
        card = video_card(video)
        assert card["aspectRatio"] == "9:16"
        assert card["badges"] == ["Short"]
        assert card["durationLabel"] == "30s"

    def test_regular_youtube_card(self):
        card = video_card(_video(YOUTUBE, 1, is_short=False))
        assert card["aspectRatio"] == "16:9"
        assert card["badges"] == []
        assert card["durationLabel"] is None
        assert card["stats"] == {}

    def test_grid(self):
        collection = VideoCollection([_video(YOUTUBE, 1), _video(TIKTOK, 2)])
        grid = video_grid(collection)
        assert grid["count"] == 2
        assert grid["empty"] is False
        assert [c["platform"] for c in grid["videos"]] == ["tiktok", "youtube"]

    def test_empty_grid(self):
        assert video_grid(VideoCollection()) == {"videos": [], "count": 0, "empty": True}
