"""Pytest configuration for inspovid tests."""

import json
from unittest.mock import MagicMock

import pytest
import requests

from inspovid.config.loader import InspovidConfig, clear_config_cache
from inspovid.models.video_url import VideoURL

_SECRET_VARS = (
    "RAPIDAPI_KEY",
    "YOUTUBE_API_KEY",
    "TIKTOK_CLIENT_KEY",
    "TIKTOK_CLIENT_SECRET",
    "INSPOVID_RAPIDAPI_KEY",
    "INSPOVID_YOUTUBE_API_KEY",
    "INSPOVID_TIKTOK_CLIENT_KEY",
    "INSPOVID_TIKTOK_CLIENT_SECRET",
    "INSPOVID_REQUEST_TIMEOUT",
    "INSPOVID_LOG_LEVEL",
    "INSPOVID_ROOT",
)

YOUTUBE_URL = "https://www.youtube.com/watch?v=dQw4w9WgXcQ"
SHORTS_URL = "https://youtube.com/shorts/abcdefghijk"
TIKTOK_URL = "https://www.tiktok.com/@dancer/video/7234567890123456789"


def pytest_addoption(parser):
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run integration tests against real provider APIs (requires API keys)",
    )


def pytest_collection_modifyitems(config, items):
    if not config.getoption("--run-integration"):
        skip = pytest.mark.skip(reason="needs --run-integration flag")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep real secrets and cached config out of every test."""
    for name in _SECRET_VARS:
        monkeypatch.delenv(name, raising=False)
    clear_config_cache()
    yield
    clear_config_cache()


@pytest.fixture
def config():
    """Config with every secret configured."""
    return InspovidConfig(
        rapidapi_key="rapid-key",
        youtube_api_key="yt-key",
        tiktok_client_key="tt-client",
        tiktok_client_secret="tt-secret",
    )


@pytest.fixture
def bare_config():
    """Config without any secrets."""
    return InspovidConfig()


def _make_response(status=200, json_data=None, text="", json_error=None):
    """Build a mock requests.Response."""
    response = MagicMock(spec=requests.Response)
    response.status_code = status
    response.ok = status < 400
    response.text = text
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = json_data
    return response


@pytest.fixture
def make_response():
    """Factory for mock responses: make_response(status, json_data, text)."""
    return _make_response


def _rehydration_page(item_struct):
    """Build a TikTok video page embedding ``item_struct`` in the rehydration script."""
    payload = {
        "__DEFAULT_SCOPE__": {
            "webapp.video-detail": {"itemInfo": {"itemStruct": item_struct}},
        }
    }
    return (
        "<html><head><title>ignored | TikTok</title></head><body>"
        '<script id="__UNIVERSAL_DATA_FOR_REHYDRATION__" type="application/json">'
        f"{json.dumps(payload)}</script></body></html>"
    )


@pytest.fixture
def rehydration_page():
    """Factory for TikTok page HTML: rehydration_page(item_struct)."""
    return _rehydration_page


@pytest.fixture
def session():
    """Mock requests.Session. Set ``session.request.return_value`` per test."""
    return MagicMock(spec=requests.Session)


@pytest.fixture
def youtube_url():
    return VideoURL.parse(YOUTUBE_URL)


@pytest.fixture
def tiktok_url():
    return VideoURL.parse(TIKTOK_URL)
