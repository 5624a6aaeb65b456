"""
Normalization helpers shared by every metadata provider.
"""

from __future__ import annotations

import re
from typing import Any

from inspovid.config.defaults import MAX_HASHTAGS
from inspovid.config.platforms import SHORTS_MARKER

# '#' followed by word characters or Latin-extended letters
HASHTAG_PATTERN = re.compile(r"#[\w\u00c0-\u024f\u1e00-\u1eff]+")

# ISO-8601 duration as used by the YouTube Data API, every component optional
ISO_DURATION_PATTERN = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?")

# Longest video still counted as a Short
SHORT_MAX_SECONDS = 60


def extract_hashtags(text: str | None, limit: int = MAX_HASHTAGS) -> list[str]:
    """Extract hashtags from description text.

    Args:
        text: Description or caption text
        limit: Maximum number of tags to keep

    Returns:
        Tags without the leading '#', in order of first appearance
    """
    if not text:
        return []
    return [match[1:] for match in HASHTAG_PATTERN.findall(text)][:limit]


def parse_hashtag_input(value: str | list[str] | None, limit: int = MAX_HASHTAGS) -> list[str]:
    """Parse hashtags typed by the user.

    Accepts a comma/whitespace separated string ("#a, b c") or a list.
    """
    if not value:
        return []
    parts = re.split(r"[,\s]+", value) if isinstance(value, str) else list(value)
    tags = [str(part).strip().lstrip("#").strip() for part in parts]
    return [tag for tag in tags if tag][:limit]


def _match_duration(value: str | None) -> int | None:
    if not value or not isinstance(value, str):
        return None
    match = ISO_DURATION_PATTERN.fullmatch(value.strip())
    if not match or not any(match.groups()):
        return None
    hours, minutes, seconds = (int(group or 0) for group in match.groups())
    return hours * 3600 + minutes * 60 + seconds


def parse_iso_duration(value: str | None) -> int:
    """Convert an ISO-8601 duration (PT#H#M#S) to seconds.

    >>> parse_iso_duration("PT1M30S")
    90

    Malformed or absent input yields 0.
    """
    total = _match_duration(value)
    return total if total is not None else 0


def detect_short(original_url: str | None, duration: str | None) -> bool:
    """Decide whether a YouTube video is a Short.

    True if the URL path carries the shorts marker, or the duration is
    well-formed and at most 60 seconds.
    """
    if original_url and SHORTS_MARKER in original_url:
        return True
    total = _match_duration(duration)
    return total is not None and total <= SHORT_MAX_SECONDS


def to_count(value: Any) -> int:
    """Coerce a provider statistic (int, numeric string, None) to a count >= 0."""
    if value is None or isinstance(value, bool):
        return 0
    try:
        count = int(float(value)) if isinstance(value, (str, float)) else int(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    return max(count, 0)


def first_present(*values: Any) -> Any:
    """Return the first value that is neither None nor empty."""
    for value in values:
        if value not in (None, "", [], {}):
            return value
    return None


def as_dict(value: Any) -> dict[str, Any]:
    """Return ``value`` if it is a dict, otherwise an empty dict."""
    return value if isinstance(value, dict) else {}


def dig(data: Any, *path: str | int) -> Any:
    """Walk nested dicts/lists, returning None when any step is missing."""
    current = data
    for key in path:
        if isinstance(current, dict):
            current = current.get(key)
        elif isinstance(current, list) and isinstance(key, int) and -len(current) <= key < len(current):
            current = current[key]
        else:
            return None
        if current is None:
            return None
    return current
