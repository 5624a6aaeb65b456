"""
URL classification and metadata normalization utilities.
"""

from inspovid.parsing.normalize import (
    detect_short,
    extract_hashtags,
    parse_hashtag_input,
    parse_iso_duration,
)
from inspovid.parsing.utils import classify_url, get_platform_for_url

__all__ = [
    "classify_url",
    "get_platform_for_url",
    "extract_hashtags",
    "parse_hashtag_input",
    "parse_iso_duration",
    "detect_short",
]
