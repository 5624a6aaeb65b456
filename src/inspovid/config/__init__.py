"""
Configuration for inspovid.

Contains the platform table, default settings and the config loader.
"""

from inspovid.config.defaults import (
    DEFAULT_FALLBACKS,
    DEFAULT_REQUEST_TIMEOUT,
    MAX_HASHTAGS,
)
from inspovid.config.loader import (
    ConfigSource,
    ConfigValidationResult,
    InspovidConfig,
    clear_config_cache,
    get_config,
    load_config,
    validate_config_dict,
)
from inspovid.config.platforms import PLATFORMS, get_platform, list_supported_platforms

__all__ = [
    "PLATFORMS",
    "get_platform",
    "list_supported_platforms",
    "DEFAULT_FALLBACKS",
    "DEFAULT_REQUEST_TIMEOUT",
    "MAX_HASHTAGS",
    # Config loader
    "InspovidConfig",
    "ConfigSource",
    "ConfigValidationResult",
    "get_config",
    "load_config",
    "clear_config_cache",
    "validate_config_dict",
]
