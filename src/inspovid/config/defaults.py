"""
Default configuration values for inspovid.

Note: Secrets and overrides are resolved via config/loader.py which supports
environment variables, project config, and user config.
"""

# Timeout (seconds) applied to every outbound provider request
DEFAULT_REQUEST_TIMEOUT = 15.0

# Fallback chains, tried strictly in order
DEFAULT_FALLBACKS: dict[str, tuple[str, ...]] = {
    "youtube": ("youtube-data",),
    "tiktok": ("tiktok-official", "rapidapi-nowatermark", "tiktok-page"),
}

# Platforms that degrade to a placeholder record instead of raising
PLACEHOLDER_PLATFORMS = frozenset({"tiktok"})

# Maximum number of hashtags kept on a record
MAX_HASHTAGS = 10

DEFAULT_CORS_ORIGINS: tuple[str, ...] = ("*",)

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8000
