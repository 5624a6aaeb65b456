"""
Unified configuration loader with priority resolution.

Root directory (INSPOVID_ROOT):
- macOS/Linux: ~/.inspovid
- Windows: %APPDATA%\\inspovid
- Override: INSPOVID_ROOT environment variable

Value priority (highest to lowest):
1. Environment variables (RAPIDAPI_KEY, YOUTUBE_API_KEY, ...)
2. Project config (.inspovid/config.yaml, searched upward from cwd)
3. User config ({root_dir}/config.yaml)
4. Defaults (config/defaults.py)

YAML structure:
    providers:
      rapidapi:
        api_key: ${RAPIDAPI_KEY}
      youtube:
        api_key: ${YOUTUBE_API_KEY}
      tiktok:
        client_key: ${TIKTOK_CLIENT_KEY}
        client_secret: ${TIKTOK_CLIENT_SECRET}
      fallbacks:
        tiktok: [tiktok-official, rapidapi-nowatermark, tiktok-page]
    request_timeout: 15
    log_level: INFO
    server:
      cors_origins: ["*"]

Each absent secret disables only the tier that needs it.
"""

from __future__ import annotations

import logging
import os
import re
import sys
from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any

from inspovid.config.defaults import (
    DEFAULT_CORS_ORIGINS,
    DEFAULT_FALLBACKS,
    DEFAULT_REQUEST_TIMEOUT,
)

logger = logging.getLogger(__name__)

# Pattern for ${ENV_VAR} interpolation
ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

# Config field -> environment variable holding the secret
_SECRET_ENV_VARS: dict[str, str] = {
    "rapidapi_key": "RAPIDAPI_KEY",
    "youtube_api_key": "YOUTUBE_API_KEY",
    "tiktok_client_key": "TIKTOK_CLIENT_KEY",
    "tiktok_client_secret": "TIKTOK_CLIENT_SECRET",
}

# Config field -> (providers section, key) in YAML
_SECRET_YAML_KEYS: dict[str, tuple[str, str]] = {
    "rapidapi_key": ("rapidapi", "api_key"),
    "youtube_api_key": ("youtube", "api_key"),
    "tiktok_client_key": ("tiktok", "client_key"),
    "tiktok_client_secret": ("tiktok", "client_secret"),
}

_VALID_TOP_LEVEL_KEYS = frozenset({"providers", "request_timeout", "log_level", "server"})
_VALID_PROVIDERS_KEYS = frozenset({"rapidapi", "youtube", "tiktok", "fallbacks"})
_VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class ConfigSource(Enum):
    """Source of the configuration file."""

    PROJECT = "project"
    USER = "user"
    DEFAULT = "default"


@dataclass(frozen=True)
class InspovidConfig:
    """Resolved inspovid configuration.

    Attributes:
        rapidapi_key: Key for the keyed third-party proxy APIs.
        youtube_api_key: YouTube Data API key.
        tiktok_client_key: TikTok developer client key.
        tiktok_client_secret: TikTok developer client secret.
        request_timeout: Seconds before an outbound provider request gives up.
        fallbacks: Provider chain per platform key, tried in order.
        cors_origins: Origins allowed by the HTTP server.
        log_level: Root log level name.
        root_dir: inspovid root directory.
        source: Which config file the values came from.
        config_path: Path of that file, if any.
    """

    rapidapi_key: str | None = None
    youtube_api_key: str | None = None
    tiktok_client_key: str | None = None
    tiktok_client_secret: str | None = None
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    fallbacks: dict[str, tuple[str, ...]] = field(
        default_factory=lambda: dict(DEFAULT_FALLBACKS)
    )
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS
    log_level: str = "INFO"
    root_dir: Path | None = None
    source: ConfigSource = ConfigSource.DEFAULT
    config_path: Path | None = None

    @property
    def has_tiktok_credentials(self) -> bool:
        return bool(self.tiktok_client_key and self.tiktok_client_secret)

    def chain_for(self, platform: str) -> tuple[str, ...]:
        """Return the provider chain for a platform key."""
        return tuple(self.fallbacks.get(platform, ()))

    def __repr__(self) -> str:
        configured = [name for name in _SECRET_ENV_VARS if getattr(self, name)]
        return (
            f"InspovidConfig(secrets={configured!r}, "
            f"request_timeout={self.request_timeout!r}, source={self.source.value!r})"
        )


def _interpolate_env_vars(value: Any) -> Any:
    """Replace ${ENV_VAR} patterns with environment variable values.

    Recursively processes strings, dicts, and lists. Missing env vars
    produce a warning and are replaced with empty string.
    """
    if isinstance(value, str):

        def _replace_match(match: re.Match) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                logger.warning(
                    "Environment variable %s not set (referenced in config)",
                    var_name,
                )
                return ""
            return env_value

        return ENV_VAR_PATTERN.sub(_replace_match, value)
    elif isinstance(value, dict):
        return {k: _interpolate_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_interpolate_env_vars(v) for v in value]
    return value


def _load_yaml_config(config_path: Path) -> dict[str, Any] | None:
    """Load configuration from a YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Parsed config dict, or None if file doesn't exist or fails to parse.
    """
    if not config_path.exists():
        return None

    import yaml

    try:
        with open(config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Failed to load config from {config_path}: {e}")
        return None

    if config is None:
        return {}
    if not isinstance(config, dict):
        logger.warning(f"Config file {config_path} is not a valid YAML dict")
        return None
    return config


def _find_project_config() -> Path | None:
    """Find project-level config by walking up from cwd.

    Returns:
        Path to .inspovid/config.yaml if found, None otherwise.
    """
    cwd = Path.cwd()
    for parent in [cwd, *cwd.parents]:
        config_path = parent / ".inspovid" / "config.yaml"
        if config_path.exists():
            return config_path
    return None


def _get_root_dir() -> Path:
    """Get the inspovid root directory.

    Priority:
    1. INSPOVID_ROOT environment variable
    2. Platform-specific default (%APPDATA%\\inspovid or ~/.inspovid)
    """
    env_root = os.environ.get("INSPOVID_ROOT")
    if env_root:
        return Path(env_root).expanduser().resolve()

    if sys.platform == "win32":
        appdata = os.environ.get("APPDATA")
        if appdata:
            return Path(appdata) / "inspovid"
        return Path.home() / "AppData" / "Roaming" / "inspovid"
    return Path.home() / ".inspovid"


def _get_user_config_path() -> Path:
    """Get the user-level config path ({root_dir}/config.yaml)."""
    return _get_root_dir() / "config.yaml"


def _env_secret(env_var: str) -> str | None:
    """Read a secret from ``ENV_VAR`` or its ``INSPOVID_``-prefixed variant."""
    return os.environ.get(env_var) or os.environ.get(f"INSPOVID_{env_var}") or None


def _parse_fallbacks(raw: Any) -> dict[str, tuple[str, ...]]:
    fallbacks = dict(DEFAULT_FALLBACKS)
    if not isinstance(raw, dict):
        return fallbacks
    for platform, chain in raw.items():
        if isinstance(chain, str):
            chain = [chain]
        if isinstance(chain, list):
            fallbacks[str(platform)] = tuple(str(name).strip() for name in chain)
    return fallbacks


def _parse_timeout(value: Any) -> float:
    try:
        timeout = float(value)
    except (TypeError, ValueError):
        logger.warning("Invalid request_timeout %r, using default", value)
        return DEFAULT_REQUEST_TIMEOUT
    if timeout <= 0:
        logger.warning("request_timeout must be positive, using default")
        return DEFAULT_REQUEST_TIMEOUT
    return timeout


def load_config(
    config_dict: dict[str, Any] | None = None,
    *,
    source: ConfigSource = ConfigSource.DEFAULT,
    config_path: Path | None = None,
) -> InspovidConfig:
    """Build an InspovidConfig from a parsed YAML dict plus the environment.

    Environment variables win over YAML values. Empty strings count as unset.

    Args:
        config_dict: Parsed YAML config (full document), or None.
        source: Where ``config_dict`` came from.
        config_path: Path of the file, for reporting.

    Returns:
        Resolved configuration.
    """
    data = _interpolate_env_vars(config_dict or {})
    providers = data.get("providers") or {}
    if not isinstance(providers, dict):
        providers = {}

    secrets: dict[str, str | None] = {}
    for field_name, env_var in _SECRET_ENV_VARS.items():
        value = _env_secret(env_var)
        if value is None:
            section, key = _SECRET_YAML_KEYS[field_name]
            section_data = providers.get(section) or {}
            if isinstance(section_data, dict):
                value = section_data.get(key) or None
        secrets[field_name] = value

    timeout = os.environ.get("INSPOVID_REQUEST_TIMEOUT", data.get("request_timeout"))
    log_level = os.environ.get("INSPOVID_LOG_LEVEL") or data.get("log_level") or "INFO"

    server = data.get("server") or {}
    origins = server.get("cors_origins") if isinstance(server, dict) else None
    if isinstance(origins, str):
        origins = [origins]

    return InspovidConfig(
        **secrets,
        request_timeout=(
            _parse_timeout(timeout) if timeout is not None else DEFAULT_REQUEST_TIMEOUT
        ),
        fallbacks=_parse_fallbacks(providers.get("fallbacks")),
        cors_origins=tuple(origins) if origins else DEFAULT_CORS_ORIGINS,
        log_level=str(log_level).upper(),
        root_dir=_get_root_dir(),
        source=source,
        config_path=config_path,
    )


def find_config_file() -> tuple[Path | None, ConfigSource]:
    """Locate the config file that applies to this process."""
    project_path = _find_project_config()
    if project_path:
        return project_path, ConfigSource.PROJECT
    user_path = _get_user_config_path()
    if user_path.exists():
        return user_path, ConfigSource.USER
    return None, ConfigSource.DEFAULT


def _resolve_config() -> InspovidConfig:
    """Resolve configuration from all sources in priority order."""
    config_path, source = find_config_file()
    yaml_config = _load_yaml_config(config_path) if config_path else None
    if config_path and yaml_config is None:
        source = ConfigSource.DEFAULT
    if config_path and source is not ConfigSource.DEFAULT:
        logger.info(f"Using {source.value} config {config_path}")
    return load_config(yaml_config, source=source, config_path=config_path)


@lru_cache(maxsize=1)
def get_config() -> InspovidConfig:
    """Get resolved inspovid configuration.

    Results are cached - configuration is resolved once per process.
    To force re-resolution (e.g., after env change), use clear_config_cache().
    """
    return _resolve_config()


def clear_config_cache() -> None:
    """Clear the cached configuration.

    Call this if environment variables or config files have changed
    and you need to re-resolve the configuration.
    """
    get_config.cache_clear()


@dataclass
class ConfigValidationResult:
    """Result of validating a config dict.

    Attributes:
        errors: Fatal issues that prevent correct operation.
        warnings: Non-fatal issues that may cause unexpected behavior.
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        """True if no errors were found."""
        return len(self.errors) == 0


def validate_config_dict(config_dict: dict | None = None) -> ConfigValidationResult:
    """Validate a parsed config dict.

    Checks for:
    - Structural issues (wrong types)
    - Unknown keys at the top level and in the providers section
    - Unknown provider names or platforms in fallback chains
    - Invalid request_timeout and log_level values

    Args:
        config_dict: Parsed YAML config dict (the full document).

    Returns:
        ConfigValidationResult with errors and warnings.
    """
    from inspovid.config.platforms import PLATFORMS
    from inspovid.providers.registry import list_all, resolve_name

    result = ConfigValidationResult()

    if config_dict is None:
        return result

    if not isinstance(config_dict, dict):
        result.errors.append(
            f"Config must be a YAML mapping (dict), got {type(config_dict).__name__}"
        )
        return result

    for key in config_dict:
        if key not in _VALID_TOP_LEVEL_KEYS:
            result.warnings.append(
                f"Unknown top-level key '{key}'. "
                f"Valid keys: {', '.join(sorted(_VALID_TOP_LEVEL_KEYS))}"
            )

    timeout = config_dict.get("request_timeout")
    if timeout is not None:
        if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
            result.errors.append(
                f"request_timeout must be a positive number, got {timeout!r}"
            )

    log_level = config_dict.get("log_level")
    if log_level is not None and str(log_level).upper() not in _VALID_LOG_LEVELS:
        result.errors.append(
            f"Invalid log_level '{log_level}'. "
            f"Valid levels: {', '.join(sorted(_VALID_LOG_LEVELS))}"
        )

    providers = config_dict.get("providers")
    if providers is None:
        return result
    if not isinstance(providers, dict):
        result.errors.append(
            "The 'providers' section must be a mapping (dict), "
            f"got {type(providers).__name__}"
        )
        return result

    for key, value in providers.items():
        if key not in _VALID_PROVIDERS_KEYS:
            result.warnings.append(
                f"Unknown key '{key}' in providers section. "
                f"Valid keys: {', '.join(sorted(_VALID_PROVIDERS_KEYS))}"
            )
        elif not isinstance(value, dict):
            result.errors.append(
                f"Config for '{key}' must be a mapping (dict), got {type(value).__name__}"
            )

    tiktok = providers.get("tiktok")
    if isinstance(tiktok, dict) and bool(tiktok.get("client_key")) != bool(
        tiktok.get("client_secret")
    ):
        result.warnings.append(
            "TikTok needs both client_key and client_secret; "
            "the official API tier stays disabled with only one of them"
        )

    fallbacks = providers.get("fallbacks")
    if isinstance(fallbacks, dict):
        platform_keys = {p["key"] for p in PLATFORMS}
        known = set(list_all())
        for platform, chain in fallbacks.items():
            if platform not in platform_keys:
                result.warnings.append(
                    f"Unknown platform '{platform}' in fallbacks. "
                    f"Valid platforms: {', '.join(sorted(platform_keys))}"
                )
                continue
            if not isinstance(chain, list) or not chain:
                result.errors.append(
                    f"Fallback chain for '{platform}' must be a non-empty list"
                )
                continue
            for name in chain:
                if resolve_name(str(name)) not in known:
                    result.errors.append(
                        f"Unknown provider '{name}' in {platform} fallbacks. "
                        f"Known providers: {', '.join(sorted(known))}"
                    )

    return result
